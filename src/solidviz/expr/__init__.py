"""
Formula language for single-variable real functions.

This module provides:
- Lexer: Tokenizes formula text in one left-to-right pass
- Parser: Builds an expression tree by recursive descent
- Evaluator: Validates formulas and evaluates trees in float64

Usage:
    from solidviz.expr import validate, evaluate, compile_formula

    validate("x^2 + sin(x)", "x")         # True
    evaluate("arcsin(x)", "x", 1.0)       # 1.5707963267948966

    f = compile_formula("sqrt(y) - 1", "y")
    f(4.0)                                # 1.0
    f(numpy.linspace(0, 4, 5))            # array of five values
"""

from .tokens import (
    Token,
    TokenType,
    SourceSpan,
    FUNCTION_NAMES,
    CONSTANT_NAMES,
)

from .lexer import (
    Lexer,
    tokenize,
)

from .parser import (
    Parser,
    parse,
)

from .ast import (
    Expression,
    ExpressionVisitor,
    Constant,
    Variable,
    UnaryOp,
    BinaryOp,
    FunctionCall,
    to_source,
)

from .errors import (
    Diagnostic,
    ErrorSeverity,
    FormulaError,
    LexerError,
    ParserError,
    ValidationError,
)

from .evaluator import (
    Formula,
    compile_formula,
    evaluate,
    validate,
    check,
    variable_for,
    try_compile,
)

__all__ = [
    # Tokens
    "Token",
    "TokenType",
    "SourceSpan",
    "FUNCTION_NAMES",
    "CONSTANT_NAMES",
    # Lexer
    "Lexer",
    "tokenize",
    # Parser
    "Parser",
    "parse",
    # Tree
    "Expression",
    "ExpressionVisitor",
    "Constant",
    "Variable",
    "UnaryOp",
    "BinaryOp",
    "FunctionCall",
    "to_source",
    # Errors
    "Diagnostic",
    "ErrorSeverity",
    "FormulaError",
    "LexerError",
    "ParserError",
    "ValidationError",
    # Evaluation
    "Formula",
    "compile_formula",
    "evaluate",
    "validate",
    "check",
    "variable_for",
    "try_compile",
]
