"""
Validation and tree-walking evaluation of formulas.

Arithmetic is carried out in numpy float64 with floating point warnings
silenced, so division by zero, ``sqrt`` of a negative number, overflow
and the like produce IEEE-754 infinities and NaNs instead of Python
exceptions. The same tree evaluates a scalar or a whole array of inputs.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np

from .tokens import TokenType, SourceSpan, FUNCTION_NAMES, CONSTANT_NAMES, ALLOWED_CHARACTERS
from .ast import (
    Expression, ExpressionVisitor, Constant, Variable, UnaryOp, BinaryOp, FunctionCall,
    to_source,
)
from .lexer import tokenize
from .parser import parse
from .errors import (
    Diagnostic,
    FormulaError,
    ValidationError,
    error_disallowed_character,
    error_empty_formula,
)

logger = logging.getLogger(__name__)

Number = Union[float, np.ndarray]

FUNCTIONS = {
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "arcsin": np.arcsin,
    "arccos": np.arccos,
    "arctan": np.arctan,
    "sqrt": np.sqrt,
    "log": np.log,
}

BINARY_OPERATORS = {
    TokenType.PLUS: np.add,
    TokenType.MINUS: np.subtract,
    TokenType.STAR: np.multiply,
    TokenType.SLASH: np.true_divide,
    TokenType.CARET: np.power,
}


def variable_for(orientation) -> str:
    """Return the variable letter for an orientation (enum or ``'x'``/``'y'``)."""
    letter = str(getattr(orientation, "value", orientation)).strip().lower()
    if letter not in ("x", "y"):
        raise ValueError(f"orientation must be 'x' or 'y', got {orientation!r}")
    return letter


def _strip_names(formula: str) -> str:
    """Blank out recognized function and constant names.

    Names are replaced by spaces rather than removed so that character
    offsets in the remainder still line up with the original formula.
    ``FUNCTION_NAMES`` is ordered longest-first, so ``arcsin`` goes as a
    unit before ``sin`` is looked at.
    """
    for name in FUNCTION_NAMES + tuple(n for n in CONSTANT_NAMES if len(n) > 1):
        formula = formula.replace(name, " " * len(name))
    return formula


def whitelist_diagnostics(formula: str, orientation) -> List[Diagnostic]:
    """Return one diagnostic per character outside the whitelist."""
    variable = variable_for(orientation)
    allowed = ALLOWED_CHARACTERS | {variable}
    stripped = _strip_names(formula)
    problems = []
    for offset, ch in enumerate(stripped):
        if ch not in allowed:
            err = error_disallowed_character(
                ch, SourceSpan(offset, offset + 1), formula, variable
            )
            problems.append(err.diagnostic)
    return problems


def validate(formula: str, orientation) -> bool:
    """Return ``True`` if ``formula`` uses only whitelisted characters and names."""
    if not formula.strip():
        return False
    return not whitelist_diagnostics(formula, orientation)


class EvaluationVisitor(ExpressionVisitor):
    """Evaluate an expression tree for one value (or array) of the variable."""

    def __init__(self, value: Number):
        self.value = value

    def visit_Constant(self, node: Constant) -> np.float64:
        return np.float64(node.value)

    def visit_Variable(self, node: Variable) -> Number:
        return self.value

    def visit_UnaryOp(self, node: UnaryOp) -> Number:
        operand = node.operand.accept(self)
        if node.operator == TokenType.MINUS:
            return np.negative(operand)
        return operand

    def visit_BinaryOp(self, node: BinaryOp) -> Number:
        left = node.left.accept(self)
        right = node.right.accept(self)
        return BINARY_OPERATORS[node.operator](left, right)

    def visit_FunctionCall(self, node: FunctionCall) -> Number:
        return FUNCTIONS[node.name](node.argument.accept(self))


@dataclass(frozen=True)
class Formula:
    """A validated, parsed formula in one independent variable.

    Instances are immutable and hold no evaluation state, so one
    ``Formula`` may be evaluated any number of times.
    """

    source: str
    variable: str
    tree: Expression = field(repr=False, compare=False)

    def __call__(self, value):
        """Evaluate at ``value``; scalars give a ``float``, arrays give an array."""
        with np.errstate(all="ignore"):
            if np.ndim(value) == 0:
                return float(self.tree.accept(EvaluationVisitor(np.float64(value))))
            values = np.asarray(value, dtype=np.float64)
            result = self.tree.accept(EvaluationVisitor(values))
            # Formulas without the variable evaluate to a scalar
            return np.broadcast_to(result, values.shape).astype(np.float64)

    def grouped(self) -> str:
        """Fully parenthesized form of the formula."""
        return to_source(self.tree)


def compile_formula(formula: str, orientation) -> Formula:
    """
    Validate and parse ``formula`` for the given orientation.

    Raises:
        ValidationError: If the formula is empty or uses a disallowed character
        LexerError: If a letter run is not a recognized name
        ParserError: If the formula is malformed
    """
    variable = variable_for(orientation)
    if not formula.strip():
        raise error_empty_formula(formula)
    problems = whitelist_diagnostics(formula, variable)
    if problems:
        raise ValidationError(problems[0])
    tree = parse(tokenize(formula, variable), formula)
    return Formula(source=formula, variable=variable, tree=tree)


def evaluate(formula: str, orientation, value: float) -> float:
    """Evaluate ``formula`` at ``value``.

    Raises ``FormulaError`` (or a subclass) if the formula is invalid.
    """
    return compile_formula(formula, orientation)(value)


def check(formula: str, orientation) -> List[Diagnostic]:
    """Return every diagnostic for ``formula``; an empty list means it is usable."""
    variable = variable_for(orientation)
    if not formula.strip():
        return [error_empty_formula(formula).diagnostic]
    problems = whitelist_diagnostics(formula, variable)
    if problems:
        return problems
    try:
        parse(tokenize(formula, variable), formula)
    except FormulaError as err:
        return [err.diagnostic]
    return []


def try_compile(formula: str, orientation) -> Optional[Formula]:
    """Compile ``formula``, or log why it was rejected and return ``None``.

    Geometry builders use this so that a bad formula degrades to empty
    output rather than an exception.
    """
    try:
        return compile_formula(formula, orientation)
    except FormulaError as err:
        logger.warning("rejected formula %r: %s", formula, err.diagnostic.message)
        return None
