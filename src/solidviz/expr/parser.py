"""
Recursive descent parser for single-variable formulas.

Converts a token stream into an expression tree.
"""

from dataclasses import replace
from typing import List, Optional
from .tokens import Token, TokenType, SourceSpan
from .ast import (
    Expression, Constant, Variable, UnaryOp, BinaryOp, FunctionCall,
)
from .errors import (
    error_unexpected_token,
    error_unexpected_end,
    error_unbalanced_parenthesis,
    error_implicit_multiplication,
)

# Named constants, in double precision
CONSTANT_VALUES = {
    "e": 2.718281828459045,
    "pi": 3.141592653589793,
}

# Tokens that can begin an operand
OPERAND_START = (
    TokenType.NUMBER,
    TokenType.CONSTANT,
    TokenType.VARIABLE,
    TokenType.FUNCTION,
    TokenType.LPAREN,
)


class Parser:
    """
    Recursive descent parser for formulas.

    Usage:
        parser = Parser(tokens)
        tree = parser.parse_formula()

    The parser implements precedence climbing for binary operators:
        Lowest:  + -
                 * /
                 ^ (power, right-associative)
        Highest: unary (- +)

    Unary signs bind tighter than ``^``, so ``-x^2`` is ``(-x)^2``.
    """

    # Operator precedence levels (higher = tighter binding)
    PRECEDENCE = {
        TokenType.PLUS: 1,
        TokenType.MINUS: 1,
        TokenType.STAR: 2,
        TokenType.SLASH: 2,
        TokenType.CARET: 3,  # Power (right-associative)
    }

    # Right-associative operators
    RIGHT_ASSOCIATIVE = {TokenType.CARET}

    def __init__(self, tokens: List[Token], source: Optional[str] = None):
        if not tokens or tokens[-1].type != TokenType.EOF:
            raise ValueError("token list must end with EOF")
        self.tokens = tokens
        self.source = source  # Formula text, for diagnostics
        self.pos = 0
        self.open_parens: List[Token] = []

    # =========================================================================
    # Token Navigation
    # =========================================================================

    def _current(self) -> Token:
        """Get current token."""
        if self.pos >= len(self.tokens):
            return self.tokens[-1]  # EOF
        return self.tokens[self.pos]

    def _is_at_end(self) -> bool:
        return self._current().type == TokenType.EOF

    def _check(self, token_type: TokenType) -> bool:
        """Check if current token is of given type."""
        return self._current().type == token_type

    def _advance(self) -> Token:
        """Consume and return current token."""
        token = self._current()
        if not self._is_at_end():
            self.pos += 1
        return token

    def _error(self, expected: str) -> None:
        """Raise a parser error for the current token."""
        token = self._current()
        if token.type == TokenType.EOF:
            if self.open_parens:
                raise error_unbalanced_parenthesis(self.open_parens[-1].span, self.source)
            raise error_unexpected_end(expected, token.span, self.source)
        if token.type == TokenType.RPAREN and not self.open_parens:
            raise error_unbalanced_parenthesis(token.span, self.source)
        raise error_unexpected_token(expected, f"'{token.lexeme}'", token.span, self.source)

    # =========================================================================
    # Expression Parsing (Precedence Climbing)
    # =========================================================================

    def _parse_binary_expr(self, min_precedence: int) -> Expression:
        """Parse binary expressions with precedence climbing."""
        left = self._parse_unary_expr()

        while True:
            op_token = self._current()
            precedence = self.PRECEDENCE.get(op_token.type)

            if precedence is None or precedence < min_precedence:
                break

            self._advance()  # consume operator

            # Right-associative operators use same precedence, others use precedence + 1
            next_precedence = precedence if op_token.type in self.RIGHT_ASSOCIATIVE else precedence + 1
            right = self._parse_binary_expr(next_precedence)

            left = BinaryOp(
                span=SourceSpan(left.span.start, right.span.end),
                left=left,
                operator=op_token.type,
                right=right
            )

        return left

    def _parse_unary_expr(self) -> Expression:
        """Parse unary sign expressions (- +)."""
        if self._check(TokenType.MINUS) or self._check(TokenType.PLUS):
            op = self._advance()
            operand = self._parse_unary_expr()
            return UnaryOp(
                span=SourceSpan(op.span.start, operand.span.end),
                operator=op.type,
                operand=operand
            )

        return self._parse_primary_expr()

    def _parse_group(self) -> Expression:
        """Parse a parenthesized expression; returns the inner expression."""
        self.open_parens.append(self._advance())  # consume '('
        inner = self._parse_binary_expr(0)
        if not self._check(TokenType.RPAREN):
            self._error("')'")
        self._advance()
        self.open_parens.pop()
        return inner

    def _parse_primary_expr(self) -> Expression:
        """Parse primary expressions (numbers, names, calls, groups)."""
        token = self._current()

        if token.type == TokenType.NUMBER:
            self._advance()
            return Constant(span=token.span, value=token.value)

        if token.type == TokenType.CONSTANT:
            self._advance()
            return Constant(span=token.span, value=CONSTANT_VALUES[token.value], name=token.value)

        if token.type == TokenType.VARIABLE:
            self._advance()
            return Variable(span=token.span, name=token.value)

        if token.type == TokenType.FUNCTION:
            self._advance()
            if not self._check(TokenType.LPAREN):
                self._error(f"'(' after '{token.value}'")
            argument = self._parse_group()
            return FunctionCall(
                span=SourceSpan(token.span.start, self.tokens[self.pos - 1].span.end),
                name=token.value,
                argument=argument
            )

        if token.type == TokenType.LPAREN:
            start = token
            inner = self._parse_group()
            # Keep the parentheses in the span so diagnostics underline the whole group
            return _with_span(inner, SourceSpan(start.span.start, self.tokens[self.pos - 1].span.end))

        self._error("expression")

    def parse_formula(self) -> Expression:
        """Parse a complete formula; the whole token stream must be consumed."""
        tree = self._parse_binary_expr(0)
        if not self._is_at_end():
            token = self._current()
            if token.type in OPERAND_START:
                raise error_implicit_multiplication(token.span, self.source)
            self._error("operator or end of formula")
        return tree


def _with_span(node: Expression, span: SourceSpan) -> Expression:
    """Return a copy of ``node`` covering ``span``."""
    return replace(node, span=span)


def parse(tokens: List[Token], source: Optional[str] = None) -> Expression:
    """
    Convenience function to parse tokens into an expression tree.

    Args:
        tokens: List of tokens from the lexer
        source: Optional formula text for error messages

    Returns:
        Parsed expression tree

    Raises:
        ParserError: If parsing fails
    """
    parser = Parser(tokens, source)
    return parser.parse_formula()
