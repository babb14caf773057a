"""
Token types for the formula lexer.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Validation errors
"""

from enum import Enum, auto
from dataclasses import dataclass
from typing import Any, Dict


class TokenType(Enum):
    """All token types recognized by the formula lexer."""

    # --- Literals and names ---
    NUMBER = auto()             # 42, 3.14, .5
    CONSTANT = auto()           # e, pi
    VARIABLE = auto()           # x or y, depending on orientation
    FUNCTION = auto()           # sin, arcsin, sqrt, log, ...

    # --- Operators ---
    PLUS = auto()               # +
    MINUS = auto()              # -
    STAR = auto()               # *
    SLASH = auto()              # /
    CARET = auto()              # ^ (power)

    # --- Delimiters ---
    LPAREN = auto()             # (
    RPAREN = auto()             # )

    # --- Special ---
    EOF = auto()                # end of input


@dataclass(frozen=True)
class SourceSpan:
    """A half-open range ``[start, end)`` of character offsets in a formula."""
    start: int
    end: int

    def __str__(self) -> str:
        return f"{self.start + 1}-{self.end}"


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""
    type: TokenType
    value: Any              # float for NUMBER, name for CONSTANT/FUNCTION/VARIABLE
    lexeme: str             # The original source text
    span: SourceSpan

    def __str__(self) -> str:
        if self.type in (TokenType.NUMBER, TokenType.CONSTANT,
                         TokenType.VARIABLE, TokenType.FUNCTION):
            return f"{self.type.name}({self.value!r})"
        return self.type.name


# Recognized function names. Ordered longest-first so that scanning and
# stripping never consume ``sin`` out of ``arcsin``.
FUNCTION_NAMES = (
    "arcsin",
    "arccos",
    "arctan",
    "sqrt",
    "sin",
    "cos",
    "tan",
    "log",
)

CONSTANT_NAMES = (
    "pi",
    "e",
)

# Single-character tokens
OPERATORS: Dict[str, TokenType] = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.STAR,
    "/": TokenType.SLASH,
    "^": TokenType.CARET,
    "(": TokenType.LPAREN,
    ")": TokenType.RPAREN,
}

# Characters allowed once the recognized names are stripped. The active
# variable letter is added per orientation.
ALLOWED_CHARACTERS = frozenset("0123456789.()^/-*+ e")

VARIABLE_NAMES = ("x", "y")


def operator_symbol(token_type: TokenType) -> str:
    """Return the source symbol for an operator token type."""
    for symbol, ttype in OPERATORS.items():
        if ttype == token_type:
            return symbol
    raise KeyError(token_type)
