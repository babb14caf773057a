"""
Formula exceptions and diagnostics.

Error code ranges:
- E0xx: Lexer errors
- E1xx: Parser errors
- E2xx: Validation errors
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List
from .tokens import SourceSpan


class ErrorSeverity(Enum):
    """Severity levels for diagnostics."""
    ERROR = "error"


@dataclass
class Diagnostic:
    """A single diagnostic message about a formula."""
    code: str                       # E001, E101, etc.
    message: str                    # Human-readable message
    severity: ErrorSeverity
    span: SourceSpan
    source_line: Optional[str] = None   # The formula text
    hints: List[str] = field(default_factory=list)

    def format(self, show_source: bool = True) -> str:
        """Format the diagnostic for display."""
        parts = [f"{self.span.start + 1}: {self.severity.value}[{self.code}]: {self.message}"]

        # Source line with caret
        if show_source and self.source_line is not None:
            parts.append(f"  | {self.source_line}")
            underline_len = max(1, self.span.end - self.span.start)
            parts.append(f"  | {' ' * self.span.start}{'^' * underline_len}")

        for hint in self.hints:
            parts.append(f"  = hint: {hint}")

        return "\n".join(parts)

    def to_json(self) -> dict:
        """Convert to JSON-serializable dict for tooling integration."""
        return {
            "code": self.code,
            "message": self.message,
            "severity": self.severity.value,
            "range": {"start": self.span.start, "end": self.span.end},
            "hints": self.hints,
        }


class FormulaError(Exception):
    """Base exception for formula errors."""

    def __init__(self, diagnostic: Diagnostic):
        self.diagnostic = diagnostic
        super().__init__(diagnostic.message)

    def __str__(self) -> str:
        return self.diagnostic.format()


class LexerError(FormulaError):
    """Error during lexical analysis (E0xx)."""
    pass


class ParserError(FormulaError):
    """Error during parsing (E1xx)."""
    pass


class ValidationError(FormulaError):
    """Formula uses characters or names outside the whitelist (E2xx)."""
    pass


# --- Lexer error codes ---

def error_unexpected_character(char: str, span: SourceSpan, source_line: str = None) -> LexerError:
    """E001: Unexpected character."""
    diag = Diagnostic(
        code="E001",
        message=f"unexpected character '{char}'",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return LexerError(diag)


def error_invalid_number_literal(lexeme: str, span: SourceSpan, source_line: str = None) -> LexerError:
    """E002: Malformed number literal."""
    diag = Diagnostic(
        code="E002",
        message=f"invalid number literal '{lexeme}'",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["numbers have at most one decimal point and no exponent"],
    )
    return LexerError(diag)


# --- Parser error codes ---

def error_unexpected_token(expected: str, found: str, span: SourceSpan,
                           source_line: str = None) -> ParserError:
    """E101: Unexpected token."""
    diag = Diagnostic(
        code="E101",
        message=f"expected {expected}, found {found}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_unexpected_end(expected: str, span: SourceSpan, source_line: str = None) -> ParserError:
    """E102: Unexpected end of formula."""
    diag = Diagnostic(
        code="E102",
        message=f"unexpected end of formula, expected {expected}",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_unbalanced_parenthesis(span: SourceSpan, source_line: str = None) -> ParserError:
    """E103: Parenthesis without a partner."""
    diag = Diagnostic(
        code="E103",
        message="unbalanced parenthesis",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
    )
    return ParserError(diag)


def error_implicit_multiplication(span: SourceSpan, source_line: str = None) -> ParserError:
    """E104: Two operands side by side with no operator."""
    diag = Diagnostic(
        code="E104",
        message="missing operator between operands",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=["write multiplication explicitly, e.g. '2*x'"],
    )
    return ParserError(diag)


# --- Validation error codes ---

def error_disallowed_character(char: str, span: SourceSpan, source_line: str = None,
                               variable: str = "x") -> ValidationError:
    """E201: Character outside the formula whitelist."""
    diag = Diagnostic(
        code="E201",
        message=f"character '{char}' is not allowed",
        severity=ErrorSeverity.ERROR,
        span=span,
        source_line=source_line,
        hints=[f"formulas use digits, '{variable}', e, pi, + - * / ^ ( ) and "
               "sin cos tan arcsin arccos arctan sqrt log"],
    )
    return ValidationError(diag)


def error_empty_formula(source_line: str = None) -> ValidationError:
    """E202: Blank formula."""
    diag = Diagnostic(
        code="E202",
        message="formula is empty",
        severity=ErrorSeverity.ERROR,
        span=SourceSpan(0, 0),
        source_line=source_line,
    )
    return ValidationError(diag)
