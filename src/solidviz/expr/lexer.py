"""
Lexer for single-variable formulas.

Converts formula text into a stream of tokens for the parser in a single
left-to-right pass. Supports:
- Number literals (``3``, ``3.5``, ``.5``, ``5.``)
- The constants ``e`` and ``pi``
- The functions ``sin cos tan arcsin arccos arctan sqrt log``
- The active variable letter (``x`` or ``y``)
- The operators ``+ - * / ^`` and parentheses

Letter runs are matched against the longest known name first, which is
what keeps ``arcsin`` from being read as ``arc`` followed by ``sin``.
"""

from typing import List, Iterator
from .tokens import (
    Token, TokenType, SourceSpan, FUNCTION_NAMES, CONSTANT_NAMES, OPERATORS,
    VARIABLE_NAMES,
)
from .errors import (
    error_unexpected_character,
    error_invalid_number_literal,
)

DIGITS = "0123456789"


class Lexer:
    """
    Tokenizer for formulas in one independent variable.

    Usage:
        lexer = Lexer("arcsin(x) + 1", variable="x")
        tokens = lexer.tokenize()

    Or for streaming:
        for token in Lexer(source):
            process(token)
    """

    def __init__(self, source: str, variable: str = "x"):
        if variable not in VARIABLE_NAMES:
            raise ValueError(f"variable must be one of {VARIABLE_NAMES}, got {variable!r}")
        self.source = source
        self.variable = variable
        self.pos = 0
        # Longest name wins when several names start at the same position
        self._names = sorted(
            [(name, TokenType.FUNCTION) for name in FUNCTION_NAMES]
            + [(name, TokenType.CONSTANT) for name in CONSTANT_NAMES]
            + [(variable, TokenType.VARIABLE)],
            key=lambda item: len(item[0]),
            reverse=True,
        )

    def _peek(self, offset: int = 0) -> str:
        """Look at character at current position + offset without consuming."""
        idx = self.pos + offset
        if idx >= len(self.source):
            return '\0'
        return self.source[idx]

    def _advance(self) -> str:
        """Consume and return current character."""
        if self.pos >= len(self.source):
            return '\0'
        ch = self.source[self.pos]
        self.pos += 1
        return ch

    def _is_at_end(self) -> bool:
        return self.pos >= len(self.source)

    def _make_token(self, token_type: TokenType, value, start: int) -> Token:
        """Create a token spanning ``start`` to the current position."""
        return Token(token_type, value, self.source[start:self.pos],
                     SourceSpan(start, self.pos))

    def _skip_whitespace(self) -> None:
        while self._peek() in ' \t':
            self._advance()

    def _scan_number(self) -> Token:
        """Scan a decimal literal with at most one decimal point."""
        start = self.pos
        seen_dot = False
        while self._peek() in DIGITS or self._peek() == '.':
            if self._peek() == '.':
                if seen_dot:
                    # Consume the rest of the run so the error covers it
                    while self._peek() in DIGITS or self._peek() == '.':
                        self._advance()
                    raise error_invalid_number_literal(
                        self.source[start:self.pos], SourceSpan(start, self.pos), self.source
                    )
                seen_dot = True
            self._advance()

        lexeme = self.source[start:self.pos]
        if lexeme == '.':
            raise error_invalid_number_literal(lexeme, SourceSpan(start, self.pos), self.source)
        return self._make_token(TokenType.NUMBER, float(lexeme), start)

    def _scan_name(self) -> Token:
        """Scan the longest recognized name at the current position."""
        start = self.pos
        for name, token_type in self._names:
            if self.source.startswith(name, self.pos):
                self.pos += len(name)
                return self._make_token(token_type, name, start)
        raise error_unexpected_character(
            self._peek(), SourceSpan(start, start + 1), self.source
        )

    def next_token(self) -> Token:
        """Scan and return the next token."""
        self._skip_whitespace()
        if self._is_at_end():
            return self._make_token(TokenType.EOF, None, self.pos)

        ch = self._peek()
        if ch in DIGITS or (ch == '.' and self._peek(1) in DIGITS):
            return self._scan_number()
        if ch == '.':
            start = self.pos
            self._advance()
            raise error_invalid_number_literal('.', SourceSpan(start, self.pos), self.source)
        if ch.isalpha():
            return self._scan_name()
        if ch in OPERATORS:
            start = self.pos
            self._advance()
            return self._make_token(OPERATORS[ch], ch, start)

        raise error_unexpected_character(
            ch, SourceSpan(self.pos, self.pos + 1), self.source
        )

    def tokenize(self) -> List[Token]:
        """Tokenize the entire formula, ending with an EOF token."""
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                return tokens

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                return


def tokenize(source: str, variable: str = "x") -> List[Token]:
    """
    Convenience function to tokenize a formula.

    Args:
        source: Formula text
        variable: The independent variable letter, ``"x"`` or ``"y"``

    Returns:
        List of tokens, ending with EOF

    Raises:
        LexerError: If the formula contains an unknown character or name
    """
    return Lexer(source, variable).tokenize()
