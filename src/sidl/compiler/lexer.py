# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Lexical scanner for .sidl files.

The scanner is pull-based: the parser asks for one token at a time through
:meth:`Lexer.next_token`, so only the current token is ever materialized.
"""

import enum
import string
from dataclasses import dataclass

from sidl.compiler.errors import Location, UnexpectedCharError

# ###############
# Public Interface
# ###############


class TokenType(enum.Enum):
    """All token kinds produced by the SIDL lexer.

    The values double as the human-readable names used in error messages.
    """

    # Keywords
    STRUCT = "Struct"
    SERVICE = "Service"
    FN = "Fn"

    # Punctuation
    BRACE_OPEN = "BraceOpen"
    BRACE_CLOSE = "BraceClose"
    PAREN_OPEN = "ParenOpen"
    PAREN_CLOSE = "ParenClose"
    COLON = "Colon"
    SEMICOLON = "SemiColon"
    ARROW = "Arrow"
    COMMA = "Comma"

    # Identifiers
    IDENT = "Ident"

    # End of input
    EOF = "Eof"


@dataclass(frozen=True)
class Token:
    """A lexical token with the location of its first character.

    Attributes:
        type: The kind of token.
        value: The identifier text for IDENT tokens, the source text for
            keywords and punctuation, and the empty string for EOF.
        location: Where the token starts.
    """

    type: TokenType
    value: str
    location: Location

    @property
    def line(self) -> int:
        return self.location.line

    @property
    def column(self) -> int:
        return self.location.column

    def describe(self) -> str:
        """Return the textual form of the token used in diagnostics."""
        if self.type == TokenType.IDENT:
            return f'Ident("{self.value}")'
        return self.type.value


class Lexer:
    """Forward-only scanner over a schema source string."""

    def __init__(self, source: str) -> None:
        self._source = source
        self._pos = 0
        self._line = 1
        self._column = 1

    def next_token(self) -> Token:
        """Scan and return the next token.

        Whitespace and ``//`` line comments before the token are skipped.
        Once the end of input is reached every further call returns an EOF
        token at the same location.

        Raises:
            UnexpectedCharError: On a character that cannot start a token,
                including a lone ``/`` and a ``-`` not followed by ``>``.
        """
        self._skip_whitespace_and_comments()
        location = Location(self._line, self._column)
        ch = self._current()

        if ch == "":
            return Token(TokenType.EOF, "", location)
        if ch in _PUNCTUATION:
            self._advance()
            return Token(_PUNCTUATION[ch], ch, location)
        if ch == "-":
            if self._peek() == ">":
                self._advance()  # -
                self._advance()  # >
                return Token(TokenType.ARROW, "->", location)
            raise UnexpectedCharError("-", location)
        if ch in _IDENT_START:
            return self._scan_identifier_or_keyword(location)
        raise UnexpectedCharError(ch, location)

    # ------------------------------------------------------------------
    # Low-level character access helpers
    # ------------------------------------------------------------------

    def _current(self) -> str:
        """Return the character at the current position, or '' at end of input."""
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _peek(self) -> str:
        """Return the character one position ahead, or '' at end of input."""
        if self._pos + 1 < len(self._source):
            return self._source[self._pos + 1]
        return ""

    def _advance(self) -> str:
        """Consume the current character, update position tracking, and return it."""
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._column = 1
        else:
            self._column += 1
        return ch

    # ------------------------------------------------------------------
    # Whitespace and comment skipping
    # ------------------------------------------------------------------

    def _skip_whitespace_and_comments(self) -> None:
        """Skip all whitespace and comment runs at the current position."""
        while self._pos < len(self._source):
            ch = self._current()
            if ch.isspace():
                self._advance()
            elif ch == "/" and self._peek() == "/":
                self._skip_line_comment()
            else:
                break

    def _skip_line_comment(self) -> None:
        """Consume from '//' through end-of-line (exclusive of the newline itself)."""
        while self._pos < len(self._source) and self._current() != "\n":
            self._advance()

    # ------------------------------------------------------------------
    # Identifier scanning
    # ------------------------------------------------------------------

    def _scan_identifier_or_keyword(self, location: Location) -> Token:
        """Scan an identifier and map it to a keyword token type if applicable."""
        start = self._pos
        while self._pos < len(self._source) and self._current() in _IDENT_CONTINUE:
            self._advance()
        value = self._source[start : self._pos]
        return Token(_KEYWORDS.get(value, TokenType.IDENT), value, location)


def tokenize(source: str) -> list[Token]:
    """Tokenize SIDL source text up to and including the first EOF token.

    Args:
        source: The full text of a .sidl file.

    Returns:
        A list of Token objects ending with a single EOF token.

    Raises:
        UnexpectedCharError: On the first character that cannot start a token.
    """
    lexer = Lexer(source)
    tokens: list[Token] = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            return tokens


# ################
# Implementation
# ################

_KEYWORDS: dict[str, TokenType] = {
    "struct": TokenType.STRUCT,
    "service": TokenType.SERVICE,
    "fn": TokenType.FN,
}

_PUNCTUATION: dict[str, TokenType] = {
    "{": TokenType.BRACE_OPEN,
    "}": TokenType.BRACE_CLOSE,
    "(": TokenType.PAREN_OPEN,
    ")": TokenType.PAREN_CLOSE,
    ":": TokenType.COLON,
    ";": TokenType.SEMICOLON,
    ",": TokenType.COMMA,
}

_IDENT_START = frozenset(string.ascii_letters + "_")
_IDENT_CONTINUE = frozenset(string.ascii_letters + string.digits + "_")
