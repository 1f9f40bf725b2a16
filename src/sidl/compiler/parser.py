# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Recursive-descent parser for .sidl files.

Pulls tokens from a :class:`~sidl.compiler.lexer.Lexer` one at a time and
builds the ordered list of top-level declarations. A single token of
lookahead selects every production, so the parser never backtracks.
"""

from sidl.compiler.errors import UnexpectedTokenError, UnexpectedTopLevelTokenError
from sidl.compiler.lexer import Lexer, Token, TokenType
from sidl.model.definitions import Def, FieldDef, MethodDef, ServiceDef, StructDef

# ###############
# Public Interface
# ###############


def parse(source: str) -> list[Def]:
    """Parse SIDL source text into its top-level declarations.

    Args:
        source: The full text of a .sidl file.

    Returns:
        The struct and service declarations in source order.

    Raises:
        UnexpectedCharError: If the source contains a character outside the
            lexical alphabet.
        UnexpectedTokenError: If a production does not find the token it requires.
        UnexpectedTopLevelTokenError: If a top-level token starts neither a
            struct nor a service.
    """
    return Parser(Lexer(source)).parse()


class Parser:
    """Recursive-descent parser with one token of lookahead."""

    def __init__(self, lexer: Lexer) -> None:
        self._lexer = lexer
        self._current: Token = lexer.next_token()

    def parse(self) -> list[Def]:
        """Parse declarations until the end of input."""
        defs: list[Def] = []
        while True:
            tok = self._current
            if tok.type == TokenType.STRUCT:
                defs.append(self._parse_struct())
            elif tok.type == TokenType.SERVICE:
                defs.append(self._parse_service())
            elif tok.type == TokenType.EOF:
                return defs
            else:
                raise UnexpectedTopLevelTokenError(tok.describe(), tok.location)

    # ------------------------------------------------------------------
    # Token access helpers
    # ------------------------------------------------------------------

    def _advance(self) -> None:
        """Replace the lookahead with the next token from the lexer."""
        self._current = self._lexer.next_token()

    def _check(self, token_type: TokenType) -> bool:
        """Return True if the lookahead is of the given type (without consuming)."""
        return self._current.type == token_type

    def _expect(self, token_type: TokenType) -> None:
        """Consume the lookahead if it has the given type.

        Raises UnexpectedTokenError naming the expected kind otherwise.
        """
        if not self._check(token_type):
            raise UnexpectedTokenError(token_type.value, self._current.describe(), self._current.location)
        self._advance()

    def _parse_ident(self) -> str:
        """Consume an identifier and return its text."""
        tok = self._current
        if tok.type != TokenType.IDENT:
            raise UnexpectedTokenError("Identifier", tok.describe(), tok.location)
        self._advance()
        return tok.value

    # ------------------------------------------------------------------
    # Struct declarations
    # ------------------------------------------------------------------

    def _parse_struct(self) -> StructDef:
        """Parse: struct <Name> { (<name>: <Type>,)* }"""
        self._advance()  # consume 'struct'
        name = self._parse_ident()
        self._expect(TokenType.BRACE_OPEN)
        fields: list[FieldDef] = []
        while not self._check(TokenType.BRACE_CLOSE):
            fields.append(self._parse_field())
        self._expect(TokenType.BRACE_CLOSE)
        return StructDef(name=name, fields=tuple(fields))

    def _parse_field(self) -> FieldDef:
        """Parse: <name>: <Type>,"""
        field_name = self._parse_ident()
        self._expect(TokenType.COLON)
        field_type = self._parse_ident()
        # The comma is required after every field, including the last one.
        self._expect(TokenType.COMMA)
        return FieldDef(name=field_name, type=field_type)

    # ------------------------------------------------------------------
    # Service declarations
    # ------------------------------------------------------------------

    def _parse_service(self) -> ServiceDef:
        """Parse: service <Name> { <method>* }"""
        self._advance()  # consume 'service'
        name = self._parse_ident()
        self._expect(TokenType.BRACE_OPEN)
        methods: list[MethodDef] = []
        while not self._check(TokenType.BRACE_CLOSE):
            methods.append(self._parse_method())
        self._expect(TokenType.BRACE_CLOSE)
        return ServiceDef(name=name, methods=tuple(methods))

    def _parse_method(self) -> MethodDef:
        """Parse: fn <name>(<arg>: <Type>) -> <Type>;"""
        self._expect(TokenType.FN)
        method_name = self._parse_ident()
        self._expect(TokenType.PAREN_OPEN)
        arg_name = self._parse_ident()
        self._expect(TokenType.COLON)
        arg_type = self._parse_ident()
        self._expect(TokenType.PAREN_CLOSE)
        self._expect(TokenType.ARROW)
        ret_type = self._parse_ident()
        self._expect(TokenType.SEMICOLON)
        return MethodDef(name=method_name, arg_name=arg_name, arg_type=arg_type, ret_type=ret_type)
