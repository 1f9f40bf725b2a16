# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Source locations and the error taxonomy of the SIDL front end."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

# ###############
# Public Interface
# ###############


@dataclass(frozen=True)
class Location:
    """A 1-based position in schema source text.

    Attributes:
        line: 1-based line number.
        column: 1-based column number.
    """

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class SidlError(Exception):
    """Base class for every error raised while reading or parsing a schema.

    Attributes:
        location: Position of the offending character or token, or None for
            errors that do not originate in the source text.
    """

    def __init__(self, message: str, location: Location | None = None) -> None:
        super().__init__(message)
        self.location = location

    @property
    def line(self) -> int | None:
        return self.location.line if self.location is not None else None

    @property
    def column(self) -> int | None:
        return self.location.column if self.location is not None else None


class UnexpectedCharError(SidlError):
    """Raised by the lexer on a character outside the lexical alphabet."""

    def __init__(self, char: str, location: Location) -> None:
        super().__init__(f"Unexpected character '{char}' at {location}", location)
        self.char = char


class UnexpectedTokenError(SidlError):
    """Raised by the parser when the lookahead token is not the one required.

    Attributes:
        expected: Name of the token kind the grammar required.
        found: Textual form of the token actually present.
    """

    def __init__(self, expected: str, found: str, location: Location) -> None:
        super().__init__(f"Unexpected token at {location}: expected {expected}, found {found}", location)
        self.expected = expected
        self.found = found


class UnexpectedTopLevelTokenError(SidlError):
    """Raised when a top-level token starts neither a struct nor a service."""

    def __init__(self, found: str, location: Location) -> None:
        super().__init__(f"Unexpected token at top level at {location}: {found}", location)
        self.found = found


class InvalidSyntaxError(SidlError):
    """Structural error not covered by the other kinds.

    The grammar never raises it; it is kept for callers that layer extra
    structural checks on top of the parser.
    """

    def __init__(self, msg: str, location: Location) -> None:
        super().__init__(f"Invalid syntax at {location}: {msg}", location)
        self.msg = msg


class SourceReadError(SidlError):
    """Raised when schema source text cannot be read from disk."""

    def __init__(self, path: Path, cause: OSError) -> None:
        super().__init__(f"IO Error: {cause}")
        self.path = path
        self.cause = cause
