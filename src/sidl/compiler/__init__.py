# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Compiler pipeline for .sidl files: scanning, parsing, and the build step."""

from sidl.compiler.artifact import ARTIFACT_SUFFIX, deserialize, read_artifact, serialize, write_artifact
from sidl.compiler.build import CompilerError, compile_files, load_source
from sidl.compiler.errors import (
    InvalidSyntaxError,
    Location,
    SidlError,
    SourceReadError,
    UnexpectedCharError,
    UnexpectedTokenError,
    UnexpectedTopLevelTokenError,
)
from sidl.compiler.lexer import Lexer, Token, TokenType, tokenize
from sidl.compiler.parser import Parser, parse

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "Parser",
    "parse",
    "Location",
    "SidlError",
    "UnexpectedCharError",
    "UnexpectedTokenError",
    "UnexpectedTopLevelTokenError",
    "InvalidSyntaxError",
    "SourceReadError",
    "serialize",
    "deserialize",
    "write_artifact",
    "read_artifact",
    "ARTIFACT_SUFFIX",
    "compile_files",
    "load_source",
    "CompilerError",
]
