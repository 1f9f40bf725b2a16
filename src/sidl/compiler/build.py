# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Build step turning .sidl schema files into generated Python modules.

Implements a CMake-style cache: a schema is re-parsed only when its artifact
is missing or not strictly newer than the source. The generated module is
re-rendered on every run and rewritten only when its text changes, so edits
to the type mappings take effect without touching the schema.
Outputs mirror the source layout under the build directory, so
``api/users.sidl`` produces ``api/users.sidl.json`` and ``api/users.py``.
"""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

from sidl.codegen.python_emitter import emit_module
from sidl.compiler.artifact import ARTIFACT_SUFFIX, read_artifact, write_artifact
from sidl.compiler.errors import SidlError, SourceReadError
from sidl.compiler.parser import parse
from sidl.model.definitions import Def

# ###############
# Public Interface
# ###############

SOURCE_SUFFIX = ".sidl"


class CompilerError(Exception):
    """Raised when a schema file cannot be compiled.

    The underlying :class:`~sidl.compiler.errors.SidlError`, if any, is
    available as ``__cause__``.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


def load_source(path: Path) -> str:
    """Read schema source text from *path*.

    Raises:
        SourceReadError: If the file cannot be read.
    """
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SourceReadError(path, exc) from exc


def compile_files(
    files: list[Path],
    build_dir: Path,
    source_root: Path,
    *,
    type_map: Mapping[str, str] | None = None,
) -> dict[str, list[Def]]:
    """Compile a list of .sidl source files.

    For each file, the compiler:
    1. Checks whether an up-to-date artifact already exists (cache hit).
    2. On a cache hit, reads the declarations back from the artifact.
    3. Otherwise parses the source and writes the artifact to *build_dir*.
    4. Renders the Python module with *type_map* and writes it when it is
       missing or its text differs.

    Args:
        files: Paths to the .sidl source files to compile.
        build_dir: Root directory for compiled outputs.
        source_root: Directory the output layout is computed relative to.
        type_map: Optional schema-to-Python type overrides for code generation.

    Returns:
        A mapping from canonical keys (source path relative to *source_root*,
        without suffix, e.g. ``"api/users"``) to the parsed declarations.

    Raises:
        CompilerError: If a file lies outside *source_root*, cannot be read,
            or fails to parse.
    """
    compiled: dict[str, list[Def]] = {}
    for f in files:
        key = _rel_key(f, source_root)
        compiled[key] = _compile_file(f, key, build_dir, type_map)
    return compiled


# ################
# Implementation
# ################


def _rel_key(source_file: Path, source_root: Path) -> str:
    """Return the canonical key for a source file (relative path without extension)."""
    try:
        rel = source_file.relative_to(source_root)
    except ValueError:
        raise CompilerError(f"Source file '{source_file}' is not under '{source_root}'") from None
    return str(rel.with_suffix("")).replace("\\", "/")


def _output_paths(key: str, build_dir: Path) -> tuple[Path, Path]:
    """Return the (artifact, module) paths for a canonical key."""
    parts = key.split("/")
    out_dir = build_dir.joinpath(*parts[:-1])
    return out_dir / (parts[-1] + ARTIFACT_SUFFIX), out_dir / (parts[-1] + ".py")


def _is_up_to_date(source_file: Path, output: Path) -> bool:
    """Return True if *output* exists and is strictly newer than *source_file*."""
    if not output.exists():
        return False
    return output.stat().st_mtime > source_file.stat().st_mtime


def _compile_file(
    source_file: Path,
    key: str,
    build_dir: Path,
    type_map: Mapping[str, str] | None,
) -> list[Def]:
    """Compile one .sidl file, reusing the cached artifact when it is fresh."""
    artifact, module = _output_paths(key, build_dir)

    try:
        cached = _is_up_to_date(source_file, artifact)
        defs = read_artifact(artifact) if cached else parse(load_source(source_file))
    except SourceReadError as exc:
        raise CompilerError(f"Cannot read source file '{source_file}': {exc.cause}") from exc
    except OSError as exc:
        raise CompilerError(f"Cannot read source file '{source_file}': {exc}") from exc
    except SidlError as exc:
        raise CompilerError(f"Parse error in '{source_file}': {exc}") from exc

    if not cached:
        write_artifact(defs, artifact)

    # The module also depends on the type mappings, so compare contents rather than mtimes.
    text = emit_module(defs, type_map=type_map, source_name=source_file.name)
    if not module.exists() or module.read_text(encoding="utf-8") != text:
        module.parent.mkdir(parents=True, exist_ok=True)
        module.write_text(text, encoding="utf-8")
    return defs
