# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Tests for the SIDL build step."""

from __future__ import annotations

import os
import time
from pathlib import Path

import pytest

from sidl.compiler.artifact import ARTIFACT_SUFFIX, read_artifact
from sidl.compiler.build import CompilerError, compile_files, load_source
from sidl.compiler.errors import SourceReadError, UnexpectedTokenError
from sidl.model.definitions import StructDef

# ###############
# Helpers
# ###############


def _write(path: Path, content: str, *, mtime_offset: float = -2.0) -> None:
    """Write *content* to *path*, creating parent directories as needed.

    Sets the file's mtime to *mtime_offset* seconds relative to now (default:
    2 seconds in the past) so that subsequently written outputs are reliably
    newer regardless of filesystem timestamp resolution.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    t = time.time() + mtime_offset
    os.utime(path, (t, t))


_USERS = """\
struct User { id: u64, username: string, }
service UserService { fn get_user(id: u64) -> User; }
"""


# ###############
# Source loading
# ###############


class TestLoadSource:
    def test_reads_text(self, tmp_path: Path) -> None:
        _write(tmp_path / "a.sidl", "struct A {}")
        assert load_source(tmp_path / "a.sidl") == "struct A {}"

    def test_missing_file_raises_source_read_error(self, tmp_path: Path) -> None:
        with pytest.raises(SourceReadError) as exc_info:
            load_source(tmp_path / "missing.sidl")
        assert isinstance(exc_info.value.cause, FileNotFoundError)
        assert exc_info.value.path == tmp_path / "missing.sidl"


# ###############
# Single-file compilation
# ###############


class TestSingleFile:
    def test_compiles_simple_file(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "users.sidl", _USERS)
        result = compile_files([src / "users.sidl"], build, src)
        assert list(result) == ["users"]
        assert [d.name for d in result["users"]] == ["User", "UserService"]

    def test_outputs_written_to_build_dir(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "users.sidl", _USERS)
        compile_files([src / "users.sidl"], build, src)
        assert (build / ("users" + ARTIFACT_SUFFIX)).exists()
        assert (build / "users.py").exists()

    def test_generated_module_contains_declarations(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "users.sidl", _USERS)
        compile_files([src / "users.sidl"], build, src)
        module = (build / "users.py").read_text(encoding="utf-8")
        assert "class User:" in module
        assert "class UserService(_abc.ABC):" in module
        assert "from users.sidl" in module

    def test_nested_layout_is_mirrored(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "api" / "v1" / "users.sidl", _USERS)
        result = compile_files([src / "api" / "v1" / "users.sidl"], build, src)
        assert "api/v1/users" in result
        assert (build / "api" / "v1" / "users.py").exists()
        assert (build / "api" / "v1" / ("users" + ARTIFACT_SUFFIX)).exists()

    def test_type_map_applied(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "t.sidl", "struct T { at: Timestamp, }")
        compile_files([src / "t.sidl"], build, src, type_map={"Timestamp": "float"})
        assert "at: float" in (build / "t.py").read_text(encoding="utf-8")

    def test_multiple_files(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A {}")
        _write(src / "b.sidl", "struct B {}")
        result = compile_files([src / "a.sidl", src / "b.sidl"], build, src)
        assert set(result) == {"a", "b"}


# ###############
# Caching
# ###############


class TestCache:
    def test_fresh_outputs_are_reused(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A {}")
        compile_files([src / "a.sidl"], build, src)
        # Corrupt the source without touching its mtime: a cache hit never re-parses.
        source = src / "a.sidl"
        stat = source.stat()
        source.write_text("not valid", encoding="utf-8")
        os.utime(source, (stat.st_atime, stat.st_mtime))
        result = compile_files([source], build, src)
        assert result["a"] == [StructDef(name="A")]

    def test_newer_source_is_recompiled(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A {}")
        compile_files([src / "a.sidl"], build, src)
        _write(src / "a.sidl", "struct Renamed {}", mtime_offset=10.0)
        result = compile_files([src / "a.sidl"], build, src)
        assert result["a"][0].name == "Renamed"
        assert read_artifact(build / ("a" + ARTIFACT_SUFFIX))[0].name == "Renamed"

    def test_missing_module_triggers_rebuild(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A {}")
        compile_files([src / "a.sidl"], build, src)
        (build / "a.py").unlink()
        compile_files([src / "a.sidl"], build, src)
        assert (build / "a.py").exists()

    def test_changed_type_map_regenerates_module(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A { t: Timestamp, }")
        compile_files([src / "a.sidl"], build, src)
        assert "t: Timestamp" in (build / "a.py").read_text(encoding="utf-8")
        compile_files([src / "a.sidl"], build, src, type_map={"Timestamp": "datetime.datetime"})
        module = (build / "a.py").read_text(encoding="utf-8")
        assert "t: datetime.datetime" in module
        assert "t: Timestamp" not in module

    def test_removed_type_map_entry_regenerates_module(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A { t: Timestamp, }")
        compile_files([src / "a.sidl"], build, src, type_map={"Timestamp": "float"})
        compile_files([src / "a.sidl"], build, src)
        assert "t: Timestamp" in (build / "a.py").read_text(encoding="utf-8")

    def test_unchanged_module_is_not_rewritten(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "a.sidl", "struct A {}")
        compile_files([src / "a.sidl"], build, src)
        module = build / "a.py"
        os.utime(module, (1.0e9, 1.0e9))
        compile_files([src / "a.sidl"], build, src)
        assert module.stat().st_mtime == 1.0e9


# ###############
# Errors
# ###############


class TestErrors:
    def test_parse_error_is_wrapped(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        _write(src / "bad.sidl", "struct User { id: u64 }")
        with pytest.raises(CompilerError, match="Parse error in") as exc_info:
            compile_files([src / "bad.sidl"], tmp_path / "build", src)
        assert isinstance(exc_info.value.__cause__, UnexpectedTokenError)
        assert "expected Comma, found BraceClose" in str(exc_info.value)

    def test_missing_source_is_wrapped(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        src.mkdir()
        with pytest.raises(CompilerError, match="Cannot read source file") as exc_info:
            compile_files([src / "gone.sidl"], tmp_path / "build", src)
        assert isinstance(exc_info.value.__cause__, SourceReadError)

    def test_file_outside_source_root(self, tmp_path: Path) -> None:
        _write(tmp_path / "elsewhere" / "a.sidl", "struct A {}")
        with pytest.raises(CompilerError, match="is not under"):
            compile_files([tmp_path / "elsewhere" / "a.sidl"], tmp_path / "build", tmp_path / "src")

    def test_no_outputs_written_on_error(self, tmp_path: Path) -> None:
        src = tmp_path / "src"
        build = tmp_path / "build"
        _write(src / "bad.sidl", "struct {")
        with pytest.raises(CompilerError):
            compile_files([src / "bad.sidl"], build, src)
        assert not (build / "bad.py").exists()
