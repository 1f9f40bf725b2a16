# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Serialization and deserialization of parsed SIDL declarations.

Artifacts are stored as compact JSON files for portability and human-readability.
The format is versioned so future schema changes can be detected.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from sidl.model.definitions import Def

# ###############
# Public Interface
# ###############

ARTIFACT_FORMAT_VERSION = "1"

ARTIFACT_SUFFIX = ".sidl.json"


def serialize(defs: list[Def], *, indent: int | None = None) -> str:
    """Serialize declarations to a JSON string (compact unless *indent* is given)."""
    obj: dict[str, Any] = {"v": ARTIFACT_FORMAT_VERSION, "defs": _DEFS_ADAPTER.dump_python(defs, mode="json")}
    if indent is None:
        return json.dumps(obj, separators=(",", ":"))
    return json.dumps(obj, indent=indent)


def deserialize(data: str) -> list[Def]:
    """Deserialize declarations from a JSON string.

    Args:
        data: JSON string produced by :func:`serialize`.

    Returns:
        The reconstructed declarations, in their original order.

    Raises:
        ValueError: If the artifact format version is not recognised or the
            payload does not describe valid declarations.
    """
    obj = json.loads(data)
    version = obj.get("v")
    if version != ARTIFACT_FORMAT_VERSION:
        raise ValueError(f"Unsupported artifact format version: {version!r}")
    return _DEFS_ADAPTER.validate_python(obj.get("defs", []))


def write_artifact(defs: list[Def], path: Path) -> None:
    """Write a compiled artifact to *path*, creating parent directories as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize(defs), encoding="utf-8")


def read_artifact(path: Path) -> list[Def]:
    """Read and deserialize a compiled artifact from *path*."""
    return deserialize(path.read_text(encoding="utf-8"))


# ################
# Implementation
# ################

_DEFS_ADAPTER: TypeAdapter[list[Def]] = TypeAdapter(list[Def])
