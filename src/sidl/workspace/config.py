# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Data model and YAML parser for the SIDL workspace configuration file."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml

# ###############
# Public Interface
# ###############

WORKSPACE_FILE_NAME = ".sidl-workspace.yaml"

DEFAULT_BUILD_DIRECTORY = ".sidl-build"


class WorkspaceConfigError(Exception):
    """Raised when a workspace configuration file is invalid or cannot be loaded."""


@dataclass
class WorkspaceConfig:
    """The parsed configuration for a SIDL workspace.

    Attributes:
        build_directory: Relative path (from the workspace root) for generated output.
        type_mappings: Schema type names mapped to Python annotations, overriding
            the built-in primitive table.
    """

    build_directory: str
    type_mappings: dict[str, str] = field(default_factory=dict)


def load_workspace_config(path: Path) -> WorkspaceConfig:
    """Load and parse a SIDL workspace configuration file.

    Args:
        path: Path to the `.sidl-workspace.yaml` file.

    Returns:
        A WorkspaceConfig instance populated from the file.

    Raises:
        WorkspaceConfigError: If the file cannot be read or the configuration is invalid.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise WorkspaceConfigError(f"Workspace config file not found: {path}") from None
    except OSError as exc:
        raise WorkspaceConfigError(f"Cannot read workspace config file: {exc}") from exc

    return _parse_workspace_config(text, source_label=str(path))


# ################
# Implementation
# ################


def _parse_workspace_config(text: str, source_label: str = "<string>") -> WorkspaceConfig:
    """Parse workspace config YAML text into a WorkspaceConfig.

    Raises:
        WorkspaceConfigError: If the YAML is invalid or required fields are missing.
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise WorkspaceConfigError(f"Invalid YAML in {source_label}: {exc}") from exc

    if not isinstance(data, dict):
        raise WorkspaceConfigError(f"{source_label}: workspace config must be a YAML mapping")

    build_directory = _require_string(data, "build-directory", source_label)

    type_mappings: dict[str, str] = {}
    if "type-mappings" in data:
        raw_mappings = data["type-mappings"]
        if not isinstance(raw_mappings, dict):
            raise WorkspaceConfigError(f"{source_label}: 'type-mappings' must be a mapping")
        location = f"{source_label}: type-mappings"
        for schema_type in raw_mappings:
            if not isinstance(schema_type, str):
                raise WorkspaceConfigError(f"{location}: keys must be strings, got {schema_type!r}")
            type_mappings[schema_type] = _require_string(raw_mappings, schema_type, location)

    return WorkspaceConfig(build_directory=build_directory, type_mappings=type_mappings)


def _require_string(mapping: dict[str, object], key: str, source_label: str) -> str:
    """Extract a required string field from a mapping, raising WorkspaceConfigError if missing."""
    if key not in mapping:
        raise WorkspaceConfigError(f"{source_label}: missing required field '{key}'")
    value = mapping[key]
    if not isinstance(value, str):
        raise WorkspaceConfigError(f"{source_label}: '{key}' must be a string")
    return value
