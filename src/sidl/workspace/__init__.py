# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Workspace configuration for SIDL."""

from sidl.workspace.config import (
    DEFAULT_BUILD_DIRECTORY,
    WORKSPACE_FILE_NAME,
    WorkspaceConfig,
    WorkspaceConfigError,
    load_workspace_config,
)

__all__ = [
    "DEFAULT_BUILD_DIRECTORY",
    "WORKSPACE_FILE_NAME",
    "WorkspaceConfig",
    "WorkspaceConfigError",
    "load_workspace_config",
]
