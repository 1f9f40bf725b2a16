# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Code generation from parsed SIDL declarations."""

from sidl.codegen.python_emitter import PRIMITIVE_TYPES, emit_module, python_type
from sidl.codegen.type_id import crc64_xz, stable_type_id

__all__ = [
    "PRIMITIVE_TYPES",
    "crc64_xz",
    "emit_module",
    "python_type",
    "stable_type_id",
]
