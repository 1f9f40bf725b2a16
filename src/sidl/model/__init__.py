# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declaration model for SIDL schemas (structs, services, methods)."""

from sidl.model.definitions import Def, FieldDef, MethodDef, ServiceDef, StructDef

__all__ = [
    "Def",
    "FieldDef",
    "MethodDef",
    "ServiceDef",
    "StructDef",
]
