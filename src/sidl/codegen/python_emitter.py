# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Python source emitter for parsed SIDL declarations.

Structs become dataclasses carrying a stable ``TYPE_ID``; services become
abstract base classes whose methods are async and take a single argument.
"""

from __future__ import annotations

import keyword
from collections.abc import Mapping, Sequence

from sidl.codegen.type_id import stable_type_id
from sidl.model.definitions import Def, ServiceDef, StructDef

# ###############
# Public Interface
# ###############

# Schema type name -> Python annotation. Names not listed are emitted verbatim.
PRIMITIVE_TYPES: dict[str, str] = {
    "u8": "int",
    "u16": "int",
    "u32": "int",
    "u64": "int",
    "u128": "int",
    "usize": "int",
    "i8": "int",
    "i16": "int",
    "i32": "int",
    "i64": "int",
    "i128": "int",
    "isize": "int",
    "f32": "float",
    "f64": "float",
    "bool": "bool",
    "string": "str",
    "String": "str",
    "str": "str",
    "bytes": "bytes",
}


def python_type(schema_type: str, type_map: Mapping[str, str] | None = None) -> str:
    """Map a schema type name to a Python annotation.

    Entries in *type_map* take precedence over the built-in primitive table.
    """
    if type_map is not None and schema_type in type_map:
        return type_map[schema_type]
    return PRIMITIVE_TYPES.get(schema_type, _class_name(schema_type))


def emit_module(
    defs: Sequence[Def],
    *,
    type_map: Mapping[str, str] | None = None,
    source_name: str | None = None,
) -> str:
    """Render declarations as the source of a Python module.

    Args:
        defs: Parsed declarations, emitted in the given order.
        type_map: Optional schema-to-Python type overrides.
        source_name: Name of the schema file, mentioned in the header comment.

    Returns:
        The module source text, ending with a single newline.
    """
    structs = [d for d in defs if isinstance(d, StructDef)]
    services = [d for d in defs if isinstance(d, ServiceDef)]

    origin = f" from {source_name}" if source_name else ""
    lines = [f"# Generated by sidl{origin}. Do not edit.", "", "from __future__ import annotations", ""]
    if services:
        lines.append("import abc as _abc")
    if structs:
        lines.append("from dataclasses import dataclass as _dataclass")
        lines.append("from typing import ClassVar as _ClassVar")

    for d in defs:
        lines.extend(["", ""])
        if isinstance(d, StructDef):
            lines.extend(_emit_struct(d, type_map))
        else:
            lines.extend(_emit_service(d, type_map))

    return "\n".join(lines) + "\n"


# ################
# Implementation
# ################

# Names the generated module binds through its own imports.
_IMPORT_ALIASES = frozenset({"_abc", "_dataclass", "_ClassVar"})


def _safe_name(name: str) -> str:
    """Append an underscore to names that are reserved words in Python."""
    if keyword.iskeyword(name):
        return f"{name}_"
    return name


def _class_name(name: str) -> str:
    """Escape a module-level name, keeping clear of the generated module's own imports."""
    if name in _IMPORT_ALIASES:
        return f"{name}_"
    return _safe_name(name)


def _emit_struct(struct: StructDef, type_map: Mapping[str, str] | None) -> list[str]:
    lines = [
        "@_dataclass",
        f"class {_class_name(struct.name)}:",
        f"    TYPE_ID: _ClassVar[int] = 0x{stable_type_id(struct.name):016x}",
    ]
    if struct.fields:
        lines.append("")
    for f in struct.fields:
        lines.append(f"    {_safe_name(f.name)}: {python_type(f.type, type_map)}")
    return lines


def _emit_service(service: ServiceDef, type_map: Mapping[str, str] | None) -> list[str]:
    lines = [f"class {_class_name(service.name)}(_abc.ABC):"]
    if not service.methods:
        lines.append("    pass")
    for i, method in enumerate(service.methods):
        if i:
            lines.append("")
        arg_name = _safe_name(method.arg_name)
        if arg_name == "self":
            arg_name = "self_"
        arg = f"{arg_name}: {python_type(method.arg_type, type_map)}"
        ret = python_type(method.ret_type, type_map)
        lines.extend(
            [
                "    @_abc.abstractmethod",
                f"    async def {_safe_name(method.name)}(self, {arg}) -> {ret}:",
                "        ...",
            ]
        )
    return lines
