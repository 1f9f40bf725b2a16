# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Declarations produced by the SIDL parser."""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict
from pydantic import Field as _Field

# ###############
# Public Interface
# ###############


class FieldDef(BaseModel):
    """A named, typed member of a struct."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str


class StructDef(BaseModel):
    """A record type. Field order follows the source."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["struct"] = "struct"
    name: str
    fields: tuple[FieldDef, ...] = ()


class MethodDef(BaseModel):
    """A service method taking exactly one argument and returning one value."""

    model_config = ConfigDict(frozen=True)

    name: str
    arg_name: str
    arg_type: str
    ret_type: str


class ServiceDef(BaseModel):
    """An RPC-style service contract."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["service"] = "service"
    name: str
    methods: tuple[MethodDef, ...] = ()


# A top-level declaration. The `kind` discriminator keeps deserialization unambiguous.
Def = Annotated[StructDef | ServiceDef, _Field(discriminator="kind")]
