# Copyright 2026 SIDL Contributors
# SPDX-License-Identifier: Apache-2.0

"""Stable per-type identifiers derived from declared struct names.

The identifier is a CRC-64 (XZ / ECMA-182 polynomial, reflected) of the
UTF-8 name followed by a single 0xFF terminator byte. The value is identical
across interpreter runs and platforms, unlike the built-in ``hash()``.
"""

# ###############
# Public Interface
# ###############


def crc64_xz(data: bytes) -> int:
    """Return the CRC-64/XZ checksum of *data*."""
    crc = _MASK
    for b in data:
        crc = _TABLE[(crc ^ b) & 0xFF] ^ (crc >> 8)
    return crc ^ _MASK


def stable_type_id(name: str) -> int:
    """Return the non-zero stable identifier for the type called *name*."""
    type_id = crc64_xz(name.encode("utf-8") + b"\xff")
    return type_id or 1


# ################
# Implementation
# ################

_POLY = 0xC96C5795D7870F42  # 0x42F0E1EBA9EA3693, bit-reversed
_MASK = 0xFFFFFFFFFFFFFFFF


def _build_table() -> list[int]:
    table: list[int] = []
    for i in range(256):
        crc = i
        for _ in range(8):
            if crc & 1:
                crc = (crc >> 1) ^ _POLY
            else:
                crc >>= 1
        table.append(crc)
    return table


_TABLE = _build_table()
