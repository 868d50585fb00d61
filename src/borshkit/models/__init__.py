"""Field types and runtime values for borshkit.

This module provides the field type vocabulary used to declare schemas and
the record/union value classes that encode() consumes and decode() returns.
The value construction facade lives in ``borshkit.models.builder``.
"""

from __future__ import annotations

from .fields import (
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    FieldType,
    FixedBytes,
    Option,
    Record,
    Sequence,
    Text,
)
from .values import RecordValue, UnionValue

__all__ = [
    "FieldType",
    "Bool",
    "U8",
    "U16",
    "U32",
    "U64",
    "U128",
    "Text",
    "FixedBytes",
    "Sequence",
    "Option",
    "Record",
    "RecordValue",
    "UnionValue",
]
