"""Borsh codec for borshkit.

This module provides schema-driven encoding and decoding of records and
tagged unions in the canonical borsh binary format.
"""

from __future__ import annotations

from .decoder import decode, decode_prefix, decode_record, decode_union
from .encoder import encode, encode_record, encode_union
from ..models.schema import FieldSchema, RecordSchema, Schema, UnionSchema, VariantSchema

__all__ = [
    "encode",
    "encode_record",
    "encode_union",
    "decode",
    "decode_prefix",
    "decode_record",
    "decode_union",
    "FieldSchema",
    "RecordSchema",
    "UnionSchema",
    "VariantSchema",
    "Schema",
]
