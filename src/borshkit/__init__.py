"""borshkit: schema-driven borsh serialization

A Python library for encoding and decoding the canonical borsh binary format
used by on-chain programs: little-endian fixed-width integers, u32
length-prefixed text and sequences, and single-byte discriminants for tagged
unions.

Key Features:
- Explicit schema registry keyed by type id (no class introspection)
- Records, tagged unions, options and recursive type graphs
- Validated value construction with build() and default()
- borsh-js schema import/export

Quick Start:
    >>> from borshkit import Text, U32, build, decode, encode, register_record
    >>>
    >>> register_record("Counter", [("name", Text), ("count", U32)])
    >>>
    >>> value = build("Counter", {"name": "ab", "count": 3})
    >>> data = encode("Counter", value)
    >>> data.hex()
    '02000000616203000000'
    >>> decode("Counter", data) == value
    True
"""

from __future__ import annotations

from .codec import (
    decode,
    decode_prefix,
    decode_record,
    decode_union,
    encode,
    encode_record,
    encode_union,
)
from .config import CodecConfig
from .exceptions import (
    BorshkitError,
    DecodeError,
    EncodeError,
    InvalidBoolean,
    InvalidUtf8,
    MissingField,
    MultipleOrNoVariantsActive,
    SchemaConflict,
    SchemaError,
    SchemaMismatch,
    TrailingBytes,
    TruncatedBuffer,
    UnknownDiscriminant,
    UnknownType,
    UnknownVariant,
)
from .interop import from_js_schema, register_js_schemas, to_js_schema
from .models import (
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    FixedBytes,
    Option,
    Record,
    RecordValue,
    Sequence,
    Text,
    UnionValue,
)
from .models.builder import build, default
from .models.schema import FieldSchema, RecordSchema, UnionSchema, VariantSchema
from .registry import (
    REGISTRY,
    SchemaRegistry,
    lookup,
    register,
    register_record,
    register_union,
)
from .utils import encoded_size, field_sizes, fixed_size, min_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "encode",
    "decode",
    "encode_record",
    "decode_record",
    "encode_union",
    "decode_union",
    "decode_prefix",
    # Values
    "build",
    "default",
    "RecordValue",
    "UnionValue",
    # Field types
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
    # Schemas and registry
    "FieldSchema",
    "RecordSchema",
    "UnionSchema",
    "VariantSchema",
    "SchemaRegistry",
    "REGISTRY",
    "register",
    "register_record",
    "register_union",
    "lookup",
    # Configuration
    "CodecConfig",
    # Exceptions
    "BorshkitError",
    "SchemaError",
    "SchemaConflict",
    "UnknownType",
    "SchemaMismatch",
    "MultipleOrNoVariantsActive",
    "EncodeError",
    "MissingField",
    "UnknownVariant",
    "DecodeError",
    "TruncatedBuffer",
    "InvalidUtf8",
    "InvalidBoolean",
    "UnknownDiscriminant",
    "TrailingBytes",
    # Sizing
    "encoded_size",
    "field_sizes",
    "fixed_size",
    "min_size",
    # borsh-js interop
    "from_js_schema",
    "to_js_schema",
    "register_js_schemas",
    # Version
    "__version__",
]
