"""Borsh decoder.

This module provides the decode functions that rebuild record and union values
from borsh bytes by walking the same schemas the encoder uses.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

from ..config import DEFAULT_CONFIG, CodecConfig
from ..exceptions import (
    DecodeError,
    SchemaError,
    TrailingBytes,
    TruncatedBuffer,
    UnknownDiscriminant,
)
from ..models.fields import (
    BoolType,
    FixedBytesType,
    OptionType,
    RecordRef,
    SequenceType,
    TextType,
    UIntType,
)
from ..models.schema import RecordSchema, UnionSchema
from ..models.values import RecordValue, UnionValue
from ..registry import SchemaRegistry, resolve_registry
from ..utils.sizing import min_size
from .buffer import ByteReader

Value = Union[RecordValue, UnionValue]


@dataclass
class _DecodeContext:
    reader: ByteReader
    registry: SchemaRegistry
    config: CodecConfig


def decode(
    type_id: str,
    data: bytes,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Value:
    """Decode borsh bytes to a value of a registered type.

    The whole buffer must be consumed unless ``config.allow_trailing_bytes``
    is set.

    Args:
        type_id: Registered type id to decode as
        data: Encoded bytes
        registry: Registry to resolve schemas in (default: the process-wide registry)
        config: Decoding limits (default: CodecConfig())

    Returns:
        RecordValue or UnionValue

    Raises:
        SchemaError: If a type id is unknown
        TruncatedBuffer: If data ends before the value is complete
        TrailingBytes: If bytes remain after the value
        DecodeError: If data is otherwise malformed

    Examples:
        ```python
        from borshkit import decode

        value = decode("Counter", bytes.fromhex("020000006162" "03000000"))
        assert value["name"] == "ab" and value["count"] == 3
        ```
    """
    config = DEFAULT_CONFIG if config is None else config
    value, offset = decode_prefix(type_id, data, registry=registry, config=config)

    if offset != len(data) and not config.allow_trailing_bytes:
        raise TrailingBytes(
            f"Unexpected {len(data) - offset} bytes after deserialized {type_id}"
        )
    return value


def decode_prefix(
    type_id: str,
    data: bytes,
    offset: int = 0,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Tuple[Value, int]:
    """Decode one value starting at offset and return it with the offset after it.

    Bytes after the value are left for the caller.
    """
    ctx = _context(data, offset, registry, config)
    value = _decode_type(ctx, type_id, type_id, 1)
    return value, ctx.reader.position


def decode_record(
    type_id: str,
    data: bytes,
    cursor: int = 0,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Tuple[RecordValue, int]:
    """Decode a record starting at cursor.

    Returns:
        Tuple of (record value, cursor after the record)

    Raises:
        SchemaError: If type_id is not a registered record
        TruncatedBuffer: If data ends before the record is complete
    """
    ctx = _context(data, cursor, registry, config)
    schema = ctx.registry.lookup(type_id)
    if not isinstance(schema, RecordSchema):
        raise SchemaError(f"{type_id} is a union, not a record")

    value = _decode_record(ctx, type_id, schema, type_id, 1)
    return value, ctx.reader.position


def decode_union(
    type_id: str,
    data: bytes,
    cursor: int = 0,
    *,
    registry: Optional[SchemaRegistry] = None,
    config: Optional[CodecConfig] = None,
) -> Tuple[UnionValue, int]:
    """Decode a union starting at cursor.

    Returns:
        Tuple of (union value, cursor after the union)

    Raises:
        SchemaError: If type_id is not a registered union
        UnknownDiscriminant: If the first byte indexes no variant
    """
    ctx = _context(data, cursor, registry, config)
    schema = ctx.registry.lookup(type_id)
    if not isinstance(schema, UnionSchema):
        raise SchemaError(f"{type_id} is a record, not a union")

    value = _decode_union(ctx, type_id, schema, type_id, 1)
    return value, ctx.reader.position


def _context(
    data: bytes,
    offset: int,
    registry: Optional[SchemaRegistry],
    config: Optional[CodecConfig],
) -> _DecodeContext:
    return _DecodeContext(
        reader=ByteReader(data, offset),
        registry=resolve_registry(registry),
        config=DEFAULT_CONFIG if config is None else config,
    )


def _check_depth(ctx: _DecodeContext, depth: int, path: str) -> None:
    if depth > ctx.config.max_depth:
        raise DecodeError(f"Field {path}: nesting exceeds max_depth={ctx.config.max_depth}")


def _decode_type(ctx: _DecodeContext, type_id: str, path: str, depth: int) -> Value:
    _check_depth(ctx, depth, path)
    schema = ctx.registry.lookup(type_id)
    if isinstance(schema, RecordSchema):
        return _decode_record(ctx, type_id, schema, path, depth)
    return _decode_union(ctx, type_id, schema, path, depth)


def _decode_record(
    ctx: _DecodeContext, type_id: str, schema: RecordSchema, path: str, depth: int
) -> RecordValue:
    field_values: dict[str, Any] = {}
    for field in schema.fields:
        field_path = f"{path}.{field.name}"
        field_values[field.name] = _decode_field(ctx, field.field_type, field_path, depth)
    return RecordValue(type_id, field_values)


def _decode_union(
    ctx: _DecodeContext, type_id: str, schema: UnionSchema, path: str, depth: int
) -> UnionValue:
    index = ctx.reader.read_uint(8)
    if index >= len(schema.variants):
        raise UnknownDiscriminant(
            f"Field {path}: invalid discriminant {index} for {type_id} "
            f"(only {len(schema.variants)} variants)"
        )

    variant = schema.variants[index]
    if variant.record is None:
        return UnionValue(type_id, variant.name)

    payload = _decode_type(ctx, variant.record, f"{path}.{variant.name}", depth + 1)
    return UnionValue(type_id, variant.name, payload)


def _decode_field(ctx: _DecodeContext, field_type: Any, path: str, depth: int) -> Any:
    """Decode a single field value.

    Raises:
        DecodeError: If data is invalid
        TruncatedBuffer: If data is truncated
    """
    reader = ctx.reader

    # Boolean
    if isinstance(field_type, BoolType):
        return reader.read_bool()

    # Fixed-width unsigned integer
    if isinstance(field_type, UIntType):
        return reader.read_uint(field_type.bits)

    # Length-prefixed UTF-8 text
    if isinstance(field_type, TextType):
        return reader.read_string()

    # Fixed-size byte array
    if isinstance(field_type, FixedBytesType):
        return reader.read_bytes(field_type.length)

    # Length-prefixed sequence
    if isinstance(field_type, SequenceType):
        _check_depth(ctx, depth + 1, path)
        count = reader.read_length()
        if count > ctx.config.max_sequence_length:
            raise DecodeError(
                f"Field {path}: sequence length {count} exceeds "
                f"max_sequence_length={ctx.config.max_sequence_length}"
            )

        element = field_type.element
        element_size = min_size(element, ctx.registry)
        if element_size == 0 and count > 0:
            # Nothing in the input bounds the element count
            raise DecodeError(
                f"Field {path}: sequence of zero-size elements with count {count}"
            )
        if count * element_size > reader.remaining():
            raise TruncatedBuffer(
                f"Field {path}: truncated data: {count} elements need at least "
                f"{count * element_size} bytes, only {reader.remaining()} remain"
            )

        if isinstance(element, UIntType) and element.bits == 8:
            return list(reader.read_bytes(count))
        return [
            _decode_field(ctx, element, f"{path}[{index}]", depth + 1) for index in range(count)
        ]

    # Optional value
    if isinstance(field_type, OptionType):
        _check_depth(ctx, depth + 1, path)
        tag = reader.read_uint(8)
        if tag == 0:
            return None
        if tag != 1:
            raise DecodeError(f"Field {path}: invalid option tag 0x{tag:02x}")
        return _decode_field(ctx, field_type.inner, path, depth + 1)

    # Nested record or union
    if isinstance(field_type, RecordRef):
        return _decode_type(ctx, field_type.type_id, path, depth + 1)

    # Unsupported type
    raise DecodeError(f"Field {path}: unsupported field type {field_type!r}")
