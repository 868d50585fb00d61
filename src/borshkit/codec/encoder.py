"""Borsh encoder.

This module provides the encode functions that turn record and union values
into canonical borsh bytes by walking the registered schemas.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Optional

from ..exceptions import (
    EncodeError,
    MissingField,
    MultipleOrNoVariantsActive,
    SchemaError,
    UnknownVariant,
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
from .buffer import ByteWriter


def encode(type_id: str, value: Any, *, registry: Optional[SchemaRegistry] = None) -> bytes:
    """Encode a value of a registered type to borsh bytes.

    Fields are written in the order the schema declares them, regardless of
    the order they are stored in the value.

    Args:
        type_id: Registered type id of the value
        value: RecordValue/mapping for a record, UnionValue/single-key mapping for a union
        registry: Registry to resolve schemas in (default: the process-wide registry)

    Returns:
        Encoded bytes

    Raises:
        SchemaError: If a type id is unknown or the value names no single variant
        EncodeError: If a field is missing or a value is out of range or of the wrong type

    Examples:
        ```python
        from borshkit import U32, Text, build, encode, register_record

        register_record("Counter", [("name", Text), ("count", U32)])
        data = encode("Counter", build("Counter", {"name": "ab", "count": 3}))
        assert data == bytes.fromhex("020000006162" "03000000")
        ```
    """
    registry = resolve_registry(registry)
    writer = ByteWriter()
    _encode_type(writer, registry, type_id, value, type_id)
    return writer.to_bytes()


def encode_record(
    type_id: str, value: Mapping[str, Any], *, registry: Optional[SchemaRegistry] = None
) -> bytes:
    """Encode a record value.

    Raises:
        SchemaError: If type_id is not a registered record
        MissingField: If the value lacks a declared field
    """
    registry = resolve_registry(registry)
    schema = registry.lookup(type_id)
    if not isinstance(schema, RecordSchema):
        raise SchemaError(f"{type_id} is a union, not a record")

    writer = ByteWriter()
    _encode_record(writer, registry, type_id, schema, value, type_id)
    return writer.to_bytes()


def encode_union(
    type_id: str,
    variant: str,
    variant_value: Optional[Mapping[str, Any]] = None,
    *,
    registry: Optional[SchemaRegistry] = None,
) -> bytes:
    """Encode a union given its active variant name and payload.

    The first byte written is the variant's registration index.

    Raises:
        SchemaError: If type_id is not a registered union
        UnknownVariant: If variant is not declared by the union
    """
    registry = resolve_registry(registry)
    schema = registry.lookup(type_id)
    if not isinstance(schema, UnionSchema):
        raise SchemaError(f"{type_id} is a record, not a union")

    writer = ByteWriter()
    _encode_union(writer, registry, type_id, schema, variant, variant_value, type_id)
    return writer.to_bytes()


def _encode_type(
    writer: ByteWriter, registry: SchemaRegistry, type_id: str, value: Any, path: str
) -> None:
    schema = registry.lookup(type_id)

    if isinstance(schema, RecordSchema):
        _encode_record(writer, registry, type_id, schema, value, path)
        return

    if isinstance(value, UnionValue):
        if value.type_id != type_id:
            raise EncodeError(f"Field {path}: expected {type_id}, got {value.type_id}")
        _encode_union(writer, registry, type_id, schema, value.variant, value.value, path)
        return

    if isinstance(value, Mapping) and not isinstance(value, RecordValue):
        if len(value) != 1:
            raise MultipleOrNoVariantsActive(
                f"Field {path}: {type_id} value must name exactly one variant, "
                f"got {sorted(value)}"
            )
        ((variant, payload),) = value.items()
        _encode_union(writer, registry, type_id, schema, variant, payload, path)
        return

    raise EncodeError(
        f"Field {path}: expected {type_id} union value, got {type(value).__name__}"
    )


def _encode_record(
    writer: ByteWriter,
    registry: SchemaRegistry,
    type_id: str,
    schema: RecordSchema,
    value: Any,
    path: str,
) -> None:
    if not isinstance(value, Mapping):
        raise EncodeError(f"Field {path}: expected {type_id} record, got {type(value).__name__}")
    if isinstance(value, RecordValue) and value.type_id != type_id:
        raise EncodeError(f"Field {path}: expected {type_id}, got {value.type_id}")

    undeclared = set(value) - set(schema.field_names)
    if undeclared:
        raise EncodeError(f"Field {path}: {type_id} has no fields {sorted(undeclared)}")

    for field in schema.fields:
        if field.name not in value:
            raise MissingField(f"Field {path}.{field.name}: missing from {type_id} value")
        _encode_field(writer, registry, field.field_type, value[field.name], f"{path}.{field.name}")


def _encode_union(
    writer: ByteWriter,
    registry: SchemaRegistry,
    type_id: str,
    schema: UnionSchema,
    variant: str,
    payload: Any,
    path: str,
) -> None:
    index = schema.index_of(variant)
    if index is None:
        raise UnknownVariant(
            f"Field {path}: {variant!r} is not a variant of {type_id} "
            f"(variants: {list(schema.variant_names)})"
        )

    writer.write_uint(index, 8)

    record = schema.variants[index].record
    if record is None:
        # Unit variant: discriminant only
        if payload is not None and not (isinstance(payload, Mapping) and len(payload) == 0):
            raise EncodeError(f"Field {path}.{variant}: unit variant takes no payload")
        return

    if payload is None:
        payload = RecordValue(record)
    _encode_type(writer, registry, record, payload, f"{path}.{variant}")


def _encode_field(
    writer: ByteWriter, registry: SchemaRegistry, field_type: Any, value: Any, path: str
) -> None:
    """Encode a single field value.

    Raises:
        EncodeError: If value is invalid for the field type
    """
    # Boolean
    if isinstance(field_type, BoolType):
        if not isinstance(value, bool):
            raise EncodeError(f"Field {path}: expected bool, got {type(value).__name__}")
        writer.write_bool(value)
        return

    # Fixed-width unsigned integer
    if isinstance(field_type, UIntType):
        if not isinstance(value, int) or isinstance(value, bool):
            raise EncodeError(f"Field {path}: expected int, got {type(value).__name__}")
        if not 0 <= value <= field_type.max_value:
            raise EncodeError(
                f"Field {path}: value {value} out of bounds for {field_type.describe()} "
                f"[0, {field_type.max_value}]"
            )
        writer.write_uint(value, field_type.bits)
        return

    # Length-prefixed UTF-8 text
    if isinstance(field_type, TextType):
        if not isinstance(value, str):
            raise EncodeError(f"Field {path}: expected str, got {type(value).__name__}")
        try:
            writer.write_string(value)
        except UnicodeEncodeError as e:
            raise EncodeError(f"Field {path}: text is not encodable as UTF-8: {e}") from e
        except ValueError as e:
            raise EncodeError(f"Field {path}: {e}") from e
        return

    # Fixed-size byte array
    if isinstance(field_type, FixedBytesType):
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise EncodeError(f"Field {path}: expected bytes, got {type(value).__name__}")
        data = bytes(value)
        if len(data) != field_type.length:
            raise EncodeError(
                f"Field {path}: expected {field_type.length} bytes, got {len(data)} bytes"
            )
        writer.write_bytes(data)
        return

    # Length-prefixed sequence
    if isinstance(field_type, SequenceType):
        if isinstance(value, (bytes, bytearray)) and isinstance(field_type.element, UIntType):
            value = list(value)
        if not isinstance(value, (list, tuple)):
            raise EncodeError(f"Field {path}: expected list, got {type(value).__name__}")
        try:
            writer.write_length(len(value))
        except ValueError as e:
            raise EncodeError(f"Field {path}: {e}") from e
        for index, item in enumerate(value):
            _encode_field(writer, registry, field_type.element, item, f"{path}[{index}]")
        return

    # Optional value
    if isinstance(field_type, OptionType):
        if value is None:
            writer.write_uint(0, 8)
        else:
            writer.write_uint(1, 8)
            _encode_field(writer, registry, field_type.inner, value, path)
        return

    # Nested record or union
    if isinstance(field_type, RecordRef):
        _encode_type(writer, registry, field_type.type_id, value, path)
        return

    # Unsupported type
    raise EncodeError(f"Field {path}: unsupported field type {field_type!r}")
