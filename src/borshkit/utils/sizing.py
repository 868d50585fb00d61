"""Encoded size calculation utilities.

This module provides functions to calculate encoded sizes from schemas,
without encoding anything, plus the exact size of a concrete value.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from ..codec.encoder import encode
from ..exceptions import SchemaError
from ..models.fields import (
    BoolType,
    FixedBytesType,
    OptionType,
    RecordRef,
    SequenceType,
    TextType,
    UIntType,
)
from ..models.schema import RecordSchema
from ..registry import SchemaRegistry, resolve_registry

Target = Union[str, Any]


def fixed_size(target: Target, registry: Optional[SchemaRegistry] = None) -> Optional[int]:
    """Return the constant encoded size of a type, or None if it varies with the value.

    Args:
        target: Registered type id or a field type

    Returns:
        Size in bytes, or None for variable-size types (text, sequences,
        options, unions whose variants differ in size, recursive types)

    Raises:
        UnknownType: If a referenced type id is not registered

    Example:
        >>> fixed_size(FixedBytes(32))
        32
        >>> fixed_size(Text) is None
        True
    """
    registry = resolve_registry(registry)
    if isinstance(target, str):
        return _fixed_type(target, registry, set())
    return _fixed_field(target, registry, set())


def min_size(target: Target, registry: Optional[SchemaRegistry] = None) -> int:
    """Return the smallest number of bytes any value of a type can encode to.

    Raises:
        SchemaError: If the type has no finite encoding (a record that
            contains itself with no union, sequence or option in between)
        UnknownType: If a referenced type id is not registered
    """
    registry = resolve_registry(registry)
    if isinstance(target, str):
        size = _min_type(target, registry, set())
    else:
        size = _min_field(target, registry, set())
    if size is None:
        raise SchemaError(f"{_name(target)} has no finite encoding")
    return size


def encoded_size(type_id: str, value: Any, registry: Optional[SchemaRegistry] = None) -> int:
    """Calculate the exact encoded size of a value in bytes.

    Raises:
        SchemaError, EncodeError: As encode() would
    """
    return len(encode(type_id, value, registry=registry))


def field_sizes(
    type_id: str, registry: Optional[SchemaRegistry] = None
) -> dict[str, Optional[int]]:
    """Get the fixed size in bytes of each field of a record.

    Returns:
        Dictionary mapping field names to their size, None for variable-size fields

    Raises:
        SchemaError: If type_id is not a record

    Example:
        >>> field_sizes("Counter")
        {'name': None, 'count': 4}
    """
    registry = resolve_registry(registry)
    schema = registry.lookup(type_id)
    if not isinstance(schema, RecordSchema):
        raise SchemaError(f"{type_id} is a union, not a record")
    return {field.name: fixed_size(field.field_type, registry) for field in schema.fields}


def _name(target: Target) -> str:
    return target if isinstance(target, str) else target.describe()


def _fixed_field(field_type: Any, registry: SchemaRegistry, stack: set[str]) -> Optional[int]:
    if isinstance(field_type, BoolType):
        return 1
    if isinstance(field_type, UIntType):
        return field_type.bits // 8
    if isinstance(field_type, FixedBytesType):
        return field_type.length
    if isinstance(field_type, RecordRef):
        return _fixed_type(field_type.type_id, registry, stack)
    if isinstance(field_type, (TextType, SequenceType, OptionType)):
        return None
    raise SchemaError(f"Unsupported field type {field_type!r}")


def _fixed_type(type_id: str, registry: SchemaRegistry, stack: set[str]) -> Optional[int]:
    schema = registry.lookup(type_id)
    if type_id in stack:
        return None

    stack.add(type_id)
    try:
        if isinstance(schema, RecordSchema):
            total = 0
            for field in schema.fields:
                size = _fixed_field(field.field_type, registry, stack)
                if size is None:
                    return None
                total += size
            return total

        sizes = set()
        for variant in schema.variants:
            if variant.record is None:
                sizes.add(0)
            else:
                sizes.add(_fixed_type(variant.record, registry, stack))
        if len(sizes) != 1 or None in sizes:
            return None
        return 1 + sizes.pop()
    finally:
        stack.discard(type_id)


def _min_field(field_type: Any, registry: SchemaRegistry, stack: set[str]) -> Optional[int]:
    if isinstance(field_type, BoolType):
        return 1
    if isinstance(field_type, UIntType):
        return field_type.bits // 8
    if isinstance(field_type, FixedBytesType):
        return field_type.length
    if isinstance(field_type, (TextType, SequenceType)):
        # Empty text or sequence is just the u32 prefix
        return 4
    if isinstance(field_type, OptionType):
        return 1
    if isinstance(field_type, RecordRef):
        return _min_type(field_type.type_id, registry, stack)
    raise SchemaError(f"Unsupported field type {field_type!r}")


def _min_type(type_id: str, registry: SchemaRegistry, stack: set[str]) -> Optional[int]:
    """Minimum encoded size, or None when every path loops back into the stack."""
    schema = registry.lookup(type_id)
    if type_id in stack:
        return None

    stack.add(type_id)
    try:
        if isinstance(schema, RecordSchema):
            total = 0
            for field in schema.fields:
                size = _min_field(field.field_type, registry, stack)
                if size is None:
                    return None
                total += size
            return total

        candidates = []
        for variant in schema.variants:
            if variant.record is None:
                candidates.append(0)
            else:
                size = _min_type(variant.record, registry, stack)
                if size is not None:
                    candidates.append(size)
        if not candidates:
            return None
        return 1 + min(candidates)
    finally:
        stack.discard(type_id)
