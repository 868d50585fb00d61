"""Value construction facade.

build() turns plain mappings into validated RecordValue/UnionValue instances,
checking every field against the registered schema. default() produces the
zero value of a type, for callers that fill in only some fields.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from ..exceptions import MultipleOrNoVariantsActive, SchemaError, SchemaMismatch
from ..registry import SchemaRegistry, resolve_registry
from .fields import (
    BoolType,
    FixedBytesType,
    OptionType,
    RecordRef,
    SequenceType,
    TextType,
    UIntType,
)
from .schema import RecordSchema, UnionSchema
from .values import RecordValue, UnionValue

Value = Union[RecordValue, UnionValue]


def build(
    type_id: str, field_values: Any, *, registry: Optional[SchemaRegistry] = None
) -> Value:
    """Build a validated value of a registered type.

    For a record, ``field_values`` must supply exactly the declared fields. For
    a union, it must be a single-key mapping ``{variant_name: payload}`` where
    payload is the variant record's field mapping (or None for a unit variant).
    Nested records and unions may be given as mappings and are built
    recursively.

    Args:
        type_id: Registered type id
        field_values: Field mapping (or an already-built value of the same type)
        registry: Registry to resolve schemas in (default: the process-wide registry)

    Returns:
        RecordValue or UnionValue

    Raises:
        SchemaMismatch: If fields are omitted or undeclared, or a value has the wrong type
        MultipleOrNoVariantsActive: If a union mapping names zero or several variants
        UnknownType: If a type id is not registered

    Example:
        >>> instruction = build("RelyingInstruction", {"closeAccount": None})
        >>> instruction.variant
        'closeAccount'
    """
    return _build_type(resolve_registry(registry), type_id, field_values, type_id)


def default(type_id: str, *, registry: Optional[SchemaRegistry] = None) -> Value:
    """Build the zero value of a registered type.

    Booleans are False, integers 0, text empty, fixed bytes all zero,
    sequences empty and options None. Unions default to their first variant.

    Raises:
        SchemaError: If the type has no finite default (its first-variant
            chain leads back to itself)
    """
    return _default_type(resolve_registry(registry), type_id, set())


def _build_type(registry: SchemaRegistry, type_id: str, value: Any, path: str) -> Value:
    schema = registry.lookup(type_id)

    if isinstance(value, (RecordValue, UnionValue)):
        if value.type_id != type_id:
            raise SchemaMismatch(f"Field {path}: expected {type_id}, got {value.type_id}")
        if isinstance(value, UnionValue):
            # Re-validated like a mapping naming its active variant
            value = {value.variant: value.value}

    if not isinstance(value, Mapping):
        raise SchemaMismatch(
            f"Field {path}: expected mapping for {type_id}, got {type(value).__name__}"
        )

    if isinstance(schema, RecordSchema):
        return _build_record(registry, type_id, schema, value, path)
    return _build_union(registry, type_id, schema, value, path)


def _build_record(
    registry: SchemaRegistry,
    type_id: str,
    schema: RecordSchema,
    value: Mapping[str, Any],
    path: str,
) -> RecordValue:
    declared = schema.field_names
    missing = [name for name in declared if name not in value]
    undeclared = [name for name in value if name not in declared]
    if missing or undeclared:
        problems = []
        if missing:
            problems.append(f"missing {missing}")
        if undeclared:
            problems.append(f"undeclared {undeclared}")
        raise SchemaMismatch(f"Field {path}: {type_id} fields do not match: {'; '.join(problems)}")

    return RecordValue(
        type_id,
        {
            field.name: _build_field(
                registry, field.field_type, value[field.name], f"{path}.{field.name}"
            )
            for field in schema.fields
        },
    )


def _build_union(
    registry: SchemaRegistry,
    type_id: str,
    schema: UnionSchema,
    value: Mapping[str, Any],
    path: str,
) -> UnionValue:
    if len(value) != 1:
        raise MultipleOrNoVariantsActive(
            f"Field {path}: {type_id} needs exactly one active variant, got {sorted(value)}"
        )

    ((name, payload),) = value.items()
    variant = schema.variant(name)
    if variant is None:
        raise SchemaMismatch(
            f"Field {path}: {name!r} is not a variant of {type_id} "
            f"(variants: {list(schema.variant_names)})"
        )

    if variant.record is None:
        if payload is not None and not (isinstance(payload, Mapping) and len(payload) == 0):
            raise SchemaMismatch(f"Field {path}.{name}: unit variant takes no payload")
        return UnionValue(type_id, name)

    if payload is None:
        payload = {}
    record = _build_type(registry, variant.record, payload, f"{path}.{name}")
    return UnionValue(type_id, name, record)


def _build_field(registry: SchemaRegistry, field_type: Any, value: Any, path: str) -> Any:
    # Boolean
    if isinstance(field_type, BoolType):
        if not isinstance(value, bool):
            raise SchemaMismatch(f"Field {path}: expected bool, got {type(value).__name__}")
        return value

    # Unsigned integer
    if isinstance(field_type, UIntType):
        if not isinstance(value, int) or isinstance(value, bool):
            raise SchemaMismatch(f"Field {path}: expected int, got {type(value).__name__}")
        if not 0 <= value <= field_type.max_value:
            raise SchemaMismatch(
                f"Field {path}: value {value} out of bounds for {field_type.describe()}"
            )
        return value

    # Text
    if isinstance(field_type, TextType):
        if not isinstance(value, str):
            raise SchemaMismatch(f"Field {path}: expected str, got {type(value).__name__}")
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise SchemaMismatch(f"Field {path}: text is not encodable as UTF-8: {e}") from e
        return value

    # Fixed-size bytes, also accepted as a list of byte values
    if isinstance(field_type, FixedBytesType):
        data = _as_bytes(value, path)
        if len(data) != field_type.length:
            raise SchemaMismatch(
                f"Field {path}: expected {field_type.length} bytes, got {len(data)} bytes"
            )
        return data

    # Sequence
    if isinstance(field_type, SequenceType):
        if isinstance(value, (bytes, bytearray)) and isinstance(field_type.element, UIntType):
            value = list(value)
        if isinstance(value, (str, bytes, bytearray, Mapping)) or not isinstance(value, Iterable):
            raise SchemaMismatch(f"Field {path}: expected list, got {type(value).__name__}")
        return [
            _build_field(registry, field_type.element, item, f"{path}[{index}]")
            for index, item in enumerate(value)
        ]

    # Option
    if isinstance(field_type, OptionType):
        if value is None:
            return None
        return _build_field(registry, field_type.inner, value, path)

    # Nested record or union
    if isinstance(field_type, RecordRef):
        return _build_type(registry, field_type.type_id, value, path)

    raise SchemaMismatch(f"Field {path}: unsupported field type {field_type!r}")


def _as_bytes(value: Any, path: str) -> bytes:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, (list, tuple)):
        try:
            return bytes(value)
        except (TypeError, ValueError) as e:
            raise SchemaMismatch(f"Field {path}: invalid byte values: {e}") from e
    raise SchemaMismatch(f"Field {path}: expected bytes, got {type(value).__name__}")


def _default_type(registry: SchemaRegistry, type_id: str, stack: set[str]) -> Value:
    schema = registry.lookup(type_id)
    if type_id in stack:
        raise SchemaError(f"{type_id} has no finite default value")

    stack.add(type_id)
    try:
        if isinstance(schema, RecordSchema):
            return RecordValue(
                type_id,
                {
                    field.name: _default_field(registry, field.field_type, stack)
                    for field in schema.fields
                },
            )

        first = schema.variants[0]
        if first.record is None:
            return UnionValue(type_id, first.name)
        return UnionValue(type_id, first.name, _default_type(registry, first.record, stack))
    finally:
        stack.discard(type_id)


def _default_field(registry: SchemaRegistry, field_type: Any, stack: set[str]) -> Any:
    if isinstance(field_type, BoolType):
        return False
    if isinstance(field_type, UIntType):
        return 0
    if isinstance(field_type, TextType):
        return ""
    if isinstance(field_type, FixedBytesType):
        return bytes(field_type.length)
    if isinstance(field_type, SequenceType):
        return []
    if isinstance(field_type, OptionType):
        return None
    if isinstance(field_type, RecordRef):
        return _default_type(registry, field_type.type_id, stack)
    raise SchemaError(f"Unsupported field type {field_type!r}")
