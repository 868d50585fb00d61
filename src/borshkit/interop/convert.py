"""borsh-js schema conversion utilities.

borsh-js describes types with plain objects registered in a schema map:

    SCHEMA.set(RelatedProgramInfo, {
      kind: 'struct',
      fields: [['name', 'String'], ['icon_cid', ['u8']], ['redirect_uri', ['String']]],
    });

This module converts such descriptions (as Python dicts/lists, e.g. loaded
from JSON) to RecordSchema/UnionSchema and back, so schemas can be shared
with JavaScript clients of the same program.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ..exceptions import SchemaError
from ..models.fields import (
    Bool,
    BoolType,
    FixedBytes,
    FixedBytesType,
    Option,
    OptionType,
    Record,
    RecordRef,
    Sequence,
    SequenceType,
    Text,
    TextType,
    U8,
    U16,
    U32,
    U64,
    U128,
    UIntType,
)
from ..models.schema import RecordSchema, Schema, UnionSchema
from ..registry import SchemaRegistry, resolve_registry

_PRIMITIVES = {
    "bool": Bool,
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "u128": U128,
    "string": Text,
    "String": Text,
}


def from_js_schema(spec: Mapping[str, Any]) -> Schema:
    """Convert a borsh-js schema entry to a RecordSchema or UnionSchema.

    Args:
        spec: ``{'kind': 'struct', 'fields': [[name, type], ...]}`` or
            ``{'kind': 'enum', 'values': [[name, type_id_or_None], ...]}``

    Returns:
        Schema equivalent to spec

    Raises:
        SchemaError: If spec uses a kind or field type borshkit cannot express

    Example:
        >>> schema = from_js_schema({"kind": "struct", "fields": [["version", "u8"]]})
        >>> schema.fields[0].field_type.describe()
        'u8'
    """
    kind = spec.get("kind")

    if kind == "struct":
        pairs = [
            (_entry_name(entry), parse_js_type(_entry_type(entry)))
            for entry in spec.get("fields", [])
        ]
        return RecordSchema.from_pairs(pairs)

    if kind == "enum":
        pairs = []
        for entry in spec.get("values", []):
            ref = _entry_type(entry)
            pairs.append((_entry_name(entry), None if ref is None else _type_id_of(ref)))
        return UnionSchema.from_pairs(pairs)

    raise SchemaError(f"Unsupported borsh-js schema kind {kind!r} (expected 'struct' or 'enum')")


def parse_js_type(js_type: Any) -> Any:
    """Convert a borsh-js field type to a borshkit field type.

    Supported forms: primitive names (``'u8'`` ... ``'u128'``, ``'bool'``,
    ``'string'``), ``[n]`` and ``['u8', n]`` fixed byte arrays, ``[t]``
    sequences, ``{'kind': 'option', 'type': t}`` options, and any other name
    or class as a reference to a registered type.

    Raises:
        SchemaError: If js_type has no borshkit equivalent
    """
    if isinstance(js_type, str):
        if js_type in _PRIMITIVES:
            return _PRIMITIVES[js_type]
        return Record(js_type)

    if isinstance(js_type, type):
        return Record(js_type.__name__)

    if isinstance(js_type, (list, tuple)):
        if len(js_type) == 1 and isinstance(js_type[0], int) and js_type[0] >= 0:
            return FixedBytes(js_type[0])
        if len(js_type) == 1:
            return Sequence(parse_js_type(js_type[0]))
        if len(js_type) == 2 and js_type[0] == "u8" and isinstance(js_type[1], int):
            if js_type[1] >= 0:
                return FixedBytes(js_type[1])
        raise SchemaError(f"Unsupported borsh-js array type {js_type!r}")

    if isinstance(js_type, Mapping) and js_type.get("kind") == "option":
        return Option(parse_js_type(js_type["type"]))

    raise SchemaError(f"Unsupported borsh-js field type {js_type!r}")


def to_js_schema(type_id: str, registry: Optional[SchemaRegistry] = None) -> dict[str, Any]:
    """Generate the borsh-js schema entry of a registered type.

    Referenced types appear by type id; register them under the same names on
    the JavaScript side.
    """
    schema = resolve_registry(registry).lookup(type_id)

    if isinstance(schema, RecordSchema):
        return {
            "kind": "struct",
            "fields": [[field.name, js_type_of(field.field_type)] for field in schema.fields],
        }

    return {
        "kind": "enum",
        "field": "enum",
        "values": [[variant.name, variant.record] for variant in schema.variants],
    }


def js_type_of(field_type: Any) -> Any:
    """Convert a borshkit field type to its borsh-js form."""
    if isinstance(field_type, BoolType):
        return "bool"
    if isinstance(field_type, UIntType):
        return field_type.describe()
    if isinstance(field_type, TextType):
        return "string"
    if isinstance(field_type, FixedBytesType):
        return [field_type.length]
    if isinstance(field_type, SequenceType):
        return [js_type_of(field_type.element)]
    if isinstance(field_type, OptionType):
        return {"kind": "option", "type": js_type_of(field_type.inner)}
    if isinstance(field_type, RecordRef):
        return field_type.type_id
    raise SchemaError(f"Cannot convert field type {field_type!r} to borsh-js")


def register_js_schemas(
    specs: Mapping[Any, Mapping[str, Any]], registry: Optional[SchemaRegistry] = None
) -> list[str]:
    """Register a whole borsh-js schema map.

    Keys may be type id strings or classes (registered under their ``__name__``).

    Returns:
        Registered type ids, in the order given
    """
    registry = resolve_registry(registry)
    type_ids = []
    for key, spec in specs.items():
        type_id = _type_id_of(key)
        registry.register(type_id, from_js_schema(spec))
        type_ids.append(type_id)
    return type_ids


def _type_id_of(ref: Any) -> str:
    if isinstance(ref, type):
        return ref.__name__
    if isinstance(ref, str) and ref:
        return ref
    raise SchemaError(f"Expected a type id or class, got {ref!r}")


def _entry_name(entry: Any) -> str:
    if not isinstance(entry, (list, tuple)) or len(entry) != 2:
        raise SchemaError(f"borsh-js schema entries are [name, type] pairs, got {entry!r}")
    return str(entry[0])


def _entry_type(entry: Any) -> Any:
    _entry_name(entry)
    return entry[1]
