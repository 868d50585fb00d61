"""Record and union schemas.

A schema is the structural description registered for a type id. Record
schemas list fields in wire order; union schemas list variants in discriminant
order. Both are frozen Pydantic models, so two schemas built from the same
description compare equal and re-registering one is harmless.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..exceptions import SchemaError
from .fields import FieldType, OptionType, RecordRef, SequenceType

# Discriminant is a single byte
MAX_VARIANTS = 256


class FieldSchema(BaseModel):
    """A single ``(name, field_type)`` entry of a record schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    field_type: FieldType


class VariantSchema(BaseModel):
    """A single union variant.

    Attributes:
        name: Variant name
        record: Type id of the payload record, or None for a unit variant
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    record: Optional[str] = Field(default=None, min_length=1)


class RecordSchema(BaseModel):
    """Ordered field list of a struct.

    Example:
        >>> schema = RecordSchema.from_pairs([("name", Text), ("count", U32)])
        >>> [field.name for field in schema.fields]
        ['name', 'count']
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["struct"] = "struct"
    fields: Tuple[FieldSchema, ...] = ()

    @field_validator("fields")
    @classmethod
    def _unique_names(cls, fields: Tuple[FieldSchema, ...]) -> Tuple[FieldSchema, ...]:
        seen: set[str] = set()
        for field in fields:
            if field.name in seen:
                raise ValueError(f"duplicate field name {field.name!r}")
            seen.add(field.name)
        return fields

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Any]]) -> RecordSchema:
        """Build a record schema from ``(field_name, field_type)`` pairs.

        Raises:
            SchemaError: If a name is empty or repeated, or a type is not a field type
        """
        try:
            return cls(fields=tuple(FieldSchema(name=name, field_type=ft) for name, ft in pairs))
        except ValidationError as e:
            raise SchemaError(f"Invalid record schema: {e}") from e

    @property
    def field_names(self) -> Tuple[str, ...]:
        return tuple(field.name for field in self.fields)

    def references(self) -> Iterator[str]:
        """Yield every type id this schema refers to."""
        for field in self.fields:
            yield from _type_references(field.field_type)


class UnionSchema(BaseModel):
    """Ordered variant list of a tagged union.

    The discriminant written on the wire is the 0-based position of the
    active variant in ``variants``.

    Example:
        >>> schema = UnionSchema.from_pairs(
        ...     [("createAccount", "CreateAccount"), ("closeAccount", None)]
        ... )
        >>> schema.index_of("closeAccount")
        1
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["enum"] = "enum"
    variants: Tuple[VariantSchema, ...] = Field(min_length=1, max_length=MAX_VARIANTS)

    @field_validator("variants")
    @classmethod
    def _unique_names(cls, variants: Tuple[VariantSchema, ...]) -> Tuple[VariantSchema, ...]:
        seen: set[str] = set()
        for variant in variants:
            if variant.name in seen:
                raise ValueError(f"duplicate variant name {variant.name!r}")
            seen.add(variant.name)
        return variants

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, Optional[str]]]) -> UnionSchema:
        """Build a union schema from ``(variant_name, record_type_id)`` pairs.

        Raises:
            SchemaError: If there are no variants, more than 256, or repeated names
        """
        try:
            return cls(variants=tuple(VariantSchema(name=name, record=rec) for name, rec in pairs))
        except ValidationError as e:
            raise SchemaError(f"Invalid union schema: {e}") from e

    @property
    def variant_names(self) -> Tuple[str, ...]:
        return tuple(variant.name for variant in self.variants)

    def index_of(self, name: str) -> Optional[int]:
        """Return the discriminant of a variant, or None if not declared."""
        for index, variant in enumerate(self.variants):
            if variant.name == name:
                return index
        return None

    def variant(self, name: str) -> Optional[VariantSchema]:
        index = self.index_of(name)
        return None if index is None else self.variants[index]

    def references(self) -> Iterator[str]:
        for variant in self.variants:
            if variant.record is not None:
                yield variant.record


Schema = Union[RecordSchema, UnionSchema]


def _type_references(field_type: Any) -> Iterator[str]:
    if isinstance(field_type, RecordRef):
        yield field_type.type_id
    elif isinstance(field_type, SequenceType):
        yield from _type_references(field_type.element)
    elif isinstance(field_type, OptionType):
        yield from _type_references(field_type.inner)
