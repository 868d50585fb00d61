"""Field type definitions.

Field types describe how a single field is laid out on the wire. They are
immutable, hashable Pydantic models discriminated by ``kind`` so that schemas
can be compared for equality and validated from plain data.

Scalar types are exposed as constants (``Bool``, ``U8`` ... ``U128``, ``Text``)
and parameterized types through factory functions (``FixedBytes``,
``Sequence``, ``Option``, ``Record``), mirroring how borsh-js schemas read:

    >>> fields = [
    ...     ("name", Text),
    ...     ("icon_cid", FixedBytes(64)),
    ...     ("redirect_uri", Sequence(Text)),
    ...     ("authority", Record("PublicKey")),
    ... ]
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class _FieldTypeBase(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    def describe(self) -> str:
        """Return a short human-readable name for the wire type."""
        raise NotImplementedError


class BoolType(_FieldTypeBase):
    """One byte, 0 or 1."""

    kind: Literal["bool"] = "bool"

    def describe(self) -> str:
        return "bool"


class UIntType(_FieldTypeBase):
    """Fixed-width little-endian unsigned integer."""

    kind: Literal["uint"] = "uint"
    bits: Literal[8, 16, 32, 64, 128]

    @property
    def max_value(self) -> int:
        return (1 << self.bits) - 1

    def describe(self) -> str:
        return f"u{self.bits}"


class TextType(_FieldTypeBase):
    """UTF-8 text behind a u32 byte-count prefix."""

    kind: Literal["string"] = "string"

    def describe(self) -> str:
        return "string"


class FixedBytesType(_FieldTypeBase):
    """Exactly ``length`` raw bytes, no prefix."""

    kind: Literal["fixed_bytes"] = "fixed_bytes"
    length: int = Field(ge=0)

    def describe(self) -> str:
        return f"[u8; {self.length}]"


class SequenceType(_FieldTypeBase):
    """u32 element count followed by the elements back to back."""

    kind: Literal["sequence"] = "sequence"
    element: FieldType

    def describe(self) -> str:
        return f"Vec<{self.element.describe()}>"


class OptionType(_FieldTypeBase):
    """One tag byte (0 = absent, 1 = present) followed by the inner value."""

    kind: Literal["option"] = "option"
    inner: FieldType

    def describe(self) -> str:
        return f"Option<{self.inner.describe()}>"


class RecordRef(_FieldTypeBase):
    """Reference to another registered type (record or union) by type id."""

    kind: Literal["record"] = "record"
    type_id: str = Field(min_length=1)

    def describe(self) -> str:
        return self.type_id


FieldType = Annotated[
    Union[BoolType, UIntType, TextType, FixedBytesType, SequenceType, OptionType, RecordRef],
    Field(discriminator="kind"),
]

SequenceType.model_rebuild()
OptionType.model_rebuild()


Bool = BoolType()
U8 = UIntType(bits=8)
U16 = UIntType(bits=16)
U32 = UIntType(bits=32)
U64 = UIntType(bits=64)
U128 = UIntType(bits=128)
Text = TextType()


def FixedBytes(length: int) -> FixedBytesType:
    """Create a fixed-size byte array field type.

    Args:
        length: Exact number of bytes

    Example:
        >>> public_key = FixedBytes(32)
    """
    return FixedBytesType(length=length)


def Sequence(element: FieldType) -> SequenceType:
    """Create a variable-length sequence field type.

    Args:
        element: Field type of every element

    Example:
        >>> redirect_uris = Sequence(Text)
    """
    return SequenceType(element=element)


def Option(inner: FieldType) -> OptionType:
    """Create an optional field type.

    Args:
        inner: Field type of the value when present
    """
    return OptionType(inner=inner)


def Record(type_id: str) -> RecordRef:
    """Create a reference to another registered record or union.

    The referenced type id is resolved at encode/decode time, so types may be
    registered in any order and may refer to themselves through a union,
    sequence or option.

    Args:
        type_id: Registered type id
    """
    return RecordRef(type_id=type_id)
