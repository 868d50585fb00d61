"""Runtime values of registered types.

A record value is an immutable mapping from field name to field value tagged
with the type id it was built for. A union value names exactly one active
variant and carries that variant's payload record (or None for a unit
variant). Values are normally produced by ``build()`` or ``decode()``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator, Optional


class RecordValue(Mapping):
    """Immutable field-name to value mapping for a record type.

    Equality compares the type id and the field contents; the order in which
    fields were supplied does not matter.

    Example:
        >>> value = RecordValue("Counter", {"name": "ab", "count": 3})
        >>> value["count"]
        3
    """

    __slots__ = ("_type_id", "_fields")

    def __init__(self, type_id: str, fields: Optional[Mapping[str, Any]] = None) -> None:
        self._type_id = type_id
        self._fields = dict(fields or {})

    @property
    def type_id(self) -> str:
        return self._type_id

    def __getitem__(self, name: str) -> Any:
        return self._fields[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RecordValue):
            return self._type_id == other._type_id and self._fields == other._fields
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        inner = ", ".join(f"{name}={value!r}" for name, value in self._fields.items())
        return f"{self._type_id}({inner})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to plain dicts and lists, recursively."""
        return {name: _plain(value) for name, value in self._fields.items()}


class UnionValue:
    """A tagged union value with exactly one active variant.

    Attributes:
        type_id: Type id of the union
        variant: Name of the active variant
        value: Payload record of the variant, or None for a unit variant
    """

    __slots__ = ("_type_id", "_variant", "_value")

    def __init__(self, type_id: str, variant: str, value: Optional[RecordValue] = None) -> None:
        self._type_id = type_id
        self._variant = variant
        self._value = value

    @property
    def type_id(self) -> str:
        return self._type_id

    @property
    def variant(self) -> str:
        return self._variant

    @property
    def value(self) -> Optional[RecordValue]:
        return self._value

    def __eq__(self, other: object) -> bool:
        if isinstance(other, UnionValue):
            return (
                self._type_id == other._type_id
                and self._variant == other._variant
                and self._value == other._value
            )
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        if self._value is None:
            return f"{self._type_id}.{self._variant}"
        return f"{self._type_id}.{self._variant}({self._value!r})"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a single-key dict ``{variant: payload}``."""
        return {self._variant: None if self._value is None else self._value.to_dict()}


def _plain(value: Any) -> Any:
    if isinstance(value, (RecordValue, UnionValue)):
        return value.to_dict()
    if isinstance(value, list):
        return [_plain(item) for item in value]
    return value
