"""Schema registry.

This module provides:
- SchemaRegistry: type id -> schema table consulted by every encode/decode call
- REGISTRY: the process-wide default registry
- Module-level register()/lookup() helpers bound to REGISTRY

Registration is a one-shot startup phase. Register every type the program
uses, optionally call seal(), and only then start encoding and decoding.
Reads take no lock; registering while other threads encode or decode is not
supported.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Iterator, Optional, Tuple

from .exceptions import SchemaConflict, SchemaError, UnknownType
from .models.schema import RecordSchema, Schema, UnionSchema


class SchemaRegistry:
    """Append-only mapping from type id to schema.

    Example:
        >>> registry = SchemaRegistry()
        >>> registry.register_record("Counter", [("name", Text), ("count", U32)])
        >>> registry.lookup("Counter").field_names
        ('name', 'count')
    """

    def __init__(self) -> None:
        self._schemas: dict[str, Schema] = {}
        self._sealed = False
        self._logger = logging.getLogger("borshkit.registry")

    def register(self, type_id: str, schema: Schema) -> None:
        """Register a schema under a type id.

        Registering an identical schema again is a no-op.

        Args:
            type_id: Type identity (non-empty string)
            schema: RecordSchema or UnionSchema

        Raises:
            SchemaConflict: If type_id already holds a different schema
            SchemaError: If the registry is sealed or the arguments are invalid
        """
        if not isinstance(type_id, str) or not type_id:
            raise SchemaError(f"type id must be a non-empty string, got {type_id!r}")
        if not isinstance(schema, (RecordSchema, UnionSchema)):
            raise SchemaError(
                f"{type_id}: expected RecordSchema or UnionSchema, got {type(schema).__name__}"
            )

        existing = self._schemas.get(type_id)
        if existing is not None:
            if existing != schema:
                raise SchemaConflict(
                    f"Type id {type_id!r} is already registered with a different schema"
                )
            # Already registered, no-op
            return

        if self._sealed:
            raise SchemaError(f"Cannot register {type_id!r}: registry is sealed")

        self._schemas[type_id] = schema
        self._logger.debug("Registered %s %r", schema.kind, type_id)

    def register_record(self, type_id: str, fields: Iterable[Tuple[str, Any]]) -> RecordSchema:
        """Register a record from ``(field_name, field_type)`` pairs and return its schema."""
        schema = RecordSchema.from_pairs(fields)
        self.register(type_id, schema)
        return schema

    def register_union(
        self, type_id: str, variants: Iterable[Tuple[str, Optional[str]]]
    ) -> UnionSchema:
        """Register a union from ``(variant_name, record_type_id)`` pairs and return its schema.

        A record type id of None declares a unit variant with no payload.
        """
        schema = UnionSchema.from_pairs(variants)
        self.register(type_id, schema)
        return schema

    def lookup(self, type_id: str) -> Schema:
        """Return the schema registered for type_id.

        Raises:
            UnknownType: If nothing is registered under type_id
        """
        try:
            return self._schemas[type_id]
        except KeyError:
            raise UnknownType(
                f"Unknown type id: {type_id!r}. Did you forget to register it?"
            ) from None

    def check_references(self) -> None:
        """Verify that every type id referenced by a registered schema is registered.

        Raises:
            UnknownType: Naming the first dangling reference
        """
        for type_id, schema in self._schemas.items():
            for ref in schema.references():
                if ref not in self._schemas:
                    raise UnknownType(f"{type_id} refers to unregistered type id {ref!r}")

    def seal(self) -> None:
        """End the registration phase.

        Raises:
            UnknownType: If a registered schema refers to an unregistered type
        """
        self.check_references()
        self._sealed = True
        self._logger.info("Schema registry sealed with %d types", len(self._schemas))

    @property
    def sealed(self) -> bool:
        return self._sealed

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._schemas

    def __iter__(self) -> Iterator[str]:
        return iter(self._schemas)

    def __len__(self) -> int:
        return len(self._schemas)


# Process-wide default registry
REGISTRY = SchemaRegistry()


def register(type_id: str, schema: Schema) -> None:
    """Register a schema in the default registry. See SchemaRegistry.register()."""
    REGISTRY.register(type_id, schema)


def register_record(type_id: str, fields: Iterable[Tuple[str, Any]]) -> RecordSchema:
    """Register a record in the default registry."""
    return REGISTRY.register_record(type_id, fields)


def register_union(type_id: str, variants: Iterable[Tuple[str, Optional[str]]]) -> UnionSchema:
    """Register a union in the default registry."""
    return REGISTRY.register_union(type_id, variants)


def lookup(type_id: str) -> Schema:
    """Look up a schema in the default registry."""
    return REGISTRY.lookup(type_id)


def resolve_registry(registry: Optional[SchemaRegistry]) -> SchemaRegistry:
    return REGISTRY if registry is None else registry
