"""Exception hierarchy for borshkit.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from BorshkitError for easy catching of any borshkit-specific error.
"""

from __future__ import annotations


class BorshkitError(Exception):
    """Base exception for all borshkit errors."""

    pass


class SchemaError(BorshkitError):
    """Raised when a schema is invalid, unknown, or used inconsistently.

    Examples:
        - Duplicate field or variant names
        - Unsupported field type in a borsh-js schema
        - Registering into a sealed registry
    """

    pass


class SchemaConflict(SchemaError):
    """Raised when a type id is re-registered with a different schema."""

    pass


class UnknownType(SchemaError):
    """Raised when a type id has no registered schema."""

    pass


class SchemaMismatch(SchemaError):
    """Raised when a value does not match the shape its schema declares.

    Examples:
        - Omitted or undeclared fields passed to build()
        - Wrong Python type or out-of-range integer for a field
        - Unknown variant name
    """

    pass


class MultipleOrNoVariantsActive(SchemaMismatch):
    """Raised when a union value names zero or more than one variant."""

    pass


class EncodeError(BorshkitError):
    """Raised when encoding a value fails.

    Examples:
        - Integer out of range for its width
        - Fixed bytes of the wrong length
        - Value tagged with a different type id than expected
    """

    pass


class MissingField(EncodeError):
    """Raised when a record value lacks a declared field at encode time."""

    pass


class UnknownVariant(EncodeError):
    """Raised when encoding a union variant name that is not registered."""

    pass


class DecodeError(BorshkitError):
    """Raised when decoding binary data fails.

    Examples:
        - Truncated data (insufficient bytes)
        - Invalid boolean, option tag, or UTF-8 bytes
        - Unknown union discriminant
        - Sequence longer than the configured maximum
    """

    pass


class TruncatedBuffer(DecodeError):
    """Raised when the buffer ends before a value is complete."""

    pass


class InvalidUtf8(DecodeError):
    """Raised when text bytes are not valid UTF-8."""

    pass


class InvalidBoolean(DecodeError):
    """Raised when a boolean byte is neither 0 nor 1."""

    pass


class UnknownDiscriminant(DecodeError):
    """Raised when a union discriminant byte indexes no registered variant."""

    pass


class TrailingBytes(DecodeError):
    """Raised when bytes remain after decoding a complete top-level value."""

    pass
