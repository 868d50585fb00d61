"""Decoder configuration.

This module provides the configuration dataclass that bounds the work a decode
call may do on untrusted input.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecConfig:
    """Limits applied while decoding.

    Attributes:
        max_sequence_length: Largest element count accepted for a sequence
            (default 2**24). Counts above it raise DecodeError before any
            element is read. The wire format itself allows up to 2**32 - 1.

        max_depth: Deepest nesting of records, unions, sequences and options
            (default 128). Recursive schemas fed corrupt input would
            otherwise recurse until the interpreter gives up.

        allow_trailing_bytes: Whether decode() accepts bytes left over after
            a complete value (default False, matching borsh-js deserialize).

    Examples:
        ```python
        from borshkit import CodecConfig, decode

        # Accept account data that is padded past the serialized struct
        config = CodecConfig(allow_trailing_bytes=True)
        value = decode("RelyingPartyData", account_data, config=config)
        ```
    """

    max_sequence_length: int = 1 << 24
    max_depth: int = 128
    allow_trailing_bytes: bool = False

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not 0 <= self.max_sequence_length <= 0xFFFFFFFF:
            raise ValueError(
                f"max_sequence_length must be 0-4294967295, got {self.max_sequence_length}"
            )

        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")


DEFAULT_CONFIG = CodecConfig()
