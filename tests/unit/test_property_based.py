"""Property-based tests using hypothesis."""

from __future__ import annotations

from typing import Any, Optional

import pytest
from hypothesis import given
from hypothesis import strategies as st

from borshkit import (
    U8,
    U16,
    U32,
    U64,
    U128,
    Bool,
    DecodeError,
    FixedBytes,
    Option,
    Record,
    SchemaRegistry,
    Sequence,
    Text,
    TrailingBytes,
    TruncatedBuffer,
    build,
    decode,
    encode,
)

# Module-level registry: hypothesis re-runs each test many times and
# function-scoped fixtures are not reset between examples.
REGISTRY = SchemaRegistry()
REGISTRY.register_record(
    "Sample",
    [
        ("flag", Bool),
        ("small", U8),
        ("medium", U16),
        ("large", U64),
        ("huge", U128),
        ("label", Text),
        ("key", FixedBytes(4)),
        ("values", Sequence(U32)),
        ("maybe", Option(U16)),
    ],
)
REGISTRY.register_record("Move", [("dx", U16), ("dy", U16)])
REGISTRY.register_record("Say", [("text", Text)])
REGISTRY.register_union("Command", [("Stop", None), ("Move", "Move"), ("Say", "Say")])
REGISTRY.register_record("Script", [("commands", Sequence(Record("Command")))])
REGISTRY.seal()

samples = st.fixed_dictionaries(
    {
        "flag": st.booleans(),
        "small": st.integers(min_value=0, max_value=0xFF),
        "medium": st.integers(min_value=0, max_value=0xFFFF),
        "large": st.integers(min_value=0, max_value=(1 << 64) - 1),
        "huge": st.integers(min_value=0, max_value=(1 << 128) - 1),
        "label": st.text(max_size=20),
        "key": st.binary(min_size=4, max_size=4),
        "values": st.lists(st.integers(min_value=0, max_value=0xFFFFFFFF), max_size=5),
        "maybe": st.none() | st.integers(min_value=0, max_value=0xFFFF),
    }
)

commands = st.one_of(
    st.just({"Stop": None}),
    st.builds(
        lambda dx, dy: {"Move": {"dx": dx, "dy": dy}},
        st.integers(min_value=0, max_value=0xFFFF),
        st.integers(min_value=0, max_value=0xFFFF),
    ),
    st.builds(lambda text: {"Say": {"text": text}}, st.text(max_size=10)),
)


class TestCodecProperties:
    """Property-based tests for codec."""

    @given(fields=samples)
    def test_encode_decode_roundtrip(self, fields: dict[str, Any]) -> None:
        """Test encode/decode is invertible."""
        value = build("Sample", fields, registry=REGISTRY)
        data = encode("Sample", value, registry=REGISTRY)
        assert decode("Sample", data, registry=REGISTRY) == value

    @given(fields=samples)
    def test_encode_deterministic(self, fields: dict[str, Any]) -> None:
        """Test encoding is deterministic and independent of key order."""
        reordered = dict(reversed(list(fields.items())))
        assert encode("Sample", fields, registry=REGISTRY) == encode(
            "Sample", reordered, registry=REGISTRY
        )

    @given(script=st.lists(commands, max_size=6))
    def test_union_sequence_roundtrip(self, script: list[dict[str, Any]]) -> None:
        """Test sequences of tagged unions round-trip."""
        value = build("Script", {"commands": script}, registry=REGISTRY)
        data = encode("Script", value, registry=REGISTRY)
        decoded = decode("Script", data, registry=REGISTRY)
        assert decoded == value
        assert [command.to_dict() for command in decoded["commands"]] == script

    @given(fields=samples)
    def test_truncated_input_rejected(self, fields: dict[str, Any]) -> None:
        """Test every non-empty proper prefix of a record encoding is truncated."""
        encoded = encode("Sample", fields, registry=REGISTRY)
        for cut in range(1, len(encoded)):
            with pytest.raises(TruncatedBuffer):
                decode("Sample", encoded[:cut], registry=REGISTRY)

    @given(script=st.lists(commands, max_size=6))
    def test_truncated_union_sequence_rejected(self, script: list[dict[str, Any]]) -> None:
        """Test every non-empty proper prefix of a union sequence is truncated."""
        encoded = encode("Script", {"commands": script}, registry=REGISTRY)
        for cut in range(1, len(encoded)):
            with pytest.raises(TruncatedBuffer):
                decode("Script", encoded[:cut], registry=REGISTRY)

    @given(fields=samples, extra=st.binary(min_size=1, max_size=8))
    def test_trailing_bytes_rejected(self, fields: dict[str, Any], extra: bytes) -> None:
        """Test bytes after a complete value fail to decode."""
        encoded = encode("Sample", fields, registry=REGISTRY)
        with pytest.raises(TrailingBytes):
            decode("Sample", encoded + extra, registry=REGISTRY)

    @given(garbage=st.binary(max_size=64))
    def test_arbitrary_bytes_never_crash(self, garbage: bytes) -> None:
        """Test random input either decodes or raises DecodeError."""
        result: Optional[Any]
        try:
            result = decode("Script", garbage, registry=REGISTRY)
        except DecodeError:
            result = None
        if result is not None:
            assert encode("Script", result, registry=REGISTRY) == garbage
