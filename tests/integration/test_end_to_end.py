"""End-to-end integration tests."""

from __future__ import annotations

import pytest

from borshkit import (
    U32,
    CodecConfig,
    RecordValue,
    SchemaRegistry,
    Text,
    TrailingBytes,
    build,
    decode,
    decode_union,
    default,
    encode,
    encoded_size,
    field_sizes,
    register_js_schemas,
    to_js_schema,
)

AUTHORITY = bytes(range(32))
PROGRAM = bytes(range(32, 64))
ICON_CID = b"Q" * 64


def make_account(registry: SchemaRegistry) -> RecordValue:
    account = build(
        "RelyingPartyData",
        {
            "version": 1,
            "authority": AUTHORITY,
            "related_program": PROGRAM,
            "related_program_data": {
                "name": "demo",
                "icon_cid": ICON_CID,
                "domain_name": "example.com",
                "redirect_uri": ["https://a.example", "https://b.example"],
            },
        },
        registry=registry,
    )
    assert isinstance(account, RecordValue)
    return account


class TestRelyingPartyAccount:
    """Account data stored by the relying-party program."""

    def test_roundtrip(self, relying_party_registry: SchemaRegistry) -> None:
        """Test full account encode/decode."""
        relying_party_registry.seal()
        account = make_account(relying_party_registry)

        data = encode("RelyingPartyData", account, registry=relying_party_registry)
        decoded = decode("RelyingPartyData", data, registry=relying_party_registry)

        assert decoded == account
        assert decoded["related_program_data"]["redirect_uri"] == [
            "https://a.example",
            "https://b.example",
        ]

    def test_wire_layout(self, relying_party_registry: SchemaRegistry) -> None:
        """Test byte offsets of the account fields."""
        account = make_account(relying_party_registry)
        data = encode("RelyingPartyData", account, registry=relying_party_registry)

        assert data[0] == 1
        assert data[1:33] == AUTHORITY
        assert data[33:65] == PROGRAM
        # name: u32 byte count then UTF-8
        assert data[65:69] == b"\x04\x00\x00\x00"
        assert data[69:73] == b"demo"
        assert data[73:137] == ICON_CID
        # domain_name
        assert data[137:141] == b"\x0b\x00\x00\x00"
        assert data[141:152] == b"example.com"
        # redirect_uri: element count then each string
        assert data[152:156] == b"\x02\x00\x00\x00"
        assert data[156:160] == b"\x11\x00\x00\x00"
        assert data[160:177] == b"https://a.example"
        assert len(data) == 177 + 4 + 17
        assert encoded_size("RelyingPartyData", account, relying_party_registry) == len(data)

    def test_field_sizes(self, relying_party_registry: SchemaRegistry) -> None:
        """Test per-field sizes of the account layout."""
        assert field_sizes("RelyingPartyData", relying_party_registry) == {
            "version": 1,
            "authority": 32,
            "related_program": 32,
            "related_program_data": None,
        }

    def test_padded_account_data(self, relying_party_registry: SchemaRegistry) -> None:
        """Test account buffers allocated larger than the data."""
        account = make_account(relying_party_registry)
        data = encode("RelyingPartyData", account, registry=relying_party_registry)
        padded = data + bytes(64)

        with pytest.raises(TrailingBytes):
            decode("RelyingPartyData", padded, registry=relying_party_registry)

        config = CodecConfig(allow_trailing_bytes=True)
        assert (
            decode("RelyingPartyData", padded, registry=relying_party_registry, config=config)
            == account
        )

    def test_default_account(self, relying_party_registry: SchemaRegistry) -> None:
        """Test the zero account encodes to its minimum size."""
        account = default("RelyingPartyData", registry=relying_party_registry)
        data = encode("RelyingPartyData", account, registry=relying_party_registry)
        assert data == bytes(1 + 32 + 32 + 4 + 64 + 4 + 4)


class TestRelyingInstruction:
    """Instructions sent to the relying-party program."""

    def test_create_account(self, relying_party_registry: SchemaRegistry) -> None:
        """Test the createAccount instruction layout."""
        instruction = build(
            "RelyingInstruction",
            {
                "createAccount": {
                    "program_name": "demo",
                    "program_icon_cid": "cid",
                    "program_domain_name": "example.com",
                    "program_redirect_uri": [],
                    "bump_seed_nonce": 255,
                }
            },
            registry=relying_party_registry,
        )
        data = encode("RelyingInstruction", instruction, registry=relying_party_registry)

        assert data[0] == 0
        assert data[1:9] == b"\x04\x00\x00\x00demo"
        assert data[-5:] == b"\x00\x00\x00\x00\xff"
        assert decode("RelyingInstruction", data, registry=relying_party_registry) == instruction

    def test_empty_variants(self, relying_party_registry: SchemaRegistry) -> None:
        """Test instructions without payload are a single discriminant byte."""
        set_authority = encode(
            "RelyingInstruction", {"setAuthority": None}, registry=relying_party_registry
        )
        close_account = encode(
            "RelyingInstruction", {"closeAccount": {}}, registry=relying_party_registry
        )
        assert set_authority == b"\x01"
        assert close_account == b"\x02"

        value, cursor = decode_union(
            "RelyingInstruction", b"\x02", registry=relying_party_registry
        )
        assert value.variant == "closeAccount"
        assert cursor == 1


class TestCounterVectors:
    """Known byte vectors."""

    def test_text_and_u32(self, registry: SchemaRegistry) -> None:
        """Test {"ab", 3} encodes to the documented bytes."""
        registry.register_record("Counter", [("name", Text), ("count", U32)])
        data = encode("Counter", {"name": "ab", "count": 3}, registry=registry)
        assert data == bytes([0x02, 0x00, 0x00, 0x00, 0x61, 0x62, 0x03, 0x00, 0x00, 0x00])

    def test_unit_variant(self, registry: SchemaRegistry) -> None:
        """Test selecting variant 1 of a two-variant union with empty payloads."""
        registry.register_record("A", [])
        registry.register_record("B", [])
        registry.register_union("AB", [("a", "A"), ("b", "B")])
        assert encode("AB", {"b": None}, registry=registry) == b"\x01"


class TestJsSchemaInterop:
    """Schemas shared with borsh-js clients."""

    def test_js_registered_schema_matches(self, relying_party_registry: SchemaRegistry) -> None:
        """Test schemas imported from borsh-js produce identical bytes."""
        js_registry = SchemaRegistry()
        register_js_schemas(
            {
                type_id: to_js_schema(type_id, relying_party_registry)
                for type_id in relying_party_registry
            },
            js_registry,
        )
        js_registry.seal()

        account = make_account(relying_party_registry)
        expected = encode("RelyingPartyData", account, registry=relying_party_registry)
        js_account = build("RelyingPartyData", account.to_dict(), registry=js_registry)
        assert encode("RelyingPartyData", js_account, registry=js_registry) == expected
