"""Relying-party program account and instruction schemas.

Registers the account layout and instruction union of an on-chain relying
party program, then encodes and decodes a sample account and instruction.

Run with:
    python examples/relying_party.py
    borshkit --analyze examples/relying_party.py
"""

from __future__ import annotations

from borshkit import (
    U8,
    FixedBytes,
    Record,
    Sequence,
    Text,
    build,
    decode,
    encode,
    encoded_size,
    register_record,
    register_union,
)

PUBKEY = FixedBytes(32)

register_record(
    "RelatedProgramInfo",
    [
        ("name", Text),
        ("icon_cid", FixedBytes(64)),
        ("domain_name", Text),
        ("redirect_uri", Sequence(Text)),
    ],
)

register_record(
    "RelyingPartyData",
    [
        ("version", U8),
        ("authority", PUBKEY),
        ("related_program", PUBKEY),
        ("related_program_data", Record("RelatedProgramInfo")),
    ],
)

register_record(
    "CreateAccount",
    [
        ("program_name", Text),
        ("program_icon_cid", Text),
        ("program_domain_name", Text),
        ("program_redirect_uri", Sequence(Text)),
        ("bump_seed_nonce", U8),
    ],
)

register_record("SetAuthority", [])
register_record("CloseAccount", [])

register_union(
    "RelyingInstruction",
    [
        ("createAccount", "CreateAccount"),
        ("setAuthority", "SetAuthority"),
        ("closeAccount", "CloseAccount"),
    ],
)


def main() -> None:
    """Demonstrate encoding and decoding of relying-party data."""
    print("=" * 60)
    print("borshkit: relying-party account example")
    print("=" * 60)

    account = build(
        "RelyingPartyData",
        {
            "version": 1,
            "authority": bytes(range(32)),
            "related_program": bytes(32),
            "related_program_data": {
                "name": "example",
                "icon_cid": b"\x01" * 64,
                "domain_name": "example.com",
                "redirect_uri": ["https://example.com/callback"],
            },
        },
    )

    data = encode("RelyingPartyData", account)
    print(f"\nAccount: {encoded_size('RelyingPartyData', account)} bytes")
    print(f"  hex: {data.hex()[:64]}...")

    decoded = decode("RelyingPartyData", data)
    assert decoded == account
    print(f"  name: {decoded['related_program_data']['name']}")
    print(f"  redirect_uri: {decoded['related_program_data']['redirect_uri']}")

    close = build("RelyingInstruction", {"closeAccount": None})
    close_data = encode("RelyingInstruction", close)
    print(f"\ncloseAccount instruction: {close_data.hex()}")
    assert decode("RelyingInstruction", close_data) == close


if __name__ == "__main__":
    main()
