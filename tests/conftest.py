"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from borshkit import (
    U8,
    U16,
    U32,
    FixedBytes,
    Record,
    SchemaRegistry,
    Sequence,
    Text,
)


@pytest.fixture
def registry() -> SchemaRegistry:
    """Empty schema registry, isolated from the process-wide one."""
    return SchemaRegistry()


@pytest.fixture
def sample_registry(registry: SchemaRegistry) -> SchemaRegistry:
    """Registry with a few small records and a tagged union."""
    registry.register_record("Counter", [("name", Text), ("count", U32)])
    registry.register_record("Point", [("x", U16), ("y", U16)])
    registry.register_record("Circle", [("radius", U32)])
    registry.register_record("Square", [("side", U8)])
    registry.register_union(
        "Shape",
        [("Circle", "Circle"), ("Empty", None), ("Square", "Square")],
    )
    return registry


@pytest.fixture
def relying_party_registry(registry: SchemaRegistry) -> SchemaRegistry:
    """Registry holding the relying-party account and instruction schemas."""
    registry.register_record(
        "RelatedProgramInfo",
        [
            ("name", Text),
            ("icon_cid", FixedBytes(64)),
            ("domain_name", Text),
            ("redirect_uri", Sequence(Text)),
        ],
    )
    registry.register_record(
        "RelyingPartyData",
        [
            ("version", U8),
            ("authority", FixedBytes(32)),
            ("related_program", FixedBytes(32)),
            ("related_program_data", Record("RelatedProgramInfo")),
        ],
    )
    registry.register_record(
        "CreateAccount",
        [
            ("program_name", Text),
            ("program_icon_cid", Text),
            ("program_domain_name", Text),
            ("program_redirect_uri", Sequence(Text)),
            ("bump_seed_nonce", U8),
        ],
    )
    registry.register_record("SetAuthority", [])
    registry.register_record("CloseAccount", [])
    registry.register_union(
        "RelyingInstruction",
        [
            ("createAccount", "CreateAccount"),
            ("setAuthority", "SetAuthority"),
            ("closeAccount", "CloseAccount"),
        ],
    )
    return registry
