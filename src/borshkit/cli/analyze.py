"""Schema analysis CLI command."""

from __future__ import annotations

import importlib.util
import logging
import sys
from pathlib import Path
from typing import Optional

from ..models.schema import RecordSchema
from ..registry import REGISTRY, SchemaRegistry
from ..utils.sizing import fixed_size, min_size

logger = logging.getLogger("borshkit.cli")

WIDTH = 54


def load_file(file_path: Path, registry: SchemaRegistry = REGISTRY) -> list[str]:
    """Execute a Python file that registers schemas.

    Args:
        file_path: Path to Python file containing register_* calls

    Returns:
        Type ids the file added to the registry, in registration order
    """
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    before = set(registry)
    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    added = [type_id for type_id in registry if type_id not in before]
    logger.debug("Loaded %s: %d new types", file_path, len(added))
    return added


def analyze_file(file_path: Path, only: Optional[str] = None) -> None:
    """Analyze all types a Python file registers.

    Args:
        file_path: Path to Python file containing schema registrations
        only: Restrict output to this type id
    """
    type_ids = load_file(file_path)
    if only is not None:
        REGISTRY.lookup(only)
        type_ids = [only]

    if not type_ids:
        print(f"No schemas registered by {file_path}")
        return

    # Print header
    print("|" * 7, "borshkit: borsh schema analyzer", "|" * 7)
    print(f"{len(type_ids)} type{'s' if len(type_ids) != 1 else ''} loaded.")
    print("Sizes are in bytes.")
    print()

    for type_id in type_ids:
        analyze_type(type_id)


def analyze_type(type_id: str, registry: SchemaRegistry = REGISTRY) -> None:
    """Print the wire layout of a single registered type.

    Args:
        type_id: Registered type id
    """
    schema = registry.lookup(type_id)

    print(f"{'=' * 19} {type_id} ({schema.kind}) {'=' * 19}")

    size = fixed_size(type_id, registry)
    if size is not None:
        print(f"Encoded size: {size} bytes")
    else:
        print(f"Encoded size: variable, at least {min_size(type_id, registry)} bytes")

    if isinstance(schema, RecordSchema):
        for i, field in enumerate(schema.fields, 1):
            field_size = fixed_size(field.field_type, registry)
            size_text = "variable" if field_size is None else str(field_size)
            field_desc = f"{i}. {field.name}"
            dots = "." * max(1, WIDTH - len(field_desc) - len(size_text))
            print(f"        {field_desc}{dots}{size_text}  {field.field_type.describe()}")
    else:
        for index, variant in enumerate(schema.variants):
            variant_desc = f"{index}. {variant.name}"
            payload = "(unit)" if variant.record is None else variant.record
            dots = "." * max(1, WIDTH - len(variant_desc))
            print(f"        {variant_desc}{dots}{payload}")

    print()
