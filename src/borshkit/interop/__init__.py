"""borsh-js interoperability for borshkit.

This module converts between borshkit schemas and the schema maps used by
borsh-js clients.
"""

from __future__ import annotations

from .convert import from_js_schema, js_type_of, parse_js_type, register_js_schemas, to_js_schema

__all__ = [
    "from_js_schema",
    "to_js_schema",
    "parse_js_type",
    "js_type_of",
    "register_js_schemas",
]
