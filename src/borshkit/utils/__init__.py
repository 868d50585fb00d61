"""Utility functions for borshkit.

This module provides encoded size calculation.
"""

from __future__ import annotations

from .sizing import encoded_size, field_sizes, fixed_size, min_size

__all__ = [
    "encoded_size",
    "field_sizes",
    "fixed_size",
    "min_size",
]
