"""Utility functions for satpack.

This module provides size calculation utilities.
"""

from __future__ import annotations

from .sizing import encoded_size, field_size, field_sizes, max_encoded_size

__all__ = [
    "encoded_size",
    "field_size",
    "field_sizes",
    "max_encoded_size",
]
