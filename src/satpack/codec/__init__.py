"""Compact binary codec for satpack.

This module provides schema compilation, layer dispatch, and the record
encoder/decoder for tagged-union JSON schemas.
"""

from __future__ import annotations

from .decoder import decode, wrap_envelope
from .encoder import encode
from .schema import (
    Bottom,
    FieldKind,
    FieldSchema,
    Layer,
    MessageConfig,
    SchemaNode,
    compile_schema,
)

__all__ = [
    "encode",
    "decode",
    "wrap_envelope",
    "compile_schema",
    "SchemaNode",
    "Layer",
    "Bottom",
    "FieldKind",
    "FieldSchema",
    "MessageConfig",
]
