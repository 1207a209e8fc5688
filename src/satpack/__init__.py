"""satpack: Schema-Driven Compact Codec

A Python library for compact binary encoding of JSON messages described by a
JSON schema. Designed for bandwidth-constrained links, particularly
satellite short-burst data channels, where a single schema document is
shared by both ends of the link.

Key Features:
- One schema drives both encoding and decoding
- Nested ``oneOf`` unions cost one tag byte per level
- Fixed-width booleans, enums, integers and doubles; length-prefixed strings
- Pure Python implementation with pydantic-validated field schemas

Quick Start:
    >>> from satpack import Parser
    >>>
    >>> parser = Parser({
    ...     "oneOf": [{
    ...         "id": "status",
    ...         "required": ["depth", "label", "ok"],
    ...         "properties": {
    ...             "depth": {"type": "integer", "size": 16},
    ...             "label": {"type": "string"},
    ...             "ok": {"type": "boolean"},
    ...         },
    ...     }]
    ... })
    >>> data = parser.encode({"status": {"depth": 50, "label": "Test", "ok": True}})
    >>> list(data)
    [0, 50, 0, 4, 84, 101, 115, 116, 1]
    >>> parser.decode(data)
    {'status': {'depth': 50, 'label': 'Test', 'ok': True}}
"""

from __future__ import annotations

from .codec import (
    Bottom,
    FieldKind,
    FieldSchema,
    Layer,
    MessageConfig,
    SchemaNode,
    compile_schema,
    decode,
    encode,
)
from .config import LinkConfig
from .exceptions import DecodeError, EncodeError, ParseError, SatpackError
from .parser import Parser
from .utils import encoded_size, field_size, field_sizes, max_encoded_size

__version__ = "0.1.0"

__all__ = [
    # Core API
    "Parser",
    "encode",
    "decode",
    "compile_schema",
    # Schema tree
    "SchemaNode",
    "Layer",
    "Bottom",
    "FieldKind",
    "FieldSchema",
    "MessageConfig",
    # Exceptions
    "SatpackError",
    "ParseError",
    "EncodeError",
    "DecodeError",
    # Sizing
    "encoded_size",
    "field_size",
    "field_sizes",
    "max_encoded_size",
    # Configuration
    "LinkConfig",
    # Version
    "__version__",
]
