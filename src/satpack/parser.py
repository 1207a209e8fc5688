"""Parser: the public handle around a compiled schema.

A Parser is built once from a schema document and is immutable afterwards,
so a single instance can be shared between threads. Every encode and decode
call works on call-local state only.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, Set

from .codec.bytebuf import ByteInput
from .codec.decoder import decode
from .codec.encoder import encode
from .codec.schema import Bottom, Layer, SchemaNode, compile_schema
from .exceptions import EncodeError, ParseError

logger = logging.getLogger(__name__)


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _loads(text: str, what: str) -> Any:
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise ParseError(f"{what} could not be serialized into key-value map") from e


class Parser:
    """Encoder/decoder for one schema document.

    Example:
        >>> parser = Parser.from_text(schema_text)
        >>> data = parser.encode({"status": {"depth": 50, "ok": True}})
        >>> parser.decode(data)
        {'status': {'depth': 50, 'ok': True}}
    """

    __slots__ = ("_schema",)

    def __init__(self, schema: Any) -> None:
        """Compile a parsed schema document.

        Args:
            schema: Parsed JSON schema document

        Raises:
            ParseError: If the document cannot be compiled
        """
        self._schema = compile_schema(schema)
        logger.debug("Compiled %r", self)

    @classmethod
    def from_text(cls, text: str) -> Parser:
        """Create a parser from JSON schema text.

        Raises:
            ParseError: If the text is not JSON or the schema cannot be compiled
        """
        return cls(_loads(text, "Schema"))

    @classmethod
    def from_node(cls, node: SchemaNode) -> Parser:
        """Create a parser rooted at an already compiled node."""
        if not isinstance(node, (Layer, Bottom)):
            raise ParseError("Provided node is not a compiled schema node")
        parser = cls.__new__(cls)
        parser._schema = node
        return parser

    @property
    def schema(self) -> SchemaNode:
        """Root node of the compiled schema tree."""
        return self._schema

    def encode(self, message: Any) -> bytes:
        """Encode a message value into bytes.

        Raises:
            ParseError: If a layer-level object does not have exactly one key
            EncodeError: If the message does not match the schema
        """
        return encode(self._schema, message)

    def encode_from_text(self, text: str) -> bytes:
        """Encode a JSON message text into bytes.

        Raises:
            ParseError: If the text is not JSON
            EncodeError: If the message does not match the schema
        """
        return self.encode(_loads(text, "String"))

    def decode(self, data: ByteInput) -> Dict[str, Any]:
        """Decode bytes into a message value.

        Raises:
            EncodeError: If the bytes do not match the schema (DecodeError subclass)
        """
        return decode(self._schema, data)

    def decode_to_text(self, data: ByteInput) -> str:
        """Decode bytes into compact JSON text."""
        return json.dumps(self.decode(data), separators=(",", ":"), ensure_ascii=False)

    def get_top_level_names(self) -> Set[str]:
        """Return the names selectable at the root.

        For a layered schema these are the alternative ids; for a single
        record schema it is the record's own id.

        Raises:
            ParseError: If the root is a record without a string id
        """
        if isinstance(self._schema, Layer):
            return set(self._schema.lookup)
        name = self._schema.name
        if name is None:
            raise ParseError("Missing an ID value")
        return {name}

    def get_sub_schema(self, name: str) -> SchemaNode:
        """Return the compiled alternative registered under ``name`` at the root.

        Raises:
            ParseError: If the root is a single record schema
            EncodeError: If ``name`` is not an alternative of the root layer
        """
        if not isinstance(self._schema, Layer):
            raise ParseError("get_sub_schema requires a layered schema")
        tag = self._schema.lookup.get(name)
        if tag is None:
            raise EncodeError("Unable to get scheme id", name)
        return self._schema.schemes[tag]

    def __repr__(self) -> str:
        if isinstance(self._schema, Layer):
            return f"Parser(layer={sorted(self._schema.lookup)!r})"
        return f"Parser(bottom={self._schema.name!r})"
