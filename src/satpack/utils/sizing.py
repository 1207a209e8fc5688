"""Message size calculation utilities.

This module provides functions to calculate the encoded size of messages
without actually encoding them.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from ..codec.constants import MAX_STRING_BYTES
from ..codec.dispatch import find_schema_encoding
from ..codec.schema import Bottom, FieldSchema, Layer, MessageConfig, SchemaNode
from ..exceptions import EncodeError
from ..parser import Parser


def _root(parser_or_node: Union[Parser, SchemaNode]) -> SchemaNode:
    if isinstance(parser_or_node, Parser):
        return parser_or_node.schema
    return parser_or_node


def field_size(field_schema: FieldSchema, value: Optional[Any] = None) -> int:
    """Calculate the bytes one field occupies on the wire.

    Args:
        field_schema: Schema of the field
        value: Field value; only consulted for strings and blobs

    Returns:
        Size in bytes. Without a value, strings and blobs report their
        worst case (length byte plus 255 bytes).

    Raises:
        EncodeError: If a string/blob value is not text

    Example:
        >>> field_size(FieldSchema(name="depth", kind=FieldKind.INTEGER, size=16))
        2
    """
    width = field_schema.byte_width
    if width is not None:
        return width
    if value is None:
        return 1 + MAX_STRING_BYTES
    if not isinstance(value, str):
        raise EncodeError("Could not serialize data as a string", field_schema.name)
    return 1 + len(value.encode("utf-8"))


def field_sizes(bottom: Bottom, record: Optional[Mapping[str, Any]] = None) -> Dict[str, int]:
    """Get the size in bytes of each field of a record.

    Args:
        bottom: Record schema
        record: Record value; when omitted, strings/blobs report their worst case

    Returns:
        Dictionary mapping field names to their size in bytes, in wire order

    Example:
        >>> field_sizes(bottom)
        {'depth': 2, 'label': 256, 'ok': 1}
    """
    config = MessageConfig.from_bottom(bottom)
    values = record if record is not None else {}
    return {name: field_size(config.fields[name], values.get(name)) for name in config.order}


def encoded_size(parser_or_node: Union[Parser, SchemaNode], message: Any) -> int:
    """Calculate the encoded size of a message in bytes.

    Equals ``len(parser.encode(message))`` for any message that encodes.

    Args:
        parser_or_node: Parser or compiled schema root
        message: Message value

    Returns:
        Tag bytes plus field bytes

    Raises:
        ParseError: If a layer-level object does not have exactly one key
        EncodeError: If the message does not match the schema
    """
    bottom, record, tags = find_schema_encoding(_root(parser_or_node), message)
    config = MessageConfig.from_bottom(bottom)
    if config.order and not isinstance(record, Mapping):
        raise EncodeError("Message record is not a key-value map", bottom.name)
    total = len(tags)
    for name in config.order:
        if name not in record:
            raise EncodeError("Message is missing a required field", name)
        total += field_size(config.fields[name], record[name])
    return total


def max_encoded_size(parser_or_node: Union[Parser, SchemaNode]) -> int:
    """Calculate the worst-case encoded size over every record of a schema.

    Args:
        parser_or_node: Parser or compiled schema root

    Returns:
        Largest possible message size in bytes
    """
    node = _root(parser_or_node)
    if isinstance(node, Layer):
        children = [max_encoded_size(child) for child in node.schemes.values()]
        return 1 + max(children, default=0)
    return sum(field_sizes(node).values())
