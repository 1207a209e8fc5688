"""Layer dispatch for both codec directions.

Encoding walks the layers guided by the message's single signal key at each
level; decoding walks them guided by one leading tag byte per level. Both
stop at the Bottom node that describes the transmitted record.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Tuple

from ..exceptions import DecodeError, EncodeError, ParseError
from .bytebuf import ByteUnpacker
from .schema import Bottom, Layer, SchemaNode

logger = logging.getLogger(__name__)


def find_schema_encoding(node: SchemaNode, message: Any) -> Tuple[Bottom, Any, List[int]]:
    """Descend the layers selected by the message's signal keys.

    Args:
        node: Root of the compiled schema tree
        message: Message value, nested single-key objects down to the record

    Returns:
        Tuple of (bottom node, innermost record value, tag bytes outer-to-inner)

    Raises:
        ParseError: If a layer-level object does not have exactly one key
        EncodeError: If a signal key is not an alternative of its layer
    """
    tags: List[int] = []
    while isinstance(node, Layer):
        if not isinstance(message, Mapping):
            raise ParseError("Message doesn't have a signal key")
        if len(message) > 1:
            raise ParseError("Message has more than one signal key")
        if not message:
            raise ParseError("Message doesn't have a signal key")

        (signal,) = message.keys()
        tag = node.lookup.get(signal)
        if tag is None:
            raise EncodeError("Unable to get scheme id", str(signal))

        logger.debug("Signal %r selects tag %d", signal, tag)
        tags.append(tag)
        node = node.schemes[tag]
        message = message[signal]

    return node, message, tags


def find_schema_decoding(
    node: SchemaNode, unpacker: ByteUnpacker
) -> Tuple[Bottom, ByteUnpacker, List[str]]:
    """Descend the layers selected by the leading tag bytes.

    One byte is consumed per layer.

    Args:
        node: Root of the compiled schema tree
        unpacker: Cursor over the received bytes

    Returns:
        Tuple of (bottom node, cursor after the tags, alternative names outer-to-inner)

    Raises:
        DecodeError: If the data ends before a tag byte or a tag is unknown
    """
    names: List[str] = []
    while isinstance(node, Layer):
        try:
            tag = unpacker.read_byte()
        except IndexError as e:
            raise DecodeError("Message is empty") from e

        child = node.schemes.get(tag)
        if child is None:
            raise DecodeError("Provided Message Bit couldn't be found", str(tag))

        logger.debug("Tag %d selects %r", tag, node.names[tag])
        names.append(node.names[tag])
        node = child

    return node, unpacker, names
