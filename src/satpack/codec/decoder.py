"""Compact binary decoder for schema-described messages.

This module provides the decode() function that converts wire bytes back to a
message value: leading tag bytes select the record schema, the record fields
are read in declared order, and the record is rewrapped under the names of
the alternatives the tags selected.
"""

from __future__ import annotations

import copy
import logging
import math
from typing import Any, Dict, Sequence

from ..exceptions import DecodeError
from .bytebuf import ByteInput, ByteUnpacker
from .dispatch import find_schema_decoding
from .schema import Bottom, FieldKind, FieldSchema, MessageConfig, SchemaNode

logger = logging.getLogger(__name__)


def decode(schema: SchemaNode, data: ByteInput) -> Dict[str, Any]:
    """Decode compact binary data to a message value.

    Args:
        schema: Root of the compiled schema tree
        data: Encoded bytes (or an iterable of ints 0-255)

    Returns:
        Message value, the record nested under one single-key object per layer

    Raises:
        EncodeError: If the schema's record declaration is malformed
        DecodeError: If data is empty, truncated, or doesn't match the schema

    Example:
        ```python
        from satpack import Parser

        parser = Parser.from_text(schema_text)
        message = parser.decode(b"\\x00\\x32\\x04Test\\x01")
        ```
    """
    unpacker = ByteUnpacker(data)
    bottom, unpacker, names = find_schema_decoding(schema, unpacker)
    record = decode_record(bottom, unpacker)

    remaining = unpacker.bytes_remaining()
    if remaining:
        logger.debug("Ignoring %d trailing bytes after %r", remaining, bottom.name)

    return wrap_envelope(record, names)


def decode_record(bottom: Bottom, unpacker: ByteUnpacker) -> Dict[str, Any]:
    """Decode the fields of a flat record.

    Args:
        bottom: Bottom node describing the record
        unpacker: Cursor positioned at the first field

    Returns:
        Field name -> value, in declared order

    Raises:
        EncodeError: If the schema's record declaration is malformed
        DecodeError: If data is truncated or a field value is invalid
    """
    config = MessageConfig.from_bottom(bottom)

    record: Dict[str, Any] = {}
    for name in config.order:
        try:
            record[name] = _decode_field(unpacker, config.fields[name])
        except IndexError as e:
            raise DecodeError(f"Truncated data while decoding field {name}: {e}", name) from e
    return record


def _decode_field(unpacker: ByteUnpacker, field_schema: FieldSchema) -> Any:
    """Decode a single field value.

    Args:
        unpacker: ByteUnpacker to read from
        field_schema: Schema information for the field

    Returns:
        Decoded field value

    Raises:
        DecodeError: If data is invalid
        IndexError: If data is truncated
    """
    name = field_schema.name
    kind = field_schema.kind

    if kind is FieldKind.ENUM:
        assert field_schema.values is not None
        index = unpacker.read_byte()
        if index >= len(field_schema.values):
            raise DecodeError(
                f"Invalid enum index {index} (only {len(field_schema.values)} values)", name
            )
        return copy.deepcopy(field_schema.values[index])

    if kind is FieldKind.BOOLEAN:
        return unpacker.read_bool()

    if kind is FieldKind.INTEGER:
        assert field_schema.byte_width is not None
        # Zero-extended: values encoded from negatives come back positive
        return unpacker.read_uint_le(field_schema.byte_width)

    if kind is FieldKind.NUMBER:
        value = unpacker.read_float64()
        if not math.isfinite(value):
            raise DecodeError(f"Decoded number {value} has no JSON representation", name)
        return value

    if kind in (FieldKind.STRING, FieldKind.BLOB):
        raw = unpacker.read_prefixed()
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid UTF-8 encoding: {e}", name) from e

    raise DecodeError("Invalid property keyword", name)


def wrap_envelope(record: Dict[str, Any], names: Sequence[str]) -> Dict[str, Any]:
    """Nest a record under the alternative names, outermost first.

    Example:
        >>> wrap_envelope({"a": 1}, ["outer", "inner"])
        {'outer': {'inner': {'a': 1}}}
    """
    if not names:
        return record
    return {names[0]: wrap_envelope(record, names[1:])}
