"""Compact binary encoder for schema-described messages.

This module provides the encode() function that converts a message value to
its wire form: one tag byte per layer traversed, followed by the record's
fields in the order declared by the schema's ``required`` array.
"""

from __future__ import annotations

import logging
import math
from typing import Any, Mapping

from ..exceptions import EncodeError
from .bytebuf import BytePacker
from .constants import INT64_MAX, INT64_MIN, MAX_STRING_BYTES
from .dispatch import find_schema_encoding
from .schema import Bottom, FieldKind, FieldSchema, MessageConfig, SchemaNode

logger = logging.getLogger(__name__)


def encode(schema: SchemaNode, message: Any) -> bytes:
    """Encode a message value to compact binary format.

    Args:
        schema: Root of the compiled schema tree
        message: Message value (nested single-key objects down to the record)

    Returns:
        Tag bytes followed by the encoded record fields

    Raises:
        ParseError: If a layer-level object does not have exactly one key
        EncodeError: If the message does not match the schema

    Example:
        ```python
        from satpack import Parser

        parser = Parser.from_text(schema_text)
        data = parser.encode({"status": {"depth": 50, "label": "Test"}})
        ```
    """
    bottom, record, tags = find_schema_encoding(schema, message)

    packer = BytePacker()
    for tag in tags:
        packer.write_byte(tag)
    encode_record(bottom, record, packer)

    encoded = packer.to_bytes()
    logger.debug(
        "Encoded %r: %d tag bytes, %d bytes total", bottom.name, len(tags), len(encoded)
    )
    return encoded


def encode_record(bottom: Bottom, record: Any, packer: BytePacker) -> None:
    """Encode the fields of a flat record.

    Args:
        bottom: Bottom node describing the record
        record: Record value (a mapping holding every required field)
        packer: BytePacker to write to

    Raises:
        EncodeError: If the record does not match the schema
    """
    config = MessageConfig.from_bottom(bottom)
    if not config.order:
        return

    if not isinstance(record, Mapping):
        raise EncodeError("Message record is not a key-value map", bottom.name)

    for name in config.order:
        if name not in record:
            raise EncodeError("Message is missing a required field", name)
        _encode_field(packer, config.fields[name], record[name])

    extra = set(record) - set(config.order)
    if extra:
        logger.debug("Ignoring undeclared fields in %r: %s", bottom.name, sorted(extra))


def _encode_field(packer: BytePacker, field_schema: FieldSchema, value: Any) -> None:
    """Encode a single field value.

    Args:
        packer: BytePacker to write to
        field_schema: Schema information for the field
        value: Field value to encode

    Raises:
        EncodeError: If value is invalid
    """
    name = field_schema.name
    kind = field_schema.kind

    if kind is FieldKind.ENUM:
        assert field_schema.values is not None
        for index, candidate in enumerate(field_schema.values):
            if json_equal(candidate, value):
                packer.write_byte(index)
                return
        raise EncodeError("Could not get index of provided enum value", name)

    if kind is FieldKind.BOOLEAN:
        if not isinstance(value, bool):
            raise EncodeError("Did not provide a valid boolean", name)
        packer.write_bool(value)
        return

    if kind is FieldKind.INTEGER:
        assert field_schema.size is not None
        if isinstance(value, bool) or not isinstance(value, int):
            raise EncodeError("Provided value cannot be deserialized as an integer", name)
        if value < INT64_MIN or value > INT64_MAX:
            raise EncodeError("Provided value cannot be deserialized as an integer", name)

        size = field_schema.size
        # Negative values are compared against the positive bound
        if value < 0:
            if (1 << (size - 1)) < value:
                raise EncodeError("Provided value is bigger than maximum", name)
        elif (1 << size) < value:
            raise EncodeError("Provided value is bigger than maximum", name)

        assert field_schema.byte_width is not None
        packer.write_int_le(value, field_schema.byte_width)
        return

    if kind is FieldKind.NUMBER:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise EncodeError("Data could not be serialized as a float", name)
        try:
            number = float(value)
        except OverflowError as e:
            raise EncodeError("Data could not be serialized as a float", name) from e
        if not math.isfinite(number):
            raise EncodeError("Data could not be serialized as a float", name)
        packer.write_float64(number)
        return

    if kind in (FieldKind.STRING, FieldKind.BLOB):
        if not isinstance(value, str):
            raise EncodeError("Could not serialize data as a string", name)
        try:
            raw = value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise EncodeError(f"Could not serialize data as UTF-8: {e}", name) from e
        if len(raw) > MAX_STRING_BYTES:
            raise EncodeError(
                f"Provided {kind.value} is more than {MAX_STRING_BYTES} bytes long", name
            )
        packer.write_prefixed(raw)
        return

    raise EncodeError("Invalid property keyword", name)


def json_equal(left: Any, right: Any) -> bool:
    """Compare two JSON values the way JSON sees them.

    Unlike ``==``, booleans never equal numbers and integers never equal floats.
    """
    if isinstance(left, Mapping) and isinstance(right, Mapping):
        return left.keys() == right.keys() and all(
            json_equal(left[key], right[key]) for key in left
        )
    if isinstance(left, list) and isinstance(right, list):
        return len(left) == len(right) and all(map(json_equal, left, right))
    return type(left) is type(right) and left == right
