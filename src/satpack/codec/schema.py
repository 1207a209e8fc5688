"""Schema compilation and introspection.

A schema document is a recursive JSON object. Documents with a ``oneOf``
array compile to a :class:`Layer`, a tagged union whose alternatives are
numbered by declaration order; documents without one compile to a
:class:`Bottom`, the flat record that is actually transmitted.
"""

from __future__ import annotations

import copy
import enum
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Annotated, Any, Dict, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ..exceptions import EncodeError, ParseError
from .constants import (
    MAX_ENUM_VALUES,
    MAX_INTEGER_BITS,
    MAX_LAYER_ALTERNATIVES,
    MIN_INTEGER_BITS,
    NUMBER_BYTES,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Layer:
    """Tagged union of named alternatives.

    Attributes:
        schemes: Tag byte -> child node, tags dense from 0 in declaration order
        lookup: Alternative name -> tag byte
        names: Tag byte -> alternative name
    """

    schemes: Mapping[int, "SchemaNode"]
    lookup: Mapping[str, int]
    names: Mapping[int, str]


@dataclass(frozen=True)
class Bottom:
    """Terminal record schema, kept as the verbatim document."""

    document: Mapping[str, Any]

    @property
    def name(self) -> Optional[str]:
        """The schema ``id``, or None if the document has no string id."""
        value = self.document.get("id")
        return value if isinstance(value, str) else None


SchemaNode = Union[Layer, Bottom]


def compile_schema(document: Any) -> SchemaNode:
    """Compile a parsed schema document into a dispatch tree.

    Args:
        document: Parsed JSON schema (a mapping)

    Returns:
        Root node of the compiled tree

    Raises:
        ParseError: If the document is not a mapping, ``oneOf`` is not an
            array, an alternative has no string ``id``, ids repeat within a
            layer, or a layer has more than 256 alternatives
    """
    if not isinstance(document, Mapping):
        raise ParseError("Provided Schema is not a valid Key-Value Map")

    if "oneOf" not in document:
        return Bottom(document=MappingProxyType(copy.deepcopy(dict(document))))

    alternatives = document["oneOf"]
    if not isinstance(alternatives, list):
        raise ParseError("oneOf is incorrectly declared, unable to parse array")
    if len(alternatives) > MAX_LAYER_ALTERNATIVES:
        raise ParseError(
            f"oneOf declares {len(alternatives)} alternatives, "
            f"at most {MAX_LAYER_ALTERNATIVES} fit in a tag byte"
        )

    schemes: Dict[int, SchemaNode] = {}
    lookup: Dict[str, int] = {}
    for tag, alternative in enumerate(alternatives):
        name = alternative.get("id") if isinstance(alternative, Mapping) else None
        if not isinstance(name, str):
            raise ParseError("Could not find subschema with given key")
        if name in lookup:
            raise ParseError(f"Duplicate subschema id {name!r}")
        schemes[tag] = compile_schema(alternative)
        lookup[name] = tag

    logger.debug("Compiled layer with %d alternatives: %s", len(lookup), list(lookup))
    return Layer(
        schemes=MappingProxyType(schemes),
        lookup=MappingProxyType(lookup),
        names=MappingProxyType({tag: name for name, tag in lookup.items()}),
    )


def iter_records(
    node: SchemaNode,
) -> Iterator[Tuple[Tuple[str, ...], Tuple[int, ...], Bottom]]:
    """Yield every record reachable from ``node`` in tag order.

    Yields:
        Tuples of (alternative names, tag bytes, bottom node), outer-to-inner
    """
    if isinstance(node, Bottom):
        yield (), (), node
        return
    for tag, child in node.schemes.items():
        for names, tags, bottom in iter_records(child):
            yield (node.names[tag],) + names, (tag,) + tags, bottom


class FieldKind(str, enum.Enum):
    """Closed set of field kinds a record may declare."""

    BOOLEAN = "boolean"
    INTEGER = "integer"
    NUMBER = "number"
    STRING = "string"
    BLOB = "blob"
    ENUM = "enum"

    @classmethod
    def from_keyword(cls, keyword: Any, position: str) -> FieldKind:
        """Map a ``type`` keyword to a kind.

        Raises:
            EncodeError: If the keyword is missing or not a known type
        """
        if keyword is None:
            raise EncodeError("Missing type keyword", position)
        for kind in (cls.BOOLEAN, cls.INTEGER, cls.NUMBER, cls.STRING, cls.BLOB):
            if keyword == kind.value:
                return kind
        raise EncodeError("Invalid property keyword", position)


class FieldSchema(BaseModel):
    """Schema of a single record field.

    Attributes:
        name: Field name
        kind: Field kind
        size: Declared bit width (integer fields only)
        values: Legal values in wire order (enum fields only)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    kind: FieldKind
    size: Optional[
        Annotated[int, Field(strict=True, ge=MIN_INTEGER_BITS, le=MAX_INTEGER_BITS)]
    ] = None
    values: Optional[Annotated[List[Any], Field(max_length=MAX_ENUM_VALUES)]] = None

    @model_validator(mode="after")
    def _check_kind_parameters(self) -> FieldSchema:
        if self.kind is FieldKind.INTEGER and self.size is None:
            raise ValueError("Integer fields must have a declared size")
        if self.kind is FieldKind.ENUM and self.values is None:
            raise ValueError("Enum fields must declare their values")
        return self

    @classmethod
    def from_document(cls, name: str, document: Any) -> FieldSchema:
        """Build a field schema from its ``properties`` entry.

        ``enum`` takes precedence over ``type``.

        Raises:
            EncodeError: If the entry is malformed, with position set to the field name
        """
        if not isinstance(document, Mapping):
            raise EncodeError("Property schema is not a key-value map", name)

        data: Dict[str, Any]
        if "enum" in document:
            values = document["enum"]
            if not isinstance(values, list):
                raise EncodeError("Enum keyword must be an array", name)
            data = {"name": name, "kind": FieldKind.ENUM, "values": values}
        else:
            kind = FieldKind.from_keyword(document.get("type"), name)
            data = {"name": name, "kind": kind}
            if kind is FieldKind.INTEGER:
                data["size"] = document.get("size")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            detail = e.errors()[0]
            raise EncodeError(f"Invalid property schema: {detail['msg']}", name) from e

    @property
    def byte_width(self) -> Optional[int]:
        """Fixed wire width in bytes, or None for length-prefixed kinds."""
        if self.kind in (FieldKind.BOOLEAN, FieldKind.ENUM):
            return 1
        if self.kind is FieldKind.INTEGER:
            assert self.size is not None
            return (self.size + 7) // 8
        if self.kind is FieldKind.NUMBER:
            return NUMBER_BYTES
        return None


@dataclass(frozen=True)
class MessageConfig:
    """Per-call view of a Bottom node: field order and field schemas.

    Built fresh for every encode and decode call.
    """

    order: Tuple[str, ...]
    fields: Mapping[str, FieldSchema]

    @classmethod
    def from_bottom(cls, bottom: Bottom) -> MessageConfig:
        """Derive the record layout from a Bottom node.

        Raises:
            EncodeError: If ``required`` or ``properties`` are missing or
                malformed, or a required field has no usable schema
        """
        document = bottom.document
        position = bottom.name

        if "required" not in document:
            raise EncodeError("Missing Required Field", position)
        order = document["required"]
        if not isinstance(order, list):
            raise EncodeError("Required Field must be an array", position)

        if "properties" not in document:
            raise EncodeError("Missing properties Field", position)
        properties = document["properties"]
        if not isinstance(properties, Mapping):
            raise EncodeError("Properties Field is incorrectly formatted", position)

        if not order and properties:
            raise EncodeError("Required Field is empty!", position)

        fields: Dict[str, FieldSchema] = {}
        for name in order:
            if not isinstance(name, str):
                raise EncodeError(f"Required field name {name!r} is not a string", position)
            if name in fields:
                raise EncodeError("Required field is listed more than once", name)
            if name not in properties:
                raise EncodeError("Required field has no property schema", name)
            fields[name] = FieldSchema.from_document(name, properties[name])

        return cls(order=tuple(order), fields=MappingProxyType(fields))
