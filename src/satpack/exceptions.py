"""Exception hierarchy for satpack.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from SatpackError for easy catching of any satpack-specific error.
"""

from __future__ import annotations

from typing import Optional


class SatpackError(Exception):
    """Base exception for all satpack errors."""

    pass


class ParseError(SatpackError):
    """Raised when a schema document or message text cannot be used at all.

    Examples:
        - Schema document is not a key-value map
        - ``oneOf`` is not an array, or an alternative has no string ``id``
        - Message text is not valid JSON
        - Message has zero or several signal keys at a layer
    """

    def __init__(self, description: str) -> None:
        super().__init__(description)
        self.description = description

    def __str__(self) -> str:
        return f"Error when parsing file: {self.description}"


class EncodeError(SatpackError):
    """Raised when a message does not match the compiled schema.

    ``position`` names the field or signal key where the mismatch was found,
    or is None when no single keyword is responsible.

    Examples:
        - Signal key unknown at a layer
        - Value out of range for an integer field
        - Value missing from an enum list
        - String longer than 255 bytes
    """

    def __init__(self, description: str, position: Optional[str] = None) -> None:
        super().__init__(description)
        self.description = description
        self.position = position

    def __str__(self) -> str:
        position = self.position if self.position is not None else "N/A"
        return f"Error when processing message at keyword {position}: {self.description}"


class DecodeError(EncodeError):
    """Raised when decoding binary data fails.

    Examples:
        - Empty data where a tag byte was expected
        - Tag byte with no matching alternative
        - Truncated data (insufficient bytes for a field)
        - Invalid UTF-8 in a string field
        - Enum index past the end of the value list
    """

    pass
