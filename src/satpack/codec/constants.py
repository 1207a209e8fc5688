"""Wire-format limits shared by the schema compiler and the codec."""

from __future__ import annotations

# One tag byte per layer
MAX_LAYER_ALTERNATIVES = 256

# Enum positions travel as a single byte
MAX_ENUM_VALUES = 256

# Strings and blobs carry a one-byte length prefix
MAX_STRING_BYTES = 255

MIN_INTEGER_BITS = 1
MAX_INTEGER_BITS = 32

# IEEE-754 binary64
NUMBER_BYTES = 8

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
