"""Byte-level packing and unpacking utilities.

This module provides the byte buffer primitives used by the codec.
Multi-byte values are little-endian; every field starts on a byte boundary.
"""

from __future__ import annotations

import struct
from typing import Iterable, Union

from .constants import NUMBER_BYTES

ByteInput = Union[bytes, bytearray, memoryview, Iterable[int]]


class BytePacker:
    """Packs values into a growing byte buffer.

    Example:
        >>> packer = BytePacker()
        >>> packer.write_byte(0)
        >>> packer.write_int_le(50, num_bytes=2)
        >>> packer.write_bool(True)
        >>> data = packer.to_bytes()
    """

    def __init__(self) -> None:
        """Initialize an empty byte packer."""
        self._buffer = bytearray()

    def write_byte(self, value: int) -> None:
        """Write a single byte.

        Args:
            value: Integer value 0-255

        Raises:
            ValueError: If value does not fit in one byte
        """
        if value < 0 or value > 0xFF:
            raise ValueError(f"Byte value must be 0-255, got {value}")
        self._buffer.append(value)

    def write_bool(self, value: bool) -> None:
        """Write a boolean as one byte (True=1, False=0)."""
        self._buffer.append(1 if value else 0)

    def write_int_le(self, value: int, num_bytes: int) -> None:
        """Write the low ``num_bytes`` bytes of a two's-complement integer.

        The value is taken as a signed 64-bit quantity, serialized little-endian
        and truncated, so high-order bytes that do not fit are dropped.

        Args:
            value: Signed integer value
            num_bytes: Number of bytes to keep (1-8)

        Raises:
            ValueError: If num_bytes is out of range
        """
        if num_bytes < 1 or num_bytes > 8:
            raise ValueError(f"num_bytes must be 1-8, got {num_bytes}")
        full = (value & 0xFFFFFFFFFFFFFFFF).to_bytes(8, "little")
        self._buffer.extend(full[:num_bytes])

    def write_float64(self, value: float) -> None:
        """Write an IEEE-754 binary64 value, little-endian."""
        self._buffer.extend(struct.pack("<d", value))

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes."""
        self._buffer.extend(data)

    def write_prefixed(self, data: bytes) -> None:
        """Write a one-byte length followed by the data.

        Raises:
            ValueError: If data is longer than 255 bytes
        """
        self.write_byte(len(data))
        self._buffer.extend(data)

    def byte_length(self) -> int:
        """Return the current number of bytes written."""
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the packed bytes."""
        return bytes(self._buffer)


class ByteUnpacker:
    """Reads values front to back from a byte buffer.

    The cursor only moves forward; every read either consumes exactly the
    bytes it needs or raises IndexError without zero-filling.

    Example:
        >>> unpacker = ByteUnpacker(b"\\x00\\x32\\x00\\x01")
        >>> tag = unpacker.read_byte()
        >>> value = unpacker.read_uint_le(2)
        >>> flag = unpacker.read_bool()
    """

    def __init__(self, data: ByteInput) -> None:
        """Initialize an unpacker over the given data.

        Args:
            data: bytes-like object or iterable of ints 0-255
        """
        self._data = bytes(data)
        self._position = 0

    def read_byte(self) -> int:
        """Read a single byte.

        Raises:
            IndexError: If no more bytes are available
        """
        if self._position >= len(self._data):
            raise IndexError("Attempted to read past end of byte buffer")
        value = self._data[self._position]
        self._position += 1
        return value

    def read_bool(self) -> bool:
        """Read one byte as a boolean (1=True, anything else False)."""
        return self.read_byte() == 1

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read raw bytes.

        Raises:
            IndexError: If not enough bytes are available
        """
        if self._position + num_bytes > len(self._data):
            raise IndexError(
                f"Not enough bytes: need {num_bytes}, have {self.bytes_remaining()}"
            )
        chunk = self._data[self._position : self._position + num_bytes]
        self._position += num_bytes
        return chunk

    def read_uint_le(self, num_bytes: int) -> int:
        """Read an unsigned little-endian integer of ``num_bytes`` bytes."""
        return int.from_bytes(self.read_bytes(num_bytes), "little", signed=False)

    def read_float64(self) -> float:
        """Read an IEEE-754 binary64 value, little-endian."""
        (value,) = struct.unpack("<d", self.read_bytes(NUMBER_BYTES))
        return float(value)

    def read_prefixed(self) -> bytes:
        """Read a one-byte length followed by that many bytes."""
        length = self.read_byte()
        return self.read_bytes(length)

    def bytes_remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def position(self) -> int:
        """Return the current read position in bytes."""
        return self._position
