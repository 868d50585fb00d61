"""Byte-level reading and writing of borsh primitives.

This module provides the low-level primitive codec. Everything is
little-endian and byte-aligned: fixed-width unsigned integers, one-byte
booleans, u32 length prefixes, UTF-8 text and raw byte runs.
"""

from __future__ import annotations

from ..exceptions import InvalidBoolean, InvalidUtf8, TruncatedBuffer

# Largest count a u32 length prefix can carry
MAX_LENGTH = 0xFFFFFFFF


class ByteWriter:
    """Appends borsh primitives to a growing buffer.

    Example:
        >>> writer = ByteWriter()
        >>> writer.write_string("ab")
        >>> writer.write_uint(3, 32)
        >>> writer.to_bytes().hex()
        '02000000616203000000'
    """

    def __init__(self) -> None:
        """Initialize an empty writer."""
        self._buffer = bytearray()

    def write_bool(self, value: bool) -> None:
        """Write a boolean as a single 0/1 byte."""
        self._buffer.append(1 if value else 0)

    def write_uint(self, value: int, num_bits: int) -> None:
        """Write an unsigned integer in ``num_bits // 8`` little-endian bytes.

        Args:
            value: Unsigned integer value to write
            num_bits: Width in bits (8, 16, 32, 64 or 128)

        Raises:
            ValueError: If value is negative or doesn't fit in num_bits
        """
        if num_bits not in (8, 16, 32, 64, 128):
            raise ValueError(f"num_bits must be 8, 16, 32, 64 or 128, got {num_bits}")
        if value < 0:
            raise ValueError(f"write_uint requires non-negative value, got {value}")

        max_value = (1 << num_bits) - 1
        if value > max_value:
            raise ValueError(f"Value {value} requires more than {num_bits} bits (max: {max_value})")

        self._buffer += value.to_bytes(num_bits // 8, "little")

    def write_length(self, length: int) -> None:
        """Write a u32 length or element-count prefix."""
        if length > MAX_LENGTH:
            raise ValueError(f"Length {length} exceeds u32 prefix (max: {MAX_LENGTH})")
        self.write_uint(length, 32)

    def write_bytes(self, data: bytes) -> None:
        """Write raw bytes with no prefix."""
        self._buffer += data

    def write_string(self, value: str) -> None:
        """Write UTF-8 text behind a u32 byte-count prefix."""
        encoded = value.encode("utf-8")
        self.write_length(len(encoded))
        self.write_bytes(encoded)

    def __len__(self) -> int:
        return len(self._buffer)

    def to_bytes(self) -> bytes:
        """Return the written bytes."""
        return bytes(self._buffer)


class ByteReader:
    """Reads borsh primitives from a buffer, tracking a cursor.

    Every read checks the remaining length first, so a truncated buffer raises
    TruncatedBuffer rather than returning short data.

    Example:
        >>> reader = ByteReader(b"\\x02\\x00\\x00\\x00ab")
        >>> reader.read_string()
        'ab'
        >>> reader.position
        6
    """

    def __init__(self, data: bytes, offset: int = 0) -> None:
        """Initialize a reader.

        Args:
            data: Buffer to read from
            offset: Starting position of the cursor

        Raises:
            ValueError: If offset lies outside the buffer
        """
        if not 0 <= offset <= len(data):
            raise ValueError(f"offset {offset} outside buffer of {len(data)} bytes")
        self._data = memoryview(bytes(data))
        self._position = offset

    @property
    def position(self) -> int:
        return self._position

    def remaining(self) -> int:
        """Return the number of unread bytes."""
        return len(self._data) - self._position

    def read_bytes(self, num_bytes: int) -> bytes:
        """Read exactly num_bytes raw bytes.

        Raises:
            TruncatedBuffer: If fewer than num_bytes remain
        """
        if num_bytes > self.remaining():
            raise TruncatedBuffer(
                f"Truncated data: need {num_bytes} bytes at offset {self._position}, "
                f"only {self.remaining()} remain"
            )
        start = self._position
        self._position += num_bytes
        return self._data[start : self._position].tobytes()

    def read_uint(self, num_bits: int) -> int:
        """Read a little-endian unsigned integer of num_bits width."""
        return int.from_bytes(self.read_bytes(num_bits // 8), "little")

    def read_bool(self) -> bool:
        """Read a boolean byte.

        Raises:
            InvalidBoolean: If the byte is neither 0 nor 1
        """
        byte = self.read_uint(8)
        if byte > 1:
            raise InvalidBoolean(
                f"Invalid boolean byte 0x{byte:02x} at offset {self._position - 1}"
            )
        return byte == 1

    def read_length(self) -> int:
        """Read a u32 length or element-count prefix."""
        return self.read_uint(32)

    def read_string(self) -> str:
        """Read UTF-8 text behind a u32 byte-count prefix.

        Raises:
            TruncatedBuffer: If fewer bytes remain than the prefix declares
            InvalidUtf8: If the bytes are not valid UTF-8
        """
        length = self.read_length()
        raw = self.read_bytes(length)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidUtf8(f"Invalid UTF-8 encoding: {e}") from e
