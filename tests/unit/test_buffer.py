"""Tests for byte-level reader and writer."""

from __future__ import annotations

import pytest

from borshkit import InvalidBoolean, InvalidUtf8, TruncatedBuffer
from borshkit.codec.buffer import ByteReader, ByteWriter


class TestByteWriter:
    """Test ByteWriter."""

    def test_write_uint_little_endian(self) -> None:
        """Test integers are written least significant byte first."""
        writer = ByteWriter()
        writer.write_uint(0x0102, 16)
        writer.write_uint(0x01020304, 32)
        assert writer.to_bytes() == b"\x02\x01\x04\x03\x02\x01"

    def test_write_uint_u128(self) -> None:
        """Test u128 max value uses 16 bytes."""
        writer = ByteWriter()
        writer.write_uint((1 << 128) - 1, 128)
        assert writer.to_bytes() == b"\xff" * 16

    def test_write_uint_overflow(self) -> None:
        """Test value that doesn't fit raises ValueError."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="requires more than 8 bits"):
            writer.write_uint(256, 8)

    def test_write_uint_negative(self) -> None:
        """Test negative value raises ValueError."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="non-negative"):
            writer.write_uint(-1, 8)

    def test_write_uint_bad_width(self) -> None:
        """Test unsupported width raises ValueError."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="num_bits"):
            writer.write_uint(1, 12)

    def test_write_bool(self) -> None:
        """Test booleans are single 0/1 bytes."""
        writer = ByteWriter()
        writer.write_bool(True)
        writer.write_bool(False)
        assert writer.to_bytes() == b"\x01\x00"

    def test_write_string_byte_count_prefix(self) -> None:
        """Test text prefix counts UTF-8 bytes, not characters."""
        writer = ByteWriter()
        writer.write_string("é")
        assert writer.to_bytes() == b"\x02\x00\x00\x00\xc3\xa9"

    def test_write_length_too_large(self) -> None:
        """Test length beyond u32 raises ValueError."""
        writer = ByteWriter()
        with pytest.raises(ValueError, match="exceeds u32"):
            writer.write_length(1 << 32)

    def test_len(self) -> None:
        """Test len() reports bytes written so far."""
        writer = ByteWriter()
        writer.write_string("ab")
        assert len(writer) == 6


class TestByteReader:
    """Test ByteReader."""

    def test_read_uint(self) -> None:
        """Test little-endian integer reads advance the cursor."""
        reader = ByteReader(b"\x02\x01\xff")
        assert reader.read_uint(16) == 0x0102
        assert reader.position == 2
        assert reader.remaining() == 1

    def test_read_bytes_truncated(self) -> None:
        """Test reading past the end raises TruncatedBuffer."""
        reader = ByteReader(b"\x01\x02")
        with pytest.raises(TruncatedBuffer, match="need 4 bytes"):
            reader.read_uint(32)

    def test_read_bool_invalid(self) -> None:
        """Test byte other than 0/1 raises InvalidBoolean."""
        reader = ByteReader(b"\x02")
        with pytest.raises(InvalidBoolean, match="0x02"):
            reader.read_bool()

    def test_read_string(self) -> None:
        """Test reading prefixed UTF-8 text."""
        reader = ByteReader(b"\x02\x00\x00\x00\xc3\xa9")
        assert reader.read_string() == "é"
        assert reader.remaining() == 0

    def test_read_string_invalid_utf8(self) -> None:
        """Test invalid UTF-8 raises InvalidUtf8."""
        reader = ByteReader(b"\x01\x00\x00\x00\xff")
        with pytest.raises(InvalidUtf8):
            reader.read_string()

    def test_read_string_truncated(self) -> None:
        """Test prefix larger than the remaining data raises TruncatedBuffer."""
        reader = ByteReader(b"\x05\x00\x00\x00ab")
        with pytest.raises(TruncatedBuffer):
            reader.read_string()

    def test_offset(self) -> None:
        """Test reader starting mid-buffer."""
        reader = ByteReader(b"\x00\x00\x07", offset=2)
        assert reader.read_uint(8) == 7

    def test_offset_out_of_range(self) -> None:
        """Test offset outside buffer raises ValueError."""
        with pytest.raises(ValueError, match="outside buffer"):
            ByteReader(b"\x00", offset=2)
