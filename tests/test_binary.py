"""Tests for binary utilities."""

from io import BytesIO

import pytest

from sims_far.utils.binary import BinaryReader


class TestBinaryReader:
    """Tests for BinaryReader class."""

    def test_read_u32_little_endian(self):
        reader = BinaryReader(b"\x78\x56\x34\x12")
        assert reader.read_u32() == 0x12345678

    def test_read_u32_max_value(self):
        reader = BinaryReader(b"\xFF\xFF\xFF\xFF")
        assert reader.read_u32() == 0xFFFFFFFF

    def test_read_utf8(self):
        reader = BinaryReader(b"test.bmpREST")
        assert reader.read_utf8(8) == "test.bmp"
        assert reader.tell() == 8

    def test_read_utf8_keeps_null_bytes(self):
        reader = BinaryReader(b"ab\x00\x00")
        assert reader.read_utf8(4) == "ab\x00\x00"

    def test_read_utf8_empty(self):
        reader = BinaryReader(b"")
        assert reader.read_utf8(0) == ""

    def test_read_utf8_invalid(self):
        reader = BinaryReader(b"\xff\xfe")
        with pytest.raises(UnicodeDecodeError):
            reader.read_utf8(2)

    def test_seek_and_tell(self):
        reader = BinaryReader(b"\x00\x01\x02\x03\x04\x05\x06\x07")
        assert reader.tell() == 0
        reader.seek(4)
        assert reader.tell() == 4
        assert reader.read_u32() == 0x07060504

    def test_wraps_stream(self):
        stream = BytesIO(b"\x01\x00\x00\x00")
        reader = BinaryReader(stream)
        assert reader.stream is stream
        assert reader.read_u32() == 1

    def test_eof_error(self):
        reader = BinaryReader(b"\x00\x01")
        with pytest.raises(EOFError):
            reader.read_bytes(10)

    def test_seek_past_end_then_read(self):
        reader = BinaryReader(b"\x00" * 4)
        reader.seek(100)
        with pytest.raises(EOFError):
            reader.read_u32()
