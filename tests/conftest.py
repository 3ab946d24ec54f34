"""Shared fixtures for building FAR archives on disk."""

import struct
from typing import Iterable, List, Optional, Tuple, Union

import pytest

Name = Union[str, bytes]


def write_u32_le(value: int) -> bytes:
    """Write a little-endian 32-bit unsigned integer."""
    return struct.pack("<I", value)


def create_far_bytes(
    records: Iterable[Tuple[int, int, int, Name]],
    body: bytes = b"",
    signature: bytes = b"FAR!byAZ",
    version: int = 1,
    manifest_offset: Optional[int] = None,
) -> bytes:
    """Create a FAR file from explicit manifest records.

    Each record is (length_primary, length_secondary, body_offset, name).
    The manifest follows the header and body unless ``manifest_offset``
    says otherwise.
    """
    manifest = bytearray()
    records = list(records)
    manifest += write_u32_le(len(records))
    for length_primary, length_secondary, body_offset, name in records:
        if isinstance(name, str):
            name = name.encode("utf-8")
        manifest += write_u32_le(length_primary)
        manifest += write_u32_le(length_secondary)
        manifest += write_u32_le(body_offset)
        manifest += write_u32_le(len(name))
        manifest += name

    if manifest_offset is None:
        manifest_offset = 16 + len(body)

    header = signature + write_u32_le(version) + write_u32_le(manifest_offset)
    return header + body + bytes(manifest)


def create_far_from_files(files: List[Tuple[Name, bytes]], **kwargs) -> bytes:
    """Create a well-formed FAR file with bodies laid out after the header."""
    body = bytearray()
    records = []
    for name, data in files:
        records.append((len(data), len(data), 16 + len(body), name))
        body += data
    return create_far_bytes(records, bytes(body), **kwargs)


@pytest.fixture
def write_far(tmp_path):
    """Write raw FAR bytes to a file and return its path."""

    def _write(data: bytes, filename: str = "test.far"):
        path = tmp_path / filename
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def bmp_far(write_far):
    """A single 144-byte test.bmp with the manifest at offset 160."""
    data = bytes(range(144))
    return write_far(create_far_from_files([("test.bmp", data)]))
