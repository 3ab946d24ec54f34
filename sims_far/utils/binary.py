"""Binary reading utilities for little-endian FAR data."""

import struct
from io import BytesIO
from typing import BinaryIO, Union


class BinaryReader:
    """Helper for reading little-endian binary data (FAR format).

    Every read is exact-length: a short read raises ``EOFError`` instead of
    returning fewer bytes than requested.
    """

    def __init__(self, data: Union[bytes, BinaryIO]):
        if isinstance(data, (bytes, bytearray)):
            self._stream = BytesIO(data)
        else:
            self._stream = data

    @property
    def stream(self) -> BinaryIO:
        return self._stream

    def tell(self) -> int:
        return self._stream.tell()

    def seek(self, offset: int, whence: int = 0) -> int:
        return self._stream.seek(offset, whence)

    def read_bytes(self, size: int) -> bytes:
        data = self._stream.read(size)
        if len(data) < size:
            raise EOFError(f"Expected {size} bytes, got {len(data)}")
        return data

    def read_u32(self) -> int:
        return struct.unpack("<I", self.read_bytes(4))[0]

    def read_utf8(self, length: int) -> str:
        """Read exactly ``length`` bytes and decode them as strict UTF-8.

        No terminator is expected and nothing is stripped. Invalid UTF-8
        raises ``UnicodeDecodeError`` rather than being replaced.
        """
        return self.read_bytes(length).decode("utf-8")

