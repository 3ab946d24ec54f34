"""FAR archive parser and extractor."""

import logging
import os
import re
from pathlib import Path
from typing import BinaryIO, Callable, Iterator, List, Optional, Tuple, Union

from ..exceptions import (
    FarEncodingError,
    FarIOError,
    UnsafeEntryPathError,
    UnsupportedFormatError,
)
from ..utils.binary import BinaryReader
from .header import FAR_SIGNATURE, FAR_VERSION, FarArchive, FarEntry, FarManifest

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

_SEPARATORS = re.compile(r"[\\/]")
_DRIVE_PREFIX = re.compile(r"[A-Za-z]:")


def parse_far(path: PathLike) -> FarArchive:
    """Parse the header and manifest of the FAR archive at ``path``.

    Parsing is permissive: the signature and version are stored as read and
    never compared against the expected values (see ``parse_far_strict``).
    The file is opened once and closed again before returning; entry bodies
    are not loaded.

    Raises:
        FarIOError: the file cannot be opened or a read comes up short,
            including a manifest offset past the end of the file.
        FarEncodingError: the signature or an entry name is not valid UTF-8.
    """
    path = str(path)
    logger.debug(f"Parsing FAR archive: {path}")

    try:
        with open(path, "rb") as f:
            archive = _parse_stream(f, path)
    except EOFError as e:
        raise FarIOError(f"Truncated FAR archive {path}: {e}", path) from e
    except OSError as e:
        raise FarIOError(f"Cannot read FAR archive {path}: {e}", path) from e

    logger.debug(f"Parsed {archive.entry_count} entries from {path}")
    return archive


def _parse_stream(f: BinaryIO, path: str) -> FarArchive:
    reader = BinaryReader(f)
    file_size = os.fstat(f.fileno()).st_size

    try:
        signature = reader.read_utf8(8)
    except UnicodeDecodeError as e:
        raise FarEncodingError(f"FAR signature is not valid UTF-8: {e}", path) from e

    version = reader.read_u32()
    manifest_offset = reader.read_u32()

    # Seeking past EOF is allowed; the entry count read below fails instead
    reader.seek(manifest_offset)
    try:
        entry_count = reader.read_u32()
    except EOFError as e:
        raise FarIOError(
            f"Manifest offset {manifest_offset} is beyond the end of {path} ({file_size} bytes)",
            path,
        ) from e

    entries = []
    for index in range(entry_count):
        entries.append(_parse_entry(reader, path, index, file_size))

    return FarArchive(
        path=path,
        signature=signature,
        version=version,
        manifest_offset=manifest_offset,
        manifest=FarManifest(entry_count=entry_count, entries=tuple(entries)),
    )


def _parse_entry(reader: BinaryReader, path: str, index: int, file_size: int) -> FarEntry:
    """Read one manifest record: four u32 fields followed by the name."""
    length_primary = reader.read_u32()
    length_secondary = reader.read_u32()
    body_offset = reader.read_u32()
    name_length = reader.read_u32()

    # Reject impossible lengths before allocating a buffer for them
    available = max(file_size - reader.tell(), 0)
    if name_length > available:
        raise EOFError(f"Entry {index} name needs {name_length} bytes, {available} left")

    try:
        name = reader.read_utf8(name_length)
    except UnicodeDecodeError as e:
        raise FarEncodingError(f"Entry {index} name is not valid UTF-8: {e}", path) from e

    return FarEntry(
        length_primary=length_primary,
        length_secondary=length_secondary,
        body_offset=body_offset,
        name_length=name_length,
        name=name,
        archive_path=path,
    )


def validate_far(archive: FarArchive) -> FarArchive:
    """Check the signature and version of a parsed archive.

    Returns the archive unchanged so calls can be chained.

    Raises:
        UnsupportedFormatError: signature is not ``FAR!byAZ`` or version is not 1.
    """
    if not archive.is_valid_signature:
        raise UnsupportedFormatError(
            f"Invalid FAR signature: {archive.signature!r}, expected {FAR_SIGNATURE!r}",
            archive.path,
        )
    if not archive.is_supported_version:
        raise UnsupportedFormatError(
            f"Unsupported FAR version: {archive.version}, expected {FAR_VERSION}",
            archive.path,
        )
    return archive


def parse_far_strict(path: PathLike) -> FarArchive:
    """Parse like ``parse_far``, then reject unexpected signatures and versions."""
    return validate_far(parse_far(path))


def extract_entry(entry: FarEntry) -> bytes:
    """Read the body of ``entry`` from its archive.

    The archive is reopened on every call and nothing is cached, so calls
    are independent of each other and safe to make from several threads.
    Only ``length_primary`` is used; ``length_secondary`` is ignored.

    Raises:
        FarIOError: the archive cannot be opened, or the body extends past
            the end of the file. A truncated buffer is never returned.
    """
    path = entry.archive_path

    try:
        with open(path, "rb") as f:
            file_size = os.fstat(f.fileno()).st_size
            end = entry.body_offset + entry.length_primary
            if end > file_size:
                raise EOFError(
                    f"body of {entry.name!r} spans {entry.body_offset}..{end}, "
                    f"file is {file_size} bytes"
                )

            reader = BinaryReader(f)
            reader.seek(entry.body_offset)
            data = reader.read_bytes(entry.length_primary)
    except EOFError as e:
        raise FarIOError(f"Truncated FAR archive {path}: {e}", path) from e
    except OSError as e:
        raise FarIOError(f"Cannot read FAR archive {path}: {e}", path) from e

    logger.debug(f"Extracted {entry.name!r} ({len(data)} bytes) from {path}")
    return data


class FarReader:
    """Reader for FAR archives.

    Parses the manifest on construction and extracts entries on demand.
    """

    def __init__(self, path: PathLike, strict: bool = False):
        self.path = Path(path)
        self.strict = strict
        if strict:
            self._archive = parse_far_strict(self.path)
        else:
            self._archive = parse_far(self.path)

    @property
    def archive(self) -> FarArchive:
        return self._archive

    @property
    def entries(self) -> Tuple[FarEntry, ...]:
        return self._archive.entries

    def list_files(self) -> List[str]:
        """List all filenames in the archive."""
        return self._archive.list_files()

    def get_entry_by_name(self, filename: str) -> Optional[FarEntry]:
        """Find an entry by filename."""
        return self._archive.get_entry_by_name(filename)

    def extract_file(self, entry: FarEntry) -> bytes:
        """Extract a single file from the archive."""
        return extract_entry(entry)

    def extract_all(
        self,
        output_dir: PathLike,
        progress_callback: Optional[Callable[[int, int, str], None]] = None,
    ) -> Iterator[Tuple[str, Path]]:
        """Extract all files to the output directory.

        Yields (filename, output_path) for each extracted file.
        """
        output_dir = Path(output_dir)
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FarIOError(f"Cannot create {output_dir}: {e}", self._archive.path) from e

        total = len(self.entries)
        for i, entry in enumerate(self.entries):
            output_path = output_dir / _relative_output_path(entry, i)
            data = extract_entry(entry)

            try:
                output_path.parent.mkdir(parents=True, exist_ok=True)
                output_path.write_bytes(data)
            except OSError as e:
                raise FarIOError(
                    f"Cannot write {entry.name!r} to {output_path}: {e}", self._archive.path
                ) from e

            if progress_callback:
                progress_callback(i, total, entry.name)

            yield entry.name, output_path


def _relative_output_path(entry: FarEntry, index: int) -> Path:
    """Map an entry name to a path below the output directory.

    Both ``/`` and ``\\`` separate directories. Leading separators are
    dropped; ``..`` components, drive prefixes and NUL bytes are refused.
    """
    parts = [part for part in _SEPARATORS.split(entry.name) if part not in ("", ".")]
    if not parts:
        return Path(f"unknown_{index}")

    if "\x00" in entry.name:
        raise UnsafeEntryPathError(
            f"Refusing to extract {entry.name!r}: name contains a NUL byte",
            entry.archive_path,
        )
    if ".." in parts or _DRIVE_PREFIX.match(parts[0]):
        raise UnsafeEntryPathError(
            f"Refusing to extract {entry.name!r} outside the output directory",
            entry.archive_path,
        )
    return Path(*parts)

