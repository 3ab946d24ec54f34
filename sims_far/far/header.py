"""FAR header and manifest structures."""

from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

# FAR signature, stored as the first 8 bytes of the file
FAR_SIGNATURE = "FAR!byAZ"
FAR_VERSION = 1

ENTRY_FIXED_SIZE = 16  # four u32 fields preceding each name


@dataclass(frozen=True)
class FarEntry:
    """One archived file as described by the manifest (16 bytes + name)."""

    length_primary: int  # 4 bytes: authoritative body length
    length_secondary: int  # 4 bytes: second copy of the length, meaning unknown
    body_offset: int  # 4 bytes: absolute offset of the body in the archive
    name_length: int  # 4 bytes: byte length of the name
    name: str  # name_length bytes of UTF-8, may contain directories

    # Source archive, reopened on every extraction
    archive_path: str

    @property
    def file_name(self) -> str:
        return self.name

    @property
    def record_size(self) -> int:
        return ENTRY_FIXED_SIZE + self.name_length

    def read_bytes(self) -> bytes:
        """Read this entry's body from the archive on disk."""
        from .reader import extract_entry

        return extract_entry(self)


@dataclass(frozen=True)
class FarManifest:
    """Entry count followed by the entries, in on-disk order."""

    entry_count: int
    entries: Tuple[FarEntry, ...]

    @property
    def size(self) -> int:
        """Total manifest size in bytes, including the count."""
        return 4 + sum(entry.record_size for entry in self.entries)


@dataclass(frozen=True)
class FarArchive:
    """A parsed FAR archive: header fields plus its manifest.

    Pure value data. No file handle is kept open, so an archive can be
    shared between threads that extract entries concurrently.
    """

    path: str
    signature: str  # 8 bytes: "FAR!byAZ" expected, stored as read
    version: int  # 4 bytes: 1 expected, stored as read
    manifest_offset: int  # 4 bytes: absolute offset of the manifest
    manifest: FarManifest

    @classmethod
    def from_file(cls, path) -> "FarArchive":
        """Parse the archive at ``path``."""
        from .reader import parse_far

        return parse_far(path)

    @property
    def entries(self) -> Tuple[FarEntry, ...]:
        return self.manifest.entries

    @property
    def entry_count(self) -> int:
        return self.manifest.entry_count

    @property
    def is_valid_signature(self) -> bool:
        return self.signature == FAR_SIGNATURE

    @property
    def is_supported_version(self) -> bool:
        return self.version == FAR_VERSION

    def list_files(self) -> List[str]:
        """List all names in manifest order."""
        return [entry.name for entry in self.entries]

    def get_entry_by_name(self, name: str) -> Optional[FarEntry]:
        """Find the first entry with the given name."""
        for entry in self.entries:
            if entry.name == name:
                return entry
        return None

    def summary(self) -> str:
        total_size = sum(entry.length_primary for entry in self.entries)
        return (
            f"FAR v{self.version}: {self.path}\n"
            f"Files: {self.entry_count}\n"
            f"Total size: {total_size:,} bytes"
        )

    def __iter__(self) -> Iterator[FarEntry]:
        return iter(self.entries)

    def __len__(self) -> int:
        return self.entry_count

    def __contains__(self, name: str) -> bool:
        return self.get_entry_by_name(name) is not None
