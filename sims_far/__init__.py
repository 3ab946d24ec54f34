"""sims-far - read The Sims FAR archives."""

__version__ = "0.1.0"

from .exceptions import (
    FarEncodingError,
    FarError,
    FarIOError,
    UnsafeEntryPathError,
    UnsupportedFormatError,
)
from .far import (
    FAR_SIGNATURE,
    FAR_VERSION,
    FarArchive,
    FarEntry,
    FarManifest,
    FarReader,
    extract_entry,
    parse_far,
    parse_far_strict,
    validate_far,
)

__all__ = [
    "FAR_SIGNATURE",
    "FAR_VERSION",
    "FarArchive",
    "FarEncodingError",
    "FarEntry",
    "FarError",
    "FarIOError",
    "FarManifest",
    "FarReader",
    "UnsafeEntryPathError",
    "UnsupportedFormatError",
    "extract_entry",
    "parse_far",
    "parse_far_strict",
    "validate_far",
]
