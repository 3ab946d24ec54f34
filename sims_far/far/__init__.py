"""FAR archive reading."""

from .header import FAR_SIGNATURE, FAR_VERSION, FarArchive, FarEntry, FarManifest
from .reader import FarReader, extract_entry, parse_far, parse_far_strict, validate_far

__all__ = [
    "FAR_SIGNATURE",
    "FAR_VERSION",
    "FarArchive",
    "FarEntry",
    "FarManifest",
    "FarReader",
    "extract_entry",
    "parse_far",
    "parse_far_strict",
    "validate_far",
]
