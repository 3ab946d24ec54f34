"""Errors raised while reading FAR archives."""

from typing import Optional


class FarError(Exception):
    """Base class for FAR archive errors."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class FarIOError(FarError):
    """Raised when the archive cannot be opened, sought or fully read."""


class FarEncodingError(FarError):
    """Raised when the signature or an entry name is not valid UTF-8."""


class UnsupportedFormatError(FarError):
    """Raised by strict validation when the signature or version is unexpected."""


class UnsafeEntryPathError(FarError):
    """Raised when an entry name would be extracted outside the output directory."""
