"""
Exception hierarchy for qrwriter.

Every error raised deliberately by this package derives from
``QRWriterError``. The concrete classes also derive from the closest
builtin exception so callers may catch either.
"""

from __future__ import annotations

from typing import Optional


class QRWriterError(Exception):
    """Base class for all qrwriter errors."""


class InvalidArgument(QRWriterError, ValueError):
    """A value is outside the accepted domain (enum, size, color, ...)."""


class InvalidPath(QRWriterError, ValueError):
    """A font or logo path does not name an existing regular file."""

    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class MissingWriter(QRWriterError, LookupError):
    """No writer is registered for a key or a file extension."""

    def __init__(
        self,
        message: str,
        *,
        key: Optional[str] = None,
        extension: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.key = key
        self.extension = extension


class EncodingError(QRWriterError):
    """The symbol encoder could not turn the text into a module grid."""


class ValidationError(QRWriterError):
    """
    A rendered raster does not decode back to the source module grid.

    Attributes
    ----------
    coordinate : tuple of int or None
        ``(row, col)`` of the first mismatched module, or None when the
        image could not be decoded or the decoded grid has another size.
    """

    def __init__(
        self,
        message: str,
        coordinate: Optional[tuple[int, int]] = None,
    ) -> None:
        super().__init__(message)
        self.coordinate = coordinate
