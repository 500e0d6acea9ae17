"""Exceptions raised by the I/O side of postdeck.

Parsing never raises; these cover fetching content and validating indexes.
"""

from __future__ import annotations


class PostdeckError(Exception):
    """Base class for postdeck errors."""


class SourceError(PostdeckError):
    """Content could not be fetched or decoded."""


class DocumentNotFoundError(SourceError):
    def __init__(self, file: str) -> None:
        super().__init__(f"document not found: {file}")
        self.file = file


class InvalidFileNameError(SourceError):
    def __init__(self, file: str) -> None:
        super().__init__(f"invalid document name: {file!r}")
        self.file = file


class IndexFormatError(PostdeckError):
    """The post index payload has the wrong shape."""
