from __future__ import annotations

from pathlib import Path


class LinkCheckError(Exception):
    """Base class for errors raised by the link checker."""


class DirectoryAccessError(LinkCheckError):
    """The site root (or a directory below it) cannot be listed."""

    def __init__(self, message: str, path: Path) -> None:
        self.path = path
        super().__init__(message)


class DocumentParseError(LinkCheckError):
    """An HTML document could not be read or parsed."""
