"""Exception types raised by pk3fs.

Storage and codec failures during extraction (``OSError``,
``zipfile.BadZipFile``, ``zlib.error``) are not wrapped and reach the
caller unchanged, so "entry absent" and "archive unreadable" stay
distinguishable by type.
"""

from __future__ import annotations

from pathlib import Path


class Pk3Error(Exception):
    """Base error for pk3fs operations."""


class EntryNotFoundError(Pk3Error):
    """A requested entry does not exist in the archive."""

    def __init__(self, filename: str, archive_path: str | Path) -> None:
        self.filename = filename
        self.archive_path = str(archive_path)
        super().__init__(f"Cannot find the file {filename} in PK3 file {self.archive_path}.")


class ArchiveOpenError(Pk3Error):
    """The archive could not be opened or enumerated while creating a reader."""


class ReaderClosedError(Pk3Error):
    """A reader was used after ``close()``."""


class ImageDecodeError(Pk3Error):
    """Extracted bytes could not be decoded into an image."""
