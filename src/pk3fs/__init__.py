"""Read-only, case-insensitive virtual filesystem over PK3 (zip) archives."""

from pk3fs.config import Settings
from pk3fs.context import ReaderContext
from pk3fs.errors import (
    ArchiveOpenError,
    EntryNotFoundError,
    ImageDecodeError,
    Pk3Error,
    ReaderClosedError,
)
from pk3fs.imaging import ArchiveImage, ImageDecoder, PillowImageDecoder
from pk3fs.index import ArchiveIndex
from pk3fs.reader import Pk3Reader

__all__ = [
    "ArchiveImage",
    "ArchiveIndex",
    "ArchiveOpenError",
    "EntryNotFoundError",
    "ImageDecodeError",
    "ImageDecoder",
    "PillowImageDecoder",
    "Pk3Error",
    "Pk3Reader",
    "ReaderClosedError",
    "ReaderContext",
    "Settings",
]
