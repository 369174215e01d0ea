"""Forward-only entry enumeration over zip-format resource archives.

Each enumerator owns one OS handle on the archive for as long as it is open.
Readers never keep an enumerator between calls; they open one, use it inside
a ``with`` block and let it close.
"""

from __future__ import annotations

import zipfile
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import IO, BinaryIO


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    filename: str
    is_dir: bool
    size: int = 0


def open_shared(path: str | Path) -> BinaryIO:
    """Open *path* for reading without locking it against other openers.

    POSIX ``open`` never takes an exclusive lock, and on Windows the C runtime
    opens with share-read/share-write, so other tools may keep reading or
    replace the archive while we hold it.
    """
    handle = open(path, "rb")  # noqa: SIM115
    handle.seek(0)
    return handle


class EntryEnumerator(ABC):
    """Base class for forward-only archive entry enumerators."""

    @abstractmethod
    def __iter__(self) -> Iterator[ArchiveEntry]:
        """Yield entries in archive-physical order."""

    @abstractmethod
    def open_entry(self, entry: ArchiveEntry) -> IO[bytes]:
        """Return a stream of the entry's decompressed bytes."""

    def lookup(self, filename: str) -> ArchiveEntry | None:
        """Return the entry stored under *filename* without scanning.

        Optional; ``None`` tells the caller to fall back to a scan.
        """
        return None

    @abstractmethod
    def close(self) -> None:
        """Release the archive handle."""

    def __enter__(self) -> EntryEnumerator:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()


def _to_entry(info: zipfile.ZipInfo) -> ArchiveEntry:
    # zipfile only treats a trailing "/" as a folder marker
    is_dir = info.is_dir() or info.filename.endswith("\\")
    return ArchiveEntry(filename=info.filename, is_dir=is_dir, size=info.file_size)


class ZipEntryEnumerator(EntryEnumerator):
    """Enumerator for zip-format archives using stdlib zipfile."""

    def __init__(self, path: str | Path) -> None:
        self._handle = open_shared(path)
        try:
            self._zf = zipfile.ZipFile(self._handle, "r")
        except BaseException:
            self._handle.close()
            raise
        self._current: zipfile.ZipInfo | None = None
        infos = self._zf.infolist()
        self._unique_names = len({i.filename for i in infos}) == len(infos)

    def __iter__(self) -> Iterator[ArchiveEntry]:
        for info in sorted(self._zf.infolist(), key=lambda i: i.header_offset):
            self._current = info
            yield _to_entry(info)
        self._current = None

    def open_entry(self, entry: ArchiveEntry) -> IO[bytes]:
        # Prefer the entry just yielded: getinfo() resolves duplicate names
        # to the last occurrence, the scan must see the first.
        info = self._current
        if info is None or info.filename != entry.filename:
            info = self._zf.getinfo(entry.filename)
        return self._zf.open(info, "r")

    def lookup(self, filename: str) -> ArchiveEntry | None:
        if not self._unique_names:
            return None  # duplicate names: only a scan picks the first one
        try:
            info = self._zf.getinfo(filename)
        except KeyError:
            return None
        return _to_entry(info)

    def close(self) -> None:
        try:
            self._zf.close()
        finally:
            self._handle.close()


def open_enumerator(path: str | Path) -> EntryEnumerator:
    """Open an archive file and return an enumerator over its entries.

    The file extension is not consulted: ``.pk3``, ``.ipk3``, ``.pke`` and
    renamed archives are all zip containers, and the zip header decides.

    Raises:
        zipfile.BadZipFile: If the file is not a readable zip archive.
    """
    return ZipEntryEnumerator(Path(path))
