"""Read-only, case-insensitive filesystem view of a PK3 (zip) resource archive.

The archive is scanned once at construction to build an ``ArchiveIndex``,
which then answers every existence and listing query.  The archive itself is
never kept open: each extraction opens a fresh enumerator, scans forward to
the requested entry, buffers its bytes and closes the handle again.  This
lets other tools replace the archive while a reader is alive and keeps file
handle usage bounded.

Extraction cost is linear in the number of entries before the match.  With
``Settings.cache_entry_names`` enabled, a path that was extracted once is
opened directly on later calls, falling back to the scan when the cached name
no longer resolves.
"""

from __future__ import annotations

import threading
import zipfile
from pathlib import Path
from typing import IO, Any

from pk3fs.archive.enumerator import ArchiveEntry, EntryEnumerator, open_enumerator
from pk3fs.context import ReaderContext, default_context
from pk3fs.errors import ArchiveOpenError, EntryNotFoundError, ReaderClosedError
from pk3fs.imaging import ArchiveImage, ImageFactory
from pk3fs.index import ArchiveIndex
from pk3fs.paths import canonical_path, fold, split_extension


def _default_image_factory(reader: Pk3Reader, name: str, filename: str, is_flat: bool) -> Any:
    return ArchiveImage(reader, name, filename, is_flat, reader.context.decoder)


def _drain(stream: IO[bytes], size_hint: int, chunk_size: int) -> bytes:
    """Read *stream* to exhaustion into a buffer pre-sized to *size_hint*."""
    buffer = bytearray(size_hint)
    filled = 0
    while True:
        if filled == len(buffer):
            buffer.extend(bytes(chunk_size))
        with memoryview(buffer) as view, view[filled : filled + chunk_size] as window:
            count = stream.readinto(window)  # type: ignore[attr-defined]
        if not count:
            break
        filled += count
    del buffer[filled:]
    return bytes(buffer)


class Pk3Reader:
    """Query and extract files from a PK3 archive."""

    def __init__(
        self,
        location: str | Path,
        context: ReaderContext | None = None,
        *,
        image_factory: ImageFactory | None = None,
    ) -> None:
        self.context = context or default_context()
        self.location = self.context.resolve(location)
        self._image_factory = image_factory or _default_image_factory
        self._log = self.context.logger
        self._entry_names: dict[str, str] = {}  # folded path -> archive-internal name
        self._cache_lock = threading.Lock()

        self._log.info("Opening PK3 resource '%s'", self.location)
        try:
            with self.open() as entries:
                names = [e.filename for e in entries if not e.is_dir]
        except (OSError, zipfile.BadZipFile) as exc:
            raise ArchiveOpenError(f"Cannot open PK3 file {self.location}: {exc}") from exc

        self._index: ArchiveIndex | None = ArchiveIndex.build(names)
        self._log.debug("Indexed %d files in '%s'", len(self._index), self.location)

    # -- lifecycle -----------------------------------------------------------

    @property
    def is_disposed(self) -> bool:
        return self._index is None

    def close(self) -> None:
        """Drop the in-memory index.  Safe to call more than once."""
        if self._index is None:
            return
        self._log.info("Closing PK3 resource '%s'", self.location)
        self._index = None
        with self._cache_lock:
            self._entry_names.clear()

    dispose = close

    def __enter__(self) -> Pk3Reader:
        return self

    def __exit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.is_disposed else f"{len(self.index)} files"
        return f"Pk3Reader({str(self.location)!r}, {state})"

    @property
    def index(self) -> ArchiveIndex:
        if self._index is None:
            raise ReaderClosedError(f"PK3 resource {self.location} is closed")
        return self._index

    def open(self) -> EntryEnumerator:
        """Open a fresh enumerator on the archive.  The caller must close it."""
        return open_enumerator(self.location)

    # -- queries -------------------------------------------------------------

    def file_exists(self, filename: str) -> bool:
        return self.index.file_exists(filename)

    def get_all_files(self, path: str, subfolders: bool) -> list[str]:
        return self.index.get_all_files(path, subfolders)

    def get_files_with_ext(self, path: str, extension: str, subfolders: bool) -> list[str]:
        return self.index.get_files_with_ext(path, extension, subfolders)

    def find_first_file(self, beginswith: str, subfolders: bool, path: str = "") -> str | None:
        """Find the first file with the given name, regardless of extension."""
        return self.index.get_first_file(beginswith, subfolders, path)

    def find_first_file_with_ext(self, path: str, beginswith: str, subfolders: bool) -> str | None:
        """Find the first file matching both name and extension of *beginswith*."""
        title, ext = split_extension(beginswith)
        return self.index.get_first_file(title, subfolders, path, ext)

    # -- extraction ----------------------------------------------------------

    def load_file(self, filename: str) -> bytes:
        """Load an entire file into memory.

        Raises:
            EntryNotFoundError: If no file entry matches *filename*.
        """
        _ = self.index  # raises if closed
        wanted = fold(canonical_path(filename))

        with self.open() as entries:
            data = self._load_cached(entries, wanted)
            if data is None:
                data = self._scan(entries, wanted)

        if data is None:
            raise EntryNotFoundError(filename, self.location)
        self._log.debug("Extracted %s (%d bytes) from '%s'", filename, len(data), self.location)
        return data

    def _scan(self, entries: EntryEnumerator, wanted: str) -> bytes | None:
        for entry in entries:
            if entry.is_dir:
                continue
            if fold(canonical_path(entry.filename)) != wanted:
                continue
            data = self._read(entries, entry)
            # only remember names the enumerator can resolve directly
            if self.context.settings.cache_entry_names and entries.lookup(entry.filename):
                with self._cache_lock:
                    self._entry_names[wanted] = entry.filename
            return data
        return None

    def _load_cached(self, entries: EntryEnumerator, wanted: str) -> bytes | None:
        if not self.context.settings.cache_entry_names:
            return None
        with self._cache_lock:
            name = self._entry_names.get(wanted)
        if name is None:
            return None
        entry = entries.lookup(name)
        if entry is None or entry.is_dir:
            self._log.warning("Cached entry %s no longer in '%s', rescanning", name, self.location)
            with self._cache_lock:
                self._entry_names.pop(wanted, None)
            return None
        return self._read(entries, entry)

    def _read(self, entries: EntryEnumerator, entry: ArchiveEntry) -> bytes:
        settings = self.context.settings
        size_hint = entry.size if entry.size > 0 else settings.default_buffer_size
        with entries.open_entry(entry) as stream:
            return _drain(stream, size_hint, settings.copy_buffer_size)

    def extract_file(self, filename: str) -> bytes:
        """Public version of ``load_file``."""
        return self.load_file(filename)

    def create_temp_file(self, filename: str) -> Path:
        """Copy a file out to a new scratch file and return its path.

        NOTE: the caller is responsible for removing the file when done.
        """
        data = self.load_file(filename)
        _, ext = split_extension(canonical_path(filename))
        tempfile = self.context.allocate_temp_path(ext or self.context.settings.temp_extension)
        tempfile.write_bytes(data)
        self._log.debug("Wrote %s to temp file %s", filename, tempfile)
        return tempfile

    def create_image(self, name: str, filename: str, is_flat: bool) -> Any:
        """Create a lazily loaded image bound to *filename* in this archive."""
        _ = self.index  # raises if closed
        return self._image_factory(self, name, filename, is_flat)
