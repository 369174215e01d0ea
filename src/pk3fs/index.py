"""In-memory directory tree over the file entries of an archive.

Built once from the entry names yielded by a single forward scan.  Directories
are implicit: every path segment but the last becomes a directory node, the
last segment becomes a file leaf.  All lookups are case-insensitive.

The tree is never mutated after ``ArchiveIndex.build`` returns, so concurrent
queries need no locking.  Duplicate entry names are kept as separate leaves;
single-result lookups return whichever came first in scan order.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from pk3fs.paths import canonical_path, clean_extension, fold, split_extension, split_path


@dataclass(frozen=True, slots=True)
class IndexedFile:
    path: str  # normalized, original casing
    name: str
    title: str
    extension: str  # without leading dot
    path_key: str
    title_key: str
    extension_key: str

    @classmethod
    def from_path(cls, path: str) -> IndexedFile:
        name = path.rsplit(os.sep, 1)[-1]
        title, extension = split_extension(name)
        return cls(
            path=path,
            name=name,
            title=title,
            extension=extension,
            path_key=fold(path),
            title_key=fold(title),
            extension_key=fold(extension),
        )


@dataclass(slots=True)
class _Directory:
    name: str
    files: list[IndexedFile] = field(default_factory=list)
    children: dict[str, _Directory] = field(default_factory=dict)  # folded name -> node

    def child(self, segment: str) -> _Directory:
        key = fold(segment)
        node = self.children.get(key)
        if node is None:
            node = _Directory(segment)
            self.children[key] = node
        return node

    def walk(self, subfolders: bool) -> Iterator[IndexedFile]:
        """Yield this directory's files, then (optionally) each child's, depth-first."""
        yield from self.files
        if subfolders:
            for node in self.children.values():
                yield from node.walk(True)


class ArchiveIndex:
    """Case-insensitive, path-based view of the files in an archive."""

    def __init__(self) -> None:
        self._root = _Directory("")
        self._files: list[IndexedFile] = []
        self._by_path: dict[str, IndexedFile] = {}

    @classmethod
    def build(cls, names: Iterable[str]) -> ArchiveIndex:
        """Create an index from file entry names in archive order.

        Directory entries must already be filtered out by the caller.
        """
        index = cls()
        for name in names:
            index._insert(name)
        return index

    def _insert(self, name: str) -> None:
        path = canonical_path(name)
        segments = split_path(path)
        if not segments:
            return
        node = self._root
        for segment in segments[:-1]:
            node = node.child(segment)
        entry = IndexedFile.from_path(path)
        node.files.append(entry)
        self._files.append(entry)
        self._by_path.setdefault(entry.path_key, entry)

    def _find_dir(self, path: str | None) -> _Directory | None:
        node = self._root
        for segment in split_path(canonical_path(path or "")):
            node = node.children.get(fold(segment))
            if node is None:
                return None
        return node

    def __len__(self) -> int:
        return len(self._files)

    def __iter__(self) -> Iterator[str]:
        return (f.path for f in self._files)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.file_exists(path)

    def file_exists(self, path: str) -> bool:
        return fold(canonical_path(path)) in self._by_path

    def get_all_files(self, path: str, subfolders: bool) -> list[str]:
        """Return files under *path* (``""`` for the root), recursing if *subfolders*."""
        node = self._find_dir(path)
        if node is None:
            return []
        return [f.path for f in node.walk(subfolders)]

    def get_files_with_ext(self, path: str, extension: str, subfolders: bool) -> list[str]:
        """Like ``get_all_files`` but only files whose extension equals *extension*."""
        node = self._find_dir(path)
        if node is None:
            return []
        wanted = fold(clean_extension(extension))
        return [f.path for f in node.walk(subfolders) if f.extension_key == wanted]

    def get_first_file(
        self,
        beginswith: str,
        subfolders: bool,
        path: str = "",
        extension: str | None = None,
    ) -> str | None:
        """Return the first file whose name without extension equals *beginswith*.

        Despite the parameter name this is an exact match on the title, not a
        prefix match.  When *extension* is given the extension must match too.
        Returns ``None`` when nothing matches.
        """
        node = self._find_dir(path)
        if node is None:
            return None
        title = fold(beginswith)
        wanted_ext = None if extension is None else fold(clean_extension(extension))
        for entry in node.walk(subfolders):
            if entry.title_key != title:
                continue
            if wanted_ext is not None and entry.extension_key != wanted_ext:
                continue
            return entry.path
        return None
