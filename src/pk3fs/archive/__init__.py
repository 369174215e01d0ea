from pk3fs.archive.enumerator import (
    ArchiveEntry,
    EntryEnumerator,
    ZipEntryEnumerator,
    open_enumerator,
    open_shared,
)

__all__ = [
    "ArchiveEntry",
    "EntryEnumerator",
    "ZipEntryEnumerator",
    "open_enumerator",
    "open_shared",
]
