"""Default scratch-file path allocator."""

from __future__ import annotations

import uuid
from pathlib import Path

from pk3fs.paths import clean_extension


class TempPathAllocator:
    """Hand out fresh, not-yet-existing paths inside a scratch directory.

    The directory is created on first use.  Files are never tracked or removed
    here; whoever asked for the path owns the file.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def __call__(self, extension: str) -> Path:
        self.directory.mkdir(parents=True, exist_ok=True)
        suffix = clean_extension(extension)
        while True:
            name = uuid.uuid4().hex[:12]
            candidate = self.directory / (f"{name}.{suffix}" if suffix else name)
            if not candidate.exists():
                return candidate
