"""Explicit per-reader context: log sink, temp-path allocator, archive root.

Readers take everything environmental from a ``ReaderContext`` handed to
them at construction instead of reaching for module globals at call time.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from pk3fs import config
from pk3fs.config import Settings
from pk3fs.imaging import ImageDecoder, PillowImageDecoder
from pk3fs.tempfiles import TempPathAllocator

TempPathFactory = Callable[[str], Path]


@dataclass(frozen=True)
class ReaderContext:
    settings: Settings
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("pk3fs.reader"))
    temp_path: TempPathFactory | None = None
    decoder: ImageDecoder = field(default_factory=PillowImageDecoder)

    @classmethod
    def from_settings(cls, settings: Settings, **overrides: object) -> ReaderContext:
        """Build a context whose allocator writes into ``settings.temp_dir``."""
        overrides.setdefault("temp_path", TempPathAllocator(settings.temp_dir))
        return cls(settings=settings, **overrides)  # type: ignore[arg-type]

    @property
    def archive_root(self) -> Path | None:
        return self.settings.archive_root

    def allocate_temp_path(self, extension: str) -> Path:
        allocator = self.temp_path or TempPathAllocator(self.settings.temp_dir)
        return allocator(extension)

    def resolve(self, location: str | Path) -> Path:
        """Resolve a relative archive *location* against ``archive_root``."""
        path = Path(location)
        if self.archive_root is not None and not path.is_absolute():
            return self.archive_root / path
        return path


def default_context() -> ReaderContext:
    """Context built from the process-wide ``pk3fs.config.settings``."""
    return ReaderContext.from_settings(config.settings)
