"""Lazy image handles over archive entries.

An ``ArchiveImage`` only remembers where its bytes live.  Nothing is
extracted until ``load()`` is called, so discovering thousands of textures
while listing an archive costs no decompression.
"""

from __future__ import annotations

import io
import logging
import math
from collections.abc import Callable
from typing import TYPE_CHECKING, Any, Protocol

from PIL import Image

from pk3fs.errors import ImageDecodeError

if TYPE_CHECKING:
    from pk3fs.reader import Pk3Reader

logger = logging.getLogger(__name__)


class ImageDecoder(Protocol):
    def decode(self, data: bytes, *, is_flat: bool) -> Any: ...


class PillowImageDecoder:
    """Decode extracted bytes with Pillow.

    Flats that Pillow cannot identify are read as raw square, palette-indexed
    pixel data (a 4096-byte flat becomes a 64x64 ``"P"`` image).
    """

    def decode(self, data: bytes, *, is_flat: bool) -> Image.Image:
        try:
            with Image.open(io.BytesIO(data)) as img:
                img.load()
                return img.copy()
        except (OSError, Image.DecompressionBombError) as exc:
            # headerless formats (TGA, WAL) may "open" raw data and then fail
            side = math.isqrt(len(data))
            if is_flat and side > 0 and side * side == len(data):
                return Image.frombytes("P", (side, side), data)
            raise ImageDecodeError(f"Cannot decode image ({len(data)} bytes): {exc}") from exc


class ArchiveImage:
    """An image whose pixels are extracted from a reader on first use."""

    def __init__(
        self,
        reader: Pk3Reader,
        name: str,
        filename: str,
        is_flat: bool,
        decoder: ImageDecoder,
    ) -> None:
        self.reader = reader
        self.name = name
        self.filename = filename
        self.is_flat = is_flat
        self._decoder = decoder
        self._pixels: Any = None

    @property
    def is_loaded(self) -> bool:
        return self._pixels is not None

    def load(self) -> Any:
        if self._pixels is None:
            data = self.reader.extract_file(self.filename)
            self._pixels = self._decoder.decode(data, is_flat=self.is_flat)
            logger.debug("Loaded image %s from %s", self.name, self.filename)
        return self._pixels

    def unload(self) -> None:
        self._pixels = None

    def __repr__(self) -> str:
        return f"ArchiveImage(name={self.name!r}, filename={self.filename!r}, flat={self.is_flat})"


ImageFactory = Callable[["Pk3Reader", str, str, bool], Any]
