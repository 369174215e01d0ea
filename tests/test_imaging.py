from __future__ import annotations

import io

import pytest
from PIL import Image

from pk3fs.errors import EntryNotFoundError, ImageDecodeError
from pk3fs.imaging import ArchiveImage, PillowImageDecoder
from pk3fs.reader import Pk3Reader


def _png(size=(4, 2), color=(255, 0, 0)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


class _RecordingDecoder:
    def __init__(self) -> None:
        self.calls: list[tuple[bytes, bool]] = []

    def decode(self, data: bytes, *, is_flat: bool):
        self.calls.append((data, is_flat))
        return ("pixels", len(data))


class TestPillowImageDecoder:
    def test_decodes_png(self):
        img = PillowImageDecoder().decode(_png(), is_flat=False)
        assert img.size == (4, 2)
        assert img.getpixel((0, 0)) == (255, 0, 0)

    def test_raw_flat(self):
        img = PillowImageDecoder().decode(b"\x07" * 4096, is_flat=True)
        assert img.mode == "P"
        assert img.size == (64, 64)

    def test_raw_non_flat_rejected(self):
        with pytest.raises(ImageDecodeError):
            PillowImageDecoder().decode(b"not an image at all " * 16, is_flat=False)

    def test_non_square_flat_rejected(self):
        with pytest.raises(ImageDecodeError):
            PillowImageDecoder().decode(b"not square", is_flat=True)


class TestArchiveImage:
    def test_load_extracts_once(self, make_pk3, context):
        reader = Pk3Reader(make_pk3({"graphics/TITLEPIC.png": b"fake"}), context)
        decoder = _RecordingDecoder()
        image = ArchiveImage(reader, "TITLEPIC", "graphics/titlepic.png", False, decoder)

        assert not image.is_loaded
        assert image.load() == ("pixels", 4)
        assert image.load() == ("pixels", 4)
        assert decoder.calls == [(b"fake", False)]
        assert image.is_loaded

    def test_unload_forces_reextract(self, make_pk3, context):
        reader = Pk3Reader(make_pk3({"flats/F_SKY1.lmp": b"\x01" * 16}), context)
        decoder = _RecordingDecoder()
        image = ArchiveImage(reader, "F_SKY1", "flats/f_sky1.lmp", True, decoder)

        image.load()
        image.unload()
        assert not image.is_loaded
        image.load()

        assert len(decoder.calls) == 2
        assert decoder.calls[0][1] is True

    def test_missing_file_surfaces_on_load(self, make_pk3, context):
        reader = Pk3Reader(make_pk3(), context)
        image = reader.create_image("GONE", "graphics/gone.png", False)

        with pytest.raises(EntryNotFoundError):
            image.load()

    def test_default_decoder_end_to_end(self, make_pk3, context):
        reader = Pk3Reader(make_pk3({"sprites/Wall.png": _png((3, 3), (0, 255, 0))}), context)

        pixels = reader.create_image("WALL", "sprites/wall.png", False).load()

        assert pixels.size == (3, 3)
        assert pixels.getpixel((1, 1)) == (0, 255, 0)
