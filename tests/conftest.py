import warnings
import zipfile
from collections.abc import Iterable
from pathlib import Path

import pytest

from pk3fs.config import Settings
from pk3fs.context import ReaderContext


def write_pk3(
    path: Path,
    files: dict[str, bytes] | Iterable[tuple[str, bytes]],
    *,
    dirs: Iterable[str] = (),
    compression: int = zipfile.ZIP_DEFLATED,
) -> Path:
    """Write a zip archive with the given name -> content entries, in order."""
    items = files.items() if isinstance(files, dict) else files
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)  # duplicate names
        with zipfile.ZipFile(path, "w", compression=compression) as zf:
            for d in dirs:
                zf.mkdir(d)
            for name, content in items:
                zf.writestr(name, content)
    return path


SAMPLE_FILES = {
    "sprites/Wall.png": b"\x89PNG wall",
    "sprites/TROOA1.png": b"\x89PNG troop",
    "textures/a.txt": b"alpha",
    "textures/b.txt": b"bravo",
    "textures/sub/c.txt": b"charlie",
    "textures/sub/d.lmp": b"delta",
    "MAPINFO": b"map MAP01",
    "decorate.txt": b"actor Foo {}",
}


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(temp_dir=tmp_path / "scratch")


@pytest.fixture
def context(settings) -> ReaderContext:
    return ReaderContext.from_settings(settings)


@pytest.fixture
def make_pk3(tmp_path):
    def _make(files=None, name: str = "resource.pk3", **kwargs) -> Path:
        return write_pk3(tmp_path / name, SAMPLE_FILES if files is None else files, **kwargs)

    return _make


@pytest.fixture
def sample_files() -> dict[str, bytes]:
    return dict(SAMPLE_FILES)
