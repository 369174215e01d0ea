import os

import pytest

from pk3fs.paths import (
    canonical_path,
    clean_extension,
    fold,
    normalize_path,
    split_extension,
    split_path,
)


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("sprites/wall.png", ["sprites", "wall.png"]),
            ("sprites\\wall.png", ["sprites", "wall.png"]),
            ("/textures/sub/", ["textures", "sub"]),
            ("MAPINFO", ["MAPINFO"]),
            ("", []),
        ],
    )
    def test_uses_host_separator(self, raw, expected):
        assert normalize_path(raw) == os.sep.join(expected)

    def test_keeps_casing(self):
        assert normalize_path("Sprites/Wall.PNG") == os.path.join("Sprites", "Wall.PNG")


class TestHelpers:
    def test_fold_is_case_insensitive(self):
        assert fold("Sprites/WALL.png") == fold("sprites/wall.PNG")

    def test_split_path_drops_empty_segments(self):
        assert split_path(os.sep.join(["a", "", "b"])) == ["a", "b"]

    @pytest.mark.parametrize(
        "raw", ["textures//sub/c.txt", "\\textures\\\\sub/c.txt", "textures/sub/c.txt/"]
    )
    def test_canonical_path_collapses_empty_segments(self, raw):
        assert canonical_path(raw) == os.path.join("textures", "sub", "c.txt")

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("TITLEPIC.png", ("TITLEPIC", "png")),
            ("README", ("README", "")),
            ("archive.tar.gz", ("archive.tar", "gz")),
            ("trailing.", ("trailing", "")),
        ],
    )
    def test_split_extension(self, name, expected):
        assert split_extension(name) == expected

    @pytest.mark.parametrize(
        ("ext", "expected"), [(".txt", "txt"), ("txt", "txt"), ("", ""), (None, "")]
    )
    def test_clean_extension(self, ext, expected):
        assert clean_extension(ext) == expected
