"""Path normalization for archive-internal names.

Zip entries may use either ``/`` or ``\\`` as separator.  Everything inside
pk3fs is expressed with the host separator, and comparisons are done on the
case-folded form.
"""

import os

_ALT_SEPARATORS = {"/", "\\"} - {os.sep}


def normalize_path(name: str) -> str:
    """Convert separators to ``os.sep`` and strip leading/trailing separators.

    >>> normalize_path("sprites/wall.png") == os.path.join("sprites", "wall.png")
    True
    >>> normalize_path("/textures/") == "textures"
    True
    """
    for sep in _ALT_SEPARATORS:
        name = name.replace(sep, os.sep)
    return name.strip(os.sep)


def fold(value: str) -> str:
    """Case-fold a name or path for case-insensitive comparison."""
    return value.casefold()


def split_path(path: str) -> list[str]:
    """Split a normalized path into its non-empty segments."""
    return [part for part in path.split(os.sep) if part]


def canonical_path(name: str) -> str:
    """Normalize *name* and collapse empty segments, so ``a//b`` equals ``a/b``.

    This is the single spelling both the index and extraction compare on.

    >>> canonical_path("textures//a.txt") == os.path.join("textures", "a.txt")
    True
    """
    return os.sep.join(split_path(normalize_path(name)))


def split_extension(name: str) -> tuple[str, str]:
    """Return ``(title, extension)`` with the leading dot removed from the extension.

    >>> split_extension("TITLEPIC.png")
    ('TITLEPIC', 'png')
    >>> split_extension("README")
    ('README', '')
    """
    title, ext = os.path.splitext(name)
    return title, ext[1:]


def clean_extension(extension: str | None) -> str:
    """Drop a single leading dot so ``".txt"`` and ``"txt"`` compare equal."""
    if not extension:
        return ""
    return extension[1:] if extension.startswith(".") else extension
