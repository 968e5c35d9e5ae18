"""Utility helpers for file enumeration and path handling."""

from __future__ import annotations

import os
import posixpath
from pathlib import Path
from typing import Iterator, Union

PathLike = Union[str, os.PathLike]


def walk_files(root: PathLike) -> Iterator[Path]:
    """Lazily yield every regular file below ``root``, depth first."""
    with os.scandir(root) as scanner:
        entries = sorted(scanner, key=lambda entry: entry.name)
    for entry in entries:
        if entry.is_dir(follow_symlinks=False):
            yield from walk_files(entry.path)
        elif entry.is_file():
            yield Path(entry.path)


def relative_posix(target: PathLike, start: PathLike) -> str:
    """Relative path from ``start`` to ``target`` using forward slashes."""
    relative = os.path.relpath(target, start)
    return relative.replace(os.sep, posixpath.sep)
