from __future__ import annotations

import types
from pathlib import Path

from zim_site.utils import relative_posix, walk_files


def test_walk_files_yields_regular_files_only(tmp_path: Path):
    (tmp_path / "b.html").write_text("b")
    (tmp_path / "a").mkdir()
    (tmp_path / "a" / "c.html").write_text("c")
    (tmp_path / "a" / "empty").mkdir()

    walker = walk_files(tmp_path)

    assert isinstance(walker, types.GeneratorType)
    assert list(walker) == [tmp_path / "a" / "c.html", tmp_path / "b.html"]
    assert list(walker) == []


def test_relative_posix(tmp_path: Path):
    assert relative_posix(tmp_path / "wiki", tmp_path / "wiki") == "."
    assert relative_posix(tmp_path / "I" / "m", tmp_path / "wiki" / "Dog") == "../../I/m"
