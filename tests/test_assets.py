from __future__ import annotations

from pathlib import Path

from zim_site.assets import (
    copy_image_assets,
    insert_index_redirect,
    move_article_folder_to_wiki,
    resolve_directories,
)
from zim_site.config import SiteConfig


def test_resolve_directories():
    config = SiteConfig(Path("/data/zim"), "Main.html", "Main_Page")

    directories = resolve_directories(config)

    assert directories.unpacked_zim_dir == Path("/data/zim")
    assert directories.article_folder == Path("/data/zim/A")
    assert directories.images_folder == Path("/data/zim/I/m")
    assert directories.wiki_folder == Path("/data/zim/wiki")


def test_move_article_folder_to_wiki(directories):
    assert move_article_folder_to_wiki(directories) is True
    assert (directories.wiki_folder / "Dog.html").is_file()
    assert not directories.article_folder.exists()

    assert move_article_folder_to_wiki(directories) is False


def test_copy_image_assets_skips_non_files(tmp_path: Path, directories):
    assets = tmp_path / "assets"
    assets.mkdir()
    # Sorts first, so a directory is the first entry listed.
    (assets / "a_subdir").mkdir()
    (assets / "a_subdir" / "nested.png").write_bytes(b"nested")
    (assets / "logo.svg").write_text("<svg/>", encoding="utf-8")
    (assets / "wordmark.png").write_bytes(b"png")

    copied = copy_image_assets(assets, directories)

    assert copied == 2
    assert (directories.images_folder / "logo.svg").read_text(encoding="utf-8") == "<svg/>"
    assert (directories.images_folder / "wordmark.png").read_bytes() == b"png"
    assert not (directories.images_folder / "a_subdir").exists()
    assert not (directories.images_folder / "nested.png").exists()


def test_insert_index_redirect(config):
    path = insert_index_redirect(config)

    assert path == config.unpacked_zim_dir / "index.html"
    markup = path.read_text(encoding="utf-8")
    assert 'content="0; url=wiki/Main_Page_Live.html"' in markup
    assert 'href="wiki/Main_Page_Live.html"' in markup
