"""Directory layout and asset handling for an unpacked ZIM export."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from .config import (
    ARTICLE_NAMESPACE_DIR,
    IMAGE_NAMESPACE_DIRS,
    INDEX_FILENAME,
    WIKI_DIR,
    SiteConfig,
)
from .models import Directories
from .templates import render_index_redirect

logger = logging.getLogger("zim_site")


def resolve_directories(config: SiteConfig) -> Directories:
    """Map the export root to the folders the build reads and writes."""
    root = Path(config.unpacked_zim_dir)
    return Directories(
        unpacked_zim_dir=root,
        article_folder=root / ARTICLE_NAMESPACE_DIR,
        images_folder=root.joinpath(*IMAGE_NAMESPACE_DIRS),
        wiki_folder=root / WIKI_DIR,
    )


def move_article_folder_to_wiki(directories: Directories) -> bool:
    """Rename the article namespace folder to ``wiki``; returns False if already done."""
    if directories.wiki_folder.exists():
        logger.debug("%s already exists, leaving articles in place", directories.wiki_folder)
        return False
    directories.article_folder.rename(directories.wiki_folder)
    logger.info("Moved %s to %s", directories.article_folder, directories.wiki_folder)
    return True


def copy_image_assets(assets_dir: Path, directories: Directories) -> int:
    """Copy the regular files of ``assets_dir`` into the image folder.

    Sub-directories and other non-file entries are skipped.
    """
    directories.images_folder.mkdir(parents=True, exist_ok=True)
    copied = 0
    for source in sorted(Path(assets_dir).iterdir()):
        if not source.is_file():
            logger.debug("Skipping non-file asset entry %s", source)
            continue
        shutil.copyfile(source, directories.images_folder / source.name)
        copied += 1
    logger.info("Copied %d assets into %s", copied, directories.images_folder)
    return copied


def insert_index_redirect(config: SiteConfig) -> Path:
    index_path = Path(config.unpacked_zim_dir) / INDEX_FILENAME
    index_path.write_text(render_index_redirect(config.main_page), encoding="utf-8")
    return index_path
