"""Per-article link rewriting and footer insertion."""

from __future__ import annotations

import datetime as dt
import logging
from pathlib import Path
from typing import Optional, Union

from bs4 import BeautifulSoup

from .config import SiteConfig
from .errors import ArticleParseFailure
from .links import ARTICLE_LINK_SELECTOR, DEFAULT_RULES, rework_links
from .models import Directories, EnhancedOptions
from .templates import render_footer
from .utils import relative_posix

logger = logging.getLogger("zim_site")

HTML_PARSER = "html.parser"


def parse_document(markup: Union[str, bytes], source: Path) -> BeautifulSoup:
    """Parse HTML markup, reporting failures against ``source``."""
    if isinstance(markup, bytes):
        try:
            markup = markup.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ArticleParseFailure(source, exc) from exc
    try:
        return BeautifulSoup(markup, HTML_PARSER)
    except Exception as exc:  # pylint: disable=broad-except
        raise ArticleParseFailure(source, exc) from exc


def read_canonical_url(soup: BeautifulSoup) -> Optional[str]:
    link = soup.select_one('link[rel="canonical"][href]')
    if link is None:
        return None
    href = link.get("href", "").strip()
    return href or None


def enhance_options(
    config: SiteConfig,
    directories: Directories,
    document_path: Path,
    snapshot_date: Optional[dt.datetime] = None,
    canonical_url: Optional[str] = None,
) -> EnhancedOptions:
    """Derive the per-document options used by the rewrite rules and footer."""
    document_dir = document_path.parent
    return EnhancedOptions(
        config=config,
        snapshot_date=snapshot_date or dt.datetime.now(),
        relative_filepath=relative_posix(document_path, directories.wiki_folder),
        relative_root=relative_posix(directories.wiki_folder, document_dir),
        relative_image_path=relative_posix(directories.images_folder, document_dir),
        canonical_url=canonical_url,
    )


def append_footer(soup: BeautifulSoup, options: EnhancedOptions) -> BeautifulSoup:
    footer = BeautifulSoup(render_footer(options), HTML_PARSER)
    container = soup.body or soup
    for node in list(footer.contents):
        container.append(node.extract())
    return soup


def process_article(
    path: Path,
    directories: Directories,
    config: SiteConfig,
    snapshot_date: Optional[dt.datetime] = None,
) -> None:
    """Rewrite the links of a single article and append the footer in place.

    Running this twice on the same file appends a second footer.
    """
    soup = parse_document(path.read_bytes(), path)
    options = enhance_options(
        config,
        directories,
        path,
        snapshot_date=snapshot_date,
        canonical_url=read_canonical_url(soup),
    )
    rework_links(soup, ARTICLE_LINK_SELECTOR, DEFAULT_RULES, options)
    append_footer(soup, options)
    path.write_text(str(soup), encoding="utf-8")
    logger.debug("Rewrote %s", options.relative_filepath)
