"""Configuration objects and constants for the site builder."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_USER_AGENT = "zim-site/0.1 (+static site builder for ZIM exports)"
DEFAULT_SITE_NAME = "Wikipedia"
HTML_POSTFIX = ".html"

ARTICLE_NAMESPACE_DIR = "A"
IMAGE_NAMESPACE_DIRS = ("I", "m")
WIKI_DIR = "wiki"
INDEX_FILENAME = "index.html"


@dataclass
class SiteConfig:
    """Top-level settings that control a site build."""

    unpacked_zim_dir: Path
    main_page: str
    kiwix_main_page: str
    assets_dir: Optional[Path] = None
    fetch_timeout: Optional[float] = None
    skip_failed_articles: bool = False
    user_agent: str = DEFAULT_USER_AGENT
    site_name: str = DEFAULT_SITE_NAME

