"""Data models shared across the site build."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .config import SiteConfig


@dataclass(frozen=True)
class Directories:
    """Semantic locations inside an unpacked ZIM export."""

    unpacked_zim_dir: Path
    article_folder: Path
    images_folder: Path
    wiki_folder: Path


@dataclass(frozen=True)
class CanonicalReference:
    """Live URL and revision id a snapshot page was built from."""

    url: str
    revision: str


@dataclass(frozen=True)
class EnhancedOptions:
    """Configuration extended with per-document values used by the rewrite rules."""

    config: SiteConfig
    snapshot_date: dt.datetime
    relative_filepath: str
    relative_root: str
    relative_image_path: str
    canonical_url: Optional[str] = None


@dataclass
class RunSummary:
    """Outcome of a full site build."""

    articles_total: int = 0
    articles_processed: int = 0
    articles_failed: int = 0
    main_page_generated: bool = False
    elapsed_seconds: float = 0.0

    @property
    def succeeded(self) -> bool:
        return self.main_page_generated and not self.articles_failed
