"""High-level orchestration of a full site build."""

from __future__ import annotations

import asyncio
import datetime as dt
import logging
import time
from pathlib import Path
from typing import Optional, Set

from .article import process_article
from .assets import (
    copy_image_assets,
    insert_index_redirect,
    move_article_folder_to_wiki,
    resolve_directories,
)
from .config import SiteConfig
from .errors import ArticleParseFailure, ZimSiteError
from .main_page import Fetcher, fetch_page, generate_main_page
from .models import Directories, RunSummary
from .progress import NullProgress, ProgressReporter
from .utils import walk_files

logger = logging.getLogger("zim_site")


async def process_articles(
    config: SiteConfig,
    directories: Directories,
    progress: ProgressReporter,
    summary: RunSummary,
    skip: Optional[Set[Path]] = None,
) -> RunSummary:
    """Rewrite every article below the wiki folder, one file at a time."""
    skip = {path.resolve() for path in (skip or set())}
    root = directories.wiki_folder

    total = sum(1 for path in walk_files(root) if path.resolve() not in skip)
    summary.articles_total = total
    snapshot_date = dt.datetime.now()

    processed = 0
    progress.start(total, processed)
    try:
        for path in walk_files(root):
            if path.resolve() in skip:
                continue
            try:
                await asyncio.to_thread(
                    process_article, path, directories, config, snapshot_date
                )
            except ArticleParseFailure as exc:
                if not config.skip_failed_articles:
                    raise
                logger.warning("Skipping %s", exc)
                progress.error(exc)
                summary.articles_failed += 1
            else:
                summary.articles_processed += 1
            processed += 1
            progress.update(processed)
    finally:
        progress.stop()
    return summary


async def run_site(
    config: SiteConfig,
    progress: Optional[ProgressReporter] = None,
    fetch: Fetcher = fetch_page,
) -> RunSummary:
    """Turn an unpacked ZIM export into a static site in place."""
    progress = progress or NullProgress()
    summary = RunSummary()
    overall_start = time.perf_counter()

    directories = resolve_directories(config)
    move_article_folder_to_wiki(directories)
    if config.assets_dir:
        copy_image_assets(config.assets_dir, directories)

    # The main page is only ever written by the merge.
    skip: Set[Path] = {directories.wiki_folder / config.main_page}
    try:
        await generate_main_page(config, directories, fetch=fetch)
    except (ZimSiteError, OSError) as exc:
        logger.error("Main page generation failed: %s", exc)
        progress.error(exc)
    else:
        summary.main_page_generated = True

    await process_articles(config, directories, progress, summary, skip=skip)
    insert_index_redirect(config)

    summary.elapsed_seconds = time.perf_counter() - overall_start
    return summary
