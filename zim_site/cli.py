"""Command-line entry point for the ZIM static site builder."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import DEFAULT_SITE_NAME, DEFAULT_USER_AGENT, SiteConfig
from .errors import ZimSiteError
from .pipeline import run_site
from .progress import TqdmProgress
from .templates import get_templates

logger = logging.getLogger("zim_site.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Turn an unpacked ZIM export into a static website with a main page "
            "merged from the live wiki."
        ),
    )
    parser.add_argument(
        "unpacked_zim_dir",
        type=Path,
        help="Directory produced by unpacking the ZIM archive",
    )
    parser.add_argument(
        "--main-page",
        required=True,
        help="File name of the generated main page inside wiki/, e.g. Main_Page.html",
    )
    parser.add_argument(
        "--kiwix-main-page",
        required=True,
        help="Name (without .html) of the snapshot's own main page article",
    )
    parser.add_argument(
        "--assets",
        type=Path,
        default=None,
        help="Directory whose files are copied into the image folder",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Timeout in seconds for fetching the live main page (default: none)",
    )
    parser.add_argument(
        "--skip-failed-articles",
        action="store_true",
        help="Log and skip articles that cannot be parsed instead of aborting",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent to the live wiki",
    )
    parser.add_argument(
        "--site-name",
        default=DEFAULT_SITE_NAME,
        help="Site name shown in the page footer",
    )
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Do not render a progress bar",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    config = SiteConfig(
        unpacked_zim_dir=Path(args.unpacked_zim_dir).resolve(),
        main_page=args.main_page,
        kiwix_main_page=args.kiwix_main_page,
        assets_dir=args.assets.resolve() if args.assets else None,
        fetch_timeout=args.timeout,
        skip_failed_articles=args.skip_failed_articles,
        user_agent=args.user_agent,
        site_name=args.site_name,
    )

    get_templates()
    progress = TqdmProgress(disable=args.no_progress)
    try:
        summary = asyncio.run(run_site(config, progress))
    except ZimSiteError as exc:
        logger.error("Build aborted: %s", exc)
        return 1

    logger.info(
        "Finished in %.2fs (%d/%d articles rewritten, %d failed, main page %s)",
        summary.elapsed_seconds,
        summary.articles_processed,
        summary.articles_total,
        summary.articles_failed,
        "generated" if summary.main_page_generated else "not generated",
    )
    return 0 if summary.succeeded else 1


if __name__ == "__main__":
    sys.exit(main())
