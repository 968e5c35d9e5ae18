"""Process-wide cache of the HTML fragments rendered into the site."""

from __future__ import annotations

import html
import posixpath
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

from .config import WIKI_DIR
from .models import EnhancedOptions

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"


@dataclass(frozen=True)
class TemplateCache:
    """Raw template text, read once and never modified."""

    footer: str
    footer_source: str
    index_redirect: str


@lru_cache(maxsize=None)
def get_templates() -> TemplateCache:
    """Read every template from disk on first use."""

    def read(name: str) -> str:
        return (TEMPLATE_DIR / name).read_text(encoding="utf-8")

    return TemplateCache(
        footer=read("footer.html"),
        footer_source=read("footer_source.html"),
        index_redirect=read("index_redirect.html"),
    )


def render_footer(options: EnhancedOptions) -> str:
    templates = get_templates()
    source_link = ""
    if options.canonical_url:
        source_link = templates.footer_source.format(
            canonical_url=html.escape(options.canonical_url)
        ).strip()
    main_page_href = posixpath.join(options.relative_root, options.config.main_page)
    return templates.footer.format(
        site_name=html.escape(options.config.site_name),
        snapshot_iso=options.snapshot_date.isoformat(timespec="seconds"),
        snapshot_date=options.snapshot_date.strftime("%Y-%m-%d"),
        source_link=source_link,
        main_page_href=html.escape(posixpath.normpath(main_page_href)),
    )


def render_index_redirect(main_page: str) -> str:
    target = f"{WIKI_DIR}/{main_page}"
    return get_templates().index_redirect.format(
        target=html.escape(target),
        main_page=html.escape(main_page),
    )
