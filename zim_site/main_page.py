"""Build the landing page by merging the live main page into the offline shell."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path
from typing import Callable, Optional
from urllib.parse import urlsplit, urlunsplit

import requests
from bs4 import BeautifulSoup, Tag

from .article import (
    HTML_PARSER,
    append_footer,
    enhance_options,
    parse_document,
    read_canonical_url,
)
from .config import HTML_POSTFIX, SiteConfig
from .errors import (
    FetchFailure,
    MergeStructureFailure,
    MissingCanonicalReference,
    MissingRevisionIdentifier,
)
from .links import DEFAULT_RULES, MAIN_PAGE_LINK_SELECTOR, rework_links
from .models import CanonicalReference, Directories

logger = logging.getLogger("zim_site")

REVISION_PATTERN = re.compile(r"(?<=oldid=)\d+")

CONTENT_SELECTOR = "#content"
CONTENT_TEXT_SELECTOR = "#mw-content-text"
PAGE_CENTER_SELECTOR = "#mw-mf-page-center"
OFFLINE_NOTE_SELECTOR = "#mw-content-text > div:last-child"

# Site chrome that has no place in the merged layout.
CHROME_SELECTORS = (
    "#siteNotice",
    "#firstHeading",
    "#siteSub",
    "#contentSub",
    "#catlinks",
    "a.mw-jump-link",
)

Fetcher = Callable[[str, Optional[float], str], str]


def extract_canonical_reference(
    soup: BeautifulSoup, markup: str, source: Path
) -> CanonicalReference:
    """Pull the canonical URL and the pinned revision id out of a snapshot page."""
    url = read_canonical_url(soup)
    if not url:
        raise MissingCanonicalReference(source)
    match = REVISION_PATTERN.search(markup)
    if not match:
        raise MissingRevisionIdentifier(source)
    return CanonicalReference(url=url, revision=match.group(0))


def build_fetch_url(reference: CanonicalReference, main_page: str) -> str:
    """Point the canonical URL at the main page, pinned to the snapshot revision."""
    parts = urlsplit(reference.url)
    title = main_page.replace(HTML_POSTFIX, "", 1)
    revision = f"oldid={reference.revision}"
    query = f"{parts.query}&{revision}" if parts.query else revision
    return urlunsplit(
        (parts.scheme, parts.netloc, f"/wiki/{title}", query, parts.fragment)
    )


def fetch_page(url: str, timeout: Optional[float], user_agent: str) -> str:
    """Download a page and return its body as text."""
    logger.info("Fetching %s", url)
    try:
        with requests.Session() as session:
            session.headers["User-Agent"] = user_agent
            resp = session.get(url, timeout=timeout)
            resp.raise_for_status()
    except requests.RequestException as exc:
        raise FetchFailure(url, exc) from exc
    return resp.text


def _require(soup: Tag, selector: str, document: str) -> Tag:
    node = soup.select_one(selector)
    if node is None:
        raise MergeStructureFailure(selector, document)
    return node


def strip_content_chrome(content: Tag) -> Tag:
    classes = list(content.get("class", []))
    if "content" not in classes:
        classes.append("content")
    content["class"] = classes
    for selector in CHROME_SELECTORS:
        for node in content.select(selector):
            node.decompose()
    return content


def merge_main_page(local: BeautifulSoup, remote: BeautifulSoup) -> BeautifulSoup:
    """Replace the shell's content region with the live one, keeping the offline note."""
    remote_content = _require(remote, CONTENT_SELECTOR, "live page")
    remote_text = _require(remote_content, CONTENT_TEXT_SELECTOR, "live page")
    _require(local, CONTENT_TEXT_SELECTOR, "offline main page")
    page_center = _require(local, PAGE_CENTER_SELECTOR, "offline main page")

    strip_content_chrome(remote_content)

    note = local.select_one(OFFLINE_NOTE_SELECTOR)
    if note is None:
        logger.warning("Offline main page has no trailing note to carry over")
    else:
        remote_text.append(note.extract())

    for node in local.select(CONTENT_SELECTOR):
        node.decompose()
    page_center.insert(0, remote_content.extract())
    return local


async def generate_main_page(
    config: SiteConfig,
    directories: Directories,
    fetch: Fetcher = fetch_page,
) -> Path:
    """Write the merged main page and return its path.

    Nothing is written unless every step succeeds.
    """
    kiwix_path = directories.wiki_folder / f"{config.kiwix_main_page}{HTML_POSTFIX}"
    main_page_path = directories.wiki_folder / config.main_page

    raw = kiwix_path.read_bytes()
    local = parse_document(raw, kiwix_path)
    markup = raw.decode("utf-8")
    reference = extract_canonical_reference(local, markup, kiwix_path)
    fetch_url = build_fetch_url(reference, config.main_page)
    logger.debug("Snapshot revision %s of %s", reference.revision, reference.url)

    body = await asyncio.to_thread(fetch, fetch_url, config.fetch_timeout, config.user_agent)
    remote = BeautifulSoup(body, HTML_PARSER)

    merge_main_page(local, remote)

    options = enhance_options(
        config,
        directories,
        main_page_path,
        canonical_url=fetch_url,
    )
    rework_links(local, MAIN_PAGE_LINK_SELECTOR, DEFAULT_RULES, options)
    append_footer(local, options)

    main_page_path.write_text(str(local), encoding="utf-8")
    logger.info("Saved main page to %s", main_page_path)
    return main_page_path
