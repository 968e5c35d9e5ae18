"""Anchor rewriting rules applied to parsed wiki documents."""

from __future__ import annotations

import posixpath
from typing import Callable, Sequence, Tuple
from urllib.parse import urlsplit

from bs4 import BeautifulSoup

from .config import HTML_POSTFIX
from .models import EnhancedOptions

RewriteRule = Callable[[str, EnhancedOptions], str]

WIKI_PREFIX = "/wiki/"
IMAGE_SUFFIXES = (".svg", ".png", ".jpg")

# Wiki namespaces ("Help:Contents") look like URL schemes to urlsplit.
EXTERNAL_SCHEMES = {
    "http",
    "https",
    "ftp",
    "mailto",
    "javascript",
    "data",
    "tel",
    "irc",
    "news",
}

_NOT_IMAGES = "".join(f':not([href$="{suffix}"])' for suffix in IMAGE_SUFFIXES)

MAIN_PAGE_LINK_SELECTOR = f'a[href^="{WIKI_PREFIX}"]{_NOT_IMAGES}'
ARTICLE_LINK_SELECTOR = f"a[href]{_NOT_IMAGES}"

# Extensions that already resolve to a file in the export.
KNOWN_EXTENSIONS = {
    ".html",
    ".htm",
    ".png",
    ".jpg",
    ".jpeg",
    ".gif",
    ".svg",
    ".webp",
    ".bmp",
    ".tif",
    ".tiff",
    ".ico",
    ".css",
    ".js",
    ".json",
    ".pdf",
    ".ogg",
    ".oga",
    ".ogv",
    ".mp3",
    ".mp4",
    ".webm",
    ".wav",
    ".txt",
    ".xml",
}


def _split_suffix(href: str) -> Tuple[str, str]:
    """Split an href into its path and the trailing ``?query#fragment`` part."""
    cut = len(href)
    for marker in ("?", "#"):
        index = href.find(marker)
        if index != -1:
            cut = min(cut, index)
    return href[:cut], href[cut:]


def _keep_relative(path: str) -> str:
    """Prefix ``./`` when the first segment would read as a URL scheme."""
    if ":" in path.split("/", 1)[0]:
        return f"./{path}"
    return path


def append_html_postfix(href: str, options: EnhancedOptions) -> str:
    """Append the static page extension to links pointing at wiki pages."""
    parts = urlsplit(href)
    if parts.scheme in EXTERNAL_SCHEMES or parts.netloc:
        return href
    path, tail = _split_suffix(href)
    if not path or path.endswith("/"):
        return href
    extension = posixpath.splitext(posixpath.basename(path))[1].lower()
    if extension not in KNOWN_EXTENSIONS:
        path = f"{path}{HTML_POSTFIX}"
    return f"{_keep_relative(path)}{tail}"


def prefix_relative_root(href: str, options: EnhancedOptions) -> str:
    """Turn ``/wiki/...`` links into paths relative to the current document."""
    if not href.startswith(WIKI_PREFIX):
        return href
    path, tail = _split_suffix(href[len(WIKI_PREFIX):])
    relative = posixpath.normpath(posixpath.join(options.relative_root, path))
    return _keep_relative(relative) + tail


DEFAULT_RULES: Sequence[RewriteRule] = (append_html_postfix, prefix_relative_root)


def rework_links(
    soup: BeautifulSoup,
    selector: str,
    rules: Sequence[RewriteRule],
    options: EnhancedOptions,
) -> BeautifulSoup:
    """Run every rule, in order, over the href of each anchor matching ``selector``."""
    for anchor in soup.select(selector):
        href = anchor.get("href")
        if href is None:
            continue
        for rule in rules:
            href = rule(href, options)
        anchor["href"] = href
    return soup
