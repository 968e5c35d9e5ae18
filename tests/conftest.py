from __future__ import annotations

import datetime as dt
from pathlib import Path

import pytest

from zim_site.assets import resolve_directories
from zim_site.config import SiteConfig

SNAPSHOT_DATE = dt.datetime(2024, 3, 1, 12, 30)

KIWIX_MAIN_PAGE = """<!DOCTYPE html>
<html>
<head>
<title>Main Page</title>
<link rel="canonical" href="https://en.example.org/wiki/Main_Page">
</head>
<body>
<div id="mw-mf-viewport">
<div id="mw-mf-page-center">
<div id="content">
<h1 id="firstHeading">Main Page (offline)</h1>
<div id="mw-content-text">
<p>Offline body <a href="/wiki/Old_Link">old</a></p>
<p><a href="https://en.example.org/w/index.php?title=Main_Page&amp;oldid=987654">Permanent link</a></p>
<div class="kiwix-note">Retrieved from the offline snapshot</div>
</div>
</div>
</div>
</div>
</body>
</html>
"""

LIVE_MAIN_PAGE = """<!DOCTYPE html>
<html>
<head><title>Main Page - Live</title></head>
<body>
<div id="content" class="mw-body">
<a class="mw-jump-link" href="#p-search">Jump to search</a>
<div id="siteNotice">Donate today</div>
<h1 id="firstHeading">Main Page</h1>
<div id="siteSub">From the live wiki</div>
<div id="contentSub"></div>
<div id="mw-content-text">
<p>Today's featured article: <a href="/wiki/Cat">Cat</a>.</p>
<p><a href="/wiki/Dog#Diet">Dog diet</a></p>
<p><a href="/wiki/File:Cat.jpg">picture</a></p>
<p><a href="https://other.example.org/page">elsewhere</a></p>
</div>
<div id="catlinks">Categories: Main page</div>
</div>
</body>
</html>
"""

ARTICLE = """<!DOCTYPE html>
<html>
<head>
<title>Dog</title>
<link rel="canonical" href="https://en.example.org/wiki/Dog">
</head>
<body>
<p><a href="Cat">Cat</a> and <a href="Wolf#Range">wolves</a></p>
<p><a href="/wiki/Fish">Fish</a></p>
<p><a href="../I/m/Dog.png">photo</a></p>
<p><a href="https://example.com/">external</a> <a href="#Diet">diet</a></p>
</body>
</html>
"""


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    root = tmp_path / "unpacked"
    articles = root / "A"
    articles.mkdir(parents=True)
    (articles / "Main_Page.html").write_text(KIWIX_MAIN_PAGE, encoding="utf-8")
    (articles / "Dog.html").write_text(ARTICLE, encoding="utf-8")
    (articles / "Dog").mkdir()
    (articles / "Dog" / "Breeds.html").write_text(ARTICLE, encoding="utf-8")
    images = root / "I" / "m"
    images.mkdir(parents=True)
    (images / "Dog.png").write_bytes(b"\x89PNG")
    return root


@pytest.fixture
def config(site_root: Path) -> SiteConfig:
    return SiteConfig(
        unpacked_zim_dir=site_root,
        main_page="Main_Page_Live.html",
        kiwix_main_page="Main_Page",
    )


@pytest.fixture
def directories(config: SiteConfig):
    return resolve_directories(config)


@pytest.fixture
def wiki_dirs(site_root: Path, directories):
    """Directories with the article folder already renamed to wiki/."""
    directories.article_folder.rename(directories.wiki_folder)
    return directories


class RecordingFetcher:
    def __init__(self, body: str = LIVE_MAIN_PAGE) -> None:
        self.body = body
        self.calls = []

    def __call__(self, url, timeout, user_agent):
        self.calls.append((url, timeout, user_agent))
        return self.body


@pytest.fixture
def fetcher() -> RecordingFetcher:
    return RecordingFetcher()
