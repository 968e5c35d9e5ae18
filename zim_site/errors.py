"""Exceptions raised by the site build."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class ZimSiteError(Exception):
    """Base class for every failure surfaced by the site build."""


class MissingCanonicalReference(ZimSiteError):
    def __init__(self, source: Path) -> None:
        super().__init__(f"Could not parse out a canonical url from {source}")
        self.source = source


class MissingRevisionIdentifier(ZimSiteError):
    def __init__(self, source: Path) -> None:
        super().__init__(f"Could not parse out the canonical revision id from {source}")
        self.source = source


class FetchFailure(ZimSiteError):
    """The live page could not be retrieved."""

    def __init__(self, url: str, cause: Exception) -> None:
        super().__init__(f"Failed to fetch {url}: {cause}")
        self.url = url
        self.cause = cause


class MergeStructureFailure(ZimSiteError):
    """An element the merge relies on is missing from one of the documents."""

    def __init__(self, selector: str, document: str) -> None:
        super().__init__(f"Expected element {selector!r} not found in {document}")
        self.selector = selector
        self.document = document


class ArticleParseFailure(ZimSiteError):
    """A single article could not be decoded or parsed."""

    def __init__(self, path: Path, cause: Optional[Exception] = None) -> None:
        message = f"Could not parse article {path}"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)
        self.path = path
        self.cause = cause
