from __future__ import annotations

"""
Domain Exceptions.

Defines the failure taxonomy shared by the loader, the tree builder and the
renderer. Interfaces (CLI/GUI) catch the base class and map each subtype to
an exit code or a blocking dialog.
"""

from typing import Optional


class SitemapTreeError(Exception):
    """Base class for every expected failure of the application."""


class SitemapInputError(SitemapTreeError):
    """The selected file is missing, unreadable, or not an XML document."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class SitemapParseError(SitemapTreeError):
    """The sitemap content could not be parsed as XML."""


class EmptySitemapError(SitemapParseError):
    """The sitemap parsed correctly but contained no <loc> URLs."""


class InvalidUrlError(SitemapTreeError):
    """A URL is not absolute (missing scheme or host)."""

    def __init__(self, url: str):
        super().__init__(f"Not an absolute URL: {url!r}")
        self.url = url


class EmptyUrlListError(SitemapTreeError):
    """The tree builder was invoked without any URL."""


class UnknownNodeError(SitemapTreeError):
    """A node identifier does not belong to the rendered tree."""

    def __init__(self, node_id: int):
        super().__init__(f"Unknown node id: {node_id}")
        self.node_id = node_id
