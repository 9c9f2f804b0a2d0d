from __future__ import annotations

"""
Sitemap Loading Service.

Validates the selected file at the boundary, reads it as text, and extracts
the `<loc>` URLs. Everything that can go wrong with the input is raised here
as a SitemapTreeError subtype, so the tree builder only ever receives a
non-empty list of strings.
"""

import logging
import mimetypes
import os
import xml.etree.ElementTree as ET
from typing import List

from sitemaptree.core.analysis.url_tree_builder import build_url_tree
from sitemaptree.domain import constants as const
from sitemaptree.domain.errors import (
    EmptySitemapError,
    SitemapInputError,
    SitemapParseError,
)
from sitemaptree.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------


def load_sitemap_tree(path: str) -> TreeNode:
    """
    Read a sitemap and build its URL tree in one step.

    Raises:
        SitemapTreeError: Any input, parse or URL failure. No partial tree
            is ever returned.
    """
    urls = load_sitemap_urls(path)
    tree = build_url_tree(urls)
    logger.info(f"Sitemap tree ready: {tree.count_nodes()} nodes, depth {tree.max_depth()}")
    return tree


def load_sitemap_urls(path: str) -> List[str]:
    """
    Read a sitemap file and return its `<loc>` URLs in document order.

    Args:
        path: Filesystem path selected by the user.

    Returns:
        List[str]: Non-empty list of stripped URL strings.

    Raises:
        SitemapInputError: Missing, unreadable or non-XML file.
        SitemapParseError: Malformed XML.
        EmptySitemapError: No `<loc>` entry found.
    """
    xml_text = read_sitemap_file(path)
    urls = extract_loc_urls(xml_text)
    if not urls:
        raise EmptySitemapError(f"No URLs found in sitemap: {path}")
    logger.info(f"Loaded {len(urls)} URLs from {os.path.basename(path)}")
    return urls


def validate_sitemap_path(path: str) -> str:
    """
    Check that `path` names an existing XML file.

    Returns:
        str: The absolute path.

    Raises:
        SitemapInputError: If the file is missing or is not an XML document.
    """
    if not path:
        raise SitemapInputError("No file selected.", path=path)

    abs_path = os.path.abspath(path)
    if not os.path.isfile(abs_path):
        raise SitemapInputError(f"File not found: {abs_path}", path=abs_path)

    if not is_xml_file(abs_path):
        raise SitemapInputError(f"Not an XML file: {abs_path}", path=abs_path)

    return abs_path


def is_xml_file(path: str) -> bool:
    """Accept `.xml` files and anything whose guessed MIME type is XML."""
    _, ext = os.path.splitext(path)
    if ext.lower() in const.SITEMAP_EXTENSIONS:
        return True
    mime_type, _ = mimetypes.guess_type(path)
    return mime_type in const.SITEMAP_MIME_TYPES


def read_sitemap_file(path: str) -> str:
    """
    Validate and read a sitemap file as UTF-8 text.

    Raises:
        SitemapInputError: Validation, I/O or decoding failure.
    """
    abs_path = validate_sitemap_path(path)
    try:
        with open(abs_path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except UnicodeDecodeError as e:
        raise SitemapInputError(f"Sitemap is not valid UTF-8: {abs_path}", path=abs_path) from e
    except OSError as e:
        raise SitemapInputError(f"Cannot read '{abs_path}': {e}", path=abs_path) from e


def extract_loc_urls(xml_text: str) -> List[str]:
    """
    Extract the text of every `<loc>` element, whatever its namespace.

    Other elements and attributes are ignored. Values are stripped and empty
    ones dropped.

    Raises:
        SitemapParseError: If the document is not well-formed XML.
    """
    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise SitemapParseError(f"Malformed sitemap XML: {e}") from e

    if _local_name(root.tag) == "sitemapindex":
        logger.warning("Document is a sitemap index: its <loc> entries point to other sitemaps.")

    urls: List[str] = []
    for element in root.iter():
        if _local_name(element.tag) != "loc":
            continue
        text = (element.text or "").strip()
        if text:
            urls.append(text)

    logger.debug(f"Extracted {len(urls)} <loc> entries")
    return urls


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------


def _local_name(tag: object) -> str:
    """Strip the `{namespace}` prefix from an element tag."""
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]

