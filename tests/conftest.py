from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Shared fixtures: sample URL lists, built trees and sitemap files.
"""

import os
import sys
from pathlib import Path
from typing import List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from sitemaptree.core.analysis.url_tree_builder import build_url_tree  # noqa: E402
from sitemaptree.domain.tree_models import TreeNode  # noqa: E402

SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"


def make_sitemap_xml(urls: List[str]) -> str:
    entries = "\n".join(f"  <url><loc>{u}</loc></url>" for u in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        f'<urlset xmlns="{SITEMAP_NS}">\n{entries}\n</urlset>\n'
    )


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture
def sample_urls() -> List[str]:
    """
    URLs producing this tree (ids in brackets):

        example.com [0]
        ├── a [1]
        │   ├── x [2]
        │   └── y [3]
        ├── b [4]
        │   └── x [5]
        └── c [6]
    """
    return [
        "https://example.com/a/x",
        "https://example.com/a/y",
        "https://example.com/b/x",
        "https://example.com/c",
    ]


@pytest.fixture
def sample_tree(sample_urls: List[str]) -> TreeNode:
    return build_url_tree(sample_urls)


@pytest.fixture
def sitemap_file(tmp_path: Path, sample_urls: List[str]) -> Path:
    """A valid namespaced sitemap.xml containing `sample_urls`."""
    path = tmp_path / "sitemap.xml"
    path.write_text(make_sitemap_xml(sample_urls), encoding="utf-8")
    return path
