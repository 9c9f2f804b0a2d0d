from __future__ import annotations

"""
Unit tests for the URL Tree Builder.

Verifies:
1. Hierarchy shape for shared prefixes and repeated segment names.
2. Stable identifiers and first-seen child order.
3. Idempotence, node-count and URL reconstruction properties.
4. Rejection of empty and non-absolute input.
"""

import random

import pytest

from sitemaptree.core.analysis.url_tree_builder import (
    build_url_tree,
    origin_of,
    reconstruct_url,
    split_segments,
)
from sitemaptree.domain.errors import EmptyUrlListError, InvalidUrlError
from sitemaptree.domain.tree_models import NodeKind
from urllib.parse import urlsplit


def _shape(node):
    return (node.name, node.url, tuple(_shape(c) for c in node.children))


def _prefixes(urls):
    found = set()
    for url in urls:
        parts = urlsplit(url)
        path = origin_of(parts)
        found.add(path)
        for segment in split_segments(parts.path):
            path += "/" + segment
            found.add(path)
    return found


# -----------------------------------------------------------------------------
# Shape
# -----------------------------------------------------------------------------

def test_two_leaves_under_shared_parent() -> None:
    tree = build_url_tree(["https://ex.com/a/b", "https://ex.com/a/c"])

    assert tree.name == "ex.com"
    assert tree.url == "https://ex.com"
    assert tree.kind is NodeKind.ROOT
    assert [c.name for c in tree.children] == ["a"]
    assert [c.name for c in tree.children[0].children] == ["b", "c"]
    assert tree.count_nodes() == 4


def test_prefix_url_is_shared_as_intermediate_node() -> None:
    tree = build_url_tree(["https://ex.com/a", "https://ex.com/a/b"])

    assert len(tree.children) == 1
    a = tree.children[0]
    assert a.name == "a"
    assert a.kind is NodeKind.INTERNAL
    assert [c.name for c in a.children] == ["b"]
    assert a.children[0].kind is NodeKind.LEAF


def test_same_segment_name_under_different_parents_stays_distinct(sample_tree) -> None:
    a, b, _ = sample_tree.children

    x_under_a = a.children[0]
    x_under_b = b.children[0]
    assert x_under_a.name == x_under_b.name == "x"
    assert x_under_a.node_id != x_under_b.node_id
    assert x_under_a.url == "https://example.com/a/x"
    assert x_under_b.url == "https://example.com/b/x"


def test_empty_segments_are_ignored() -> None:
    tree = build_url_tree(["https://ex.com//a///b/", "https://ex.com/a/b"])

    assert tree.count_nodes() == 3
    assert tree.children[0].children[0].url == "https://ex.com/a/b"


def test_root_only_url_produces_single_node() -> None:
    tree = build_url_tree(["https://ex.com/"])
    assert tree.count_nodes() == 1
    assert not tree.has_children


def test_depth_equals_longest_segment_count() -> None:
    tree = build_url_tree(["https://ex.com/a", "https://ex.com/a/b/c/d", "https://ex.com/e/f"])
    assert tree.max_depth() == 4


def test_query_and_fragment_do_not_create_nodes() -> None:
    tree = build_url_tree(["https://ex.com/a?page=2#top"])
    assert [n.url for n in tree.iter_preorder()] == ["https://ex.com", "https://ex.com/a"]


# -----------------------------------------------------------------------------
# Identity and ordering
# -----------------------------------------------------------------------------

def test_ids_follow_first_seen_order(sample_tree) -> None:
    ids_by_url = {n.url: n.node_id for n in sample_tree.iter_preorder()}
    assert ids_by_url == {
        "https://example.com": 0,
        "https://example.com/a": 1,
        "https://example.com/a/x": 2,
        "https://example.com/a/y": 3,
        "https://example.com/b": 4,
        "https://example.com/b/x": 5,
        "https://example.com/c": 6,
    }


def test_children_keep_encounter_order() -> None:
    tree = build_url_tree(["https://ex.com/z", "https://ex.com/m", "https://ex.com/a", "https://ex.com/m/1"])
    assert [c.name for c in tree.children] == ["z", "m", "a"]


def test_depths_are_assigned(sample_tree) -> None:
    for node in sample_tree.iter_preorder():
        assert node.depth == len(split_segments(urlsplit(node.url).path))


# -----------------------------------------------------------------------------
# Properties
# -----------------------------------------------------------------------------

def test_duplicates_are_merged(sample_urls) -> None:
    assert _shape(build_url_tree(sample_urls)) == _shape(build_url_tree(sample_urls + sample_urls))


def test_node_count_matches_distinct_prefixes_in_any_order(sample_urls) -> None:
    urls = sample_urls + ["https://example.com/a/x/deep", "https://example.com/d/e/f"]
    expected = len(_prefixes(urls))

    rng = random.Random(7)
    for _ in range(5):
        shuffled = list(urls)
        rng.shuffle(shuffled)
        tree = build_url_tree(shuffled)
        assert tree.count_nodes() == expected
        assert {n.url for n in tree.iter_preorder()} == _prefixes(urls)


def test_reconstructed_url_matches_node_url(sample_tree) -> None:
    for node in sample_tree.iter_preorder():
        if node.is_root:
            continue
        assert reconstruct_url(sample_tree, node.node_id) == node.url


def test_reconstruct_unknown_node_returns_none(sample_tree) -> None:
    assert reconstruct_url(sample_tree, 999) is None


# -----------------------------------------------------------------------------
# Origins
# -----------------------------------------------------------------------------

def test_origin_drops_default_port_and_userinfo() -> None:
    assert origin_of(urlsplit("HTTPS://user:pw@Ex.com:443/a")) == "https://ex.com"
    assert origin_of(urlsplit("http://ex.com:8080/a")) == "http://ex.com:8080"


def test_foreign_origin_keeps_its_own_urls(caplog) -> None:
    with caplog.at_level("WARNING"):
        tree = build_url_tree(["https://ex.com/a", "https://cdn.ex.com/a"])

    urls = [c.url for c in tree.children]
    assert urls == ["https://ex.com/a", "https://cdn.ex.com/a"]
    assert "outside root origin" in caplog.text


# -----------------------------------------------------------------------------
# Errors
# -----------------------------------------------------------------------------

def test_empty_list_raises() -> None:
    with pytest.raises(EmptyUrlListError):
        build_url_tree([])


@pytest.mark.parametrize("bad", ["/relative/path", "example.com/a", "https://", "http://ex.com:99999/"])
def test_non_absolute_url_raises(bad) -> None:
    with pytest.raises(InvalidUrlError) as exc_info:
        build_url_tree(["https://ex.com/a", bad])
    assert exc_info.value.url == bad
