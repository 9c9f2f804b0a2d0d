from __future__ import annotations

"""
Unit tests for Domain Models.

Verifies:
1. TreeNode traversal helpers and JSON export.
2. Immutability of frozen dataclasses.
3. LayoutSettings construction from configuration.
"""

from dataclasses import FrozenInstanceError

import pytest

from sitemaptree.domain import constants as const
from sitemaptree.domain.config import get_default_config
from sitemaptree.domain.layout_models import IndicatorState, LayoutSettings, TransitionPlan
from sitemaptree.domain.tree_models import NodeKind, TreeNode


def test_preorder_visits_parents_first(sample_tree) -> None:
    assert [n.node_id for n in sample_tree.iter_preorder()] == [0, 1, 2, 3, 4, 5, 6]


def test_find_and_path_to(sample_tree) -> None:
    assert sample_tree.find(5).url == "https://example.com/b/x"
    assert sample_tree.find(42) is None
    assert [n.name for n in sample_tree.path_to(5)] == ["example.com", "b", "x"]
    assert sample_tree.path_to(42) is None


def test_counts(sample_tree) -> None:
    assert sample_tree.count_nodes() == 7
    assert sample_tree.max_depth() == 2


def test_to_dict_is_nested(sample_tree) -> None:
    data = sample_tree.to_dict()
    assert data["id"] == 0
    assert data["kind"] == "root"
    assert [c["name"] for c in data["children"]] == ["a", "b", "c"]
    assert data["children"][2] == {
        "id": 6,
        "name": "c",
        "url": "https://example.com/c",
        "kind": "leaf",
        "children": [],
    }


def test_tree_node_is_frozen() -> None:
    node = TreeNode(node_id=0, name="ex.com", url="https://ex.com", kind=NodeKind.ROOT)
    with pytest.raises(FrozenInstanceError):
        node.name = "other"


def test_indicator_glyphs() -> None:
    assert IndicatorState.EXPANDED.glyph == const.INDICATOR_GLYPHS["expanded"]
    assert IndicatorState.COLLAPSED.glyph == const.INDICATOR_GLYPHS["collapsed"]
    assert IndicatorState.NONE.glyph == ""


def test_layout_settings_from_config() -> None:
    conf = get_default_config()
    conf.update({"node_spacing": 20, "initial_depth": None, "slow_duration_ms": 1000})

    settings = LayoutSettings.from_config(conf)
    assert settings.node_spacing == 20.0
    assert settings.initial_depth is None
    assert settings.duration_for(slow=True) == 1000
    assert settings.duration_for(slow=False) == const.NORMAL_DURATION_MS


def test_empty_plan() -> None:
    assert TransitionPlan(source_id=0, duration_ms=0).is_empty
