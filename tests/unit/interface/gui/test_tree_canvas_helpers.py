from __future__ import annotations

"""
Unit tests for the pure helpers of the tree canvas.
"""

import pytest

from sitemaptree.interface.gui.components.tree_canvas import blend, is_slow_modifier


@pytest.mark.parametrize("state, expected", [
    (0x0000, False),
    (0x0001, True),     # Shift
    (0x0008, True),     # Alt (X11 Mod1)
    (0x20000, True),    # Alt (Windows)
    (0x0004, False),    # Control
    (0x0010, False),    # NumLock
    (0x0011, True),
])
def test_slow_modifier(state, expected) -> None:
    assert is_slow_modifier(state) is expected


def test_blend_bounds() -> None:
    assert blend("#333333", "#FFFFFF", 1.0) == "#333333"
    assert blend("#333333", "#FFFFFF", 0.0) == "#FFFFFF"


def test_blend_midpoint_and_clamping() -> None:
    assert blend("#000000", "#FFFFFF", 0.5) == "#808080"
    assert blend("#ff0000", "#000000", 2.0) == "#FF0000"
    assert blend("#ff0000", "#000000", -1.0) == "#000000"
