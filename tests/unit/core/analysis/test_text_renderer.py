from __future__ import annotations

"""
Unit tests for the ASCII tree renderer used by the CLI.
"""

import pytest

from sitemaptree.core.analysis.text_renderer import generate_tree_lines


def test_full_tree_rendering(sample_tree) -> None:
    lines = generate_tree_lines(sample_tree)

    assert lines == [
        "example.com",
        "├── a",
        "│   ├── x",
        "│   └── y",
        "├── b",
        "│   └── x",
        "└── c",
    ]


def test_collapsed_nodes_are_marked_and_pruned(sample_tree) -> None:
    lines = generate_tree_lines(sample_tree, expanded={0, 4})

    assert lines == [
        "example.com",
        "├── a ▸",
        "├── b",
        "│   └── x",
        "└── c",
    ]


def test_collapsed_root_renders_alone(sample_tree) -> None:
    assert generate_tree_lines(sample_tree, expanded=set()) == ["example.com ▸"]


def test_show_urls(sample_tree) -> None:
    lines = generate_tree_lines(sample_tree, expanded={0}, show_urls=True)
    assert lines[0] == "example.com  [https://example.com]"
    assert lines[-1] == "└── c  [https://example.com/c]"


def test_save_path_writes_file(sample_tree, tmp_path) -> None:
    target = tmp_path / "out" / "tree.txt"
    lines = generate_tree_lines(sample_tree, save_path=str(target))

    assert target.read_text(encoding="utf-8") == "\n".join(lines) + "\n"


def test_print_to_log(sample_tree, caplog) -> None:
    with caplog.at_level("INFO"):
        generate_tree_lines(sample_tree, expanded={0}, print_to_log=True)
    assert "Tree Preview" in caplog.text
    assert "└── c" in caplog.text


def test_unwritable_save_path_raises(sample_tree, tmp_path) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("not a directory", encoding="utf-8")

    with pytest.raises(OSError):
        generate_tree_lines(sample_tree, save_path=str(blocker / "out.txt"))
