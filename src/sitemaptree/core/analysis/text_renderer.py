from __future__ import annotations

"""
Text Tree Renderer.

Converts a URL tree into a visual ASCII representation for headless use.
Honours the same expand/collapse semantics as the diagram: children of a
collapsed node are omitted and the node is marked with its disclosure glyph.
"""

import logging
import os
from typing import AbstractSet, List, Optional

from sitemaptree.domain.layout_models import IndicatorState
from sitemaptree.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------


def generate_tree_lines(
        tree: TreeNode,
        expanded: Optional[AbstractSet[int]] = None,
        show_urls: bool = False,
        print_to_log: bool = False,
        save_path: str = "",
) -> List[str]:
    """
    Generate a formatted text representation of the URL tree.

    Args:
        tree: Root of the URL tree.
        expanded: Identifiers of expanded nodes. None renders everything.
        show_urls: Append each node's URL after its label.
        print_to_log: Whether to log the output to INFO.
        save_path: Optional file path to persist the tree.

    Returns:
        List[str]: Visual lines of the generated tree.

    Raises:
        OSError: If `save_path` cannot be written.
    """
    lines: List[str] = [_format_label(tree, expanded, show_urls)]
    if _is_open(tree, expanded):
        render_tree_structure(tree, lines, prefix="", expanded=expanded, show_urls=show_urls)

    if print_to_log:
        logger.info("Tree Preview:\n" + "\n".join(lines))

    if save_path:
        _save_tree_to_disk(save_path, lines)

    return lines


def render_tree_structure(
        node: TreeNode,
        lines: List[str],
        prefix: str = "",
        expanded: Optional[AbstractSet[int]] = None,
        show_urls: bool = False,
) -> None:
    """
    Recursively append the children of `node` to `lines`.

    Uses standard ASCII connectors (├──, └──) and keeps the first-seen order
    of the children.

    Args:
        node: Node whose children are rendered.
        lines: Accumulator list for output strings.
        prefix: Indentation prefix for the current recursion level.
        expanded: Identifiers of expanded nodes (None: all).
        show_urls: Append URLs to labels.
    """
    total = len(node.children)
    for i, child in enumerate(node.children):
        is_last = (i == total - 1)
        connector = "└── " if is_last else "├── "
        lines.append(f"{prefix}{connector}{_format_label(child, expanded, show_urls)}")

        if _is_open(child, expanded):
            new_prefix = prefix + ("    " if is_last else "│   ")
            render_tree_structure(child, lines, new_prefix, expanded, show_urls)


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------


def _is_open(node: TreeNode, expanded: Optional[AbstractSet[int]]) -> bool:
    return node.has_children and (expanded is None or node.node_id in expanded)


def _format_label(node: TreeNode, expanded: Optional[AbstractSet[int]], show_urls: bool) -> str:
    label = node.name
    if node.has_children and not _is_open(node, expanded):
        label = f"{label} {IndicatorState.COLLAPSED.glyph}"
    if show_urls:
        label = f"{label}  [{node.url}]"
    return label


def _save_tree_to_disk(save_path: str, lines: List[str]) -> None:
    """Persist tree lines to the filesystem; OSError reaches the caller."""
    out_dir = os.path.dirname(os.path.abspath(save_path))
    os.makedirs(out_dir, exist_ok=True)
    with open(save_path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    logger.info(f"Tree saved to file: {save_path}")
