from __future__ import annotations

"""
Tidy Tree Layout.

Positions the visible part of a URL tree using the Reingold-Tilford
algorithm with Walker's linear-time refinements (Buchheim, Jünger and
Leipert). Siblings sit one slot apart, neighbouring subtrees of different
parents two slots apart, every parent is centred over its children, and the
root is anchored at the origin.
"""

from dataclasses import dataclass
from typing import AbstractSet, Callable, Dict, List, Optional

from sitemaptree.domain.tree_models import TreeNode

Separation = Callable[["_WalkerNode", "_WalkerNode"], float]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class PlacedNode:
    """Result of the layout for one visible node."""

    node: TreeNode
    parent_id: Optional[int]
    x: float
    y: float


def compute_layout(
        root: TreeNode,
        expanded: AbstractSet[int],
        node_spacing: float,
        depth_spacing: float,
) -> Dict[int, PlacedNode]:
    """
    Lay out every node whose ancestors are all expanded.

    Args:
        root: Root of the immutable URL tree.
        expanded: Identifiers of expanded nodes. Children of nodes outside
            this set are not visited.
        node_spacing: Distance between adjacent breadth slots.
        depth_spacing: Distance between consecutive depth levels.

    Returns:
        Dict[int, PlacedNode]: Visible nodes by identifier, in pre-order.
    """
    walker_root = _build_walker_tree(root, expanded)

    for node in _post_order(walker_root):
        _first_walk(node)
    walker_root.parent.mod = -walker_root.prelim
    placed: Dict[int, PlacedNode] = {}
    for node in _pre_order(walker_root):
        _second_walk(node)
        parent = node.parent.source if node.parent and node.parent.source else None
        placed[node.source.node_id] = PlacedNode(
            node=node.source,
            parent_id=parent.node_id if parent else None,
            x=node.x * node_spacing,
            y=node.source.depth * depth_spacing,
        )
    return placed


def visible_nodes(root: TreeNode, expanded: AbstractSet[int]) -> List[TreeNode]:
    """Return the visible set in pre-order without computing positions."""
    result: List[TreeNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        result.append(node)
        if node.node_id in expanded:
            stack.extend(reversed(node.children))
    return result


# -----------------------------------------------------------------------------
# WALKER BOOKKEEPING
# -----------------------------------------------------------------------------


class _WalkerNode:
    """Per-node scratch data of the layout algorithm."""

    __slots__ = (
        "source", "parent", "children", "index",
        "default_ancestor", "ancestor", "prelim", "mod",
        "change", "shift", "thread", "x",
    )

    def __init__(self, source: Optional[TreeNode], index: int):
        self.source = source
        self.parent: Optional[_WalkerNode] = None
        self.children: List[_WalkerNode] = []
        self.index = index
        self.default_ancestor: Optional[_WalkerNode] = None
        self.ancestor: _WalkerNode = self
        self.prelim = 0.0
        self.mod = 0.0
        self.change = 0.0
        self.shift = 0.0
        self.thread: Optional[_WalkerNode] = None
        self.x = 0.0


def _separation(a: _WalkerNode, b: _WalkerNode) -> float:
    return 1.0 if a.parent is b.parent else 2.0


def _build_walker_tree(root: TreeNode, expanded: AbstractSet[int]) -> _WalkerNode:
    walker_root = _WalkerNode(root, 0)
    stack = [walker_root]
    while stack:
        node = stack.pop()
        if node.source.node_id not in expanded:
            continue
        for i, child in enumerate(node.source.children):
            walker_child = _WalkerNode(child, i)
            walker_child.parent = node
            node.children.append(walker_child)
            stack.append(walker_child)

    # Sentinel parent so the root can be treated like any other node
    sentinel = _WalkerNode(None, 0)
    sentinel.children = [walker_root]
    walker_root.parent = sentinel
    return walker_root


def _pre_order(root: _WalkerNode) -> List[_WalkerNode]:
    order: List[_WalkerNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(reversed(node.children))
    return order


def _post_order(root: _WalkerNode) -> List[_WalkerNode]:
    return list(reversed(_reverse_post_order(root)))


def _reverse_post_order(root: _WalkerNode) -> List[_WalkerNode]:
    # Root, then children right to left: reversed, this is a post-order walk
    order: List[_WalkerNode] = []
    stack = [root]
    while stack:
        node = stack.pop()
        order.append(node)
        stack.extend(node.children)
    return order


def _next_left(v: _WalkerNode) -> Optional[_WalkerNode]:
    return v.children[0] if v.children else v.thread


def _next_right(v: _WalkerNode) -> Optional[_WalkerNode]:
    return v.children[-1] if v.children else v.thread


def _move_subtree(wm: _WalkerNode, wp: _WalkerNode, shift: float) -> None:
    change = shift / (wp.index - wm.index)
    wp.change -= change
    wp.shift += shift
    wm.change += change
    wp.prelim += shift
    wp.mod += shift


def _execute_shifts(v: _WalkerNode) -> None:
    shift = 0.0
    change = 0.0
    for w in reversed(v.children):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _next_ancestor(vim: _WalkerNode, v: _WalkerNode, ancestor: _WalkerNode) -> _WalkerNode:
    return vim.ancestor if vim.ancestor.parent is v.parent else ancestor


def _first_walk(v: _WalkerNode) -> None:
    siblings = v.parent.children
    w = siblings[v.index - 1] if v.index else None

    if v.children:
        _execute_shifts(v)
        midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
        if w is not None:
            v.prelim = w.prelim + _separation(v, w)
            v.mod = v.prelim - midpoint
        else:
            v.prelim = midpoint
    elif w is not None:
        v.prelim = w.prelim + _separation(v, w)

    v.parent.default_ancestor = _apportion(v, w, v.parent.default_ancestor or siblings[0])


def _second_walk(v: _WalkerNode) -> None:
    v.x = v.prelim + v.parent.mod
    v.mod += v.parent.mod


def _apportion(v: _WalkerNode, w: Optional[_WalkerNode], ancestor: _WalkerNode) -> _WalkerNode:
    """Push the subtree of `v` right until it clears its left siblings."""
    if w is None:
        return ancestor

    vip = vop = v
    vim: Optional[_WalkerNode] = w
    vom = vip.parent.children[0]
    sip = vip.mod
    sop = vop.mod
    sim = vim.mod
    som = vom.mod

    vim = _next_right(vim)
    vip = _next_left(vip)
    while vim is not None and vip is not None:
        vom = _next_left(vom)
        vop = _next_right(vop)
        vop.ancestor = v
        shift = vim.prelim + sim - vip.prelim - sip + _separation(vim, vip)
        if shift > 0:
            _move_subtree(_next_ancestor(vim, v, ancestor), v, shift)
            sip += shift
            sop += shift
        sim += vim.mod
        sip += vip.mod
        som += vom.mod
        sop += vop.mod
        vim = _next_right(vim)
        vip = _next_left(vip)

    if vim is not None and _next_right(vop) is None:
        vop.thread = vim
        vop.mod += sim - sop
    if vip is not None and _next_left(vom) is None:
        vom.thread = vip
        vom.mod += sip - som
        ancestor = v
    return ancestor
