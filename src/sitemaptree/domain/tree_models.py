from __future__ import annotations

"""
URL Tree Structure Data Models.

Provides the immutable node type produced by the URL tree builder. Each node
carries an explicit kind tag and a stable identifier assigned once, when the
tree is built, so that layouts can match nodes across passes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Tuple

# -----------------------------------------------------------------------------
# STRUCTURAL COMPONENTS
# -----------------------------------------------------------------------------


class NodeKind(str, Enum):
    """Variant tag of a TreeNode."""

    ROOT = "root"
    INTERNAL = "internal"
    LEAF = "leaf"


@dataclass(frozen=True)
class TreeNode:
    """
    A single entry of the URL hierarchy.

    Attributes:
        node_id: Stable identity, assigned in first-seen order (root is 0).
        name: Hostname for the root, a single path segment otherwise.
        url: Origin plus every segment accumulated down to this node.
        kind: ROOT, INTERNAL (has children) or LEAF.
        depth: Distance from the root.
        children: Child nodes in first-seen order.
    """

    node_id: int
    name: str
    url: str
    kind: NodeKind
    depth: int = 0
    children: Tuple["TreeNode", ...] = field(default_factory=tuple)

    @property
    def is_root(self) -> bool:
        return self.kind is NodeKind.ROOT

    @property
    def has_children(self) -> bool:
        return bool(self.children)

    def iter_preorder(self) -> Iterator["TreeNode"]:
        """Yield this node and all of its descendants, parents first."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def find(self, node_id: int) -> Optional["TreeNode"]:
        for node in self.iter_preorder():
            if node.node_id == node_id:
                return node
        return None

    def path_to(self, node_id: int) -> Optional[List["TreeNode"]]:
        """Return the chain of nodes from this node down to `node_id`."""
        stack: List[Tuple["TreeNode", List["TreeNode"]]] = [(self, [self])]
        while stack:
            node, chain = stack.pop()
            if node.node_id == node_id:
                return chain
            for child in node.children:
                stack.append((child, chain + [child]))
        return None

    def count_nodes(self) -> int:
        return sum(1 for _ in self.iter_preorder())

    def max_depth(self) -> int:
        return max(node.depth for node in self.iter_preorder())

    def to_dict(self) -> dict:
        """Nested plain-dict export (used by the JSON output)."""
        return {
            "id": self.node_id,
            "name": self.name,
            "url": self.url,
            "kind": self.kind.value,
            "children": [child.to_dict() for child in self.children],
        }
