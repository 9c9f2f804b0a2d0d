from __future__ import annotations

"""
URL Tree Builder.

Converts a flat, ordered list of absolute URLs into a rooted hierarchy keyed
by hostname and path segments. Nodes are de-duplicated on the fully
accumulated path (origin + segments), never on the bare segment name, so
identical segment names under different parents stay distinct.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple
from urllib.parse import SplitResult, urlsplit

from sitemaptree.domain.errors import EmptyUrlListError, InvalidUrlError
from sitemaptree.domain.tree_models import NodeKind, TreeNode

logger = logging.getLogger(__name__)

_DEFAULT_PORTS: Dict[str, int] = {"http": 80, "https": 443, "ftp": 21, "ws": 80, "wss": 443}

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------


def build_url_tree(urls: Sequence[str]) -> TreeNode:
    """
    Build the URL hierarchy for a list of absolute URLs.

    The first URL decides the root: its hostname becomes the root label and
    its origin the root URL. Every URL is then walked segment by segment,
    creating a child for each accumulated path not seen before.

    Args:
        urls: Absolute URLs in sitemap order. Duplicates are merged.

    Returns:
        TreeNode: The immutable root of the hierarchy.

    Raises:
        EmptyUrlListError: If `urls` is empty.
        InvalidUrlError: If an element is not an absolute URL.
    """
    if not urls:
        raise EmptyUrlListError("Cannot build a tree from an empty URL list.")

    first = _parse_absolute(urls[0])
    root_origin = origin_of(first)
    root = _DraftNode(node_id=0, name=first.hostname or "", url=root_origin, depth=0)

    # Accumulated path -> node, the de-duplication key
    nodes_by_path: Dict[str, _DraftNode] = {}
    next_id = 1
    foreign_origins = set()

    for raw_url in urls:
        parts = _parse_absolute(raw_url)
        current_path = origin_of(parts)
        if current_path != root_origin and current_path not in foreign_origins:
            foreign_origins.add(current_path)
            logger.warning(f"URL outside root origin {root_origin}: {current_path}")

        current = root
        for segment in split_segments(parts.path):
            current_path += "/" + segment
            child = nodes_by_path.get(current_path)
            if child is None:
                child = _DraftNode(
                    node_id=next_id,
                    name=segment,
                    url=current_path,
                    depth=current.depth + 1,
                )
                next_id += 1
                nodes_by_path[current_path] = child
                current.children.append(child)
            current = child

    logger.debug(f"URL tree built: {len(urls)} URLs -> {next_id} nodes")
    return _freeze(root, is_root=True)


def split_segments(path: str) -> List[str]:
    """Split a URL path into its non-empty segments."""
    return [segment for segment in path.split("/") if segment]


def origin_of(parts: SplitResult) -> str:
    """
    Return `scheme://host[:port]` for a parsed URL.

    Userinfo is dropped and the port is kept only when it differs from the
    scheme's default.
    """
    scheme = parts.scheme.lower()
    host = parts.hostname or ""
    if ":" in host:
        host = f"[{host}]"
    port = parts.port
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        host = f"{host}:{port}"
    return f"{scheme}://{host}"


def reconstruct_url(tree: TreeNode, node_id: int) -> Optional[str]:
    """
    Rebuild a node's URL from the root origin and its ancestor chain.

    Returns None if the node does not exist.
    """
    chain = tree.path_to(node_id)
    if chain is None:
        return None
    return "/".join([tree.url] + [node.name for node in chain[1:]])


# -----------------------------------------------------------------------------
# INTERNAL HELPERS
# -----------------------------------------------------------------------------


@dataclass
class _DraftNode:
    """Mutable node used while the tree is being assembled."""

    node_id: int
    name: str
    url: str
    depth: int
    children: List["_DraftNode"] = field(default_factory=list)


def _parse_absolute(raw_url: str) -> SplitResult:
    if not isinstance(raw_url, str):
        raise InvalidUrlError(repr(raw_url))
    try:
        parts = urlsplit(raw_url.strip())
        # Accessing the port validates it
        parts.port
    except ValueError as e:
        raise InvalidUrlError(raw_url) from e
    if not parts.scheme or not parts.hostname:
        raise InvalidUrlError(raw_url)
    return parts


def _freeze(draft: _DraftNode, is_root: bool = False) -> TreeNode:
    """Recursively convert draft nodes into immutable TreeNodes."""
    children: Tuple[TreeNode, ...] = tuple(_freeze(child) for child in draft.children)
    if is_root:
        kind = NodeKind.ROOT
    elif children:
        kind = NodeKind.INTERNAL
    else:
        kind = NodeKind.LEAF
    return TreeNode(
        node_id=draft.node_id,
        name=draft.name,
        url=draft.url,
        kind=kind,
        depth=draft.depth,
        children=children,
    )
