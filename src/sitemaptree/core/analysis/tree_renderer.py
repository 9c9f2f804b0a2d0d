from __future__ import annotations

"""
Incremental Tree Renderer.

Maintains the expand/collapse state of a URL tree, recomputes the layout of
the visible set after every interaction, and derives the enter/update/exit
transition plan that the drawing surface animates. Every operation returns a
fresh RenderState; the previous one is never modified.
"""

import logging
from typing import AbstractSet, Callable, Dict, FrozenSet, List, Optional, Tuple

from sitemaptree.core.analysis.tree_layout import PlacedNode, compute_layout
from sitemaptree.domain import constants as const
from sitemaptree.domain.errors import UnknownNodeError
from sitemaptree.domain.layout_models import (
    IndicatorState,
    LayoutLink,
    LayoutNode,
    LayoutSettings,
    LinkPath,
    LinkTransition,
    NodeTransition,
    Point,
    RenderState,
    TransitionPlan,
    Viewport,
)
from sitemaptree.domain.tree_models import TreeNode

logger = logging.getLogger(__name__)

LabelMeasurer = Callable[[str], float]

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------


def initialize(
        tree: TreeNode,
        settings: Optional[LayoutSettings] = None,
        measure_label: Optional[LabelMeasurer] = None,
) -> RenderState:
    """
    Perform the first layout pass of a freshly built tree.

    The root is always expanded; other nodes follow the initial-expansion
    policy of `settings.initial_depth`. Every visible node enters from the
    root's position.

    Args:
        tree: Root of the URL tree.
        settings: Geometry and timing parameters (defaults if omitted).
        measure_label: Returns the rendered width of a label. Defaults to an
            average character width estimate.

    Returns:
        RenderState: The initial state with an all-entering plan.
    """
    settings = settings or LayoutSettings()
    expanded = initial_expanded(tree, settings.initial_depth)
    logger.info(
        f"Initial layout: {tree.count_nodes()} nodes, {len(expanded)} expanded "
        f"(initial depth: {settings.initial_depth})"
    )
    return _relayout(
        tree=tree,
        expanded=expanded,
        previous=None,
        source_id=tree.node_id,
        duration_ms=settings.normal_duration_ms,
        settings=settings,
        label_widths={},
        measure_label=measure_label or estimate_label_width,
    )


def toggle(state: RenderState, node_id: int, *, slow: bool = False) -> RenderState:
    """
    Flip the expand flag of a single node and lay the tree out again.

    Descendant flags are left untouched, so re-expanding a branch restores
    its previous sub-expansion. Toggling a leaf yields the same layout with
    an empty plan.

    Args:
        state: Current render state.
        node_id: Identifier of the clicked node.
        slow: Use the slow transition duration.

    Returns:
        RenderState: The next state.

    Raises:
        UnknownNodeError: If the identifier is not part of the tree.
    """
    node = state.tree.find(node_id)
    if node is None:
        raise UnknownNodeError(node_id)

    if not node.has_children:
        logger.debug(f"Toggle ignored on leaf node {node_id} ({node.url})")
        expanded = state.expanded
    elif node_id in state.expanded:
        logger.debug(f"Collapsing node {node_id} ({node.url})")
        expanded = state.expanded - {node_id}
    else:
        logger.debug(f"Expanding node {node_id} ({node.url})")
        expanded = state.expanded | {node_id}

    return _advance(state, expanded, node_id, slow)


def expand_all(state: RenderState, *, slow: bool = False) -> RenderState:
    """Expand every node that has children."""
    expanded = frozenset(n.node_id for n in state.tree.iter_preorder() if n.has_children)
    return _advance(state, expanded | {state.tree.node_id}, state.tree.node_id, slow)


def collapse_all(state: RenderState, *, slow: bool = False) -> RenderState:
    """Collapse everything below the root."""
    return _advance(state, frozenset({state.tree.node_id}), state.tree.node_id, slow)


def initial_expanded(tree: TreeNode, initial_depth: Optional[int]) -> FrozenSet[int]:
    """
    Return the identifiers expanded before any interaction.

    Args:
        tree: Root of the URL tree.
        initial_depth: Nodes with `depth < initial_depth` start expanded;
            None expands every node with children.
    """
    expanded = {tree.node_id}
    for node in tree.iter_preorder():
        if not node.has_children:
            continue
        if initial_depth is None or node.depth < initial_depth:
            expanded.add(node.node_id)
    return frozenset(expanded)


def estimate_label_width(text: str) -> float:
    return len(text) * const.AVERAGE_CHAR_WIDTH


def indicator_position(label_width: float) -> float:
    """Depth-axis offset of the disclosure glyph for a label of this width."""
    return const.LABEL_OFFSET + label_width + const.INDICATOR_GAP


# -----------------------------------------------------------------------------
# LAYOUT PASS
# -----------------------------------------------------------------------------


def _advance(state: RenderState, expanded: FrozenSet[int], source_id: int, slow: bool) -> RenderState:
    return _relayout(
        tree=state.tree,
        expanded=expanded,
        previous=state,
        source_id=source_id,
        duration_ms=state.settings.duration_for(slow),
        settings=state.settings,
        label_widths=state.label_widths,
        measure_label=state.measure_label or estimate_label_width,
    )


def _relayout(
        tree: TreeNode,
        expanded: FrozenSet[int],
        previous: Optional[RenderState],
        source_id: int,
        duration_ms: int,
        settings: LayoutSettings,
        label_widths: Dict[int, float],
        measure_label: LabelMeasurer,
) -> RenderState:
    placed = compute_layout(tree, expanded, settings.node_spacing, settings.depth_spacing)
    widths = _measure_visible(placed, label_widths, measure_label)

    old_nodes: Dict[int, LayoutNode] = previous.nodes if previous else {}
    old_links: Dict[int, LayoutLink] = previous.links if previous else {}

    anchor_id = _visible_anchor(tree, source_id, placed.keys())
    new_anchor = placed[anchor_id]
    old_anchor = old_nodes.get(source_id) or old_nodes.get(anchor_id)
    source_before = old_anchor.position if old_anchor else Point(new_anchor.x, new_anchor.y)
    source_after = Point(new_anchor.x, new_anchor.y)

    nodes = _build_layout_nodes(placed, old_nodes, expanded, widths, source_before)
    links = _build_links(nodes)
    plan = _build_plan(
        nodes, links, old_nodes, old_links,
        source_id=source_id,
        duration_ms=duration_ms,
        source_before=source_before,
        source_after=source_after,
    )

    logger.debug(
        f"Layout pass: {len(nodes)} visible, +{len(plan.entering)} "
        f"~{len(plan.updating)} -{len(plan.exiting)} ({duration_ms} ms)"
    )

    return RenderState(
        tree=tree,
        expanded=expanded,
        nodes=nodes,
        links=links,
        plan=plan,
        viewport=_compute_viewport(nodes, settings),
        settings=settings,
        label_widths=widths,
        measure_label=measure_label,
    )


def _measure_visible(
        placed: Dict[int, PlacedNode],
        cache: Dict[int, float],
        measure_label: LabelMeasurer,
) -> Dict[int, float]:
    """Measure labels of visible nodes with children, reusing earlier results."""
    widths = dict(cache)
    for node_id, item in placed.items():
        if item.node.has_children and node_id not in widths:
            widths[node_id] = float(measure_label(item.node.name))
    return widths


def _visible_anchor(tree: TreeNode, node_id: int, visible: AbstractSet[int]) -> int:
    """Return `node_id` if visible, else its deepest visible ancestor."""
    if node_id in visible:
        return node_id
    chain = tree.path_to(node_id) or [tree]
    for node in reversed(chain):
        if node.node_id in visible:
            return node.node_id
    return tree.node_id


def _build_layout_nodes(
        placed: Dict[int, PlacedNode],
        old_nodes: Dict[int, LayoutNode],
        expanded: FrozenSet[int],
        widths: Dict[int, float],
        source_before: Point,
) -> Dict[int, LayoutNode]:
    nodes: Dict[int, LayoutNode] = {}
    for node_id, item in placed.items():
        old = old_nodes.get(node_id)
        origin = old.position if old else source_before
        is_expanded = node_id in expanded

        if not item.node.has_children:
            indicator = IndicatorState.NONE
            offset = 0.0
        else:
            indicator = IndicatorState.EXPANDED if is_expanded else IndicatorState.COLLAPSED
            offset = const.LABEL_OFFSET + widths.get(node_id, 0.0) + const.LINK_GAP

        nodes[node_id] = LayoutNode(
            node=item.node,
            parent_id=item.parent_id,
            x=item.x,
            y=item.y,
            x0=origin.x,
            y0=origin.y,
            expanded=is_expanded,
            indicator=indicator,
            indicator_offset=offset,
        )
    return nodes


def _build_links(nodes: Dict[int, LayoutNode]) -> Dict[int, LayoutLink]:
    links: Dict[int, LayoutLink] = {}
    for node_id, node in nodes.items():
        if node.parent_id is None:
            continue
        parent = nodes[node.parent_id]
        links[node_id] = LayoutLink(
            source_id=parent.node_id,
            target_id=node_id,
            path=link_path(parent, node),
        )
    return links


def link_path(parent: LayoutNode, child: LayoutNode) -> LinkPath:
    """Connector from the parent's indicator to the child's marker."""
    return LinkPath(
        source=Point(parent.x, parent.y + parent.indicator_offset),
        target=Point(child.x, child.y - const.MARKER_OFFSET),
    )


def _build_plan(
        nodes: Dict[int, LayoutNode],
        links: Dict[int, LayoutLink],
        old_nodes: Dict[int, LayoutNode],
        old_links: Dict[int, LayoutLink],
        source_id: int,
        duration_ms: int,
        source_before: Point,
        source_after: Point,
) -> TransitionPlan:
    entering: List[NodeTransition] = []
    updating: List[NodeTransition] = []
    exiting: List[NodeTransition] = []

    for node_id, node in nodes.items():
        old = old_nodes.get(node_id)
        if old is None:
            entering.append(NodeTransition(node_id, source_before, node.position, 0.0, 1.0))
        else:
            updating.append(NodeTransition(node_id, old.position, node.position, 1.0, 1.0))

    for node_id, old in old_nodes.items():
        if node_id not in nodes:
            exiting.append(NodeTransition(node_id, old.position, source_after, 1.0, 0.0))

    collapsed_before = LinkPath(source_before, source_before)
    collapsed_after = LinkPath(source_after, source_after)
    entering_links: List[LinkTransition] = []
    updating_links: List[LinkTransition] = []
    exiting_links: List[LinkTransition] = []

    for target_id, link in links.items():
        old_link = old_links.get(target_id)
        if old_link is None:
            entering_links.append(LinkTransition(target_id, collapsed_before, link.path))
        else:
            updating_links.append(LinkTransition(target_id, old_link.path, link.path))

    for target_id, old_link in old_links.items():
        if target_id not in links:
            exiting_links.append(LinkTransition(target_id, old_link.path, collapsed_after))

    return TransitionPlan(
        source_id=source_id,
        duration_ms=duration_ms,
        entering=tuple(entering),
        updating=tuple(updating),
        exiting=tuple(exiting),
        entering_links=tuple(entering_links),
        updating_links=tuple(updating_links),
        exiting_links=tuple(exiting_links),
    )


def _compute_viewport(nodes: Dict[int, LayoutNode], settings: LayoutSettings) -> Viewport:
    breadths: Tuple[float, ...] = tuple(node.x for node in nodes.values())
    low = min(breadths)
    high = max(breadths)
    return Viewport(
        top=low - settings.margin_top,
        height=high - low + settings.margin_top + settings.margin_bottom,
        margin_left=settings.margin_left,
    )
