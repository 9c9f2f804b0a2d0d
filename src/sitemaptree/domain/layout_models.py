from __future__ import annotations

"""
Diagram Layout Domain Models.

Defines the ephemeral structures recomputed on every layout pass
(LayoutNode, LayoutLink), the transition plan handed to the drawing surface,
and the RenderState value that the caller owns and replaces wholesale after
each interaction.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple

from sitemaptree.domain import constants as const
from sitemaptree.domain.tree_models import TreeNode

# -----------------------------------------------------------------------------
# GEOMETRY PRIMITIVES
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class Point:
    """
    A layout coordinate.

    `x` runs along the breadth axis (vertical on screen) and `y` along the
    depth axis (horizontal on screen).
    """

    x: float
    y: float


@dataclass(frozen=True)
class LinkPath:
    """Both endpoints of a parent-child connector."""

    source: Point
    target: Point


class IndicatorState(str, Enum):
    EXPANDED = "expanded"
    COLLAPSED = "collapsed"
    NONE = "none"

    @property
    def glyph(self) -> str:
        return const.INDICATOR_GLYPHS[self.value]


# -----------------------------------------------------------------------------
# SETTINGS
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class LayoutSettings:
    """
    Immutable geometry and timing parameters of the diagram.

    Attributes:
        node_spacing: Distance between neighbouring breadth slots.
        depth_spacing: Distance between consecutive depth levels.
        margin_top: Space reserved above the topmost node.
        margin_bottom: Space reserved below the bottommost node.
        margin_left: Space reserved left of the root.
        initial_depth: Nodes shallower than this start expanded (None: all).
        normal_duration_ms: Transition length without modifier.
        slow_duration_ms: Transition length with the slow modifier.
    """

    node_spacing: float = const.DEFAULT_NODE_SPACING
    depth_spacing: float = const.DEFAULT_DEPTH_SPACING
    margin_top: float = const.DEFAULT_MARGIN_TOP
    margin_bottom: float = const.DEFAULT_MARGIN_BOTTOM
    margin_left: float = const.DEFAULT_MARGIN_LEFT
    initial_depth: Optional[int] = const.DEFAULT_INITIAL_DEPTH
    normal_duration_ms: int = const.NORMAL_DURATION_MS
    slow_duration_ms: int = const.SLOW_DURATION_MS

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "LayoutSettings":
        """Build settings from a validated configuration dictionary."""
        defaults = cls()
        return cls(
            node_spacing=float(config.get("node_spacing", defaults.node_spacing)),
            depth_spacing=float(config.get("depth_spacing", defaults.depth_spacing)),
            margin_top=float(config.get("margin_top", defaults.margin_top)),
            margin_bottom=float(config.get("margin_bottom", defaults.margin_bottom)),
            margin_left=float(config.get("margin_left", defaults.margin_left)),
            initial_depth=config.get("initial_depth", defaults.initial_depth),
            normal_duration_ms=int(config.get("normal_duration_ms", defaults.normal_duration_ms)),
            slow_duration_ms=int(config.get("slow_duration_ms", defaults.slow_duration_ms)),
        )

    def duration_for(self, slow: bool) -> int:
        return self.slow_duration_ms if slow else self.normal_duration_ms


# -----------------------------------------------------------------------------
# LAYOUT PASS RESULTS
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class LayoutNode:
    """
    A visible TreeNode positioned by one layout pass.

    Attributes:
        node: The underlying immutable tree node.
        parent_id: Identifier of the parent (None for the root).
        x: Breadth coordinate of this pass.
        y: Depth coordinate of this pass.
        x0: Breadth coordinate of the previous pass (animation source).
        y0: Depth coordinate of the previous pass (animation source).
        expanded: Current expand flag of the node.
        indicator: Disclosure indicator state.
        indicator_offset: Depth-axis offset where outgoing links start.
    """

    node: TreeNode
    parent_id: Optional[int]
    x: float
    y: float
    x0: float
    y0: float
    expanded: bool
    indicator: IndicatorState
    indicator_offset: float = 0.0

    @property
    def node_id(self) -> int:
        return self.node.node_id

    @property
    def position(self) -> Point:
        return Point(self.x, self.y)

    @property
    def previous_position(self) -> Point:
        return Point(self.x0, self.y0)

    @property
    def has_hidden_children(self) -> bool:
        return self.node.has_children and not self.expanded


@dataclass(frozen=True)
class LayoutLink:
    """Connector from a visible parent to a visible child, keyed by child id."""

    source_id: int
    target_id: int
    path: LinkPath


@dataclass(frozen=True)
class Viewport:
    """Vertical extent of the visible diagram including margins."""

    top: float
    height: float
    margin_left: float


# -----------------------------------------------------------------------------
# TRANSITION PLAN
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class NodeTransition:
    node_id: int
    start: Point
    end: Point
    start_opacity: float
    end_opacity: float


@dataclass(frozen=True)
class LinkTransition:
    target_id: int
    start: LinkPath
    end: LinkPath


@dataclass(frozen=True)
class TransitionPlan:
    """
    Enter/update/exit partition between two consecutive layouts.

    Attributes:
        source_id: The node whose interaction triggered the pass.
        duration_ms: Animation length chosen for this pass.
        entering: Nodes appearing in this pass.
        updating: Nodes present before and after.
        exiting: Nodes to fade out and discard.
        entering_links: Links appearing in this pass.
        updating_links: Links present before and after.
        exiting_links: Links to collapse and discard.
    """

    source_id: int
    duration_ms: int
    entering: Tuple[NodeTransition, ...] = ()
    updating: Tuple[NodeTransition, ...] = ()
    exiting: Tuple[NodeTransition, ...] = ()
    entering_links: Tuple[LinkTransition, ...] = ()
    updating_links: Tuple[LinkTransition, ...] = ()
    exiting_links: Tuple[LinkTransition, ...] = ()

    @property
    def is_empty(self) -> bool:
        return not (self.entering or self.exiting or self.entering_links or self.exiting_links)


# -----------------------------------------------------------------------------
# RENDER STATE
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class RenderState:
    """
    Complete renderer state for one loaded sitemap.

    Replaced wholesale on every interaction; nothing mutates in place.

    Attributes:
        tree: The immutable URL tree.
        expanded: Identifiers of the nodes currently expanded.
        nodes: Visible nodes by identifier, in pre-order.
        links: Visible links by target identifier.
        plan: Transition from the previous pass to this one.
        viewport: Vertical extent of this pass.
        settings: Geometry and timing parameters.
        label_widths: Measured label widths by node identifier.
        measure_label: Label width collaborator reused by later passes.
    """

    tree: TreeNode
    expanded: FrozenSet[int]
    nodes: Dict[int, LayoutNode]
    links: Dict[int, LayoutLink]
    plan: TransitionPlan
    viewport: Viewport
    settings: LayoutSettings
    label_widths: Dict[int, float] = field(default_factory=dict)
    measure_label: Optional[Callable[[str], float]] = field(default=None, compare=False, repr=False)

    @property
    def visible_ids(self) -> FrozenSet[int]:
        return frozenset(self.nodes)

    def is_expanded(self, node_id: int) -> bool:
        return node_id in self.expanded
