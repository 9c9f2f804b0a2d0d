from __future__ import annotations

"""
Transition Interpolation and Link Geometry.

Pure helpers used by the drawing surface to animate a TransitionPlan:
easing, per-frame interpolation of node positions, opacities and link
endpoints, and the horizontal cubic Bézier used to draw parent-child links.
"""

import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from sitemaptree.domain import constants as const
from sitemaptree.domain.layout_models import (
    LinkPath,
    LinkTransition,
    NodeTransition,
    Point,
    TransitionPlan,
    Viewport,
)

ScreenPoint = Tuple[float, float]

# -----------------------------------------------------------------------------
# EASING AND TIMING
# -----------------------------------------------------------------------------


def ease_cubic_in_out(t: float) -> float:
    """Symmetric cubic easing over [0, 1]."""
    t = min(max(t, 0.0), 1.0) * 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


def frame_count(duration_ms: int, interval_ms: int = const.FRAME_INTERVAL_MS) -> int:
    """Number of animation frames for a duration (at least one)."""
    if duration_ms <= 0:
        return 1
    return max(1, math.ceil(duration_ms / interval_ms))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def lerp_point(a: Point, b: Point, t: float) -> Point:
    return Point(lerp(a.x, b.x, t), lerp(a.y, b.y, t))


def lerp_link(a: LinkPath, b: LinkPath, t: float) -> LinkPath:
    return LinkPath(lerp_point(a.source, b.source, t), lerp_point(a.target, b.target, t))


def viewport_at(start: Viewport, end: Viewport, t: float) -> Viewport:
    """Interpolate the visible extent with the same easing as the nodes."""
    k = ease_cubic_in_out(t)
    return Viewport(
        top=lerp(start.top, end.top, k),
        height=lerp(start.height, end.height, k),
        margin_left=lerp(start.margin_left, end.margin_left, k),
    )


# -----------------------------------------------------------------------------
# FRAME SNAPSHOTS
# -----------------------------------------------------------------------------


@dataclass(frozen=True)
class NodeFrame:
    position: Point
    opacity: float


@dataclass(frozen=True)
class Frame:
    """Interpolated state of every animated node and link at one instant."""

    nodes: Dict[int, NodeFrame]
    links: Dict[int, LinkPath]


def node_at(transition: NodeTransition, t: float) -> NodeFrame:
    k = ease_cubic_in_out(t)
    return NodeFrame(
        position=lerp_point(transition.start, transition.end, k),
        opacity=lerp(transition.start_opacity, transition.end_opacity, k),
    )


def link_at(transition: LinkTransition, t: float) -> LinkPath:
    return lerp_link(transition.start, transition.end, ease_cubic_in_out(t))


def frame_at(plan: TransitionPlan, t: float) -> Frame:
    """
    Interpolate a whole plan at normalised time `t` in [0, 1].

    Exiting nodes and links are included until the end of the transition;
    the caller discards them once `t` reaches 1.
    """
    nodes = {
        tr.node_id: node_at(tr, t)
        for tr in plan.entering + plan.updating + plan.exiting
    }
    links = {
        tr.target_id: link_at(tr, t)
        for tr in plan.entering_links + plan.updating_links + plan.exiting_links
    }
    return Frame(nodes=nodes, links=links)


# -----------------------------------------------------------------------------
# LINK GEOMETRY
# -----------------------------------------------------------------------------


def to_screen(point: Point, top: float, margin_left: float) -> ScreenPoint:
    """Map a layout point to canvas coordinates (depth runs left to right)."""
    return point.y + margin_left, point.x - top


def horizontal_link_controls(source: ScreenPoint, target: ScreenPoint) -> List[ScreenPoint]:
    """Control points of a horizontal cubic Bézier between two screen points."""
    mid_x = (source[0] + target[0]) / 2
    return [source, (mid_x, source[1]), (mid_x, target[1]), target]


def sample_cubic_bezier(controls: List[ScreenPoint], steps: int = 16) -> List[ScreenPoint]:
    """Flatten a cubic Bézier into `steps + 1` points."""
    (x0, y0), (x1, y1), (x2, y2), (x3, y3) = controls
    points: List[ScreenPoint] = []
    for i in range(steps + 1):
        t = i / steps
        u = 1 - t
        a = u * u * u
        b = 3 * u * u * t
        c = 3 * u * t * t
        d = t * t * t
        points.append((a * x0 + b * x1 + c * x2 + d * x3, a * y0 + b * y1 + c * y2 + d * y3))
    return points


def link_polyline(path: LinkPath, top: float, margin_left: float, steps: int = 16) -> List[float]:
    """Flat coordinate list suitable for `Canvas.create_line`/`coords`."""
    source = to_screen(path.source, top, margin_left)
    target = to_screen(path.target, top, margin_left)
    flat: List[float] = []
    for x, y in sample_cubic_bezier(horizontal_link_controls(source, target), steps):
        flat.extend((x, y))
    return flat
