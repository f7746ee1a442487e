"""
Segment intersection and point-in-polygon tests

Segments are 4-tuples ``(x1, y1, x2, y2)``. Both segments are written in
parametric form, ``p + t*r`` and ``q + u*s``, and solved for ``t`` and ``u``
with 2D cross products.
"""

from __future__ import annotations
from typing import Iterable, Tuple

from .point import Point

Segment = Tuple[float, float, float, float]

# Far-left end of the horizontal test ray. Must lie outside any field.
RAY_ORIGIN_X = -100000.0


def _on_segment(point: Point, seg: Segment) -> bool:
    """Check whether ``point`` lies on ``seg`` (endpoints included)"""
    q = Point(seg[0], seg[1])
    s = Point(seg[2] - seg[0], seg[3] - seg[1])
    ss = s.dot(s)
    if ss == 0.0:
        return point == q
    if (point - q).cross(s) != 0.0:
        return False
    t = (point - q).dot(s) / ss
    return 0.0 <= t <= 1.0


def lines_intersect(l1: Segment, l2: Segment) -> bool:
    """
    Check whether two closed line segments share at least one point.

    Touching endpoints count as an intersection. Collinear segments
    intersect when their parametric intervals overlap.
    """
    p = Point(l1[0], l1[1])
    q = Point(l2[0], l2[1])
    r = Point(l1[2] - l1[0], l1[3] - l1[1])
    s = Point(l2[2] - l2[0], l2[3] - l2[1])

    rxs = r.cross(s)

    if rxs == 0.0 and (p - q).cross(r) == 0.0:
        rr = r.dot(r)
        if rr == 0.0:
            # l1 is a single point
            return _on_segment(p, l2)
        # Positions of q and q + s along l1; the interval may be reversed
        t0 = (q - p).dot(r / rr)
        t1 = t0 + s.dot(r / rr)
        return not ((t0 < 0.0 and t1 < 0.0) or (t0 > 1.0 and t1 > 1.0))

    if rxs == 0.0:
        # parallel, never meet
        return False

    t = (q - p).cross(s / rxs)
    u = (p - q).cross(r / s.cross(r))
    return 0.0 <= t <= 1.0 and 0.0 <= u <= 1.0


def ray(point: Point) -> Segment:
    """Horizontal segment from far left of the field to ``point``"""
    return (RAY_ORIGIN_X, point.y, point.x, point.y)


def point_in(point: Point, edges: Iterable[Segment]) -> bool:
    """
    Even-odd point-in-polygon test.

    A horizontal ray is cast from ``RAY_ORIGIN_X`` to ``point`` and every
    edge it crosses flips the result. An edge only takes part when it
    straddles the ray half-open (exactly one end has ``y > point.y``),
    so a ray through a vertex shared by two edges is counted once.
    Points on the boundary count as inside.

    ``edges`` is consumed at most once, so a generator works.
    """
    r = ray(point)
    inside = False
    for edge in edges:
        if _on_segment(point, edge):
            return True
        if (edge[1] > point.y) != (edge[3] > point.y):
            inside ^= lines_intersect(r, edge)
    return inside
