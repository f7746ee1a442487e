"""
Draw requests handed to the renderer

The game never draws anything itself; entities and scenes describe what
should appear as a list of these primitives, in field coordinates
(origin top-left, y pointing down).
"""

from dataclasses import dataclass
from typing import List, Tuple, Union

from .intersect import Segment


@dataclass
class PolygonPrimitive:
    """Closed polygon outline"""
    points: List[Tuple[float, float]]


@dataclass
class SquarePrimitive:
    """Filled square with its top-left corner at (x, y)"""
    x: float
    y: float
    size: float


@dataclass
class LinesPrimitive:
    """Independent line segments"""
    segments: List[Segment]


@dataclass
class TextPrimitive:
    """Text centred on (x, y)"""
    text: str
    x: float
    y: float
    size: float


Primitive = Union[PolygonPrimitive, SquarePrimitive, LinesPrimitive, TextPrimitive]
