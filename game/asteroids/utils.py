"""
Utility functions for game mechanics

Angles follow the screen-space polar convention used throughout the game:
``theta = 0`` points up (towards negative y) and grows clockwise.
"""

from __future__ import annotations
import math
from typing import Optional, Tuple

import numpy as np


def clamp(x: float, lo: float, hi: float) -> float:
    """Clamp value between low and high bounds"""
    return lo if x < lo else hi if x > hi else x


def to_cartesian(theta: float, r: float) -> Tuple[float, float]:
    """Convert a heading and a distance to an (x, y) displacement"""
    return math.sin(theta) * r, -math.cos(theta) * r


def to_polar(x: float, y: float) -> Tuple[float, float]:
    """Convert an (x, y) displacement to (heading, distance)"""
    return math.atan2(x, -y), math.hypot(x, y)


def wrapped_add(a: float, b: float, bound: float) -> float:
    """Add ``b`` to ``a`` on a ring of size ``bound``; result is in [0, bound)"""
    result = (a + b) % bound
    # -1e-20 % 1.0 rounds up to exactly 1.0
    return 0.0 if result >= bound else result


def rotate(x: float, y: float, theta: float) -> Tuple[float, float]:
    """Rotate a point about the origin by ``theta`` radians"""
    c = math.cos(theta)
    s = math.sin(theta)
    return c * x - s * y, s * x + c * y


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create the random generator that gets threaded through the game"""
    return np.random.default_rng(seed)
