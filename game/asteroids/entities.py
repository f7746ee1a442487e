"""
Game entities: the moving object model, the ship, bullets and asteroids
"""

from __future__ import annotations
import enum
import logging
import math
from dataclasses import dataclass, field, replace
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from .config import GameConfig
from .intersect import Segment, lines_intersect, point_in
from .point import Point
from .primitives import LinesPrimitive, PolygonPrimitive, SquarePrimitive
from .utils import clamp, rotate, to_cartesian, to_polar, wrapped_add

logger = logging.getLogger(__name__)

# Ship tuning
SHIP_HULL: Tuple[Tuple[float, float], ...] = ((5.0, 7.0), (-5.0, 7.0), (0.0, -13.0))
SHIP_MAX_SPEED = 200.0
THRUST_POWER = 1.0
TURN_POWER = 0.05
FIRE_COOLDOWN = 0.5  # seconds

# Bullet tuning
BULLET_SPEED = 100.0
BULLET_RANGE = 100.0
BULLET_SIZE = 2.0

# Asteroid tuning
ASTEROID_LARGE = 3
ASTEROID_SPEED_RANGE = (40.0, 60.0)
ASTEROID_CORNERS = (8, 12)  # [low, high)
SPLIT_JITTER = 5.0


class Action(enum.Enum):
    """Logical player inputs"""
    THRUST = "thrust"
    REVERSE = "reverse"
    TURN_LEFT = "turn_left"
    TURN_RIGHT = "turn_right"
    FIRE = "fire"
    RESTART = "restart"
    QUIT = "quit"


@dataclass
class GameObject:
    """Position, speed and heading shared by everything that moves"""
    x: float
    y: float
    v: float = 0.0
    theta: float = 0.0

    def with_go(self, dt: float, x_max: float, y_max: float) -> GameObject:
        """Return this object advanced by ``dt`` on a toroidal field"""
        dx, dy = to_cartesian(self.theta, self.v * dt)
        return replace(
            self,
            x=wrapped_add(self.x, dx, x_max),
            y=wrapped_add(self.y, dy, y_max),
        )


@dataclass
class Ship:
    """
    Player ship.

    ``theta`` on the underlying object is the direction of travel while
    ``sprite_theta`` is where the nose points; thrust is applied along the
    nose, so the two drift apart.
    """
    obj: GameObject
    sprite_theta: float = 0.0
    accel: float = 0.0
    reverse: float = 0.0
    left: float = 0.0
    right: float = 0.0
    firing: bool = False
    cooldown: float = 0.0

    @classmethod
    def new(cls, config: GameConfig) -> Ship:
        return cls(obj=GameObject(config.width / 2.0, config.height / 2.0))

    def handle_press(self, action: Action):
        if action is Action.THRUST:
            self.accel = THRUST_POWER
        elif action is Action.REVERSE:
            self.reverse = THRUST_POWER
        elif action is Action.TURN_LEFT:
            self.left = TURN_POWER
        elif action is Action.TURN_RIGHT:
            self.right = TURN_POWER
        elif action is Action.FIRE:
            self.firing = True

    def handle_release(self, action: Action):
        if action is Action.THRUST:
            self.accel = 0.0
        elif action is Action.REVERSE:
            self.reverse = 0.0
        elif action is Action.TURN_LEFT:
            self.left = 0.0
        elif action is Action.TURN_RIGHT:
            self.right = 0.0
        elif action is Action.FIRE:
            self.firing = False

    def go(self, dt: float, x_max: float, y_max: float):
        self.obj = self.obj.with_go(dt, x_max, y_max)

    def accelerate(self, dt: float):
        """Add thrust along the nose to the current velocity vector"""
        net_accel = (self.accel - self.reverse) * dt * 100.0
        dx, dy = to_cartesian(self.obj.theta, self.obj.v)
        ddx, ddy = to_cartesian(self.sprite_theta, net_accel)
        theta, v = to_polar(dx + ddx, dy + ddy)
        self.obj.v = clamp(v, -SHIP_MAX_SPEED, SHIP_MAX_SPEED)
        self.obj.theta = theta

    def turn(self, dt: float):
        self.sprite_theta += (self.right - self.left) * dt * 100.0

    def cool_down(self, dt: float):
        self.cooldown = max(0.0, self.cooldown - dt)

    def ready_to_fire(self) -> bool:
        return self.cooldown == 0.0

    def is_firing(self) -> bool:
        return self.firing

    def fire(self, bullets: List[Bullet]) -> Optional[Bullet]:
        """Append a bullet leaving the nose; does nothing while cooling down"""
        if not self.ready_to_fire():
            return None
        self.cooldown = FIRE_COOLDOWN
        bullet = Bullet.new(self.obj.x, self.obj.y, self.sprite_theta)
        bullets.append(bullet)
        logger.debug("Fired bullet at (%.1f, %.1f)", self.obj.x, self.obj.y)
        return bullet

    def hull(self) -> List[Tuple[float, float]]:
        """Hull corners rotated by the sprite heading and moved to the ship"""
        points = []
        for px, py in SHIP_HULL:
            rx, ry = rotate(px, py, self.sprite_theta)
            points.append((rx + self.obj.x, ry + self.obj.y))
        return points

    def edges(self) -> List[Segment]:
        points = self.hull()
        return [
            (x1, y1, x2, y2)
            for (x1, y1), (x2, y2) in zip(points, points[1:] + points[:1])
        ]

    def collides(self, edges: Iterable[Segment]) -> bool:
        """Check whether any hull edge crosses any of ``edges``"""
        others = list(edges)
        return any(
            lines_intersect(edge, other)
            for edge in self.edges()
            for other in others
        )

    def draw(self) -> PolygonPrimitive:
        return PolygonPrimitive(points=self.hull())


@dataclass
class Bullet:
    """Projectile that expires after travelling ``BULLET_RANGE``"""
    obj: GameObject
    distance: float = 0.0

    @classmethod
    def new(cls, x: float, y: float, theta: float) -> Bullet:
        return cls(obj=GameObject(x, y, BULLET_SPEED, theta))

    def go(self, dt: float, x_max: float, y_max: float):
        self.obj = self.obj.with_go(dt, x_max, y_max)
        self.distance += self.obj.v * dt

    def is_alive(self) -> bool:
        return self.distance < BULLET_RANGE

    def coords(self) -> Point:
        return Point(self.obj.x, self.obj.y)

    def collides(self, asteroid: Asteroid) -> bool:
        return point_in(self.coords(), asteroid.iter_edges())

    def draw(self) -> SquarePrimitive:
        return SquarePrimitive(x=self.obj.x, y=self.obj.y, size=BULLET_SIZE)


def _random_start(max_value: float, gap: float, rng: np.random.Generator) -> float:
    """Pick a coordinate at least ``gap`` away from the middle of the axis"""
    if rng.integers(0, 2) == 0:
        return float(rng.uniform(0.0, max_value / 2.0 - gap))
    return float(rng.uniform(max_value / 2.0 + gap, max_value))


@dataclass
class Asteroid:
    """
    Drifting rock with an irregular outline.

    ``border`` is relative to the centre and fixed at construction; only
    the centre moves.
    """
    obj: GameObject
    size: int
    border: Tuple[Segment, ...] = field(default_factory=tuple)

    @classmethod
    def large_new(cls, config: GameConfig, rng: np.random.Generator) -> Asteroid:
        return cls.new(ASTEROID_LARGE, config, rng)

    @classmethod
    def new(cls, size: int, config: GameConfig, rng: np.random.Generator) -> Asteroid:
        """Spawn a fresh asteroid away from the field centre"""
        gap = config.asteroid_gap_distance
        x = _random_start(config.width, gap, rng)
        y = _random_start(config.height, gap, rng)
        v = float(rng.uniform(*ASTEROID_SPEED_RANGE))
        theta = float(rng.uniform(0.0, 2.0 * math.pi))
        return cls(
            obj=GameObject(x, y, v, theta),
            size=size,
            border=cls.create_border(rng, size * 5.0),
        )

    @staticmethod
    def create_border(rng: np.random.Generator, radius: float) -> Tuple[Segment, ...]:
        """Closed loop of segments around the origin at roughly ``radius``"""
        spread = radius / 5.0
        point_count = int(rng.integers(*ASTEROID_CORNERS))
        theta_0 = float(rng.uniform(0.0, 2.0 * math.pi))
        points = []
        for i in range(1, point_count + 1):
            theta = theta_0 + 2.0 * math.pi * i / point_count
            distance = radius + float(rng.uniform(-spread, spread))
            points.append(to_cartesian(theta, distance))
        points.append(points[0])
        return tuple(
            (x1, y1, x2, y2) for (x1, y1), (x2, y2) in zip(points, points[1:])
        )

    def _exploded(self, rng: np.random.Generator) -> Asteroid:
        new_size = self.size - 1
        d_theta = float(rng.normal(0.0, math.pi / 2.0))
        x = self.obj.x + float(rng.uniform(-SPLIT_JITTER, SPLIT_JITTER))
        y = self.obj.y + float(rng.uniform(-SPLIT_JITTER, SPLIT_JITTER))
        v = float(rng.uniform(*ASTEROID_SPEED_RANGE))
        return Asteroid(
            obj=GameObject(x, y, v, self.obj.theta + d_theta),
            size=new_size,
            border=self.create_border(rng, new_size * 5.0),
        )

    def explode(self, rng: np.random.Generator) -> List[Asteroid]:
        """Debris left after a hit: two smaller rocks, or nothing at size 1"""
        if self.size <= 1:
            return []
        return [self._exploded(rng), self._exploded(rng)]

    def go(self, dt: float, x_max: float, y_max: float):
        self.obj = self.obj.with_go(dt, x_max, y_max)

    def iter_edges(self) -> Iterator[Segment]:
        x, y = self.obj.x, self.obj.y
        for x1, y1, x2, y2 in self.border:
            yield (x1 + x, y1 + y, x2 + x, y2 + y)

    def edges(self) -> List[Segment]:
        return list(self.iter_edges())

    def draw(self) -> LinesPrimitive:
        return LinesPrimitive(segments=self.edges())
