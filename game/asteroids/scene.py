"""
Scenes and the transitions between them

A scene is a plain value: either the running game (``MainScene``) or the
game-over screen (``GameOverScene``). The caller keeps exactly one current
scene and replaces it with whatever ``transition`` returns; ``None`` means
the player asked to quit.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

import numpy as np

from .config import GameConfig
from .entities import Action, Asteroid, Bullet, Ship
from .primitives import Primitive, TextPrimitive

logger = logging.getLogger(__name__)


# ----------------------------
# Events
# ----------------------------

@dataclass(frozen=True)
class Update:
    """One simulation tick of ``dt`` seconds"""
    dt: float


@dataclass(frozen=True)
class Press:
    action: Action


@dataclass(frozen=True)
class Release:
    action: Action


Event = Union[Update, Press, Release]


# ----------------------------
# Scenes
# ----------------------------

@dataclass
class StepOutcome:
    """What happened during one tick of the main scene"""
    collided: bool = False
    fired: bool = False
    hits: int = 0  # bullets spent on asteroids
    destroyed: int = 0  # asteroids that were hit (split or gone)
    cleared: bool = False


@dataclass
class MainScene:
    level: int
    ship: Ship
    bullets: List[Bullet] = field(default_factory=list)
    asteroids: List[Asteroid] = field(default_factory=list)

    @classmethod
    def new(cls, level: int, config: GameConfig, rng: np.random.Generator) -> MainScene:
        """Fresh ship in the centre and one large asteroid per level"""
        return cls(
            level=level,
            ship=Ship.new(config),
            asteroids=[Asteroid.large_new(config, rng) for _ in range(level)],
        )

    def update(self, dt: float, config: GameConfig, rng: np.random.Generator) -> StepOutcome:
        outcome = StepOutcome()
        w, h = config.width, config.height

        self.ship.accelerate(dt)
        self.ship.turn(dt)
        self.ship.go(dt, w, h)
        self.ship.cool_down(dt)

        for asteroid in self.asteroids:
            asteroid.go(dt, w, h)

        asteroid_edges = (edge for a in self.asteroids for edge in a.iter_edges())
        if self.ship.collides(asteroid_edges):
            outcome.collided = True
            return outcome

        if self.ship.is_firing() and self.ship.ready_to_fire():
            outcome.fired = self.ship.fire(self.bullets) is not None

        for bullet in self.bullets:
            bullet.go(dt, w, h)

        self._resolve_hits(rng, outcome)
        self.bullets = [b for b in self.bullets if b.is_alive()]
        outcome.cleared = not self.asteroids
        return outcome

    def _resolve_hits(self, rng: np.random.Generator, outcome: StepOutcome):
        """
        Match bullets to asteroids, then apply every split at once.

        Each bullet is matched against the asteroids as they were before
        this phase and stops at the first one (in list order) that
        contains it. Every asteroid hit at least once explodes exactly
        once; its debris takes its place in the list.
        """
        spent = set()
        hit = set()
        for bi, bullet in enumerate(self.bullets):
            for ai, asteroid in enumerate(self.asteroids):
                if bullet.collides(asteroid):
                    spent.add(bi)
                    hit.add(ai)
                    break

        if not hit:
            return

        asteroids: List[Asteroid] = []
        for ai, asteroid in enumerate(self.asteroids):
            if ai in hit:
                debris = asteroid.explode(rng)
                logger.debug("Asteroid of size %d split into %d", asteroid.size, len(debris))
                asteroids.extend(debris)
            else:
                asteroids.append(asteroid)

        self.asteroids = asteroids
        self.bullets = [b for bi, b in enumerate(self.bullets) if bi not in spent]
        outcome.hits = len(spent)
        outcome.destroyed = len(hit)


@dataclass
class GameOverScene:
    level: int


Scene = Union[MainScene, GameOverScene]


# ----------------------------
# Transitions
# ----------------------------

def advance(
    scene: Scene, dt: float, config: GameConfig, rng: np.random.Generator
) -> Tuple[Scene, StepOutcome]:
    """Run one tick and return the next scene together with what happened"""
    if isinstance(scene, GameOverScene):
        return scene, StepOutcome()

    outcome = scene.update(dt, config, rng)
    if outcome.collided:
        logger.info("Ship destroyed on level %d", scene.level)
        return GameOverScene(level=scene.level), outcome
    if outcome.cleared:
        logger.info("Level %d cleared", scene.level)
        return MainScene.new(scene.level + 1, config, rng), outcome
    return scene, outcome


def transition(
    scene: Scene, event: Event, config: GameConfig, rng: np.random.Generator
) -> Optional[Scene]:
    """Feed one event to the current scene and return the scene to use next"""
    if isinstance(event, Press) and event.action is Action.QUIT:
        return None

    if isinstance(event, Update):
        return advance(scene, event.dt, config, rng)[0]

    if isinstance(scene, MainScene):
        if isinstance(event, Press):
            if event.action is Action.RESTART:
                scene.ship = Ship.new(config)
            else:
                scene.ship.handle_press(event.action)
        elif isinstance(event, Release):
            scene.ship.handle_release(event.action)
        return scene

    if isinstance(scene, GameOverScene):
        if isinstance(event, Press) and event.action is Action.RESTART:
            return MainScene.new(1, config, rng)
        return scene

    raise TypeError(f"Unknown scene: {scene!r}")


def render(scene: Scene, config: GameConfig) -> List[Primitive]:
    """Everything the renderer has to draw for ``scene``"""
    if isinstance(scene, GameOverScene):
        cx, cy = config.width / 2.0, config.height / 2.0
        return [
            TextPrimitive("Game Over", cx, cy - config.text_offset / 2.0, config.font_size),
            TextPrimitive(
                f"Level {scene.level} - press R to restart",
                cx,
                cy + config.text_offset / 2.0,
                config.font_size / 2.0,
            ),
        ]

    primitives: List[Primitive] = [a.draw() for a in scene.asteroids]
    primitives.append(scene.ship.draw())
    primitives.extend(b.draw() for b in scene.bullets)
    return primitives
