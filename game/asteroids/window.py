"""
Arcade front end: draws primitive lists and turns keys into actions
"""

from __future__ import annotations
import logging
from typing import Callable, List, Optional

import arcade
import numpy as np

from .config import GameConfig
from .entities import Action
from .primitives import (
    LinesPrimitive,
    Primitive,
    PolygonPrimitive,
    SquarePrimitive,
    TextPrimitive,
)
from .scene import MainScene, Press, Release, Scene, Update, render, transition
from .utils import make_rng

logger = logging.getLogger(__name__)

KEY_ACTIONS = {
    arcade.key.UP: Action.THRUST,
    arcade.key.DOWN: Action.REVERSE,
    arcade.key.LEFT: Action.TURN_LEFT,
    arcade.key.RIGHT: Action.TURN_RIGHT,
    arcade.key.SPACE: Action.FIRE,
    arcade.key.R: Action.RESTART,
    arcade.key.Q: Action.QUIT,
}


class AsteroidsWindow(arcade.Window):
    """Arcade window that draws whatever ``primitives()`` returns"""

    def __init__(
        self,
        config: GameConfig,
        primitives: Callable[[], List[Primitive]],
        title: str = "Asteroids - Arcade",
    ):
        # pyglet reserves ``config`` for the GL config
        self.game_config = config
        self.primitives = primitives
        self.BG = arcade.color.BLACK
        self.FG = arcade.color.WHITE
        super().__init__(
            int(config.width * config.render_scale),
            int(config.height * config.render_scale),
            title,
        )

    def to_screen(self, x: float, y: float):
        """Field coordinates (y down) to window coordinates (y up)"""
        s = self.game_config.render_scale
        return x * s, (self.game_config.height - y) * s

    def on_draw(self):
        self.clear(color=self.BG)
        s = self.game_config.render_scale
        for prim in self.primitives():
            if isinstance(prim, PolygonPrimitive):
                arcade.draw_polygon_outline(
                    [self.to_screen(x, y) for x, y in prim.points], self.FG, 1
                )
            elif isinstance(prim, LinesPrimitive):
                for x1, y1, x2, y2 in prim.segments:
                    arcade.draw_line(*self.to_screen(x1, y1), *self.to_screen(x2, y2), self.FG, 1)
            elif isinstance(prim, SquarePrimitive):
                left, top = self.to_screen(prim.x, prim.y)
                size = prim.size * s
                arcade.draw_lrbt_rectangle_filled(left, left + size, top - size, top, self.FG)
            elif isinstance(prim, TextPrimitive):
                x, y = self.to_screen(prim.x, prim.y)
                arcade.draw_text(
                    prim.text, x, y, self.FG, prim.size * s / 2,
                    anchor_x="center", anchor_y="center",
                )


class PlayWindow(AsteroidsWindow):
    """Human-playable window driving the scene loop from keyboard input"""

    def __init__(self, config: GameConfig, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else make_rng()
        self.scene: Optional[Scene] = MainScene.new(1, config, self.rng)
        super().__init__(config, self._current_primitives, title="vs-game")

    def _current_primitives(self) -> List[Primitive]:
        if self.scene is None:
            return []
        return render(self.scene, self.game_config)

    def _send(self, event):
        if self.scene is None:
            return
        self.scene = transition(self.scene, event, self.game_config, self.rng)
        if self.scene is None:
            logger.info("Quit requested")
            self.close()

    def on_key_press(self, symbol: int, modifiers: int):
        action = KEY_ACTIONS.get(symbol)
        if action is not None:
            self._send(Press(action))

    def on_key_release(self, symbol: int, modifiers: int):
        action = KEY_ACTIONS.get(symbol)
        if action is not None:
            self._send(Release(action))

    def on_update(self, delta_time: float):
        self._send(Update(delta_time))


def play(config: Optional[GameConfig] = None, seed: Optional[int] = None):
    """Open a window and play until it is closed or Q is pressed"""
    PlayWindow(config or GameConfig(), make_rng(seed))
    arcade.run()
