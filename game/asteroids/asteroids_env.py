"""
AsteroidsEnv - the asteroids game behind the Gymnasium API
----------------------------------------------------------
- One scene loop (``scene.advance``) per step
- Arcade for human rendering (window is created lazily)
- Discrete MultiDiscrete action space: [thrust(3), turn(3), fire(2)]
- Vector observation: ship state + top-K nearest asteroids
- The ship only ever sees press/release edges, derived from the change
  between consecutive actions

Install:
    pip install gymnasium arcade numpy

Quick test:
    python -m game.asteroids --random-agent
"""

from __future__ import annotations

import logging
import math
from typing import Any, Dict, List, Optional, Set

import numpy as np
import gymnasium as gym
from gymnasium import spaces

from .config import GameConfig
from .entities import Action, SHIP_MAX_SPEED, ASTEROID_LARGE
from .scene import GameOverScene, MainScene, Press, Release, Scene, advance, render, transition
from .utils import clamp

logger = logging.getLogger(__name__)

# thrust: 0 none, 1 forward, 2 reverse
THRUST_ACTIONS = (None, Action.THRUST, Action.REVERSE)
# turn: 0 none, 1 left, 2 right
TURN_ACTIONS = (None, Action.TURN_LEFT, Action.TURN_RIGHT)


class AsteroidsEnv(gym.Env):
    """Asteroids environment rendered with Arcade"""

    metadata = {"render_modes": ["human", "rgb_array"], "render_fps": 60}

    def __init__(
        self,
        render_mode: Optional[str] = None,
        config: Optional[GameConfig] = None,
        dt: float = 1 / 30,
        max_steps: int = 1800,  # 60s at 30 FPS
        k_asteroids: int = 5,
        start_level: int = 1,
        reward_destroy: float = 1.0,
        reward_hit: float = 0.2,
        penalty_death: float = 5.0,
        penalty_time: float = 0.001,
    ):
        super().__init__()

        assert render_mode is None or render_mode in self.metadata["render_modes"], \
            f"Unsupported render_mode {render_mode!r}"
        assert start_level >= 1, "start_level must be at least 1"
        self.render_mode = render_mode

        self.config = config or GameConfig()
        self.dt = dt
        self.max_steps = max_steps
        self.k_asteroids = k_asteroids
        self.start_level = start_level

        self.reward_destroy = reward_destroy
        self.reward_hit = reward_hit
        self.penalty_death = penalty_death
        self.penalty_time = penalty_time

        self.action_space = spaces.MultiDiscrete([3, 3, 2])

        # Ship: pos(2) vel(2) facing(2) cooldown(1)
        # Each asteroid: toroidal rel pos(2) size(1)
        obs_dim = 7 + self.k_asteroids * 3
        self.observation_space = spaces.Box(
            low=-1.0, high=1.0, shape=(obs_dim,), dtype=np.float32
        )

        self._window = None

        self.scene: Scene = None  # type: ignore
        self._held: Set[Action] = set()
        self._held_by = None
        self._step_count = 0
        self._score = 0

    # ----------------------------
    # Gym API
    # ----------------------------

    def reset(self, seed: Optional[int] = None, options: Optional[dict] = None):
        super().reset(seed=seed)

        self._step_count = 0
        self._score = 0
        self._held = set()
        self.scene = MainScene.new(self.start_level, self.config, self.np_random)

        return self._get_obs(), self._get_info()

    def step(self, action):
        thrust, turn, fire = int(action[0]), int(action[1]), int(action[2])
        self._apply_controls({THRUST_ACTIONS[thrust], TURN_ACTIONS[turn],
                              Action.FIRE if fire else None} - {None})

        self.scene, outcome = advance(self.scene, self.dt, self.config, self.np_random)

        reward = -self.penalty_time
        reward += self.reward_hit * outcome.hits
        reward += self.reward_destroy * outcome.destroyed
        self._score += outcome.destroyed

        terminated = isinstance(self.scene, GameOverScene)
        if terminated:
            reward -= self.penalty_death
            logger.debug("Episode terminated after %d steps", self._step_count + 1)

        self._step_count += 1
        truncated = self._step_count >= self.max_steps

        if self.render_mode == "human":
            self.render()

        return self._get_obs(), float(reward), terminated, truncated, self._get_info()

    def _apply_controls(self, wanted: Set[Action]):
        """Turn the wanted set of held actions into press/release events"""
        # a level change or respawn brings a fresh ship that holds nothing
        if isinstance(self.scene, MainScene) and self.scene.ship is not self._held_by:
            self._held = set()
            self._held_by = self.scene.ship
        for act in sorted(self._held - wanted, key=lambda a: a.value):
            self.scene = transition(self.scene, Release(act), self.config, self.np_random)
        for act in sorted(wanted - self._held, key=lambda a: a.value):
            self.scene = transition(self.scene, Press(act), self.config, self.np_random)
        self._held = wanted

    # ----------------------------
    # Observation / info
    # ----------------------------

    def _get_obs(self) -> np.ndarray:
        if not isinstance(self.scene, MainScene):
            return np.zeros(self.observation_space.shape, dtype=np.float32)

        w, h = self.config.width, self.config.height
        ship = self.scene.ship
        sx, sy = ship.obj.x, ship.obj.y
        vx = math.sin(ship.obj.theta) * ship.obj.v / SHIP_MAX_SPEED
        vy = -math.cos(ship.obj.theta) * ship.obj.v / SHIP_MAX_SPEED

        obs_parts = [
            sx / w * 2 - 1,
            sy / h * 2 - 1,
            clamp(vx, -1, 1),
            clamp(vy, -1, 1),
            math.sin(ship.sprite_theta),
            -math.cos(ship.sprite_theta),
            clamp(ship.cooldown * 4 - 1, -1, 1),
        ]

        def rel(a):
            # shortest offset on the torus
            dx = (a.obj.x - sx + w / 2) % w - w / 2
            dy = (a.obj.y - sy + h / 2) % h - h / 2
            return dx, dy

        offsets = sorted(
            (rel(a) + (a.size,) for a in self.scene.asteroids),
            key=lambda o: o[0] ** 2 + o[1] ** 2,
        )
        for i in range(self.k_asteroids):
            if i < len(offsets):
                dx, dy, size = offsets[i]
                obs_parts += [
                    clamp(dx / (w / 2), -1, 1),
                    clamp(dy / (h / 2), -1, 1),
                    size / ASTEROID_LARGE,
                ]
            else:
                obs_parts += [0.0, 0.0, 0.0]

        return np.array(obs_parts, dtype=np.float32)

    def _get_info(self) -> Dict[str, Any]:
        main = isinstance(self.scene, MainScene)
        return {
            "level": self.scene.level,
            "score": self._score,
            "num_asteroids": len(self.scene.asteroids) if main else 0,
            "num_bullets": len(self.scene.bullets) if main else 0,
            "game_over": not main,
            "step": self._step_count,
        }

    def primitives(self) -> List:
        return render(self.scene, self.config)

    # ----------------------------
    # Rendering with Arcade
    # ----------------------------

    def render(self):
        if self.render_mode is None:
            return None

        if self.render_mode == "rgb_array":
            # TODO: read back an offscreen framebuffer once arcade exposes one headless
            w = int(self.config.width * self.config.render_scale)
            h = int(self.config.height * self.config.render_scale)
            return np.zeros((h, w, 3), dtype=np.uint8)

        if self._window is None:
            from .window import AsteroidsWindow
            self._window = AsteroidsWindow(self.config, lambda: self.primitives())
        self._window.on_draw()
        return None

    def close(self):
        if self._window is not None:
            self._window.close()
            self._window = None


# ----------------------------
# Quick sanity test
# ----------------------------

def run_random_episode(
    render: bool = True, seed: Optional[int] = 42, config: Optional[GameConfig] = None
) -> float:
    """Run a random episode for testing"""
    env = AsteroidsEnv(render_mode="human" if render else None, config=config)
    obs, info = env.reset(seed=seed)

    terminated = False
    truncated = False
    total = 0.0

    print("Running episode... Close the window to exit early.")

    import time
    while not (terminated or truncated):
        action = env.action_space.sample()
        obs, reward, terminated, truncated, info = env.step(action)
        total += reward

        if render and env._window:
            env._window.dispatch_events()
            env._window.flip()
            time.sleep(env.dt)

    print(f"Random episode return: {total:.3f} (level {info['level']}, score {info['score']})")
    env.close()
    return total
