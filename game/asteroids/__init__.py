"""Asteroids game module - geometry core, scenes and a Gymnasium environment"""

from .asteroids_env import AsteroidsEnv, run_random_episode
from .config import GameConfig
from .entities import Action, Asteroid, Bullet, GameObject, Ship
from .scene import GameOverScene, MainScene, transition

__all__ = [
    'AsteroidsEnv',
    'run_random_episode',
    'GameConfig',
    'Action',
    'Asteroid',
    'Bullet',
    'GameObject',
    'Ship',
    'GameOverScene',
    'MainScene',
    'transition',
]
