"""
Play the game, or watch a random agent

    python -m game.asteroids
    python -m game.asteroids --random-agent --episodes 3 --no-render
"""

import argparse
import logging

from .asteroids_env import run_random_episode
from .config import GameConfig


def main():
    parser = argparse.ArgumentParser(description="Asteroids")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--random-agent", action="store_true",
                        help="Let a random policy play instead of the keyboard")
    parser.add_argument("--episodes", type=int, default=1,
                        help="Episodes to run with --random-agent")
    parser.add_argument("--no-render", action="store_true",
                        help="Run --random-agent episodes without a window")
    parser.add_argument("--width", type=float, default=None, help="Field width")
    parser.add_argument("--height", type=float, default=None, help="Field height")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    overrides = {k: v for k, v in (("width", args.width), ("height", args.height)) if v is not None}
    config = GameConfig.from_dict(overrides)

    if args.random_agent:
        for ep in range(args.episodes):
            seed = None if args.seed is None else args.seed + ep
            run_random_episode(render=not args.no_render, seed=seed, config=config)
        return

    from .window import play
    play(config, seed=args.seed)


if __name__ == "__main__":
    main()
