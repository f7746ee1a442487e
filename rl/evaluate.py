"""
Evaluation script for scripted policies on the asteroids environment
"""

import argparse
import csv
import math
import os
import time
from typing import Callable, Dict, List, Optional

import numpy as np

from game.asteroids import AsteroidsEnv, GameConfig
from rl.configs.asteroids_config import ENV_CONFIG, EVAL_CONFIG, GAME_CONFIG

Policy = Callable[[AsteroidsEnv, np.ndarray], np.ndarray]


def random_policy(env: AsteroidsEnv, obs: np.ndarray) -> np.ndarray:
    return env.action_space.sample()


def spin_policy(env: AsteroidsEnv, obs: np.ndarray) -> np.ndarray:
    """Stay put, keep turning right and keep shooting"""
    return np.array([0, 2, 1], dtype=np.int64)


def aim_policy(env: AsteroidsEnv, obs: np.ndarray) -> np.ndarray:
    """Turn towards the nearest asteroid and shoot when roughly facing it"""
    # obs[4:6] is the facing vector, obs[7:9] the nearest asteroid offset
    fx, fy = obs[4], obs[5]
    dx, dy = obs[7], obs[8]
    if dx == 0.0 and dy == 0.0:
        return np.array([0, 0, 0], dtype=np.int64)
    cross = fx * dy - fy * dx
    dot = fx * dx + fy * dy
    angle = math.atan2(cross, dot)
    turn = 0 if abs(angle) < 0.1 else (2 if angle > 0 else 1)
    fire = 1 if abs(angle) < 0.3 else 0
    return np.array([0, turn, fire], dtype=np.int64)


POLICIES: Dict[str, Policy] = {
    "random": random_policy,
    "spin": spin_policy,
    "aim": aim_policy,
}


def evaluate_policy(
    policy_name: str = "aim",
    n_episodes: int = 10,
    render: bool = False,
    seed: Optional[int] = None,
    csv_path: Optional[str] = None,
):
    """
    Evaluate a scripted policy

    Args:
        policy_name: One of ``POLICIES``
        n_episodes: Number of episodes to evaluate
        render: Whether to render the environment
        seed: Base random seed; episode ``i`` uses ``seed + i``
        csv_path: Optional CSV file receiving one row per episode
    """
    if policy_name not in POLICIES:
        raise ValueError(f"Unknown policy: {policy_name}")
    policy = POLICIES[policy_name]

    render_mode = "human" if render else None
    env = AsteroidsEnv(
        render_mode=render_mode, config=GameConfig.from_dict(GAME_CONFIG), **ENV_CONFIG
    )

    episode_rewards: List[float] = []
    episode_lengths: List[int] = []
    episode_scores: List[int] = []
    episode_levels: List[int] = []

    for episode in range(n_episodes):
        obs, info = env.reset(seed=seed + episode if seed is not None else None)
        env.action_space.seed(seed + episode if seed is not None else None)

        terminated = False
        truncated = False
        total_reward = 0.0
        steps = 0

        while not (terminated or truncated):
            action = policy(env, obs)
            obs, reward, terminated, truncated, info = env.step(action)
            total_reward += reward
            steps += 1

            if render and env._window:
                env._window.dispatch_events()
                env._window.flip()
                time.sleep(env.dt)

        episode_rewards.append(total_reward)
        episode_lengths.append(steps)
        episode_scores.append(info["score"])
        episode_levels.append(info["level"])

        print(f"Episode {episode + 1}/{n_episodes}: "
              f"Reward = {total_reward:.2f}, Length = {steps}, "
              f"Score = {info['score']}, Level = {info['level']}")

    env.close()

    if csv_path:
        os.makedirs(os.path.dirname(csv_path) or ".", exist_ok=True)
        with open(csv_path, "w", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(["episode", "reward", "length", "score", "level"])
            for i, row in enumerate(zip(episode_rewards, episode_lengths,
                                        episode_scores, episode_levels)):
                writer.writerow([i, *row])
        print(f"[evaluate] Wrote {csv_path}")

    mean_reward = float(np.mean(episode_rewards))
    std_reward = float(np.std(episode_rewards))
    mean_length = float(np.mean(episode_lengths))

    print("\n" + "="*50)
    print(f"Evaluation Results for '{policy_name}' ({n_episodes} episodes):")
    print(f"Mean Reward: {mean_reward:.2f} ± {std_reward:.2f}")
    print(f"Mean Episode Length: {mean_length:.1f}")
    print(f"Mean Score: {np.mean(episode_scores):.2f}")
    print(f"Max Level: {max(episode_levels)}")
    print("="*50)

    return {
        "mean_reward": mean_reward,
        "std_reward": std_reward,
        "mean_length": mean_length,
        "episode_rewards": episode_rewards,
        "episode_lengths": episode_lengths,
        "episode_scores": episode_scores,
    }


def main():
    parser = argparse.ArgumentParser(description="Evaluate scripted asteroids policies")
    parser.add_argument(
        "--policy",
        type=str,
        default="all",
        choices=["all"] + list(POLICIES),
        help="Policy to evaluate (default: all)",
    )
    parser.add_argument(
        "--n-episodes",
        type=int,
        default=EVAL_CONFIG["n_eval_episodes"],
        help="Number of evaluation episodes",
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Show the episodes in a window",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=EVAL_CONFIG["seeds"][0],
        help="Random seed (default: 42)",
    )
    parser.add_argument(
        "--log-dir",
        type=str,
        default=EVAL_CONFIG["log_dir"],
        help="Directory for per-episode CSV files",
    )

    args = parser.parse_args()

    names = EVAL_CONFIG["policies"] if args.policy == "all" else [args.policy]
    for name in names:
        evaluate_policy(
            policy_name=name,
            n_episodes=args.n_episodes,
            render=args.render,
            seed=args.seed,
            csv_path=os.path.join(args.log_dir, f"{name}_eval.csv"),
        )


if __name__ == "__main__":
    main()
