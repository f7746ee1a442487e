"""Tests for the scripted evaluation policies."""
import numpy as np

from rl.evaluate import POLICIES, aim_policy, evaluate_policy, spin_policy


def make_obs(facing, target):
    obs = np.zeros(22, dtype=np.float32)
    obs[4:6] = facing
    obs[7:9] = target
    return obs


def test_aim_turns_right_towards_target():
    action = aim_policy(None, make_obs((0.0, -1.0), (0.5, 0.0)))
    assert list(action) == [0, 2, 0]


def test_aim_turns_left_towards_target():
    action = aim_policy(None, make_obs((0.0, -1.0), (-0.5, 0.0)))
    assert list(action) == [0, 1, 0]


def test_aim_fires_when_facing_target():
    action = aim_policy(None, make_obs((0.0, -1.0), (0.0, -0.5)))
    assert list(action) == [0, 0, 1]


def test_aim_idles_without_targets():
    assert list(aim_policy(None, make_obs((0.0, -1.0), (0.0, 0.0)))) == [0, 0, 0]


def test_spin_policy():
    assert list(spin_policy(None, None)) == [0, 2, 1]


def test_evaluate_policy_writes_csv(tmp_path):
    csv_path = tmp_path / "spin_eval.csv"
    results = evaluate_policy("spin", n_episodes=2, seed=3, csv_path=str(csv_path))
    assert len(results["episode_rewards"]) == 2
    lines = csv_path.read_text().strip().splitlines()
    assert lines[0] == "episode,reward,length,score,level"
    assert len(lines) == 3


def test_policy_registry():
    assert set(POLICIES) == {"random", "spin", "aim"}
