"""
Configuration for the asteroids environment and policy evaluation
"""

# Play-field settings (see game.asteroids.config.GameConfig)
GAME_CONFIG = {
    "width": 200.0,
    "height": 200.0,
    "asteroid_gap_distance": 25.0,
    "render_scale": 3.0,
    "font_size": 14.0,
    "text_offset": 40.0,
}

# Environment parameters
ENV_CONFIG = {
    "dt": 1/30,
    "max_steps": 1800,  # 60 seconds at 30 FPS
    "k_asteroids": 5,
    "start_level": 1,
    "reward_destroy": 1.0,
    "reward_hit": 0.2,
    "penalty_death": 5.0,
    "penalty_time": 0.001,
}

# ==============================================================================
# EVALUATION SETTINGS
# ==============================================================================

EVAL_CONFIG = {
    "seeds": [42, 123, 456],
    "n_eval_episodes": 10,
    "policies": ["random", "spin", "aim"],
    "log_dir": "./logs",
}
