"""
Game configuration
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class GameConfig:
    """Play-field settings shared by the scene, the env and the window"""
    width: float = 200.0
    height: float = 200.0
    # asteroids never spawn closer than this to the field centre (per axis)
    asteroid_gap_distance: float = 25.0
    # cosmetic, only read by the renderer
    render_scale: float = 3.0
    font_size: float = 14.0
    text_offset: float = 40.0

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"field dimensions must be positive, got {self.width}x{self.height}"
            )
        if self.asteroid_gap_distance < 0:
            raise ValueError("asteroid_gap_distance must be non-negative")
        if self.asteroid_gap_distance * 2 >= min(self.width, self.height):
            raise ValueError(
                f"asteroid_gap_distance {self.asteroid_gap_distance} leaves no room "
                f"to spawn asteroids in a {self.width}x{self.height} field"
            )
        if self.render_scale <= 0:
            raise ValueError("render_scale must be positive")

    @classmethod
    def from_dict(cls, values: Optional[Dict[str, Any]] = None) -> "GameConfig":
        """Build a config from a (possibly partial) settings dict"""
        values = dict(values or {})
        unknown = set(values) - set(cls.__dataclass_fields__)
        if unknown:
            raise ValueError(f"Unknown game config keys: {sorted(unknown)}")
        return cls(**values)
