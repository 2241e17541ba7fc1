from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from .die import DEFAULT_ROLL_FRAMES


def _env_int(name: str, default: Optional[int]) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f'{name} must be an integer, got {raw!r}') from None


@dataclass(frozen=True)
class GameConfig:
    """Board and pacing settings for one game controller."""
    width: int = 10
    height: int = 10
    cell_size: float = 1.0
    roll_frames: int = DEFAULT_ROLL_FRAMES
    obstacle_interval_min: int = 15
    obstacle_interval_max: int = 20
    seed: Optional[int] = None

    @classmethod
    def from_env(cls) -> 'GameConfig':
        """Reads ROLLCUBE_WIDTH, ROLLCUBE_HEIGHT, ROLLCUBE_ROLL_FRAMES and ROLLCUBE_SEED."""
        return cls(
            width=_env_int('ROLLCUBE_WIDTH', 10),
            height=_env_int('ROLLCUBE_HEIGHT', 10),
            roll_frames=_env_int('ROLLCUBE_ROLL_FRAMES', DEFAULT_ROLL_FRAMES),
            seed=_env_int('ROLLCUBE_SEED', None),
        )
