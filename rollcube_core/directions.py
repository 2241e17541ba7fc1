from __future__ import annotations

import math
from enum import Enum
from typing import Dict, Tuple


class Direction(str, Enum):
    """A cardinal roll direction, in board space or screen space."""
    UP = 'up'
    DOWN = 'down'
    LEFT = 'left'
    RIGHT = 'right'

    @classmethod
    def parse(cls, value: object) -> 'Direction':
        """Accepts a Direction or its lowercase name; raises ValueError otherwise."""
        if isinstance(value, Direction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f'Unknown direction: {value!r}') from None

    @property
    def delta(self) -> Tuple[int, int]:
        return _DELTAS[self]


# Board "up" grows y, matching the render side's z axis.
_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, 1),
    Direction.DOWN: (0, -1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_QUARTER_TURN_90: Dict[Direction, Direction] = {
    Direction.UP: Direction.RIGHT,
    Direction.RIGHT: Direction.DOWN,
    Direction.DOWN: Direction.LEFT,
    Direction.LEFT: Direction.UP,
}

# Indexed by camera quarter-turn: 0 deg, 90 deg, 180 deg, 270 deg.
CAMERA_TABLES: Tuple[Dict[Direction, Direction], ...] = (
    {d: d for d in Direction},
    _QUARTER_TURN_90,
    {
        Direction.UP: Direction.DOWN,
        Direction.DOWN: Direction.UP,
        Direction.LEFT: Direction.RIGHT,
        Direction.RIGHT: Direction.LEFT,
    },
    {v: k for k, v in _QUARTER_TURN_90.items()},
)


def camera_quarter_turns(angle_degrees: float) -> int:
    """Snaps an orbit angle to the nearest quarter turn, 0..3."""
    return int(math.floor((angle_degrees + 45) / 90)) % 4


def remap_by_camera(direction: Direction, angle_degrees: float) -> Direction:
    """Translates a screen-relative direction into a board direction for the given camera orbit."""
    return CAMERA_TABLES[camera_quarter_turns(angle_degrees)][Direction.parse(direction)]


def unmap_for_camera(direction: Direction, angle_degrees: float) -> Direction:
    """Inverse of remap_by_camera: the screen direction a player presses to roll the die this way."""
    table = CAMERA_TABLES[camera_quarter_turns(angle_degrees)]
    for screen, board in table.items():
        if board == direction:
            return screen
    raise ValueError(f'Unknown direction: {direction!r}')
