from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional

from .directions import Direction

if TYPE_CHECKING:
    from .board import Board, Coord

QUARTER_TURN = math.pi / 2
DEFAULT_ROLL_FRAMES = 12  # pi/24 per frame


@dataclass(frozen=True)
class Faces:
    """Values on each face of the die. Opposite faces always sum to 7."""
    top: int = 1
    bottom: int = 6
    left: int = 3
    right: int = 4
    front: int = 2
    back: int = 5

    def is_consistent(self) -> bool:
        values = (self.top, self.bottom, self.left, self.right, self.front, self.back)
        return (
            sorted(values) == [1, 2, 3, 4, 5, 6]
            and self.top + self.bottom == 7
            and self.left + self.right == 7
            and self.front + self.back == 7
        )

    def rolled(self, direction: Direction) -> 'Faces':
        return ROLLS[Direction.parse(direction)](self)

    def as_dict(self) -> Dict[str, int]:
        return {
            'top': self.top,
            'bottom': self.bottom,
            'left': self.left,
            'right': self.right,
            'front': self.front,
            'back': self.back,
        }


def _roll_up(f: Faces) -> Faces:
    return Faces(top=f.back, bottom=f.front, left=f.left, right=f.right, front=f.top, back=f.bottom)


def _roll_down(f: Faces) -> Faces:
    return Faces(top=f.front, bottom=f.back, left=f.left, right=f.right, front=f.bottom, back=f.top)


def _roll_left(f: Faces) -> Faces:
    return Faces(top=f.right, bottom=f.left, left=f.top, right=f.bottom, front=f.front, back=f.back)


def _roll_right(f: Faces) -> Faces:
    return Faces(top=f.left, bottom=f.right, left=f.bottom, right=f.top, front=f.front, back=f.back)


ROLLS: Dict[Direction, Callable[[Faces], Faces]] = {
    Direction.UP: _roll_up,
    Direction.DOWN: _roll_down,
    Direction.LEFT: _roll_left,
    Direction.RIGHT: _roll_right,
}


class DieState(str, Enum):
    IDLE = 'idle'
    ROLLING = 'rolling'


class Die:
    """The rolling piece.

    roll() validates a move and starts the quarter-turn; tick() advances it one
    frame and commits position and faces once the turn reaches pi/2. The roll
    direction and destination travel with the Rolling state, so completion
    never has to re-derive them from the animation.
    """

    def __init__(self, position: 'Coord' = (0, 0), roll_frames: int = DEFAULT_ROLL_FRAMES) -> None:
        if roll_frames < 1:
            raise ValueError('roll_frames must be positive')
        self.position: 'Coord' = (int(position[0]), int(position[1]))
        self.faces = Faces()
        self.state = DieState.IDLE
        self.roll_frames = roll_frames
        self.direction: Optional[Direction] = None
        self.destination: Optional['Coord'] = None
        self._frames = 0

    @property
    def rolling(self) -> bool:
        return self.state is DieState.ROLLING

    @property
    def rotation_angle(self) -> float:
        """Accumulated pivot rotation of the roll in progress, 0 when idle."""
        if not self.rolling:
            return 0.0
        return QUARTER_TURN * self._frames / self.roll_frames

    def roll(self, direction: Direction, board: 'Board') -> bool:
        if self.rolling:
            return False
        direction = Direction.parse(direction)
        dx, dy = direction.delta
        x, y = self.position[0] + dx, self.position[1] + dy
        if not board.in_bounds(x, y) or board.is_obstacle(x, y):
            return False
        self.state = DieState.ROLLING
        self.direction = direction
        self.destination = (x, y)
        self._frames = 0
        return True

    def tick(self) -> bool:
        """Advances the roll by one frame. Returns True on the frame the roll completes."""
        if not self.rolling:
            return False
        self._frames += 1
        if self._frames < self.roll_frames:
            return False
        direction, destination = self.direction, self.destination
        if direction is None or destination is None:
            raise RuntimeError('rolling die has no pending roll')
        self.position = destination
        self.faces = self.faces.rolled(direction)
        self.state = DieState.IDLE
        self.direction = None
        self.destination = None
        self._frames = 0
        return True

    def settle(self) -> bool:
        """Runs the roll in progress to completion. Returns False if the die was idle."""
        if not self.rolling:
            return False
        while not self.tick():
            pass
        return True

    def get_bottom_value(self) -> int:
        return self.faces.bottom

    def get_top_value(self) -> int:
        return self.faces.top

    def reset(self, start: 'Coord') -> None:
        self.position = (int(start[0]), int(start[1]))
        self.faces = Faces()
        self.state = DieState.IDLE
        self.direction = None
        self.destination = None
        self._frames = 0
