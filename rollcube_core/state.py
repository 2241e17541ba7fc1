from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

from .board import Coord


class SessionPhase(str, Enum):
    NOT_STARTED = 'not_started'
    ACTIVE = 'active'
    COMPLETED = 'completed'


@dataclass(frozen=True)
class TargetView:
    cell: Coord
    value: int
    highlight: str


@dataclass(frozen=True)
class DieView:
    """What a renderer needs to draw the die this frame."""
    position: Coord
    faces: Tuple[Tuple[str, int], ...]  # (face name, value) pairs
    rolling: bool
    direction: Optional[str]
    destination: Optional[Coord]
    angle: float

    def face(self, name: str) -> int:
        return dict(self.faces)[name]


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of a whole session, rebuilt every tick."""
    width: int
    height: int
    start: Coord
    targets: Tuple[TargetView, ...]
    obstacles: Tuple[Coord, ...]  # sorted for stable output
    die: DieView
    phase: SessionPhase
    collected: int
    move_count: int
    obstacle_interval: int
    total_moves: int
    camera_angle: int

    def to_json(self) -> Dict[str, Any]:
        return {
            "board": {
                "width": self.width,
                "height": self.height,
                "start": [self.start[0], self.start[1]],
                "targets": [
                    {"cell": [t.cell[0], t.cell[1]], "value": t.value, "highlight": t.highlight}
                    for t in self.targets
                ],
                "obstacles": [[x, y] for (x, y) in self.obstacles],
            },
            "die": {
                "position": [self.die.position[0], self.die.position[1]],
                "faces": dict(self.die.faces),
                "rolling": self.die.rolling,
                "direction": self.die.direction,
                "destination": (
                    [self.die.destination[0], self.die.destination[1]] if self.die.destination else None
                ),
                "angle": self.die.angle,
            },
            "phase": self.phase.value,
            "active": self.phase is SessionPhase.ACTIVE,
            "collected": self.collected,
            "moveCount": self.move_count,
            "obstacleInterval": self.obstacle_interval,
            "totalMoves": self.total_moves,
            "cameraAngle": self.camera_angle,
        }
