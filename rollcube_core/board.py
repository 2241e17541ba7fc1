from __future__ import annotations

import random
from enum import Enum
from typing import Dict, Iterable, List, Optional, Set, Tuple

from loguru import logger

from .errors import BoardConfigurationError
from .shuffle import fisher_yates

Coord = Tuple[int, int]  # (x, y)

TARGET_COUNT = 6
MAX_OBSTACLES = 5


class CellRole(str, Enum):
    NORMAL = 'normal'
    TARGET = 'target'
    OBSTACLE = 'obstacle'


class Highlight(str, Enum):
    """How a target cell is drawn relative to the next value to collect."""
    DIMMED = 'dimmed'    # already collected
    ACTIVE = 'active'    # next to collect
    NEUTRAL = 'neutral'  # later in the sequence


class Board:
    """Owns the grid and the target/obstacle role assignment.

    Targets are placed once per session by generate_targets(); obstacles are
    re-placed by generate_obstacles() whenever the controller asks for it.
    """

    def __init__(
        self,
        width: int = 10,
        height: int = 10,
        cell_size: float = 1.0,
        rng: Optional[random.Random] = None,
    ) -> None:
        if width < 1 or height < 1:
            raise BoardConfigurationError(f'Board must be at least 1x1, got {width}x{height}')
        if width * height - 1 < TARGET_COUNT:
            raise BoardConfigurationError(
                f'Board {width}x{height} has {width * height - 1} free cells; '
                f'{TARGET_COUNT} distinct target cells are required'
            )
        self.width = width
        self.height = height
        self.cell_size = cell_size
        self.rng = rng or random.Random()
        self.targets: Dict[Coord, int] = {}
        self.obstacles: Set[Coord] = set()
        self.highlights: Dict[int, Highlight] = {}

    @property
    def start(self) -> Coord:
        """The centre cell, where the die starts every session."""
        return (self.width // 2, self.height // 2)

    def coords(self) -> Iterable[Coord]:
        """Iterates over all coordinates on the board, row by row."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    # ---------- Role assignment ----------

    def generate_targets(self) -> Dict[Coord, int]:
        """Places the six targets on random non-start cells with a random value order."""
        candidates = [c for c in self.coords() if c != self.start]
        cells = fisher_yates(candidates, self.rng)[:TARGET_COUNT]
        values = fisher_yates(range(1, TARGET_COUNT + 1), self.rng)
        self.targets = dict(zip(cells, values))
        self.obstacles = set()
        self.update_target_highlight(1)
        return dict(self.targets)

    def generate_obstacles(self, exclude_cell: Optional[Coord] = None) -> Set[Coord]:
        """Replaces the obstacle layout, never touching start, targets or exclude_cell."""
        blocked = set(self.targets)
        blocked.add(self.start)
        if exclude_cell is not None:
            blocked.add((exclude_cell[0], exclude_cell[1]))
        candidates = [c for c in self.coords() if c not in blocked]
        count = min(MAX_OBSTACLES, len(candidates))
        if count < MAX_OBSTACLES:
            logger.debug(f'only {len(candidates)} obstacle candidates on {self.width}x{self.height} board')
        self.obstacles = set(fisher_yates(candidates, self.rng)[:count])
        return set(self.obstacles)

    # ---------- Queries ----------

    def is_obstacle(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return (x, y) in self.obstacles

    def check_target(self, x: int, y: int, value: int) -> bool:
        """True iff (x, y) is a target cell carrying exactly this value."""
        if not self.in_bounds(x, y):
            return False
        return self.targets.get((x, y)) == value

    def role_at(self, x: int, y: int) -> CellRole:
        if (x, y) in self.targets:
            return CellRole.TARGET
        if (x, y) in self.obstacles:
            return CellRole.OBSTACLE
        return CellRole.NORMAL

    def target_value_at(self, x: int, y: int) -> Optional[int]:
        return self.targets.get((x, y))

    def target_cell(self, value: int) -> Optional[Coord]:
        for coord, v in self.targets.items():
            if v == value:
                return coord
        return None

    def target_count(self) -> int:
        return len(self.targets)

    def update_target_highlight(self, next_value: int) -> None:
        """Dims collected values, emphasises next_value and leaves later ones neutral."""
        self.highlights = {}
        for value in self.targets.values():
            if value < next_value:
                self.highlights[value] = Highlight.DIMMED
            elif value == next_value:
                self.highlights[value] = Highlight.ACTIVE
            else:
                self.highlights[value] = Highlight.NEUTRAL

    def grid_to_world(self, x: int, y: int) -> Tuple[float, float]:
        """Maps a cell centre to world (x, z) coordinates, with the board centred on the origin."""
        return (
            (x - self.width / 2 + 0.5) * self.cell_size,
            (y - self.height / 2 + 0.5) * self.cell_size,
        )

    def pretty(self, die: Optional[Coord] = None) -> str:
        """Generates a human-readable view, highest y first so 'up' points up."""
        lines: List[str] = []
        for y in range(self.height - 1, -1, -1):
            row: List[str] = []
            for x in range(self.width):
                if die == (x, y):
                    row.append('@')
                elif (x, y) in self.obstacles:
                    row.append('#')
                elif (x, y) in self.targets:
                    row.append(str(self.targets[(x, y)]))
                else:
                    row.append('.')
            lines.append(' '.join(row))
        return '\n'.join(lines)
