from __future__ import annotations

import random
from typing import Callable, List, Optional, Tuple

from loguru import logger

from .board import TARGET_COUNT, Board
from .config import GameConfig
from .die import Die
from .directions import Direction, remap_by_camera, unmap_for_camera
from .hint import shortest_roll_path
from .shuffle import draw_interval
from .state import DieView, GameSnapshot, SessionPhase, TargetView

CollectedHandler = Callable[[int], None]
CompletedHandler = Callable[[], None]


class GameController:
    """
    Owns one puzzle session: a Board, a Die and the progress counters.

    Hosts call move_cube() for player intents and tick() once per frame; the
    roll that tick() completes is checked against the targets in that same call.
    Rejected moves never change any counter or the obstacle layout.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rng: Optional[random.Random] = None,
        on_collected_numbers_changed: Optional[CollectedHandler] = None,
        on_game_completed: Optional[CompletedHandler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random(self.config.seed)
        self.on_collected_numbers_changed = on_collected_numbers_changed
        self.on_game_completed = on_game_completed
        self.board: Optional[Board] = None
        self.die: Optional[Die] = None
        self.phase = SessionPhase.NOT_STARTED
        self.active = False
        self.collected_count = 0
        self.move_count = 0
        self.total_moves = 0
        self.obstacle_interval = self.config.obstacle_interval_min
        self.camera_angle = 0

    # ---------- Lifecycle ----------

    def init(self) -> None:
        """Builds the board and die. Raises BoardConfigurationError for boards too small to play."""
        self.board = Board(
            width=self.config.width,
            height=self.config.height,
            cell_size=self.config.cell_size,
            rng=self.rng,
        )
        self.die = Die(self.board.start, roll_frames=self.config.roll_frames)
        self.phase = SessionPhase.NOT_STARTED
        self.active = False

    def start(self) -> None:
        self.reset()

    def reset(self) -> None:
        if self.board is None or self.die is None:
            self.init()
        board, die = self._parts()
        board.generate_targets()
        board.generate_obstacles(board.start)
        die.reset(board.start)
        self.collected_count = 0
        self.move_count = 0
        self.total_moves = 0
        self.obstacle_interval = self._draw_interval()
        self.active = True
        self.phase = SessionPhase.ACTIVE
        logger.info(
            f'session started on {board.width}x{board.height} board, '
            f'targets={sorted(board.targets.items())}, obstacles={sorted(board.obstacles)}'
        )

    # ---------- Intents ----------

    def move_cube(self, direction: Direction) -> bool:
        """Starts a roll in a screen-relative direction. Returns False when the move is rejected."""
        if not self.active or self.is_cube_rotating():
            return False
        board, die = self._parts()
        board_direction = self.remap_by_camera(direction, self.camera_angle)
        if not die.roll(board_direction, board):
            logger.debug(f'rejected roll {board_direction.value} from {die.position}')
            return False
        self.move_count += 1
        self.total_moves += 1
        if self.move_count >= self.obstacle_interval:
            self._relocate_obstacles()
        return True

    def tick(self) -> bool:
        """Advances the frame driver. Returns True on the frame a roll completes."""
        if self.die is None:
            return False
        completed = self.die.tick()
        if completed:
            self.check_target_cell()
        return completed

    def settle(self) -> bool:
        """Ticks until the roll in progress lands."""
        landed = False
        while self.is_cube_rotating():
            landed = self.tick() or landed
        return landed

    def check_target_cell(self) -> bool:
        """Collects the die's cell if it is the next target and the bottom face matches."""
        board, die = self._parts()
        value = die.get_bottom_value()
        expected = self.collected_count + 1
        x, y = die.position
        if not (board.check_target(x, y, value) and value == expected):
            return False
        self.collected_count += 1
        board.update_target_highlight(self.collected_count + 1)
        logger.info(f'collected {value} at {die.position}')
        if self.on_collected_numbers_changed:
            self.on_collected_numbers_changed(self.collected_count)
        if self.collected_count == TARGET_COUNT:
            self.active = False
            self.phase = SessionPhase.COMPLETED
            logger.info(f'session completed in {self.total_moves} moves')
            if self.on_game_completed:
                self.on_game_completed()
        return True

    def rotate_camera_left(self) -> int:
        self.camera_angle = (self.camera_angle + 90) % 360
        return self.camera_angle

    def rotate_camera_right(self) -> int:
        self.camera_angle = (self.camera_angle - 90) % 360
        return self.camera_angle

    @staticmethod
    def remap_by_camera(direction: Direction, angle_degrees: float) -> Direction:
        return remap_by_camera(direction, angle_degrees)

    # ---------- Host queries ----------

    def is_active(self) -> bool:
        return self.active

    def is_cube_rotating(self) -> bool:
        return self.die is not None and self.die.rolling

    def set_collected_numbers_changed_handler(self, handler: Optional[CollectedHandler]) -> None:
        self.on_collected_numbers_changed = handler

    def set_game_completed_handler(self, handler: Optional[CompletedHandler]) -> None:
        self.on_game_completed = handler

    def hint(self) -> Optional[List[Direction]]:
        """Screen-relative directions that collect the next value with the current obstacles."""
        if not self.active or self.is_cube_rotating():
            return None
        board, die = self._parts()
        path = shortest_roll_path(board, die.position, die.faces, self.collected_count + 1)
        if path is None:
            return None
        return [unmap_for_camera(d, self.camera_angle) for d in path]

    def snapshot(self) -> GameSnapshot:
        board, die = self._parts()
        targets = tuple(
            TargetView(cell=cell, value=value, highlight=board.highlights[value].value)
            for cell, value in sorted(board.targets.items(), key=lambda kv: kv[1])
        )
        die_view = DieView(
            position=die.position,
            faces=tuple(die.faces.as_dict().items()),
            rolling=die.rolling,
            direction=die.direction.value if die.direction else None,
            destination=die.destination,
            angle=die.rotation_angle,
        )
        return GameSnapshot(
            width=board.width,
            height=board.height,
            start=board.start,
            targets=targets,
            obstacles=tuple(sorted(board.obstacles)),
            die=die_view,
            phase=self.phase,
            collected=self.collected_count,
            move_count=self.move_count,
            obstacle_interval=self.obstacle_interval,
            total_moves=self.total_moves,
            camera_angle=self.camera_angle,
        )

    # ---------- Internals ----------

    def _parts(self) -> Tuple[Board, Die]:
        if self.board is None or self.die is None:
            raise RuntimeError('GameController.init() has not been called')
        return self.board, self.die

    def _draw_interval(self) -> int:
        return draw_interval(self.rng, self.config.obstacle_interval_min, self.config.obstacle_interval_max)

    def _relocate_obstacles(self) -> None:
        board, die = self._parts()
        # While rolling, the die's new cell is the roll destination.
        new_cell = die.destination if die.destination is not None else die.position
        board.generate_obstacles(new_cell)
        self.move_count = 0
        self.obstacle_interval = self._draw_interval()
        logger.debug(f'obstacles relocated to {sorted(board.obstacles)}; next in {self.obstacle_interval} moves')
