from __future__ import annotations

# Facade module that re-exports RollCube core functionality.
# The Flask app and the tests import from here; single-responsibility
# modules live under rollcube_core/*.

from rollcube_core.board import (  # noqa: F401
    MAX_OBSTACLES,
    TARGET_COUNT,
    Board,
    CellRole,
    Coord,
    Highlight,
)
from rollcube_core.config import GameConfig  # noqa: F401
from rollcube_core.controller import GameController  # noqa: F401
from rollcube_core.die import QUARTER_TURN, ROLLS, Die, DieState, Faces  # noqa: F401
from rollcube_core.directions import (  # noqa: F401
    CAMERA_TABLES,
    Direction,
    camera_quarter_turns,
    remap_by_camera,
    unmap_for_camera,
)
from rollcube_core.errors import BoardConfigurationError  # noqa: F401
from rollcube_core.hint import shortest_roll_path  # noqa: F401
from rollcube_core.shuffle import draw_interval, fisher_yates  # noqa: F401
from rollcube_core.state import DieView, GameSnapshot, SessionPhase, TargetView  # noqa: F401


def main() -> None:
    # CLI driver delegated to rollcube_core.cli
    from rollcube_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
