from __future__ import annotations

import argparse
import sys
from typing import Callable, Dict, List, Optional

from loguru import logger

from .config import GameConfig
from .controller import GameController
from .directions import Direction
from .errors import BoardConfigurationError

KEYS: Dict[str, Direction] = {
    'w': Direction.UP,
    'up': Direction.UP,
    'a': Direction.LEFT,
    'left': Direction.LEFT,
    's': Direction.DOWN,
    'down': Direction.DOWN,
    'd': Direction.RIGHT,
    'right': Direction.RIGHT,
}

HELP = 'Keys: w/a/s/d (or up/left/down/right) roll, q/e orbit camera, h hint, r reset, x quit'


def render(game: GameController) -> str:
    """Text render adapter: board, die faces and progress."""
    if game.board is None:
        raise RuntimeError('GameController.init() has not been called')
    snap = game.snapshot()
    faces = dict(snap.die.faces)
    lines = [
        game.board.pretty(snap.die.position),
        f"Die at {snap.die.position}: top={faces['top']} bottom={faces['bottom']} "
        f"front={faces['front']} back={faces['back']} left={faces['left']} right={faces['right']}",
        f"Collected: {snap.collected}/6   Moves: {snap.total_moves}   "
        f"Obstacles move in {snap.obstacle_interval - snap.move_count}   Camera: {snap.camera_angle} deg",
    ]
    return '\n'.join(lines)


def handle_command(game: GameController, text: str) -> Optional[str]:
    """Applies one line of input. Returns a message for the player, or None when nothing to say."""
    cmd = text.strip().lower()
    if cmd in KEYS:
        if not game.move_cube(KEYS[cmd]):
            return 'Blocked.'
        game.settle()
        return None
    if cmd == 'q':
        game.rotate_camera_left()
        return None
    if cmd == 'e':
        game.rotate_camera_right()
        return None
    if cmd == 'r':
        game.reset()
        return 'New board.'
    if cmd == 'h':
        path = game.hint()
        if path is None:
            return 'No route to the next target right now.'
        return 'Hint: ' + ' '.join(d.value for d in path)
    return 'Unknown command. ' + HELP


def main(argv: Optional[List[str]] = None, read: Callable[[str], str] = input) -> int:
    parser = argparse.ArgumentParser(description='RollCube: roll the die onto 1..6 in order')
    defaults = GameConfig.from_env()
    parser.add_argument('--width', type=int, default=defaults.width, help='Board width in cells')
    parser.add_argument('--height', type=int, default=defaults.height, help='Board height in cells')
    parser.add_argument('--seed', type=int, default=defaults.seed, help='RNG seed for board layout')
    parser.add_argument('--show-hints', action='store_true', help='Print the shortest route after every roll')
    parser.add_argument('--verbose', action='store_true', help='Log session events')
    args = parser.parse_args(argv)

    logger.remove()
    logger.add(sys.stderr, level='DEBUG' if args.verbose else 'WARNING')

    completed: List[bool] = []
    game = GameController(
        GameConfig(width=args.width, height=args.height, seed=args.seed),
        on_collected_numbers_changed=lambda n: print(f'Collected {n}!'),
        on_game_completed=lambda: completed.append(True),
    )
    try:
        game.init()
    except BoardConfigurationError as e:
        print(f'error: {e}')
        return 2
    game.start()
    print(HELP)

    while True:
        print(render(game))
        if completed:
            print(f'All six collected in {game.total_moves} moves!')
            return 0
        if args.show_hints:
            print(handle_command(game, 'h'))
        try:
            text = read('> ')
        except EOFError:
            return 0
        if text.strip().lower() == 'x':
            return 0
        message = handle_command(game, text)
        if message:
            print(message)


if __name__ == '__main__':
    raise SystemExit(main())
