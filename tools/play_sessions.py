from __future__ import annotations

import argparse
import os
import random
import sys
import time
from typing import List, Tuple

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import GameConfig, GameController, Direction  # type: ignore


def check_invariants(game: GameController) -> List[str]:
    """Returns a description of every board/die invariant the session currently breaks."""
    problems: List[str] = []
    if game.board is None or game.die is None:
        return ['session not initialised']
    board, die = game.board, game.die
    if not die.faces.is_consistent():
        problems.append(f"faces broken: {die.faces}")
    if sorted(board.targets.values()) != [1, 2, 3, 4, 5, 6]:
        problems.append(f"target values: {sorted(board.targets.values())}")
    if board.start in board.targets:
        problems.append("target on start cell")
    clash = board.obstacles & (set(board.targets) | {board.start})
    if clash:
        problems.append(f"obstacles on reserved cells: {sorted(clash)}")
    if not board.in_bounds(*die.position):
        problems.append(f"die off board: {die.position}")
    return problems


def play(seed: int, max_moves: int, random_walk: bool) -> Tuple[bool, int, List[str]]:
    rng = random.Random(seed)
    game = GameController(GameConfig(seed=seed))
    game.init()
    game.start()
    problems: List[str] = []
    while game.is_active() and game.total_moves < max_moves:
        if random_walk:
            direction = rng.choice(list(Direction))
        else:
            path = game.hint()
            direction = path[0] if path else rng.choice(list(Direction))
        if game.move_cube(direction):
            game.settle()
        problems.extend(check_invariants(game))
    return not game.is_active(), game.total_moves, problems


def main() -> None:
    ap = argparse.ArgumentParser(description="Play many sessions and check board/die invariants")
    ap.add_argument("--sessions", type=int, default=100)
    ap.add_argument("--max-moves", type=int, default=2000)
    ap.add_argument("--random-walk", action="store_true", help="Roll randomly instead of following hints")
    ap.add_argument("--seed", type=int, default=0)
    args = ap.parse_args()

    t0 = time.time()
    solved = 0
    moves_total = 0
    failures = 0
    for i in range(args.sessions):
        done, moves, problems = play(args.seed + i, args.max_moves, args.random_walk)
        solved += int(done)
        moves_total += moves if done else 0
        if problems:
            failures += 1
            print(f"seed={args.seed + i} problems={problems[:3]}")
    avg = (moves_total / solved) if solved else 0.0
    print(f"sessions={args.sessions} completed={solved} avg_moves={avg:.1f} "
          f"invariant_failures={failures} took={time.time() - t0:.2f}s")


if __name__ == "__main__":
    main()
