from __future__ import annotations

from collections import deque
from typing import Deque, Dict, List, Optional, Tuple

from .board import Board, Coord
from .die import Faces
from .directions import Direction

_Node = Tuple[Coord, Faces]


def shortest_roll_path(board: Board, start: Coord, faces: Faces, value: int) -> Optional[List[Direction]]:
    """
    Finds the fewest board-direction rolls that land `value` bottom-down on its target.

    Breadth-first search over (cell, orientation); at most width*height*24 nodes.
    Obstacles are taken as they are now. Returns [] if the die already rests
    there correctly, None if the target is missing or unreachable.
    """
    goal = board.target_cell(value)
    if goal is None:
        return None
    origin: _Node = (start, faces)
    if start == goal and faces.bottom == value:
        return []

    parents: Dict[_Node, Tuple[_Node, Direction]] = {}
    seen = {origin}
    queue: Deque[_Node] = deque([origin])
    while queue:
        node = queue.popleft()
        (x, y), f = node
        for direction in Direction:
            dx, dy = direction.delta
            nx, ny = x + dx, y + dy
            if not board.in_bounds(nx, ny) or board.is_obstacle(nx, ny):
                continue
            nxt: _Node = ((nx, ny), f.rolled(direction))
            if nxt in seen:
                continue
            seen.add(nxt)
            parents[nxt] = (node, direction)
            if nxt[0] == goal and nxt[1].bottom == value:
                return _unwind(parents, origin, nxt)
            queue.append(nxt)
    return None


def _unwind(parents: Dict[_Node, Tuple[_Node, Direction]], origin: _Node, end: _Node) -> List[Direction]:
    path: List[Direction] = []
    node = end
    while node != origin:
        node, direction = parents[node]
        path.append(direction)
    path.reverse()
    return path
