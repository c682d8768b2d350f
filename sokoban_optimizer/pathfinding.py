import math
from collections import deque
from typing import Dict, List, Optional, Tuple

from .grid import Grid, Location
from .moves import SEARCH_ORDER, Move

UNREACHED = math.inf


def shortest_path(start: Location, goal: Location, grid: Grid) -> Optional[List[Move]]:
    """
    Shortest walk from ``start`` to ``goal`` without pushing anything.

    Walls and boxes both block. Neighbours are expanded in SEARCH_ORDER and a
    node reached again at the same depth takes the later parent, so among
    equally short walks the result is always the same one.
    Returns None if ``goal`` cannot be reached.
    """
    distance: Dict[Location, float] = {goal: UNREACHED}
    distance[start] = 0
    parent: Dict[Location, Tuple[Move, Location]] = {}
    q = deque([start])

    while q:
        cur = q.popleft()
        d = distance[cur]
        if d >= distance[goal]:
            continue
        for mv in SEARCH_ORDER:
            nxt = cur.step(mv)
            cell = grid.cell(nxt)
            if cell is None or cell.is_occupied:
                continue
            if distance.get(nxt, UNREACHED) <= d:
                continue
            distance[nxt] = d + 1
            parent[nxt] = (mv, cur)
            q.append(nxt)

    if distance[goal] == UNREACHED:
        return None

    path = []
    cur = goal
    while cur != start:
        mv, cur = parent[cur]
        path.append(mv)
    path.reverse()
    return path


def walk_length(start: Location, goal: Location, grid: Grid) -> Optional[int]:
    path = shortest_path(start, goal, grid)
    return None if path is None else len(path)
