from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, NamedTuple, Optional, Tuple

import numpy as np

from .moves import Move


class Location(NamedTuple):
    row: int
    col: int

    def step(self, move: Move) -> 'Location':
        dr, dc = move.delta
        return Location(self.row + dr, self.col + dc)

    def __str__(self) -> str:
        return f"({self.row},{self.col})"


class Occupant(IntEnum):
    NONE = 0
    BOX = 1
    WALL = 2
    # Position past the end of a ragged row; not a cell at all.
    VOID = -1


@dataclass(frozen=True)
class Cell:
    occupant: Occupant
    is_goal: bool

    @property
    def has_box(self) -> bool:
        return self.occupant == Occupant.BOX

    @property
    def has_wall(self) -> bool:
        return self.occupant == Occupant.WALL

    @property
    def is_occupied(self) -> bool:
        return self.has_box or self.has_wall

    @property
    def is_solved(self) -> bool:
        return self.has_box if self.is_goal else not self.has_box


# ---------- Grid ----------

class Grid:
    """
    Fixed-size board of cells. Only box placement changes after parsing.

    Stored as two arrays of shape (rows, widest row): occupants (int8) and
    goal flags (bool). Short rows are padded with VOID.
    """

    def __init__(self, occupants: np.ndarray, goals: np.ndarray):
        if occupants.shape != goals.shape:
            raise ValueError("occupant and goal arrays differ in shape")
        self._occupants = occupants
        self._goals = goals

    @property
    def shape(self) -> Tuple[int, int]:
        return self._occupants.shape

    def _inside(self, loc: Location) -> bool:
        h, w = self._occupants.shape
        return 0 <= loc.row < h and 0 <= loc.col < w

    def cell(self, loc: Location) -> Optional[Cell]:
        """Cell at ``loc``, or None when it lies outside the grid (ragged rows included)."""
        if not self._inside(loc):
            return None
        occ = int(self._occupants[loc.row, loc.col])
        if occ == Occupant.VOID:
            return None
        return Cell(Occupant(occ), bool(self._goals[loc.row, loc.col]))

    def locations(self) -> Iterator[Location]:
        for r, c in np.argwhere(self._occupants != Occupant.VOID):
            yield Location(int(r), int(c))

    def boxes(self) -> List[Location]:
        return [Location(int(r), int(c)) for r, c in np.argwhere(self._occupants == Occupant.BOX)]

    def goals(self) -> List[Location]:
        return [Location(int(r), int(c)) for r, c in np.argwhere(self._goals)]

    def put_box(self, loc: Location) -> None:
        self._occupants[loc.row, loc.col] = Occupant.BOX

    def remove_box(self, loc: Location) -> None:
        self._occupants[loc.row, loc.col] = Occupant.NONE

    def move_box(self, src: Location, dst: Location) -> None:
        self.remove_box(src)
        self.put_box(dst)

    def is_solved(self) -> bool:
        # Boxes sit on exactly the goal cells. VOID and WALL are never goals.
        return bool(np.array_equal(self._occupants == Occupant.BOX, self._goals))

    def copy(self) -> 'Grid':
        return Grid(self._occupants.copy(), self._goals.copy())

    def __eq__(self, other):
        # Every cell of self must have an equal cell at the same place in other.
        if not isinstance(other, Grid):
            return NotImplemented
        if self.shape == other.shape:
            present = self._occupants != Occupant.VOID
            return bool(
                np.array_equal(self._occupants[present], other._occupants[present])
                and np.array_equal(self._goals[present], other._goals[present])
            )
        return all(other.cell(loc) == self.cell(loc) for loc in self.locations())

    __hash__ = None

    def render(self, player: Optional[Location] = None) -> str:
        lines = []
        h, w = self.shape
        for r in range(h):
            line = []
            for c in range(w):
                cell = self.cell(Location(r, c))
                if cell is None:
                    continue
                line.append(cell_char(cell, player == (r, c)))
            lines.append(''.join(line))
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"Grid(shape={self.shape}, boxes={len(self.boxes())})"


def cell_char(cell: Cell, has_player: bool = False) -> str:
    if cell.has_wall:
        return '#'
    if cell.has_box:
        return '*' if cell.is_goal else '$'
    if has_player:
        return '+' if cell.is_goal else '@'
    return '.' if cell.is_goal else ' '


# ---------- Level parsing ----------

# char -> (occupant, is_goal, is_player)
SYMBOLS = {
    ' ': (Occupant.NONE, False, False),
    '#': (Occupant.WALL, False, False),
    '.': (Occupant.NONE, True,  False),
    '$': (Occupant.BOX,  False, False),
    '*': (Occupant.BOX,  True,  False),
    '@': (Occupant.NONE, False, True),
    '+': (Occupant.NONE, True,  True),
}
FLOOR = SYMBOLS[' ']


def parse_level(definition: str, strict: bool = False) -> Tuple[Grid, Location]:
    """
    Parse a level in the usual text notation into a grid and player location.

    Carriage returns and blank lines are dropped. Unknown characters are read
    as empty floor. If the player appears more than once the last one wins,
    unless ``strict`` is set, in which case it is an error.
    """
    rows = [line.replace('\r', '') for line in definition.split('\n')]
    rows = [r for r in rows if r]
    if not rows:
        raise ValueError("Empty level.")

    h = len(rows)
    w = max(len(r) for r in rows)
    occupants = np.full((h, w), Occupant.VOID, dtype=np.int8)
    goals = np.zeros((h, w), dtype=bool)
    player: Optional[Location] = None

    for i, row in enumerate(rows):
        for j, ch in enumerate(row):
            occ, is_goal, is_player = SYMBOLS.get(ch, FLOOR)
            occupants[i, j] = occ
            goals[i, j] = is_goal
            if is_player:
                if strict and player is not None:
                    raise ValueError(f"More than one player in level: {player} and {Location(i, j)}")
                player = Location(i, j)

    if player is None:
        raise ValueError("No player found in level (@ or +).")
    return Grid(occupants, goals), player
