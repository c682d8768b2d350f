from dataclasses import dataclass
from enum import Enum
from typing import Iterable

from .errors import LevelSolvedError
from .grid import Grid, Location, parse_level
from .moves import Move


class MoveOutcome(Enum):
    NO_MOVE = 1
    MOVED = 2
    MOVED_BOX = 3


@dataclass(frozen=True)
class MoveResult:
    outcome: MoveOutcome
    solved: bool


class Level:
    """
    A level being played: the current grid, the player and the solved flag.

    The starting grid and player location are kept apart so ``reset`` can
    restore them. Once solved, the level accepts no more moves.

    Example:
        >>> level = Level.from_definition("#####\\n#@$.#\\n#####")
        >>> level.move(Move.RIGHT)
        MoveResult(outcome=<MoveOutcome.MOVED_BOX: 3>, solved=True)
    """

    def __init__(self, grid: Grid, player: Location):
        self._start_grid = grid.copy()
        self._start_player = player
        self.reset()

    @classmethod
    def from_definition(cls, definition: str, strict: bool = False) -> 'Level':
        return cls(*parse_level(definition, strict=strict))

    @property
    def grid(self) -> Grid:
        return self._grid

    @property
    def player(self) -> Location:
        return self._player

    @property
    def solved(self) -> bool:
        return self._solved

    def reset(self) -> None:
        self._grid = self._start_grid.copy()
        self._player = self._start_player
        self._solved = False

    def move(self, move: Move) -> MoveResult:
        if self._solved:
            raise LevelSolvedError()
        outcome = self._attempt(move)
        if outcome is MoveOutcome.MOVED_BOX:
            self._solved = self._grid.is_solved()
        return MoveResult(outcome, self._solved)

    def play(self, moves: Iterable[Move]) -> bool:
        for m in moves:
            self.move(m)
        return self._solved

    def _attempt(self, move: Move) -> MoveOutcome:
        target = self._player.step(move)
        cell = self._grid.cell(target)
        if cell is None or cell.has_wall:
            return MoveOutcome.NO_MOVE

        if cell.has_box:
            landing = target.step(move)
            landing_cell = self._grid.cell(landing)
            if landing_cell is None or landing_cell.is_occupied:
                return MoveOutcome.NO_MOVE
            self._grid.move_box(target, landing)
            self._player = target
            return MoveOutcome.MOVED_BOX

        self._player = target
        return MoveOutcome.MOVED

    def render(self) -> str:
        return self._grid.render(self._player)

    def __str__(self) -> str:
        return self.render()
