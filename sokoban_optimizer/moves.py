from enum import Enum
from typing import Iterable, List, Tuple

from .errors import InvalidMoveError


class Move(Enum):
    UP = 'u'
    RIGHT = 'r'
    DOWN = 'd'
    LEFT = 'l'

    @property
    def delta(self) -> Tuple[int, int]:
        return DELTAS[self]

    def __str__(self) -> str:
        return self.name.lower()


DELTAS = {
    Move.UP:    (-1, 0),
    Move.RIGHT: ( 0, 1),
    Move.DOWN:  ( 1, 0),
    Move.LEFT:  ( 0,-1),
}

# Neighbour expansion order for the walk search. Changing it changes which
# of several equally short walks is returned.
SEARCH_ORDER = (Move.DOWN, Move.LEFT, Move.RIGHT, Move.UP)

CHAR_TO_MOVE = {c: m for m in Move for c in (m.value, m.value.upper())}


def char_to_move(char: str) -> Move:
    try:
        return CHAR_TO_MOVE[char]
    except KeyError:
        raise InvalidMoveError(char) from None


def str_to_moves(s: str) -> List[Move]:
    """Decode a LURD string. Case is ignored (pushes may be uppercase)."""
    return [char_to_move(c) for c in s]


def moves_to_str(moves: Iterable[Move]) -> str:
    return ''.join(m.value for m in moves)
