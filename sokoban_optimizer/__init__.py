"""Shortens known Sokoban solutions by recomputing walks and merging push segments."""

from .errors import InvalidMoveError, LevelSolvedError, OptimizerError, UnreachableSegmentError
from .grid import Cell, Grid, Location, Occupant, parse_level
from .level import Level, MoveOutcome, MoveResult
from .moves import Move, moves_to_str, str_to_moves
from .optimize import optimize, optimize_solution, reconstruct
from .pathfinding import shortest_path
from .segments import Segment, extract_segments, merge_segments, merge_until_stable

__all__ = [
    "Cell", "Grid", "Location", "Occupant", "parse_level",
    "Level", "MoveOutcome", "MoveResult",
    "Move", "moves_to_str", "str_to_moves",
    "optimize", "optimize_solution", "reconstruct",
    "shortest_path",
    "Segment", "extract_segments", "merge_segments", "merge_until_stable",
    "OptimizerError", "InvalidMoveError", "LevelSolvedError", "UnreachableSegmentError",
]
