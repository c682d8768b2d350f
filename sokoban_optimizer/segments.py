"""
Push segments: a solution cut into walk-then-push pieces.

A segment records where the walk started, where the player stood right before
the push, the push direction and a copy of the grid at the start of the walk.
Walking moves themselves are thrown away; the walk is recomputed later.
"""
import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

from .errors import UnreachableSegmentError
from .grid import Grid, Location
from .level import Level, MoveOutcome
from .moves import Move
from .pathfinding import walk_length

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    move: Move
    start: Location
    end: Location
    snapshot: Grid

    def describe(self) -> str:
        return f"start at {self.start} walk to {self.end} and push {self.move}"


def log_segments(title: str, segments: List[Segment]) -> None:
    if not logger.isEnabledFor(logging.DEBUG):
        return
    logger.debug("segments %s (%d):", title, len(segments))
    for seg in segments:
        logger.debug("  %s", seg.describe())


# ---------- Extraction ----------

def extract_segments(level: Level, moves: Iterable[Move]) -> List[Segment]:
    """
    Replay ``moves`` from the starting position and cut them at every push.

    The level is reset before and after the replay, also when a move fails.
    """
    level.reset()
    segments: List[Segment] = []
    start = level.player
    snapshot = level.grid.copy()
    try:
        for mv in moves:
            before = level.player
            result = level.move(mv)
            if result.outcome is MoveOutcome.MOVED_BOX:
                segments.append(Segment(mv, start, before, snapshot))
                start = level.player
                snapshot = level.grid.copy()
        if not level.solved:
            logger.warning("Solution does not solve the level; %d pushes replayed", len(segments))
    finally:
        level.reset()
    return segments


# ---------- Merging ----------

class _SegmentCosts:
    """Walk+push cost of each segment of one list, computed on first use."""

    def __init__(self, segments: List[Segment], strict: bool):
        self.segments = segments
        self.strict = strict
        self._cache: Dict[int, Optional[int]] = {}

    def __getitem__(self, idx: int) -> Optional[int]:
        if idx not in self._cache:
            seg = self.segments[idx]
            length = walk_length(seg.start, seg.end, seg.snapshot)
            if length is None:
                if self.strict:
                    raise UnreachableSegmentError(seg.start, seg.end)
                logger.warning("Unwalkable segment #%d: %s", idx, seg.describe())
                self._cache[idx] = None
            else:
                self._cache[idx] = length + 1
        return self._cache[idx]

    def total(self, i: int, j: int) -> int:
        # Unwalkable segments add nothing, as their walk is never emitted.
        return sum(self[s] or 0 for s in range(i, j + 1))


def merge_segments(segments: List[Segment], strict: bool = False) -> List[Segment]:
    """
    One greedy merge pass.

    For each i, try j from the last segment down to i+1. If the grid at the
    start of i equals the grid at the start of j, segments i..j can be
    replaced by a walk from i.start to j.end followed by j's push. The first
    such j that is strictly cheaper wins and the scan resumes after it.
    This only finds local improvements; it is not a minimal-moves search.
    """
    costs = _SegmentCosts(segments, strict)
    merged: List[Segment] = []
    i = 0
    while i < len(segments):
        first = segments[i]
        for j in range(len(segments) - 1, i, -1):
            last = segments[j]
            if first.snapshot != last.snapshot:
                continue
            direct = walk_length(first.start, last.end, first.snapshot)
            if direct is None:
                continue
            if direct + 1 < costs.total(i, j):
                logger.debug("merging segments %d..%d (%d -> %d moves)",
                             i, j, costs.total(i, j), direct + 1)
                merged.append(Segment(last.move, first.start, last.end, last.snapshot))
                i = j + 1
                break
        else:
            merged.append(first)
            i += 1
    return merged


def merge_until_stable(segments: List[Segment], strict: bool = False) -> List[Segment]:
    """Repeat merge passes until one of them leaves the list unchanged."""
    passes = 0
    while True:
        merged = merge_segments(segments, strict=strict)
        passes += 1
        if len(merged) == len(segments):
            logger.debug("merging stable after %d passes, %d segments", passes, len(merged))
            return merged
        segments = merged
