import logging
from typing import Iterable, List

from .errors import UnreachableSegmentError
from .level import Level
from .moves import Move, moves_to_str, str_to_moves
from .pathfinding import shortest_path
from .segments import Segment, extract_segments, log_segments, merge_until_stable

logger = logging.getLogger(__name__)


def reconstruct(segments: Iterable[Segment], strict: bool = False) -> List[Move]:
    """Shortest walk plus push for every segment, concatenated."""
    result: List[Move] = []
    for seg in segments:
        walk = shortest_path(seg.start, seg.end, seg.snapshot)
        if walk is None:
            if strict:
                raise UnreachableSegmentError(seg.start, seg.end)
            # Only the push is emitted, so the result may no longer replay.
            logger.warning("Path not found from %s to %s; emitting push %s alone",
                           seg.start, seg.end, seg.move)
        else:
            result.extend(walk)
        result.append(seg.move)
    return result


def optimize(definition: str, solution: Iterable[Move],
             merge_segments: bool = False, strict: bool = False) -> List[Move]:
    """
    Shorten a known solution of the level in ``definition``.

    The solution is cut into push segments, optionally merged, and every
    walk between pushes is replaced by a shortest one. The result solves the
    level whenever the input does, and is never longer than it.
    """
    level = Level.from_definition(definition)
    segments = extract_segments(level, solution)
    log_segments("extracted", segments)
    if merge_segments:
        segments = merge_until_stable(segments, strict=strict)
        log_segments("merged", segments)
    moves = reconstruct(segments, strict=strict)
    level.reset()
    return moves


def optimize_solution(definition: str, solution: str, merge_segments: bool = True,
                      strict: bool = False) -> str:
    """String version of :func:`optimize`; the result is lowercase LURD."""
    moves = optimize(definition, str_to_moves(solution), merge_segments, strict)
    return moves_to_str(moves)


# ---------- Demo ----------
if __name__ == "__main__":
    demo = "\n".join([
        "#######",
        "#     #",
        "# @$  #",
        "#  .  #",
        "#######",
    ])
    raw = "rurrdluld"
    print("Raw:      ", raw)
    print("Optimized:", optimize_solution(demo, raw, merge_segments=False))
    print("Merged:   ", optimize_solution(demo, raw, merge_segments=True))
