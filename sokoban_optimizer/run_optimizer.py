import argparse
import logging
from typing import List, Optional, Tuple

from .config import OptimizerConfig
from .errors import LevelSolvedError, OptimizerError
from .level import Level
from .level_loader import LevelRecord, load_records, save_records
from .moves import moves_to_str, str_to_moves
from .optimize import optimize

LOGGER_NAME = "sokoban_optimizer"
logger = logging.getLogger(__name__)

# Logging

def setup_logger(logfile: Optional[str] = None, verbose: bool = False):
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(logging.DEBUG if verbose else logging.INFO)
    log.handlers.clear()
    fmt = logging.Formatter("%(asctime)s %(levelname)s: %(message)s", "%Y-%m-%d %H:%M:%S")
    sh = logging.StreamHandler(); sh.setFormatter(fmt)
    log.addHandler(sh)
    if logfile:
        fh = logging.FileHandler(logfile, mode="a", encoding="utf-8"); fh.setFormatter(fmt)
        log.addHandler(fh)
    return log

# Batch

def verify(definition: str, moves) -> bool:
    level = Level.from_definition(definition)
    try:
        return level.play(moves)
    except LevelSolvedError:
        return False


def optimize_record(record: LevelRecord, cfg: OptimizerConfig) -> LevelRecord:
    original = str_to_moves(record.solution)
    moves = optimize(record.definition, original, cfg.merge_segments, cfg.strict)
    if cfg.verify:
        if not verify(record.definition, moves):
            logger.error("%s: optimized solution does not solve the level, keeping input", record.title)
            return record
        if len(moves) > len(original):
            logger.warning("%s: optimized solution is longer (%d > %d), keeping input",
                           record.title, len(moves), len(original))
            return record
    return LevelRecord(record.title, record.definition, moves_to_str(moves))


def optimize_records(records: List[LevelRecord], cfg: OptimizerConfig) -> Tuple[List[LevelRecord], int]:
    """Returns the optimized records and how many of them could not be processed."""
    out, failures = [], 0
    before_total = after_total = 0
    for idx, rec in enumerate(records):
        try:
            new = optimize_record(rec, cfg)
        except (OptimizerError, ValueError) as e:
            logger.error("Level %d (%s) failed: %s", idx, rec.title, e)
            failures += 1
            new = rec
        before, after = len(rec.solution), len(new.solution)
        before_total += before; after_total += after
        logger.info("Level %d (%s): %d -> %d moves", idx, rec.title, before, after)
        out.append(new)
    logger.info("Done. %d levels, %d -> %d moves (%d saved), %d failed",
                len(records), before_total, after_total, before_total - after_total, failures)
    return out, failures


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Shorten known Sokoban solutions")
    ap.add_argument("input", help="JSON array of {title, definition, solution}")
    ap.add_argument("output", help="where to write the optimized levels")
    ap.add_argument("--no-merge", action="store_true", help="only shorten walks, do not merge segments")
    ap.add_argument("--strict", action="store_true", help="fail on unwalkable segments instead of degrading")
    ap.add_argument("--no-verify", action="store_true", help="skip replaying the optimized solutions")
    ap.add_argument("--log-file", default=None)
    ap.add_argument("--verbose", action="store_true", help="log segments and merges")
    args = ap.parse_args(argv)

    cfg = OptimizerConfig(
        merge_segments=not args.no_merge,
        strict=args.strict,
        verify=not args.no_verify,
        log_file=args.log_file,
        verbose=args.verbose,
    )
    setup_logger(cfg.log_file, cfg.verbose)

    records = load_records(args.input)
    optimized, failures = optimize_records(records, cfg)
    save_records(args.output, optimized)
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
