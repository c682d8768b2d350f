"""Tests for sokoban_optimizer.run_optimizer module."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from sokoban_optimizer import run_optimizer
from sokoban_optimizer.config import OptimizerConfig
from sokoban_optimizer.level_loader import LevelRecord, load_records, save_records
from sokoban_optimizer.moves import Move
from sokoban_optimizer.run_optimizer import main, optimize_records, setup_logger

ROOM = "#######\n#     #\n# @$  #\n#  .  #\n#######"
DETOUR = "########\n# @ $ .#\n########"


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    log = logging.getLogger(run_optimizer.LOGGER_NAME)
    for h in list(log.handlers):
        h.close()
    log.handlers.clear()
    log.setLevel(logging.NOTSET)


def write_levels(tmp_path: Path, records) -> Path:
    path = tmp_path / "in.json"
    save_records(str(path), records)
    return path


class TestOptimizeRecords:
    def test_titles_and_definitions_kept(self) -> None:
        records = [LevelRecord("room", ROOM, "rurrdluld"), LevelRecord("detour", DETOUR, "lrrrr")]
        out, failures = optimize_records(records, OptimizerConfig())
        assert failures == 0
        assert [(r.title, r.definition) for r in out] == [(r.title, r.definition) for r in records]
        assert [r.solution for r in out] == ["urd", "rrr"]

    def test_without_merging(self) -> None:
        records = [LevelRecord("room", ROOM, "rurrdluld")]
        out, _ = optimize_records(records, OptimizerConfig(merge_segments=False))
        assert len(out[0].solution) == 9

    def test_failed_record_is_kept(self, caplog: pytest.LogCaptureFixture) -> None:
        records = [LevelRecord("bad", DETOUR, "lrxr"), LevelRecord("good", DETOUR, "lrrrr")]
        with caplog.at_level(logging.ERROR, logger="sokoban_optimizer"):
            out, failures = optimize_records(records, OptimizerConfig())
        assert failures == 1
        assert out[0] == records[0]
        assert out[1].solution == "rrr"
        assert "Level 0 (bad) failed" in caplog.text

    def test_verification_keeps_input(self, monkeypatch: pytest.MonkeyPatch,
                                      caplog: pytest.LogCaptureFixture) -> None:
        monkeypatch.setattr(run_optimizer, "optimize", lambda *a, **k: [Move.LEFT])
        records = [LevelRecord("detour", DETOUR, "lrrrr")]
        with caplog.at_level(logging.ERROR, logger="sokoban_optimizer"):
            out, failures = optimize_records(records, OptimizerConfig())
        assert failures == 0
        assert out == records
        assert "does not solve" in caplog.text

    def test_no_verify_trusts_result(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(run_optimizer, "optimize", lambda *a, **k: [Move.LEFT])
        records = [LevelRecord("detour", DETOUR, "lrrrr")]
        out, _ = optimize_records(records, OptimizerConfig(verify=False))
        assert out[0].solution == "l"


class TestMain:
    def test_writes_output(self, tmp_path: Path) -> None:
        src = write_levels(tmp_path, [LevelRecord("room", ROOM, "rurrdluld")])
        dst = tmp_path / "out.json"
        assert main([str(src), str(dst)]) == 0
        assert load_records(str(dst)) == [LevelRecord("room", ROOM, "urd")]

    def test_no_merge_flag(self, tmp_path: Path) -> None:
        src = write_levels(tmp_path, [LevelRecord("room", ROOM, "rurrdluld")])
        dst = tmp_path / "out.json"
        assert main([str(src), str(dst), "--no-merge"]) == 0
        assert len(load_records(str(dst))[0].solution) == 9

    def test_exit_code_on_failure(self, tmp_path: Path) -> None:
        src = write_levels(tmp_path, [LevelRecord("bad", DETOUR, "rrrrrrl")])
        dst = tmp_path / "out.json"
        assert main([str(src), str(dst)]) == 1
        assert load_records(str(dst))[0].solution == "rrrrrrl"

    def test_log_file(self, tmp_path: Path) -> None:
        src = write_levels(tmp_path, [LevelRecord("detour", DETOUR, "lrrrr")])
        log_file = tmp_path / "run.log"
        main([str(src), str(tmp_path / "out.json"), "--log-file", str(log_file)])
        text = log_file.read_text(encoding="utf-8")
        assert "Level 0 (detour): 5 -> 3 moves" in text
        assert "2 saved" in text


class TestSetupLogger:
    def test_handlers_replaced(self, tmp_path: Path) -> None:
        setup_logger(str(tmp_path / "a.log"))
        log = setup_logger(None, verbose=True)
        assert len(log.handlers) == 1
        assert log.level == logging.DEBUG
