"""Smoke tests for the Pydantic domain models."""

import pytest

from chrono_engine.domain.board import Board
from chrono_engine.domain.enums import ActionError
from chrono_engine.domain.outcome import ActionResult
from chrono_engine.domain.pattern import PatternSolved
from chrono_engine.domain.snapshot import SessionSnapshot


def test_board_defaults_and_bounds() -> None:
    board = Board()
    assert (board.width, board.height) == (6, 6)
    assert board.cell_count == 36
    assert board.contains(0, 0)
    assert board.contains(5, 5)
    assert not board.contains(6, 0)
    assert not board.contains(0, -1)
    assert len(board.cells()) == 36


def test_board_clamp() -> None:
    board = Board(width=4, height=3)
    assert board.clamp(-2, 7) == (0, 2)
    assert board.clamp(2, 1) == (2, 1)


def test_board_rejects_non_positive_size() -> None:
    with pytest.raises(Exception):
        Board(width=0, height=6)


def test_pattern_solved_message() -> None:
    event = PatternSolved(name="Time Loop", points=200, fragment_ids=(1, 2, 3, 4))
    assert event.message == "Time Loop Solved! +200 points"


def test_action_result_constructors() -> None:
    ok = ActionResult.ok()
    assert ok.accepted and bool(ok)
    assert ok.error is None
    assert ok.points_awarded == 0

    rejected = ActionResult.rejected(ActionError.CELL_OCCUPIED)
    assert not rejected
    assert rejected.error == ActionError.CELL_OCCUPIED
    assert rejected.solved == ()


def test_action_result_points() -> None:
    result = ActionResult.ok(
        (
            PatternSolved(name="Temporal Balance", points=50, fragment_ids=(1, 2)),
            PatternSolved(name="Temporal Balance", points=50, fragment_ids=(3, 4)),
        )
    )
    assert result.points_awarded == 100


def test_session_snapshot_validates() -> None:
    snap = SessionSnapshot(
        board_width=6,
        board_height=6,
        energy=12.0,
        capacity=110.0,
        regen_rate=1.1,
        energy_fraction=12.0 / 110.0,
        low_energy=True,
        level=1,
        score=0,
        puzzles_solved=0,
        is_playing=False,
    )
    assert snap.unsolved_count == 0
    with pytest.raises(Exception):
        SessionSnapshot(
            board_width=6,
            board_height=6,
            energy=-1.0,
            capacity=110.0,
            regen_rate=1.1,
            energy_fraction=0.0,
            low_energy=True,
            level=1,
            score=0,
            puzzles_solved=0,
            is_playing=False,
        )
