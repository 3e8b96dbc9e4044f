from __future__ import annotations

import pytest

from tetris_core.board import COLUMNS, LINES, Cell
from tetris_core.game_state import GameState, Snapshot
from tetris_core.tetromino import Shape


def _bar(line, column, color="blue") -> Shape:
    return Shape(line, column, [Cell(0, 0, color), Cell(0, -1, color), Cell(0, 1, color)])


def _fill_line(state: GameState, line: int, color: str = "red", skip=()) -> None:
    for column in range(COLUMNS):
        if column not in skip:
            state.board.set_cell(line, column, color)


def test_valid_without_falling_shape_even_on_full_board() -> None:
    state = GameState()
    for line in range(LINES):
        _fill_line(state, line)
    assert state.falling_shape is None
    assert state.is_valid()


@pytest.mark.parametrize(
    "line,column",
    [(0, 0), (0, COLUMNS - 1), (LINES, 5), (3, 5)],
)
def test_invalid_positions(line: int, column: int) -> None:
    state = GameState()
    state.board.set_cell(3, 5, "red")
    state.falling_shape = _bar(line, column)
    assert not state.is_valid()


def test_cells_above_board_are_permitted() -> None:
    state = GameState()
    state.falling_shape = _bar(-1, 5)
    assert state.is_valid()
    state.falling_shape = Shape(0, 5, [Cell(-3, 0, "red"), Cell(0, 0, "red")])
    assert state.is_valid()


def test_single_full_line_is_removed_and_scored() -> None:
    state = GameState()
    _fill_line(state, LINES - 1)
    state.board.set_cell(LINES - 2, 3, "green")

    cleared = state.complete_lines()

    assert cleared == 1
    assert state.score == pytest.approx(110)
    assert state.lines == 1
    assert all(cell.is_empty for cell in state.board.cells[0])
    assert state.board.get_cell(LINES - 1, 3) == Cell(LINES - 1, 3, "green")
    assert state.board.occupancy().sum() == 1


def test_four_lines_score_560() -> None:
    state = GameState()
    for line in range(LINES - 4, LINES):
        _fill_line(state, line)
    assert state.complete_lines() == 4
    assert state.score == pytest.approx(560)
    assert not state.board.occupancy().any()


def test_separated_lines_cleared_in_one_pass() -> None:
    state = GameState()
    _fill_line(state, 10)
    _fill_line(state, 12)
    _fill_line(state, 11, skip=(0,))
    assert state.complete_lines() == 2
    assert state.score == pytest.approx(240)
    assert state.board.get_cell(12, 1).color == "red"
    assert state.board.get_cell(12, 0).is_empty


def test_incomplete_lines_do_not_score() -> None:
    state = GameState()
    _fill_line(state, LINES - 1, skip=(9,))
    assert state.complete_lines() == 0
    assert state.score == 0


@pytest.mark.parametrize("n,expected", [(1, 110), (2, 240), (3, 390), (4, 560)])
def test_increase_score_rewards_multiple_lines(n: int, expected: int) -> None:
    state = GameState()
    state.increase_score(n)
    assert state.score == expected


@pytest.mark.parametrize("line,over", [(0, True), (1, True), (2, False), (LINES - 1, False)])
def test_freeze_headroom(line: int, over: bool) -> None:
    state = GameState()
    upcoming = _bar(0, 5, "green")
    state.falling_shape = _bar(line, 5)
    state.next_shape = upcoming

    state.freeze_shape()

    assert state.game_over is over
    for column in (4, 5, 6):
        assert state.board.get_cell(line, column).color == "blue"
    if over:
        assert state.falling_shape is None
    else:
        assert state.falling_shape is upcoming
        assert state.next_shape is None


def test_freeze_skips_hidden_cells() -> None:
    state = GameState()
    state.falling_shape = Shape(3, 5, [Cell(-4, 0, "red"), Cell(0, 0, "red")])
    state.next_shape = _bar(0, 5)
    state.freeze_shape()
    assert state.board.occupancy().sum() == 1
    assert not state.game_over


def test_snapshot_is_read_only_projection() -> None:
    state = GameState(speed=3)
    state.falling_shape = _bar(4, 5)
    state.next_shape = _bar(0, 4, "green")
    state.score = 110.9
    state.paused = True

    snap = state.snapshot()

    assert isinstance(snap, Snapshot)
    assert snap.score == 110
    assert snap.speed == 3
    assert snap.paused and not snap.game_over
    assert sorted((c.line, c.column) for c in snap.falling) == [(4, 4), (4, 5), (4, 6)]
    assert sorted((c.line, c.column) for c in snap.next) == [(2, 0), (2, 1), (2, 2)]
    assert len(snap.board) == LINES and len(snap.board[0]) == COLUMNS
    with pytest.raises(AttributeError):
        snap.score = 0  # type: ignore[misc]
