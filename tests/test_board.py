from __future__ import annotations

import pytest

from tetris_core.board import COLUMNS, LINES, Board, Cell, create_board


def test_create_board_is_dense_and_tagged() -> None:
    grid = create_board()
    assert len(grid) == LINES
    for line, row in enumerate(grid):
        assert len(row) == COLUMNS
        for column, cell in enumerate(row):
            assert (cell.line, cell.column) == (line, column)
            assert cell.is_empty


def test_cell_empty_iff_color_unset() -> None:
    assert Cell(0, 0).is_empty
    assert Cell(0, 0, "").is_empty
    assert not Cell(0, 0, "red").is_empty


def test_set_cell_replaces_instead_of_mutating() -> None:
    board = Board()
    before = board.get_cell(3, 4)
    board.set_cell(3, 4, "red")
    after = board.get_cell(3, 4)
    assert before.is_empty
    assert after is not before
    assert after == Cell(3, 4, "red")


@pytest.mark.parametrize("line,column", [(-1, 0), (LINES, 0), (0, -1), (0, COLUMNS)])
def test_accessors_reject_off_board_coordinates(line: int, column: int) -> None:
    board = Board()
    with pytest.raises(IndexError):
        board.get_cell(line, column)
    with pytest.raises(IndexError):
        board.set_cell(line, column, "red")
    assert board.is_empty(line, column) is False


def test_remove_lines_uses_original_indices() -> None:
    board = Board()
    for column in range(COLUMNS):
        board.set_cell(18, column, "red")
        board.set_cell(19, column, "red")
    board.set_cell(17, 2, "blue")

    cleared = board.remove_lines(board.full_lines())

    assert cleared == 2
    assert board.get_cell(19, 2) == Cell(19, 2, "blue")
    assert board.occupancy().sum() == 1
    assert len(board.cells) == LINES
