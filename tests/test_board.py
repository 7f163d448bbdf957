"""Tests for the Board model: parsing, serialization and display."""

import numpy as np
import pytest

from vestaboard.board import FLAGSHIP_COLS, FLAGSHIP_ROWS, Board
from vestaboard.characters import CharacterCode, to_char
from vestaboard.validation import (
    BoardDimensionError,
    BoardFormatError,
    InvalidCharError,
    InvalidLengthError,
    TooManyColsError,
    TooManyRowsError,
)


def test_blank_board_is_flagship_size():
    board = Board.blank()
    assert board.shape == (FLAGSHIP_ROWS, FLAGSHIP_COLS)
    assert all(code == 0 for row in board for code in row)


def test_parse_layout_and_round_trip():
    board = Board.parse("[[1,2,3],[4,5,6]]", rows=2, cols=3)
    assert board.to_rows() == [[1, 2, 3], [4, 5, 6]]
    assert board.to_layout() == "[[1,2,3],[4,5,6]]"
    assert Board.parse(board.to_layout(), 2, 3) == board


def test_flagship_round_trip_with_colors():
    recognised = [code for code in CharacterCode if code != CharacterCode.NEWLINE]
    cells = [
        [int(recognised[(row * FLAGSHIP_COLS + col) % len(recognised)]) for col in range(FLAGSHIP_COLS)]
        for row in range(FLAGSHIP_ROWS)
    ]
    cells[5][21] = int(CharacterCode.RED)
    board = Board.from_rows(cells)
    assert any(CharacterCode(code).is_color for row in board for code in row)

    assert Board.parse(board.to_layout()) == board
    assert Board.parse(board.to_layout()).to_rows() == cells

    # the display text carries the same cells, except FILLED which shows as white
    lines = [[to_char(code) for code in row] for row in cells]
    expected = [
        [int(CharacterCode.WHITE) if code == CharacterCode.FILLED else code for code in row]
        for row in cells
    ]
    assert Board.from_text(lines) == expected


def test_parse_ignores_whitespace_and_brackets():
    board = Board.parse("[\n  [8, 9],\n  [0, 63]\n]", rows=2, cols=2)
    assert board == [[8, 9], [0, 63]]


def test_parse_short_input_leaves_blanks():
    board = Board.parse("8,9", rows=2, cols=2)
    assert board.to_rows() == [[8, 9], [0, 0]]


def test_parse_tolerates_trailing_separator():
    board = Board.parse("1,2,3,4,", rows=2, cols=2)
    assert board.to_rows() == [[1, 2], [3, 4]]


def test_parse_too_many_values():
    with pytest.raises(TooManyRowsError):
        Board.parse("1,2,3,4,5", rows=2, cols=2)


@pytest.mark.parametrize("text", ["1,256", "1,,2", ""])
def test_parse_invalid_values(text):
    with pytest.raises(InvalidCharError):
        Board.parse(text, rows=2, cols=2)


def test_invalid_char_error_keeps_the_token():
    with pytest.raises(InvalidCharError) as exc_info:
        Board.parse("1,999", rows=2, cols=2)
    assert exc_info.value.value == "999"
    assert isinstance(exc_info.value, BoardFormatError)
    assert isinstance(exc_info.value, ValueError)


def test_from_rows_shape_errors():
    with pytest.raises(TooManyRowsError):
        Board.from_rows([[0, 0]] * 3, rows=2, cols=2)
    with pytest.raises(TooManyColsError):
        Board.from_rows([[0, 0, 0], [0, 0]], rows=2, cols=2)
    with pytest.raises(InvalidLengthError):
        Board.from_rows([[0, 0]], rows=2, cols=2)
    with pytest.raises(InvalidLengthError):
        Board.from_rows([[0], [0, 0]], rows=2, cols=2)


@pytest.mark.parametrize("values", [None, 5, "0,0,0,0", [0, 0], [[0, 0], 7]])
def test_from_rows_rejects_non_lists(values):
    with pytest.raises(InvalidLengthError):
        Board.from_rows(values, rows=2, cols=2)


def test_from_rows_rejects_bad_cells():
    with pytest.raises(InvalidCharError):
        Board.from_rows([[0, 300], [0, 0]], rows=2, cols=2)
    with pytest.raises(InvalidCharError):
        Board.from_rows([[0, -1], [0, 0]], rows=2, cols=2)
    with pytest.raises(InvalidCharError):
        Board.from_rows([[0, True], [0, 0]], rows=2, cols=2)


def test_from_text():
    board = Board.from_text(["hi", "!?"], rows=2, cols=2)
    assert board.to_rows() == [[8, 9], [37, 60]]


def test_board_is_immutable():
    board = Board.blank(2, 2)
    changed = board.with_cell(0, 1, 5)
    assert board[0, 1] == 0
    assert changed[0, 1] == 5

    array = board.to_array()
    array[0, 0] = 7
    assert board[0, 0] == 0


def test_invalid_dimensions():
    with pytest.raises(BoardDimensionError):
        Board.blank(0, 22)
    with pytest.raises(BoardDimensionError):
        Board(np.zeros(4, dtype=np.uint8))


def test_display_string():
    board = Board.from_rows([[8, 0]], rows=1, cols=2)
    expected = " ----\n|" + f"{'H':^2}" + "  |\n ----\n"
    assert board.to_display_string() == expected
    assert str(board) == expected


def test_equality_and_hash():
    a = Board.parse("1,2,3,4", 2, 2)
    b = Board.from_rows([[1, 2], [3, 4]], 2, 2)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Board.blank(2, 2)
    assert a != Board.parse("1,2,3,4", 1, 4)
