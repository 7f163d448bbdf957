"""
Board - fixed-size grid of character codes.

The flagship display is 6 rows by 22 columns, but every operation here takes
the size as a parameter so other board sizes work the same way.

A Board wraps a read-only numpy array of uint8 codes. Transformations return
new boards; the wrapped array is never mutated after construction.
"""

from __future__ import annotations

import json
import re
from typing import Iterator, List, Sequence, Tuple, Union

import numpy as np

from .characters import display_cell, to_code
from .validation import (
    BoardDimensionError,
    InvalidCharError,
    InvalidLengthError,
    TooManyColsError,
    TooManyRowsError,
    validate_board_dimensions,
)

FLAGSHIP_ROWS = 6
FLAGSHIP_COLS = 22

# Everything except digits and separators is decoration ("[", "]", spaces, newlines)
_LAYOUT_NOISE = re.compile(r"[^0-9,]")

Rows = Sequence[Sequence[int]]


def _parse_cell(token: str) -> int:
    if not token.isdigit():
        raise InvalidCharError(token)
    value = int(token)
    if value > 0xFF:
        raise InvalidCharError(token)
    return value


def _is_sequence(value) -> bool:
    return isinstance(value, (list, tuple, np.ndarray))


def _check_cell(value) -> int:
    # bool is an int subclass but never a valid cell
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidCharError(str(value))
    if not (0 <= value <= 0xFF):
        raise InvalidCharError(str(value))
    return int(value)


class Board:
    """
    A board of character codes.

    A Board can be created via:
        - ``Board.blank(rows, cols)`` for an all-blank board
        - ``Board.parse(text, rows, cols)`` from a comma separated layout string
        - ``Board.from_rows(rows_list, rows, cols)`` from a nested list of codes
        - ``Board.from_text(lines, rows, cols)`` from rows of display characters
        - the constructor, from any 2d array-like of codes

    Args:
        - data: a 2d array-like of codes in the range 0-255
    """

    def __init__(self, data: Union[np.ndarray, Rows]):
        array = np.array(data, dtype=np.uint8)
        if array.ndim != 2:
            raise BoardDimensionError(f"Board data must be 2d, got {array.ndim}d")
        validate_board_dimensions(*array.shape)
        array.setflags(write=False)
        self._data = array

    @classmethod
    def blank(cls, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS) -> Board:
        validate_board_dimensions(rows, cols)
        return cls(np.zeros((rows, cols), dtype=np.uint8))

    @classmethod
    def parse(
        cls, text: str, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
    ) -> Board:
        """
        Parse a layout string such as ``"[[0,0,...],[0,0,...],...]"``.

        All characters other than digits and commas are dropped, the remainder
        is split on commas and filled in row-major order. Cells that are not
        given stay blank.

        Raises:
            TooManyRowsError: If a non-empty value falls past the last row
            InvalidCharError: If a value is not an integer in 0-255
        """
        validate_board_dimensions(rows, cols)
        data = np.zeros((rows, cols), dtype=np.uint8)

        cleaned = _LAYOUT_NOISE.sub("", text)
        for index, token in enumerate(cleaned.split(",")):
            row, col = divmod(index, cols)

            if row >= rows:
                # tolerate a trailing separator after the last cell
                if not token:
                    continue
                raise TooManyRowsError(rows)

            data[row, col] = _parse_cell(token)

        return cls(data)

    @classmethod
    def from_rows(
        cls, values: Rows, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
    ) -> Board:
        """
        Build a board from a nested list of codes that must be exactly rows x cols.

        Raises:
            TooManyRowsError: If there are more than ``rows`` rows
            TooManyColsError: If any row has more than ``cols`` values
            InvalidLengthError: If there are too few rows or columns, or the
                input is not a list of lists
            InvalidCharError: If a value is not an integer in 0-255
        """
        validate_board_dimensions(rows, cols)

        if not _is_sequence(values):
            raise InvalidLengthError(f"expected a list of rows, got {type(values).__name__}")
        if len(values) > rows:
            raise TooManyRowsError(rows)
        if len(values) < rows:
            raise InvalidLengthError(f"expected {rows} rows, got {len(values)}")

        data = np.zeros((rows, cols), dtype=np.uint8)
        for row, line in enumerate(values):
            if not _is_sequence(line):
                raise InvalidLengthError(f"row {row} is not a list: {line!r}")
            if len(line) > cols:
                raise TooManyColsError(cols)
            if len(line) < cols:
                raise InvalidLengthError(
                    f"expected {cols} columns in row {row}, got {len(line)}"
                )
            data[row, :] = [_check_cell(value) for value in line]

        return cls(data)

    @classmethod
    def from_text(
        cls,
        lines: Sequence[Union[str, Sequence[str]]],
        rows: int = FLAGSHIP_ROWS,
        cols: int = FLAGSHIP_COLS,
    ) -> Board:
        """Build a board from rows of display characters, e.g. ``["HELLO ...", ...]``."""
        return cls.from_rows([[to_code(char) for char in line] for line in lines], rows, cols)

    @property
    def rows(self) -> int:
        return int(self._data.shape[0])

    @property
    def cols(self) -> int:
        return int(self._data.shape[1])

    @property
    def shape(self) -> Tuple[int, int]:
        return self.rows, self.cols

    def to_array(self) -> np.ndarray:
        """Return a writable copy of the codes."""
        return self._data.copy()

    def to_rows(self) -> List[List[int]]:
        return self._data.tolist()

    def to_layout(self) -> str:
        """Serialize to the nested-list layout string that ``Board.parse`` reads."""
        return json.dumps(self.to_rows(), separators=(",", ":"))

    def with_cell(self, row: int, col: int, code: int) -> Board:
        data = self.to_array()
        data[row, col] = _check_cell(code)
        return Board(data)

    def to_display_string(self) -> str:
        border = " " + "-" * (self.cols * 2)
        lines = [border]
        for row in self._data:
            lines.append("|" + "".join(display_cell(code) for code in row) + "|")
        lines.append(border)
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.to_display_string()

    def __repr__(self) -> str:
        return f"Board({self.rows}x{self.cols}, {self.to_layout()})"

    def __getitem__(self, key):
        value = self._data[key]
        if isinstance(value, np.ndarray):
            return value.tolist()
        return int(value)

    def __iter__(self) -> Iterator[List[int]]:
        return iter(self.to_rows())

    def __eq__(self, other) -> bool:
        if isinstance(other, Board):
            return self.shape == other.shape and bool(np.array_equal(self._data, other._data))
        if isinstance(other, (np.ndarray, list, tuple)):
            other_array = np.asarray(other)
            return other_array.shape == self._data.shape and bool(
                np.array_equal(self._data, other_array)
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.shape, self._data.tobytes()))

