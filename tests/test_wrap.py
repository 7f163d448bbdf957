"""Tests for word wrapping into component rectangles."""

import pytest

from vestaboard.characters import CharacterCode, to_code
from vestaboard.wrap import split_words, strip_line_end_spaces, wrap_text


def codes(text):
    return tuple(CharacterCode(to_code(char)) for char in text)


# text, height, width, expected non-empty rows, expected content height
WRAP_CASES = [
    ("HI THERE", 6, 22, ["HI THERE"], 1),
    ("HELLO WORLD", 2, 8, ["HELLO", "WORLD"], 2),
    ("ABCDEFGHIJ", 3, 4, ["ABCD", "EFGH", "IJ"], 3),
    ("HELLO\nHI", 6, 22, ["HELLO", "HI"], 2),
    # separator fits and the row ends up exactly full
    ("AB CD", 1, 5, ["AB CD"], 1),
    # next word is exactly as long as the space left: no separator, no wrap
    ("AB CDE", 2, 5, ["ABCDE"], 1),
    # next word is longer than the space left: no separator, wrap first
    ("AB CDEF", 2, 5, ["AB", "CDEF"], 2),
    # newline arriving when the row is already full only wraps once
    ("ABCD\nEF", 3, 4, ["ABCD", "EF"], 2),
    # runs of spaces give empty words, each followed by a blank
    ("A  B", 1, 22, ["A  B"], 1),
    # a word exactly as wide as the rectangle is never moved down first
    ("ABCD", 2, 4, ["ABCD"], 1),
    ("X ABCD", 2, 4, ["XABC", "D"], 2),
    # a trailing newline still counts as a used row
    ("HI\n", 6, 22, ["HI"], 2),
    ("\nHI", 6, 22, ["HI"], 2),
    # content past the last row is dropped
    ("AAA BBB CCC", 1, 4, ["AAA"], 2),
    ("ONE TWO THREE FOUR", 2, 5, ["ONE", "TWOTH"], 3),
]


@pytest.mark.parametrize("text,height,width,expected,content_height", WRAP_CASES)
def test_wrap_cases(text, height, width, expected, content_height):
    wrapped = wrap_text(text, height, width)
    assert wrapped.content_rows() == [codes(line) for line in expected]
    assert wrapped.height == content_height
    assert wrapped.widest == max(len(line) for line in expected)


@pytest.mark.parametrize("text,height,width,expected,content_height", WRAP_CASES)
def test_wrap_stays_inside_rectangle(text, height, width, expected, content_height):
    wrapped = wrap_text(text, height, width)
    assert len(wrapped.rows) <= height
    assert all(len(row) <= width for row in wrapped.rows)


def test_empty_text_is_blank_rectangle():
    wrapped = wrap_text("", 2, 3)
    assert wrapped.rows == ((CharacterCode.BLANK,) * 3,) * 2
    assert wrapped.height == 2
    assert wrapped.widest == 3


def test_rows_only_cover_used_lines():
    wrapped = wrap_text("HI", 255, 255)
    assert wrapped.rows == (codes("HI"),)
    assert wrapped.height == 1


def test_colour_glyph_is_one_cell():
    wrapped = wrap_text("🟥🟥 AB", 1, 5)
    assert wrapped.content_rows() == [(CharacterCode.RED, CharacterCode.RED) + codes(" AB")]


def test_trailing_spaces_are_stripped():
    assert strip_line_end_spaces("HI  \nYO  ") == "HI\nYO"
    assert strip_line_end_spaces("  A B") == "  A B"


def test_split_words_keeps_newlines():
    assert split_words("A B\nC") == ["A", "B\n", "C"]
    assert split_words("A  B") == ["A", "", "B"]
