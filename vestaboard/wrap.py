"""
Word wrapping of rendered template text into a component rectangle.

This is a greedy line breaker with one word of look-ahead for the separating
blank. Output must stay cell-for-cell identical to boards rendered by the
Vestaboard apps.

Word lengths are counted in characters, so a colour glyph or ``°`` is one cell
wide. Renderers that measure UTF-8 bytes treat those words as 2-4 cells longer
and can break a line earlier than this module does.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Tuple

from .characters import CharacterCode

logger = logging.getLogger(__name__)

# Chunks of text each ending in (and keeping) a newline, plus any tail
_LINE_CHUNKS = re.compile(r"[^\n]*\n|[^\n]+")


@dataclass(frozen=True)
class WrappedContent:
    """
    Result of wrapping text into a rectangle.

    rows runs up to the last row that received content; rows without content
    are empty.
    height is the number of rows the text reached (last used row + 1) and
    widest is the length of the longest row.
    """

    rows: Tuple[Tuple[CharacterCode, ...], ...]
    height: int
    widest: int

    def content_rows(self) -> List[Tuple[CharacterCode, ...]]:
        return [row for row in self.rows if row]


def strip_line_end_spaces(text: str) -> str:
    """Drop spaces sitting at the end of the text or directly before a newline."""
    kept: List[str] = []
    removing = True
    for char in reversed(text):
        if removing and char == " ":
            continue
        removing = char == "\n"
        kept.append(char)
    return "".join(reversed(kept))


def split_words(text: str) -> List[str]:
    """Split on spaces, keeping each newline attached to the word before it."""
    return [word for chunk in _LINE_CHUNKS.findall(text) for word in chunk.split(" ")]


def _emit(rows: List[List[CharacterCode]], row: int, code: CharacterCode) -> None:
    while len(rows) <= row:
        rows.append([])
    rows[row].append(code)


def wrap_text(text: str, height: int, width: int) -> WrappedContent:
    """
    Lay ``text`` out into ``height`` rows of at most ``width`` cells.

    Empty text yields a rectangle full of blanks. Text that runs past the last
    row is dropped without error.
    """
    if not text:
        blank_row = (CharacterCode.BLANK,) * width
        return WrappedContent(rows=(blank_row,) * height, height=height, widest=width)

    rows: List[List[CharacterCode]] = []
    words = split_words(strip_line_end_spaces(text))
    logger.debug(f"Wrapping {len(words)} words into {height}x{width}")

    row = 0
    col = 0
    for index, word in enumerate(words):
        next_word = words[index + 1] if index + 1 < len(words) else None

        # words that fit on an empty row don't get split across rows
        if len(word) > width - col and len(word) < width and not word.startswith("\n"):
            col = 0
            row += 1

        ended_on_newline = False
        for char in word:
            code = CharacterCode.from_char(char)

            if col >= width:
                col = 0
                row += 1
                if code == CharacterCode.NEWLINE:
                    ended_on_newline = True
                    continue

            if code == CharacterCode.NEWLINE:
                col = 0
                row += 1
                ended_on_newline = True
                continue

            if row >= height:
                break

            _emit(rows, row, code)
            col += 1

        if (
            next_word is not None
            and col < width
            and len(next_word) < width - col
            and not ended_on_newline
            and row < height
        ):
            _emit(rows, row, CharacterCode.BLANK)
            col += 1

    widest = max((len(line) for line in rows), default=0)
    return WrappedContent(rows=tuple(tuple(line) for line in rows), height=row + 1, widest=widest)
