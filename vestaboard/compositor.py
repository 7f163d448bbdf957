"""
Compositor - places VBML components onto a board.

Components without an absolute position flow left to right, wrapping to a new
band of rows once a component would run past the right edge. Absolutely
positioned components are placed after all flowed components, in document
order. Cells that land outside the board are dropped with a warning; rendering
never fails because content is too big.

Raw components replace the whole board with their cells. With several raw
components only the last one survives, and any template placed before it is
wiped out.
"""

from __future__ import annotations

import logging
import math
from typing import Mapping, Optional, Union

import numpy as np

from .board import FLAGSHIP_COLS, FLAGSHIP_ROWS, Board
from .document import (
    Align,
    Component,
    ComponentStyle,
    Document,
    Justify,
    RawComponent,
    parse_document,
)
from .template import expand_props, render_template
from .validation import validate_board_dimensions, validate_matching_dimensions
from .wrap import WrappedContent, wrap_text

logger = logging.getLogger(__name__)


def starting_row(align: Optional[Align], height: int, content_height: int) -> int:
    """Row offset of the content inside its rectangle."""
    spare = max(height - content_height, 0)
    if align == Align.CENTER:
        return math.floor(spare / 2)
    if align == Align.JUSTIFIED:
        return math.ceil(spare / 2)
    if align == Align.BOTTOM:
        return spare
    return 0


def starting_col(justify: Optional[Justify], width: int, row_len: int, widest: int) -> int:
    """Column offset of one content row inside its rectangle."""
    if justify == Justify.CENTER:
        return max(width - row_len, 0) // 2
    if justify == Justify.RIGHT:
        return max(width - row_len, 0)
    if justify == Justify.JUSTIFIED:
        # every row shares the offset of the widest one so the block stays aligned
        return max(width - widest, 0) // 2
    return 0


class Compositor:
    """
    Renders documents onto a board of a fixed size.

    A Compositor holds no state between renders, so one instance can be shared
    freely, including across threads.
    """

    def __init__(self, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS):
        validate_board_dimensions(rows, cols)
        self.rows = rows
        self.cols = cols

    def render(self, document: Document) -> Board:
        board = np.zeros((self.rows, self.cols), dtype=np.uint8)

        # stable: flowed components keep their order and come first
        components = sorted(
            document.components,
            key=lambda component: component.style.absolute_position is not None,
        )
        props = expand_props(document.props)

        cur_row = 0
        cur_col = 0
        max_row = 0

        for index, component in enumerate(components):
            style = component.style
            height = style.height if style.height is not None else self.rows
            width = style.width if style.width is not None else self.cols

            content = self._wrap(component, props, height, width)

            if cur_col + width > self.cols:
                cur_col = 0
                cur_row = max_row

            if style.absolute_position is not None:
                cur_row = style.absolute_position.y
                cur_col = style.absolute_position.x

            if content is None:
                raw = component.raw_characters
                validate_matching_dimensions(raw.shape, self.rows, self.cols)
                logger.debug(f"Component {index}: raw board replaces the whole board")
                board = raw.to_array()
                continue

            logger.debug(
                f"Component {index}: {height}x{width} at ({cur_row},{cur_col}), "
                f"content {content.height}x{content.widest}"
            )
            dropped = self._place(board, content, style, cur_row, cur_col, height, width)
            if dropped:
                logger.warning(
                    f"Component {index}: dropped {dropped} cells outside the "
                    f"{self.rows}x{self.cols} board"
                )

            cur_col += width
            max_row = max(max_row, cur_row + height)

        return Board(board)

    def _wrap(
        self,
        component: Component,
        props: Optional[Mapping[str, str]],
        height: int,
        width: int,
    ) -> Optional[WrappedContent]:
        if isinstance(component, RawComponent):
            return None
        text = render_template(component.template, props)
        return wrap_text(text, height, width)

    def _place(
        self,
        board: np.ndarray,
        content: WrappedContent,
        style: ComponentStyle,
        cur_row: int,
        cur_col: int,
        height: int,
        width: int,
    ) -> int:
        """Write wrapped content into ``board``; returns the number of clipped cells."""
        first_row = starting_row(style.align, height, content.height)
        dropped = 0

        # empty rows are skipped without leaving a gap
        lines = content.content_rows()
        for row_offset, line in enumerate(lines):
            row = cur_row + first_row + row_offset
            if row >= self.rows:
                # rows only move down from here
                dropped += sum(len(rest) for rest in lines[row_offset:])
                break
            if row < 0:
                dropped += len(line)
                continue

            start = cur_col + starting_col(style.justify, width, len(line), content.widest)
            lo = max(start, 0)
            hi = min(start + len(line), self.cols)
            if lo >= hi:
                dropped += len(line)
                continue

            board[row, lo:hi] = [int(code) for code in line[lo - start : hi - start]]
            dropped += len(line) - (hi - lo)

        return dropped


def render(
    document: Document, rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
) -> Board:
    """Render a parsed document onto a ``rows`` x ``cols`` board."""
    return Compositor(rows, cols).render(document)


def render_json(
    text: Union[str, bytes], rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
) -> Board:
    """Parse VBML JSON and render it onto a ``rows`` x ``cols`` board."""
    return render(parse_document(text, rows, cols), rows, cols)
