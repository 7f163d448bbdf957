"""
Cross-cutting validation logic for the board renderer.

This module provides the error hierarchy shared by the board, document and
compositor modules, plus validation functions for rules that span several
objects. Type-local invariants stay in the dataclass/model validators.

Cross-cutting rules validated here:
- Board dimensions are positive
- Raw boards match the target board size
- Component rectangles fit on the board (opt-in, strict mode only)
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .document import Document


class ValidationError(ValueError):
    """Base exception for validation errors."""
    pass


class BoardFormatError(ValidationError):
    """Raised when board text or nested rows cannot be turned into a board."""
    pass


class TooManyRowsError(BoardFormatError):
    """Raised when the input has more rows than the board."""

    def __init__(self, rows: int):
        super().__init__(f"too many rows in the input (board has {rows})")


class TooManyColsError(BoardFormatError):
    """Raised when an input row has more columns than the board."""

    def __init__(self, cols: int):
        super().__init__(f"too many columns in the input (board has {cols})")


class InvalidCharError(BoardFormatError):
    """Raised when a cell token is not a byte-sized integer."""

    def __init__(self, value: str):
        self.value = value
        super().__init__(f"invalid character in the input: {value!r}")


class InvalidLengthError(BoardFormatError):
    """Raised when the input has fewer rows or columns than the board."""
    pass


class BoardDimensionError(ValidationError):
    """Raised when board dimensions are invalid or don't match."""
    pass


class DocumentError(ValidationError):
    """Raised when a VBML document cannot be deserialized."""
    pass


class GeometryError(ValidationError):
    """Raised by strict geometry checks when a component doesn't fit the board."""
    pass


def validate_board_dimensions(rows: int, cols: int) -> None:
    """
    Validate a board size.

    Args:
        rows: Number of board rows
        cols: Number of board columns

    Raises:
        BoardDimensionError: If either dimension is not positive
    """
    if rows <= 0 or cols <= 0:
        raise BoardDimensionError(f"Board size must be positive, got {rows}x{cols}")


def validate_matching_dimensions(shape: tuple, rows: int, cols: int) -> None:
    """
    Validate that a board shape matches the target board.

    Cross-cutting rule: raw components carry a full board and must be the same
    size as the board they are composited onto.

    Raises:
        BoardDimensionError: If the shapes differ
    """
    if tuple(shape) != (rows, cols):
        raise BoardDimensionError(
            f"Board of size {shape[0]}x{shape[1]} doesn't match target {rows}x{cols}"
        )


def validate_document_geometry(document: "Document", rows: int, cols: int) -> None:
    """
    Strictly validate that every component rectangle fits on the board.

    The renderer clips anything that falls off the board; callers that would
    rather reject such documents run this first.

    Args:
        document: Parsed VBML document
        rows: Board rows
        cols: Board columns

    Raises:
        GeometryError: If a component is larger than the board or is absolutely
            positioned so that its rectangle leaves the board
    """
    validate_board_dimensions(rows, cols)

    for index, component in enumerate(document.components):
        style = component.style
        height = style.height if style.height is not None else rows
        width = style.width if style.width is not None else cols

        if height > rows or width > cols:
            raise GeometryError(
                f"Component {index} size {height}x{width} exceeds board {rows}x{cols}"
            )

        position = style.absolute_position
        if position is not None and (position.y + height > rows or position.x + width > cols):
            raise GeometryError(
                f"Component {index} at (x={position.x}, y={position.y}) "
                f"size {height}x{width} leaves board {rows}x{cols}"
            )
