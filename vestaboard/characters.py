"""
Character codes understood by the split-flap display.

Every cell of a board holds one byte. The display only knows a sparse subset
of 0-100; anything outside that subset shows as a blank flap.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Dict


class CharacterCode(IntEnum):
    BLANK = 0
    A = 1
    B = 2
    C = 3
    D = 4
    E = 5
    F = 6
    G = 7
    H = 8
    I = 9  # noqa: E741
    J = 10
    K = 11
    L = 12
    M = 13
    N = 14
    O = 15  # noqa: E741
    P = 16
    Q = 17
    R = 18
    S = 19
    T = 20
    U = 21
    V = 22
    W = 23
    X = 24
    Y = 25
    Z = 26
    ONE = 27
    TWO = 28
    THREE = 29
    FOUR = 30
    FIVE = 31
    SIX = 32
    SEVEN = 33
    EIGHT = 34
    NINE = 35
    ZERO = 36
    EXCLAMATION_MARK = 37
    AT_SIGN = 38
    POUND_SIGN = 39
    DOLLAR_SIGN = 40
    LEFT_PAREN = 41
    RIGHT_PAREN = 42
    HYPHEN = 44
    PLUS_SIGN = 46
    AMPERSAND = 47
    EQUALS_SIGN = 48
    SEMICOLON = 49
    COLON = 50
    SINGLE_QUOTE = 52
    DOUBLE_QUOTE = 53
    PERCENT_SIGN = 54
    COMMA = 55
    PERIOD = 56
    SLASH = 59
    QUESTION_MARK = 60
    DEGREE_SIGN = 62
    RED = 63
    ORANGE = 64
    YELLOW = 65
    GREEN = 66
    BLUE = 67
    VIOLET = 68
    WHITE = 69
    BLACK = 70
    FILLED = 71
    NEWLINE = 100

    @classmethod
    def coerce(cls, value: int) -> "CharacterCode":
        """Map any integer to a known code, falling back to BLANK."""
        try:
            return cls(value)
        except ValueError:
            return cls.BLANK

    @classmethod
    def from_char(cls, char: str) -> "CharacterCode":
        return cls(to_code(char))

    @property
    def char(self) -> str:
        return to_char(self)

    @property
    def is_color(self) -> bool:
        return CharacterCode.RED <= self <= CharacterCode.FILLED


_CODE_TO_CHAR: Dict[int, str] = {
    0: " ",
    **{code: chr(ord("A") + code - 1) for code in range(1, 27)},
    **{code: str(code - 26) for code in range(27, 36)},
    36: "0",
    37: "!",
    38: "@",
    39: "#",
    40: "$",
    41: "(",
    42: ")",
    44: "-",
    46: "+",
    47: "&",
    48: "=",
    49: ";",
    50: ":",
    52: "'",
    53: '"',
    54: "%",
    55: ",",
    56: ".",
    59: "/",
    60: "?",
    62: "°",
    63: "🟥",
    64: "🟧",
    65: "🟨",
    66: "🟩",
    67: "🟦",
    68: "🟪",
    69: "⬜",
    70: "⬛",
    # FILLED has no glyph of its own on the display; it shows as white
    71: "⬜",
    100: "\n",
}

# FILLED is skipped so the white glyph keeps encoding as WHITE
_CHAR_TO_CODE: Dict[str, int] = {
    char: code for code, char in _CODE_TO_CHAR.items() if code != CharacterCode.FILLED
}

COLOR_GLYPHS = frozenset(_CODE_TO_CHAR[code] for code in range(63, 72))


def to_char(code: int) -> str:
    """Return the character shown for ``code``; unknown codes show as a space."""
    return _CODE_TO_CHAR.get(int(code), " ")


def to_code(char: str) -> int:
    """Return the code for ``char`` (ASCII is uppercased first); unknown chars are 0."""
    if char.isascii():
        char = char.upper()
    return _CHAR_TO_CODE.get(char, CharacterCode.BLANK.value)


def display_cell(code: int) -> str:
    """
    Render one cell for the bordered board view.

    Letters are centred in two columns so they line up with the colour glyphs,
    which already render double-width in a terminal.
    """
    char = to_char(code)
    if char in COLOR_GLYPHS:
        return f"{char:^1}"
    return f"{char:^2}"
