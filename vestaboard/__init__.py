"""
Vestaboard board rendering package.

This package provides:
- Character code tables for the split-flap display
- A fixed-size Board model with layout parsing and pretty printing
- VBML document loading, template rendering and word wrapping
- The compositor that places components onto a board
- Thin HTTP transports and a small render server
"""

from .board import FLAGSHIP_COLS, FLAGSHIP_ROWS, Board
from .characters import CharacterCode, to_char, to_code
from .compositor import Compositor, render, render_json
from .document import (
    AbsolutePosition,
    Align,
    ComponentStyle,
    Document,
    DocumentStyle,
    Justify,
    RawComponent,
    TemplateComponent,
    parse_document,
)

__version__ = "0.1.0"

__all__ = [
    "FLAGSHIP_COLS",
    "FLAGSHIP_ROWS",
    "Board",
    "CharacterCode",
    "to_char",
    "to_code",
    "Compositor",
    "render",
    "render_json",
    "AbsolutePosition",
    "Align",
    "ComponentStyle",
    "Document",
    "DocumentStyle",
    "Justify",
    "RawComponent",
    "TemplateComponent",
    "parse_document",
]
