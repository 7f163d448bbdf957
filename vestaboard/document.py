"""
VBML document model.

A document is JSON of the form::

    {
      "props": {"name": "value"},
      "style": {"height": 6, "width": 22},
      "components": [
        {"style": {...}, "template": "HELLO {{name}}"},
        {"style": {...}, "rawCharacters": [[0, 0, ...], ...]}
      ]
    }

Each component carries exactly one of ``template`` or ``rawCharacters``.
Raw boards are checked against the target board size while loading, so a
document is always loaded for one board size.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_serializer,
    field_validator,
)
from pydantic import ValidationError as PydanticValidationError

from .board import FLAGSHIP_COLS, FLAGSHIP_ROWS, Board
from .validation import BoardFormatError, DocumentError

logger = logging.getLogger(__name__)


class Justify(str, Enum):
    CENTER = "center"
    LEFT = "left"
    RIGHT = "right"
    JUSTIFIED = "justified"


class Align(str, Enum):
    CENTER = "center"
    TOP = "top"
    BOTTOM = "bottom"
    JUSTIFIED = "justified"
    # informational; placement comes from absolutePosition
    ABSOLUTE = "absolute"


def _to_camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.title() for part in tail)


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=_to_camel, populate_by_name=True)


class AbsolutePosition(_WireModel):
    x: int = Field(ge=0)
    y: int = Field(ge=0)


# component rectangles larger than this are rejected when the document loads
MAX_COMPONENT_SIZE = 255


class ComponentStyle(_WireModel):
    justify: Optional[Justify] = None
    align: Optional[Align] = None
    height: Optional[int] = Field(default=None, ge=0, le=MAX_COMPONENT_SIZE)
    width: Optional[int] = Field(default=None, ge=0, le=MAX_COMPONENT_SIZE)
    absolute_position: Optional[AbsolutePosition] = None


class DocumentStyle(_WireModel):
    """Document-level size hints. Accepted for compatibility, ignored when rendering."""

    height: Optional[int] = Field(default=None, ge=0)
    width: Optional[int] = Field(default=None, ge=0)


class TemplateComponent(_WireModel):
    style: ComponentStyle = Field(default_factory=ComponentStyle)
    template: str


class RawComponent(_WireModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    style: ComponentStyle = Field(default_factory=ComponentStyle)
    raw_characters: Board

    @field_validator("raw_characters", mode="before")
    @classmethod
    def _load_board(cls, value: Any, info: ValidationInfo) -> Board:
        context = info.context or {}
        rows = context.get("rows", FLAGSHIP_ROWS)
        cols = context.get("cols", FLAGSHIP_COLS)

        if isinstance(value, Board):
            if value.shape != (rows, cols):
                raise ValueError(
                    f"raw board is {value.rows}x{value.cols}, expected {rows}x{cols}"
                )
            return value
        if isinstance(value, str):
            return Board.parse(value, rows, cols)
        if not isinstance(value, (list, tuple)):
            raise ValueError(
                f"rawCharacters must be a list of rows or a layout string, got {type(value).__name__}"
            )
        return Board.from_rows(value, rows, cols)

    @field_serializer("raw_characters")
    def _dump_board(self, board: Board) -> List[List[int]]:
        return board.to_rows()


Component = Union[RawComponent, TemplateComponent]


def _load_component(entry: Any, context: Dict[str, int]) -> Component:
    if isinstance(entry, (RawComponent, TemplateComponent)):
        return entry
    if not isinstance(entry, dict):
        raise ValueError(f"component must be an object, got {type(entry).__name__}")

    has_raw = "rawCharacters" in entry or "raw_characters" in entry
    has_template = "template" in entry
    if has_raw and has_template:
        raise ValueError("component has both rawCharacters and template")
    if not has_raw and not has_template:
        raise ValueError("component needs one of rawCharacters or template")

    model = RawComponent if has_raw else TemplateComponent
    return model.model_validate(entry, context=context)


class Document(_WireModel):
    """
    A VBML document.

    Attributes:
        props: values for ``{{name}}`` escapes in templates
        style: document size hints (currently ignored)
        components: components in document order
    """

    props: Optional[Dict[str, str]] = None
    style: Optional[DocumentStyle] = None
    components: List[Component]

    @field_validator("components", mode="before")
    @classmethod
    def _load_components(cls, value: Any, info: ValidationInfo) -> List[Component]:
        if not isinstance(value, list):
            raise ValueError("components must be a list")
        context = info.context or {}
        try:
            return [_load_component(entry, context) for entry in value]
        except (BoardFormatError, PydanticValidationError) as e:
            raise ValueError(str(e)) from e

    @classmethod
    def from_json(
        cls, text: Union[str, bytes], rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
    ) -> Document:
        try:
            return cls.model_validate_json(text, context={"rows": rows, "cols": cols})
        except PydanticValidationError as e:
            raise DocumentError(f"failed to deserialize VBML: {e}") from e

    @classmethod
    def from_dict(
        cls, data: Dict[str, Any], rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
    ) -> Document:
        try:
            return cls.model_validate(data, context={"rows": rows, "cols": cols})
        except PydanticValidationError as e:
            raise DocumentError(f"failed to deserialize VBML: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True, exclude_none=True)


def parse_document(
    text: Union[str, bytes], rows: int = FLAGSHIP_ROWS, cols: int = FLAGSHIP_COLS
) -> Document:
    """Deserialize VBML JSON for a ``rows`` x ``cols`` board."""
    document = Document.from_json(text, rows, cols)
    logger.debug(f"Parsed VBML document with {len(document.components)} components")
    return document
