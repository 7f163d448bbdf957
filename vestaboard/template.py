"""
Template rendering for VBML components.

Two escapes are recognised:
    {N}       the character for code N
    {{name}}  the value of document prop ``name`` (empty when missing)

Anything that doesn't match either pattern is copied through unchanged.
"""

from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

from .characters import CharacterCode, to_char

PROPS_PATTERN = re.compile(r"\{(\d+)\}")
TEMPLATE_PATTERN = re.compile(r"\{(\d+)\}|\{\{([A-Za-z0-9]+)\}\}")


def _code_escape(match: re.Match) -> str:
    code = int(match.group(1))
    # not a byte, so not a character code: leave the escape alone
    if code > 0xFF:
        return match.group(0)
    return to_char(CharacterCode.coerce(code))


def expand_props(props: Optional[Mapping[str, str]]) -> Optional[Dict[str, str]]:
    """Expand ``{N}`` escapes inside every prop value."""
    if props is None:
        return None
    return {name: PROPS_PATTERN.sub(_code_escape, value) for name, value in props.items()}


def render_template(template: str, props: Optional[Mapping[str, str]] = None) -> str:
    """
    Substitute code and prop escapes in ``template``.

    ``props`` should already have been passed through :func:`expand_props`;
    prop values are inserted as-is and not scanned again.
    """

    def replace(match: re.Match) -> str:
        if match.group(1) is not None:
            return _code_escape(match)
        if props is not None:
            return props.get(match.group(2), "")
        return ""

    return TEMPLATE_PATTERN.sub(replace, template)
