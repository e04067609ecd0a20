"""
Terminal palette derived from a color scheme.

Each of the nine slots takes the foreground of a canonical scheme attribute.
Slots whose attribute cannot be resolved, or that has no foreground, fall back
to bright white.
"""

import logging
from dataclasses import dataclass, fields
from typing import Dict, Optional

from rich.color import Color

from ..exceptions import CyclicInheritanceError
from ..scheme.color import RGBA
from ..scheme.color_scheme import ColorScheme
from ..scheme.mappings import Mapping
from ..utils.logging_utils import log_resolution_warning

logger = logging.getLogger(__name__)

__all__ = ["FALLBACK_COLOR", "SLOT_ATTRIBUTES", "Palette", "terminal_color"]

FALLBACK_COLOR = Color.parse("bright_white")

# Palette slot -> canonical attribute whose foreground fills it
SLOT_ATTRIBUTES: Dict[str, str] = {
    "string": "DEFAULT_STRING",
    "number": "DEFAULT_NUMBER",
    "null": "DEFAULT_KEYWORD",
    "bool": "DEFAULT_KEYWORD",
    "key": "DEFAULT_INSTANCE_FIELD",
    "brackets": "DEFAULT_BRACKETS",
    "braces": "DEFAULT_BRACES",
    "comma": "DEFAULT_COMMA",
    "colon": "DEFAULT_COMMA",
}


def terminal_color(color: Optional[RGBA]) -> Color:
    """Truecolor terminal color for a scheme color; alpha is dropped."""
    if color is None:
        return FALLBACK_COLOR
    return Color.from_rgb(color.r, color.g, color.b)


@dataclass(frozen=True)
class Palette:
    string: Color = FALLBACK_COLOR
    number: Color = FALLBACK_COLOR
    null: Color = FALLBACK_COLOR
    bool: Color = FALLBACK_COLOR
    key: Color = FALLBACK_COLOR
    brackets: Color = FALLBACK_COLOR
    braces: Color = FALLBACK_COLOR
    comma: Color = FALLBACK_COLOR
    colon: Color = FALLBACK_COLOR

    @classmethod
    def default(cls) -> "Palette":
        return cls()

    @classmethod
    def from_scheme(cls, scheme: ColorScheme, mapping: Mapping) -> "Palette":
        """Build the palette; never fails, unresolved slots use the fallback."""
        foregrounds: Dict[str, Optional[RGBA]] = {}
        slots: Dict[str, Color] = {}
        for slot, canonical in SLOT_ATTRIBUTES.items():
            if canonical not in foregrounds:
                foregrounds[canonical] = _foreground(scheme, mapping, canonical)
            slots[slot] = terminal_color(foregrounds[canonical])
        palette = cls(**slots)
        logger.debug(f"Derived palette {palette.describe()}")
        return palette

    def describe(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name).name for f in fields(self)}


def _foreground(
    scheme: ColorScheme, mapping: Mapping, canonical: str
) -> Optional[RGBA]:
    try:
        data = scheme.resolve_attribute_via_mapping(mapping, canonical)
    except CyclicInheritanceError as e:
        log_resolution_warning(logger, canonical, str(e))
        return None
    if data is None:
        logger.debug(f"No attribute for {canonical}, using fallback color")
        return None
    return data.foreground
