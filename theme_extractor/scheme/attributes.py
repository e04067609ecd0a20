"""
Text attribute entries of a color scheme.

An attribute entry is exactly one of:

- ``AttributeData``: the attribute declares its own fields
- ``BaseRef``: the attribute inherits everything from another named attribute
- ``EmptyAttribute``: the attribute carries no usable data
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, Dict, Optional, Union

from .color import RGBA, decode_color

logger = logging.getLogger(__name__)

__all__ = [
    "FontType",
    "EffectType",
    "AttributeData",
    "BaseRef",
    "EmptyAttribute",
    "AttributeEntry",
    "COLOR_FIELDS",
]


class FontType(Enum):
    NONE = 0
    BOLD = 1
    ITALIC = 2
    BOLD_ITALIC = 3


class EffectType(Enum):
    UNDERSCORED = 0
    BOLD_UNDERSCORED = 1
    UNDERWAVE = 2
    BORDERED = 3
    STRIKE = 4
    DOTTED = 5
    NONE = 6


# Field keys as they appear in scheme files, mapped to AttributeData fields
COLOR_FIELDS: Dict[str, str] = {
    "FOREGROUND": "foreground",
    "BACKGROUND": "background",
    "EFFECT_COLOR": "effect_color",
    "ERROR_STRIPE_COLOR": "error_stripe_color",
}


def _parse_ordinal(value: str, enum_type: Any, default: Any) -> Any:
    # Unsigned decimal only; "+1", "-1" and " 1" are rejected like any other junk
    if not value.isascii() or not value.isdigit():
        return default
    try:
        return enum_type(int(value))
    except ValueError:
        return default


@dataclass(frozen=True)
class AttributeData:
    foreground: Optional[RGBA] = None
    background: Optional[RGBA] = None
    effect_color: Optional[RGBA] = None
    error_stripe_color: Optional[RGBA] = None
    effect_type: EffectType = EffectType.NONE
    font_type: FontType = FontType.NONE

    def with_field(self, key: str, value: str) -> "AttributeData":
        """
        Return a copy with the field named by a scheme key set from its raw value.

        Unknown keys and undecodable colors leave the entry unchanged; enum
        values that do not parse fall back to NONE.
        """
        if key in COLOR_FIELDS:
            color = decode_color(value)
            if color is None:
                logger.debug(f"Ignoring undecodable {key} color {value!r}")
                return self
            return replace(self, **{COLOR_FIELDS[key]: color})
        if key == "FONT_TYPE":
            return replace(
                self, font_type=_parse_ordinal(value, FontType, FontType.NONE)
            )
        if key == "EFFECT_TYPE":
            return replace(
                self, effect_type=_parse_ordinal(value, EffectType, EffectType.NONE)
            )
        logger.debug(f"Ignoring unknown attribute field {key!r}")
        return self

    def to_dict(self) -> Dict[str, Any]:
        """Plain value tree of the fields that are set."""
        out: Dict[str, Any] = {}
        for key, field_name in COLOR_FIELDS.items():
            color = getattr(self, field_name)
            if color is not None:
                out[field_name] = color.to_text()
        if self.font_type is not FontType.NONE:
            out["font_type"] = self.font_type.name
        if self.effect_type is not EffectType.NONE:
            out["effect_type"] = self.effect_type.name
        return out


@dataclass(frozen=True)
class BaseRef:
    name: str


@dataclass(frozen=True)
class EmptyAttribute:
    pass


AttributeEntry = Union[AttributeData, BaseRef, EmptyAttribute]
