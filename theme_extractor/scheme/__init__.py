"""
Color scheme parsing and attribute resolution.
"""

from .attributes import (
    AttributeData,
    AttributeEntry,
    BaseRef,
    EffectType,
    EmptyAttribute,
    FontType,
)
from .color import RGBA, decode_color
from .color_scheme import ColorScheme
from .mappings import Mapping
from .reader import AttributeEvent, ColorEvent, SchemeEvent, SchemeReader
from .source_buffer import SourceBuffer, SourceSpan

__all__ = [
    "RGBA",
    "decode_color",
    "FontType",
    "EffectType",
    "AttributeData",
    "BaseRef",
    "EmptyAttribute",
    "AttributeEntry",
    "ColorEvent",
    "AttributeEvent",
    "SchemeEvent",
    "SchemeReader",
    "SourceBuffer",
    "SourceSpan",
    "ColorScheme",
    "Mapping",
]
