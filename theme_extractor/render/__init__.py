"""
Terminal rendering of value trees with scheme-derived colors.
"""

from .colored_value import ColoredValue, render_value
from .options import RenderOptions, color_enabled
from .palette import FALLBACK_COLOR, SLOT_ATTRIBUTES, Palette, terminal_color

__all__ = [
    "ColoredValue",
    "render_value",
    "RenderOptions",
    "color_enabled",
    "Palette",
    "FALLBACK_COLOR",
    "SLOT_ATTRIBUTES",
    "terminal_color",
]
