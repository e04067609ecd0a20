"""
Colored rendering of plain value trees.

Values are the shapes produced by ``json.loads``: None, bool, int, float, str,
lists (or tuples) and dicts. Every token is painted with the matching palette
slot; object keys keep the dict's iteration order.

Compact output::

    {"a": 1, "b": [true, null]}

Pretty output indents two spaces per nesting level::

    {
      "a": 1,
      "b": [
        true,
        null
      ]
    }
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from rich.color import Color, ColorSystem
from rich.style import Style

from ..exceptions import RenderError
from .options import RenderOptions
from .palette import Palette

logger = logging.getLogger(__name__)

__all__ = ["ColoredValue", "render_value", "INDENT"]

INDENT = "  "


class ColoredValue:
    """A value tree bound to a palette, rendered at a nesting depth."""

    def __init__(
        self,
        palette: Palette,
        value: Any,
        options: Optional[RenderOptions] = None,
        depth: int = 0,
    ) -> None:
        self.palette = palette
        self.value = value
        self.options = options if options is not None else RenderOptions()
        self.depth = depth
        self._styles: Dict[Color, Style] = {}

    def nest(self, value: Any) -> "ColoredValue":
        """Child value one level deeper, sharing palette and options."""
        child = ColoredValue(self.palette, value, self.options, self.depth + 1)
        child._styles = self._styles
        return child

    def render(self) -> str:
        out: List[str] = []
        self._write(out)
        return "".join(out)

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return (
            f"ColoredValue(depth={self.depth}, pretty={self.options.pretty}, "
            f"color={self.options.color})"
        )

    # Painting ---------------------------------------------------------
    def _paint(self, text: str, color: Color) -> str:
        if not self.options.color:
            return text
        style = self._styles.get(color)
        if style is None:
            style = self._styles[color] = Style(color=color)
        return style.render(text, color_system=ColorSystem.TRUECOLOR)

    def _quoted(self, text: str, color: Color) -> str:
        quote = self._paint('"', color)
        return quote + self._paint(text, color) + quote

    # Writing ----------------------------------------------------------
    def _write(self, out: List[str]) -> None:
        value = self.value
        palette = self.palette
        if value is None:
            out.append(self._paint("null", palette.null))
        elif isinstance(value, bool):
            out.append(self._paint("true" if value else "false", palette.bool))
        elif isinstance(value, (int, float)):
            out.append(self._paint(json.dumps(value), palette.number))
        elif isinstance(value, Decimal):
            out.append(self._paint(str(value), palette.number))
        elif isinstance(value, str):
            out.append(self._quoted(value, palette.string))
        elif isinstance(value, (list, tuple)):
            self._write_array(out, value)
        elif isinstance(value, dict):
            self._write_object(out, value)
        else:
            raise RenderError(
                f"Cannot render value of type {type(value).__name__}",
                context={"depth": self.depth},
            )

    def _write_array(self, out: List[str], items: Any) -> None:
        color = self.palette.brackets
        out.append(self._paint("[", color))
        if items:
            for i, item in enumerate(items):
                self._write_separator(out, i)
                self.nest(item)._write(out)
            self._write_closing_break(out)
        out.append(self._paint("]", color))

    def _write_object(self, out: List[str], entries: Dict[Any, Any]) -> None:
        color = self.palette.braces
        out.append(self._paint("{", color))
        if entries:
            for i, (key, item) in enumerate(entries.items()):
                if not isinstance(key, str):
                    raise RenderError(
                        f"Object keys must be strings, got {type(key).__name__}",
                        context={"depth": self.depth, "key": repr(key)},
                    )
                self._write_separator(out, i)
                out.append(self._quoted(key, self.palette.key))
                out.append(self._paint(": ", self.palette.colon))
                self.nest(item)._write(out)
            self._write_closing_break(out)
        out.append(self._paint("}", color))

    def _write_separator(self, out: List[str], index: int) -> None:
        # Comes before every item: a comma after the previous one, then in
        # pretty mode a line break and the child indentation
        if self.options.pretty:
            if index:
                out.append(self._paint(",", self.palette.comma))
            out.append("\n")
            out.append(INDENT * (self.depth + 1))
        elif index:
            out.append(self._paint(", ", self.palette.comma))

    def _write_closing_break(self, out: List[str]) -> None:
        if self.options.pretty:
            out.append("\n")
            out.append(INDENT * self.depth)


def render_value(
    palette: Palette,
    value: Any,
    pretty: bool = False,
    color: bool = True,
) -> str:
    """Render a value tree in one call."""
    options = RenderOptions(pretty=pretty, color=color)
    return ColoredValue(palette, value, options).render()
