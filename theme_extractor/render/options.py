"""Rendering configuration."""

import os
import sys
from dataclasses import dataclass
from typing import Optional, TextIO

from rich.console import Console

__all__ = ["RenderOptions", "color_enabled"]


@dataclass(frozen=True)
class RenderOptions:
    """
    Options threaded through a render.

    Attributes:
        pretty: Multi-line output indented by two spaces per nesting level
        color: Emit terminal escape sequences; plain text when False
    """

    pretty: bool = False
    color: bool = True


def color_enabled(stream: Optional[TextIO] = None) -> bool:
    """
    Decide whether output written to ``stream`` should be colored.

    ``NO_COLOR`` disables color, ``FORCE_COLOR`` or ``CLICOLOR_FORCE`` enable
    it; otherwise color is used only when the stream is a color terminal.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR") or os.environ.get("CLICOLOR_FORCE", "0") != "0":
        return True
    console = Console(file=stream if stream is not None else sys.stdout)
    return console.is_terminal and console.color_system is not None
