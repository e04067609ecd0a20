"""
Hex color decoding for IDE color schemes.

Scheme files store colors as bare hex strings of varying width ("0", "808080",
"ff000080"). The decoder does not slice the text into channel pairs: it parses
the whole string as one integer and reads channels out of its little-endian
byte layout, choosing the layout by the length of the text.

A decoded color remembers the text it came from, so exports can reproduce the
scheme file exactly. The text takes no part in equality.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple

__all__ = ["RGBA", "decode_color"]


@dataclass(frozen=True)
class RGBA:
    r: int
    g: int
    b: int
    a: int = 255
    source_text: Optional[str] = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        for channel in (self.r, self.g, self.b, self.a):
            if not 0 <= channel <= 0xFF:
                raise ValueError(f"Channel value out of range: {channel}")

    def rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_hex(self) -> str:
        """Format as ``#rrggbb``, or ``#rrggbbaa`` when not fully opaque."""
        text = f"#{self.r:02x}{self.g:02x}{self.b:02x}"
        if self.a != 0xFF:
            text += f"{self.a:02x}"
        return text

    def to_text(self) -> str:
        """The scheme text this color was decoded from, else ``to_hex()``."""
        if self.source_text is not None:
            return self.source_text
        return self.to_hex()


def decode_color(text: str) -> Optional[RGBA]:
    """
    Decode a scheme color string.

    Args:
        text: Hex color with an optional leading ``#``

    Returns:
        The decoded color, or None when the text is not 1-8 hex digits
    """
    digits = text[1:] if text.startswith("#") else text
    if not digits or any(c not in "0123456789abcdefABCDEF" for c in digits):
        return None
    value = int(digits, 16)
    if value > 0xFFFFFFFF:
        return None
    b0, b1, b2, b3 = value.to_bytes(4, "little")

    length = len(digits)
    if length <= 2:
        return RGBA(b0, b0, b0, 0xFF, text)
    if length <= 4:
        return RGBA(b0, b1, b1, 0xFF, text)
    if length <= 6:
        return RGBA(b0, b1, b2, 0xFF, text)
    if length <= 8:
        return RGBA(b0, b1, b2, b3, text)
    return None
