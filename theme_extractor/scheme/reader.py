"""
Pull-based reader for IDE color scheme XML.

The reader walks one fragment of scheme text and yields a ColorEvent for every
named color and an AttributeEvent for every named text attribute. Markup is
tokenized incrementally: the text is fed to an expat parser in slices and
events are produced as each slice is scanned, so nothing is materialized up
front and no element tree is built.

A fragment does not need a single root. It is scanned inside a synthetic
wrapper element, so ``<colors>...</colors><attributes>...</attributes>`` reads
the same as the two sections nested in ``<scheme>``. A leading XML
declaration is blanked out before scanning.

Recognized layout::

    <scheme>
      <colors>
        <option name="CARET_COLOR" value="bbbbbb"/>
      </colors>
      <attributes>
        <option name="DEFAULT_STRING">
          <value>
            <option name="FOREGROUND" value="6a8759"/>
            <option name="FONT_TYPE" value="2"/>
          </value>
        </option>
        <option name="JSON_STRING" baseAttributes="DEFAULT_STRING"/>
      </attributes>
    </scheme>
"""

import logging
import re
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Iterator, Optional, Tuple, Union
from xml.parsers import expat

from ..exceptions import SchemeParseError
from ..utils.logging_utils import log_data_processing, log_debug_operation
from .attributes import AttributeData, AttributeEntry, BaseRef
from .color import RGBA, decode_color

logger = logging.getLogger(__name__)

__all__ = [
    "ColorEvent",
    "AttributeEvent",
    "SchemeEvent",
    "SchemeReader",
    "DEFAULT_CHUNK_SIZE",
]

DEFAULT_CHUNK_SIZE = 4096

_WRAPPER_OPEN = b"<scheme-fragment>"
_WRAPPER_CLOSE = b"</scheme-fragment>"
_DECLARATION = re.compile(r"\A(\ufeff?\s*)(<\?xml\b[^>]*\?>)")

# (kind, tag, attributes, self_closing)
_Tag = Tuple[str, str, Dict[str, str], bool]


@dataclass(frozen=True)
class ColorEvent:
    name: str
    color: RGBA


@dataclass(frozen=True)
class AttributeEvent:
    name: str
    entry: AttributeEntry


SchemeEvent = Union[ColorEvent, AttributeEvent]


def _blank_declaration(text: str) -> str:
    """Replace a leading ``<?xml ...?>`` with spaces, keeping line numbers."""
    match = _DECLARATION.match(text)
    if match is None:
        return text
    blank = re.sub(r"[^\n]", " ", match.group(2))
    return match.group(1) + blank + text[match.end() :]


def _is_self_closing(data: bytes, index: int) -> bool:
    """Whether the start tag beginning at ``data[index]`` ends with ``/>``."""
    quote = 0
    for i in range(index + 1, len(data)):
        byte = data[i]
        if quote:
            if byte == quote:
                quote = 0
        elif byte in (0x22, 0x27):
            quote = byte
        elif byte == 0x3E:
            return data[i - 1] == 0x2F
    return False


class SchemeReader:
    """Single-pass iterator of scheme events over one fragment of text.

    The reader is consumed as it is iterated and cannot be restarted; build a
    new reader to scan the same text again. Malformed options are skipped.
    Text that is not well-formed markup raises SchemeParseError.
    """

    def __init__(
        self,
        text: str,
        source: Optional[str] = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError("chunk_size must be positive")
        self._text = text
        self._source = source
        self._chunk_size = chunk_size
        self.in_colors: bool = False
        self.in_attributes: bool = False
        self.depth: int = 0
        self.skipped: int = 0
        self._attribute_name: Optional[str] = None
        self._attribute_depth: int = 0
        self._attribute: Optional[AttributeData] = None
        self._pending: Deque[_Tag] = deque()
        self._events = self._scan()

    def __iter__(self) -> "SchemeReader":
        return self

    def __next__(self) -> SchemeEvent:
        return next(self._events)

    # Scanning ---------------------------------------------------------
    def _scan(self) -> Iterator[SchemeEvent]:
        if not self._text.strip():
            return
        data = (
            _WRAPPER_OPEN
            + _blank_declaration(self._text).encode("utf-8")
            + _WRAPPER_CLOSE
        )
        parser = expat.ParserCreate("utf-8")

        def on_start(tag: str, attrs: Dict[str, str]) -> None:
            self_closing = _is_self_closing(data, parser.CurrentByteIndex)
            self._pending.append(("start", tag, attrs, self_closing))

        def on_end(tag: str) -> None:
            self._pending.append(("end", tag, {}, False))

        parser.StartElementHandler = on_start
        parser.EndElementHandler = on_end
        try:
            for offset in range(0, len(data), self._chunk_size):
                parser.Parse(data[offset : offset + self._chunk_size], False)
                yield from self._drain()
            parser.Parse(b"", True)
            yield from self._drain()
        except expat.ExpatError as e:
            line, column = e.lineno, e.offset
            if line == 1:
                column = max(column - len(_WRAPPER_OPEN), 0)
            context = {"line": line, "column": column}
            if self._source:
                context["source"] = self._source
            raise SchemeParseError(
                f"Malformed scheme markup: {expat.ErrorString(e.code)}: "
                f"line {line}, column {column}",
                context=context,
                original_exception=e,
            ) from e
        finally:
            self._pending.clear()
        log_data_processing(
            logger,
            "Scheme fragment scanned",
            f"{len(self._text)} chars, {self.skipped} options skipped",
        )

    def _drain(self) -> Iterator[SchemeEvent]:
        while self._pending:
            kind, tag, attrs, self_closing = self._pending.popleft()
            if kind == "start":
                self.depth += 1
                event = self._handle_start(tag, attrs, self_closing)
            else:
                event = self._handle_end(tag)
                self.depth -= 1
            if event is not None:
                yield event

    # State transitions --------------------------------------------------
    def _skip(self, tag: str, reason: str) -> None:
        self.skipped += 1
        log_debug_operation(logger, f"Skipping <{tag}>", reason)

    def _handle_start(
        self, tag: str, attrs: Dict[str, str], self_closing: bool
    ) -> Optional[SchemeEvent]:
        if tag == "colors":
            self.in_colors = True
            return None
        if tag == "attributes":
            self.in_attributes = True
            return None
        if tag != "option":
            return None

        if self._attribute is not None:
            key = attrs.get("name")
            value = attrs.get("value")
            if key is None or value is None:
                self._skip(tag, "attribute field without name or value")
                return None
            self._attribute = self._attribute.with_field(key, value)
            return None

        if self.in_attributes:
            name = attrs.get("name")
            if name is None:
                self._skip(tag, "attribute without name")
                return None
            base = attrs.get("baseAttributes")
            if base is not None:
                return AttributeEvent(name, BaseRef(base))
            if self_closing:
                self._skip(tag, f"attribute {name} without fields")
                return None
            self._attribute_name = name
            self._attribute_depth = self.depth
            self._attribute = AttributeData()
            return None

        if self.in_colors:
            name = attrs.get("name")
            value = attrs.get("value")
            if name is None or value is None:
                self._skip(tag, "color without name or value")
                return None
            color = decode_color(value)
            if color is None:
                self._skip(tag, f"undecodable color {value!r} for {name}")
                return None
            return ColorEvent(name, color)

        return None

    def _handle_end(self, tag: str) -> Optional[SchemeEvent]:
        if tag == "colors":
            self.in_colors = False
        elif tag == "attributes":
            self.in_attributes = False
        elif (
            tag == "option"
            and self._attribute is not None
            and self.depth == self._attribute_depth
        ):
            name = self._attribute_name
            data = self._attribute
            self._attribute_name = None
            self._attribute = None
            return AttributeEvent(name, data)
        return None
