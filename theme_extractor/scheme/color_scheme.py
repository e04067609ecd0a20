"""
In-memory color scheme model.

A ColorScheme is grown by ingesting scheme fragments one after another. Colors
and attributes live in insertion-ordered dicts: redefining a name in a later
fragment replaces its value but keeps its original position.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Set, Union

from ..exceptions import CyclicInheritanceError, SourceReadError
from ..utils.logging_utils import log_data_processing, log_resolution_warning
from .attributes import AttributeData, AttributeEntry, BaseRef, EmptyAttribute
from .color import RGBA
from .mappings import Mapping
from .reader import AttributeEvent, ColorEvent, SchemeEvent, SchemeReader
from .source_buffer import SourceBuffer, SourceSpan

logger = logging.getLogger(__name__)

__all__ = ["ColorScheme"]


class ColorScheme:
    """Ordered colors and attributes of one or more ingested scheme fragments."""

    def __init__(self) -> None:
        self.colors: Dict[str, RGBA] = {}
        self.attributes: Dict[str, AttributeEntry] = {}
        self.source = SourceBuffer()

    def __repr__(self) -> str:
        return (
            f"ColorScheme(colors={len(self.colors)}, "
            f"attributes={len(self.attributes)}, fragments={len(self.source)})"
        )

    # Ingestion --------------------------------------------------------
    @classmethod
    def parse(cls, text: str) -> "ColorScheme":
        scheme = cls()
        scheme.ingest(text)
        return scheme

    def ingest(self, text: str, source: Optional[str] = None) -> SourceSpan:
        """
        Add one scheme fragment.

        The fragment text is stored first, then scanned. Either every entry of
        the fragment is committed or, when the text is not well-formed markup,
        none is and SchemeParseError propagates.

        Args:
            text: Scheme XML text
            source: Optional label (usually a file path) used in errors and logs

        Returns:
            Span of the stored fragment in the scheme's source buffer
        """
        span = self.source.append(text, source)
        events: List[SchemeEvent] = list(
            SchemeReader(self.source.text(span), source=source)
        )
        for event in events:
            if isinstance(event, ColorEvent):
                self.colors[event.name] = event.color
            elif isinstance(event, AttributeEvent):
                self.attributes[event.name] = event.entry
        log_data_processing(
            logger,
            f"Ingested {source or 'fragment'}",
            f"{len(events)} entries, now {len(self.colors)} colors "
            f"and {len(self.attributes)} attributes",
        )
        return span

    def ingest_file(self, path: Union[str, Path]) -> SourceSpan:
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(
                f"Cannot read scheme file: {e}",
                context={"path": str(path)},
                original_exception=e,
            ) from e
        return self.ingest(text, source=str(path))

    # Resolution -------------------------------------------------------
    def resolve_attribute(self, name: str) -> Optional[AttributeData]:
        """
        Resolve an attribute through its baseAttributes chain.

        Returns:
            The first AttributeData reached, or None when the chain ends at a
            missing or empty attribute

        Raises:
            CyclicInheritanceError: if the chain revisits an attribute
        """
        chain: List[str] = []
        visited: Set[str] = set()
        current = name
        while True:
            if current in visited:
                chain.append(current)
                raise CyclicInheritanceError(chain)
            visited.add(current)
            chain.append(current)

            entry = self.attributes.get(current)
            if entry is None:
                return None
            if isinstance(entry, AttributeData):
                return entry
            if isinstance(entry, BaseRef):
                current = entry.name
                continue
            if isinstance(entry, EmptyAttribute):
                return None
            raise TypeError(f"Unknown attribute entry: {entry!r}")

    def resolve_attribute_via_mapping(
        self, mapping: Mapping, canonical_name: str
    ) -> Optional[AttributeData]:
        """First scheme attribute that resolves under any name mapped to canonical_name."""
        for name in mapping.attribute_names(canonical_name):
            data = self.resolve_attribute(name)
            if data is not None:
                return data
        return None

    def resolve_color_via_mapping(
        self, mapping: Mapping, canonical_name: str
    ) -> Optional[RGBA]:
        for name in mapping.color_names(canonical_name):
            color = self.colors.get(name)
            if color is not None:
                return color
        return None

    def resolved_attributes(self) -> Dict[str, AttributeData]:
        """Every attribute that resolves to data, in scheme order."""
        resolved: Dict[str, AttributeData] = {}
        for name in self.attributes:
            try:
                data = self.resolve_attribute(name)
            except CyclicInheritanceError as e:
                log_resolution_warning(logger, name, str(e))
                continue
            if data is not None:
                resolved[name] = data
        return resolved

    def to_value(self) -> Dict[str, Any]:
        """Plain value tree of the scheme, suitable for ColoredValue."""
        return {
            "colors": {name: color.to_text() for name, color in self.colors.items()},
            "attributes": {
                name: data.to_dict()
                for name, data in self.resolved_attributes().items()
            },
        }
