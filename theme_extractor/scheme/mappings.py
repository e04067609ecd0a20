"""
Canonical name tables.

A mapping associates a canonical color or attribute name (the names the
renderer asks for, such as ``DEFAULT_STRING``) with the names a particular
scheme dialect uses for the same thing. The document format is JSON::

    {
      "colors": {"EDITOR_BACKGROUND": ["editor.background"]},
      "attributes": {"DEFAULT_STRING": ["string", "string.quoted"], "X": null}
    }

``null`` entries and ``null`` list members are dropped. A bare string is
accepted in place of a one-element list.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping as TypingMapping, Optional, Union

from ..exceptions import MappingError, SourceReadError

logger = logging.getLogger(__name__)

__all__ = ["Mapping"]

NameTable = Dict[str, List[str]]


def _normalize_table(section: str, raw: Any) -> NameTable:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise MappingError(
            f"Mapping section '{section}' must be an object",
            context={"section": section, "type": type(raw).__name__},
        )
    table: NameTable = {}
    for canonical, names in raw.items():
        if names is None:
            continue
        if isinstance(names, str):
            names = [names]
        if not isinstance(names, list):
            raise MappingError(
                f"Mapping entry '{canonical}' must be a list of names",
                context={"section": section, "name": canonical},
            )
        kept = [n for n in names if n is not None]
        for n in kept:
            if not isinstance(n, str):
                raise MappingError(
                    f"Mapping entry '{canonical}' contains a non-string name",
                    context={"section": section, "name": canonical, "value": n},
                )
        table[canonical] = kept
    return table


class Mapping:
    """Canonical name to scheme-specific names, for colors and attributes."""

    def __init__(
        self,
        colors: Optional[TypingMapping[str, List[str]]] = None,
        attributes: Optional[TypingMapping[str, List[str]]] = None,
        passthrough: bool = False,
    ) -> None:
        """
        Initialize a mapping.

        Args:
            colors: Canonical color name -> scheme color names
            attributes: Canonical attribute name -> scheme attribute names
            passthrough: When True, a canonical name without an entry maps to itself
        """
        self.colors: NameTable = {k: list(v) for k, v in (colors or {}).items()}
        self.attributes: NameTable = {
            k: list(v) for k, v in (attributes or {}).items()
        }
        self.passthrough = passthrough

    def __repr__(self) -> str:
        return (
            f"Mapping(colors={len(self.colors)}, attributes={len(self.attributes)}, "
            f"passthrough={self.passthrough})"
        )

    # Construction -----------------------------------------------------
    @classmethod
    def jetbrains(cls) -> "Mapping":
        """Mapping for JetBrains schemes, which use the canonical names directly."""
        return cls(passthrough=True)

    @classmethod
    def from_dict(cls, data: Any) -> "Mapping":
        if not isinstance(data, dict):
            raise MappingError(
                "Mapping document must be an object",
                context={"type": type(data).__name__},
            )
        return cls(
            colors=_normalize_table("colors", data.get("colors")),
            attributes=_normalize_table("attributes", data.get("attributes")),
        )

    @classmethod
    def from_json_str(cls, text: str) -> "Mapping":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise MappingError(
                f"Invalid mapping JSON: {e.msg}",
                context={"line": e.lineno, "column": e.colno},
                original_exception=e,
            ) from e
        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Mapping":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise SourceReadError(
                f"Cannot read mapping file: {e}",
                context={"path": str(path)},
                original_exception=e,
            ) from e
        mapping = cls.from_json_str(text)
        logger.debug(f"Loaded mapping from {path}: {mapping!r}")
        return mapping

    # Lookup -----------------------------------------------------------
    def _lookup(self, table: NameTable, canonical: str) -> List[str]:
        if canonical in table:
            return list(table[canonical])
        if self.passthrough:
            return [canonical]
        return []

    def attribute_names(self, canonical: str) -> List[str]:
        """Scheme attribute names for a canonical attribute, in priority order."""
        return self._lookup(self.attributes, canonical)

    def color_names(self, canonical: str) -> List[str]:
        """Scheme color names for a canonical color, in priority order."""
        return self._lookup(self.colors, canonical)
