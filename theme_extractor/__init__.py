"""
theme_extractor package init.
Exports the scheme model, palette and renderer, plus the command line entry point.
"""

import argparse
import datetime
import json
import logging
import os
import re
import sys
from typing import Any, Dict, List, Optional

from .exceptions import (
    CyclicInheritanceError,
    MappingError,
    RenderError,
    SchemeParseError,
    SourceReadError,
    ThemeExtractorError,
)
from .render import ColoredValue, Palette, RenderOptions, color_enabled, render_value
from .scheme import (
    RGBA,
    AttributeData,
    BaseRef,
    ColorScheme,
    EmptyAttribute,
    Mapping,
    SchemeReader,
    decode_color,
)

__version__ = "0.2.0"

_JETBRAINS_MAPPER = re.compile(r"(?i)jb|jetbrains")
_VSCODE_MAPPER = re.compile(r"(?i)(vs)?code")


class JSONFormatter(logging.Formatter):
    """JSON formatter with structured logging support."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: Dict[str, Any] = {
            "timestamp": datetime.datetime.now().isoformat(),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "message": record.getMessage(),
        }

        source = getattr(record, "source", None)
        if source:
            log_entry["source"] = source

        # Add extra structured data
        extra = getattr(record, "theme_extractor_extra", {})
        if extra:
            log_entry.update(extra)

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(level: str = "WARNING") -> None:
    """
    Setup basic logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    use_json = os.environ.get("THEME_EXTRACTOR_LOG_JSON", "false").lower() == "true"
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper()))
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    if use_json:
        handler = logging.StreamHandler()
        handler.setFormatter(JSONFormatter())
        root.addHandler(handler)
    else:
        logging.basicConfig(level=getattr(logging, level.upper()))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="theme-extractor",
        description="Read IDE color schemes and print them with their own colors",
    )
    parser.add_argument(
        "sources", nargs="+", help="Scheme XML files, ingested in order"
    )
    parser.add_argument(
        "-m",
        "--mapper",
        default="jb",
        help="Name mapping: 'jb'/'jetbrains', 'vscode', or a mapping JSON file",
    )
    parser.add_argument(
        "-o", "--out", help="Write output to this file (never colored)"
    )
    parser.add_argument(
        "--compact", action="store_true", help="Single-line output"
    )
    parser.add_argument(
        "--color",
        choices=["auto", "always", "never"],
        default="auto",
        help="Color output (default: auto)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level (default: WARNING)",
    )
    return parser


def _use_color(choice: str, out: Optional[str]) -> bool:
    if out:
        return False
    if choice == "always":
        return True
    if choice == "never":
        return False
    return color_enabled(sys.stdout)


def main(argv: Optional[List[str]] = None) -> int:
    """CLI entry point. Returns the process exit status."""
    args = _build_parser().parse_args(argv)
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    if _VSCODE_MAPPER.fullmatch(args.mapper):
        logger.error("Converting to VS Code themes is not supported")
        return 2

    try:
        if _JETBRAINS_MAPPER.fullmatch(args.mapper):
            mapping = Mapping.jetbrains()
        else:
            mapping = Mapping.from_file(args.mapper)

        scheme = ColorScheme()
        for source in args.sources:
            scheme.ingest_file(source)
        logger.info(f"Loaded {scheme!r}")

        palette = Palette.from_scheme(scheme, mapping)
        options = RenderOptions(
            pretty=not args.compact, color=_use_color(args.color, args.out)
        )
        text = ColoredValue(palette, scheme.to_value(), options).render()
    except ThemeExtractorError as e:
        logger.error(f"theme-extractor failed: {e}")
        return 1

    if args.out:
        try:
            with open(args.out, "w", encoding="utf-8") as f:
                f.write(text + "\n")
        except OSError as e:
            logger.error(f"Cannot write {args.out}: {e}")
            return 1
    else:
        sys.stdout.write(text + "\n")
    return 0


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()


__all__ = [
    "RGBA",
    "decode_color",
    "AttributeData",
    "BaseRef",
    "EmptyAttribute",
    "SchemeReader",
    "ColorScheme",
    "Mapping",
    "Palette",
    "ColoredValue",
    "RenderOptions",
    "render_value",
    "color_enabled",
    "ThemeExtractorError",
    "SchemeParseError",
    "SourceReadError",
    "MappingError",
    "CyclicInheritanceError",
    "RenderError",
    "setup_logging",
    "main",
]
