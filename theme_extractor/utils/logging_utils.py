"""
Centralized logging utilities for theme_extractor.

Provides standardized logging functions for common scenarios so that log lines
look the same no matter which module emits them.
"""

import logging
from typing import Any


def log_parsing_warning(logger: logging.Logger, operation: str, reason: str) -> None:
    """Log parsing warnings with consistent format."""
    logger.warning(f"{operation}: {reason}")


def log_resolution_warning(
    logger: logging.Logger, attribute: str, reason: str
) -> None:
    """Log attribute resolution problems with consistent format."""
    logger.warning(f"[RESOLVE] {attribute}: {reason}")


def log_debug_operation(
    logger: logging.Logger, operation: str, details: Any = None
) -> None:
    """Log debug information for operations."""
    if details is not None:
        logger.debug(f"{operation}: {details}")
    else:
        logger.debug(f"{operation}")


def log_data_processing(
    logger: logging.Logger, operation: str, data_info: str = ""
) -> None:
    """Log data processing operations with consistent format."""
    info_str = f" - {data_info}" if data_info else ""
    logger.debug(f"[DATA] {operation}{info_str}")


__all__ = [
    "log_parsing_warning",
    "log_resolution_warning",
    "log_debug_operation",
    "log_data_processing",
]
