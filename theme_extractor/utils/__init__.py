"""
Utilities package for theme_extractor.

Contains common utility functions used across the theme_extractor codebase.
"""

from .logging_utils import (
    log_data_processing,
    log_debug_operation,
    log_parsing_warning,
    log_resolution_warning,
)

__all__ = [
    "log_parsing_warning",
    "log_resolution_warning",
    "log_debug_operation",
    "log_data_processing",
]
