"""Structured logging module.

Provides configurable logging with JSON format support, selection context
tags and file rotation.
"""

from stream_selection.logging.config import configure_logging
from stream_selection.logging.context import SELECTION_FIELDS, SelectionContextFilter
from stream_selection.logging.handlers import JSONFormatter

__all__ = [
    "JSONFormatter",
    "SELECTION_FIELDS",
    "SelectionContextFilter",
    "configure_logging",
]
