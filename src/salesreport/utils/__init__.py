"""Utility modules."""
from .logger import configure_logging, get_logger, set_source_context
from .exceptions import (
    SalesReportError,
    ConfigError,
    RecordError,
    ParseError
)

__all__ = [
    "configure_logging",
    "get_logger",
    "set_source_context",
    "SalesReportError",
    "ConfigError",
    "RecordError",
    "ParseError"
]
