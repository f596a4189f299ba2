"""Logging infrastructure with source-file context."""
import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


class SourceContextFilter(logging.Filter):
    """Add the input file being processed to log records."""

    def __init__(self):
        super().__init__()
        self.source: Optional[str] = None

    def filter(self, record):
        """Add source to record."""
        record.source = self.source or "-"
        return True


class SalesReportLogger:
    """Centralized logging manager."""

    def __init__(
        self,
        log_level: str = "WARNING",
        log_file: Optional[str] = None,
        max_file_size_mb: int = 10,
        backup_count: int = 5
    ):
        self.source_filter = SourceContextFilter()

        self.logger = logging.getLogger("salesreport")
        self.logger.setLevel(logging.DEBUG)
        self.logger.propagate = False

        # Remove existing handlers
        for handler in list(self.logger.handlers):
            handler.close()
        self.logger.handlers.clear()

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [source:%(source)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        # stdout carries the report table
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(getattr(logging, log_level.upper()))
        console_handler.setFormatter(formatter)
        console_handler.addFilter(self.source_filter)
        self.logger.addHandler(console_handler)

        if log_file:
            log_path = Path(log_file).expanduser()
            log_path.parent.mkdir(parents=True, exist_ok=True)
            file_handler = RotatingFileHandler(
                log_path,
                maxBytes=max_file_size_mb * 1024 * 1024,
                backupCount=backup_count,
                encoding="utf-8"
            )
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(formatter)
            file_handler.addFilter(self.source_filter)
            self.logger.addHandler(file_handler)

    def set_source_context(self, source: Optional[str]):
        """Set the input file currently being processed."""
        self.source_filter.source = source

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[SalesReportLogger] = None


def configure_logging(
    log_level: str = "WARNING",
    log_file: Optional[str] = None,
    max_file_size_mb: int = 10,
    backup_count: int = 5
) -> logging.Logger:
    """(Re)build the global logger with explicit settings."""
    global _logger_instance
    _logger_instance = SalesReportLogger(log_level, log_file, max_file_size_mb, backup_count)
    return _logger_instance.get_logger()


def get_logger(log_level: str = "WARNING") -> logging.Logger:
    """Get or create global logger instance."""
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = SalesReportLogger(log_level)
    return _logger_instance.get_logger()


def set_source_context(source: Optional[str]):
    """Set source context for logging."""
    if _logger_instance:
        _logger_instance.set_source_context(source)
