"""Custom exception classes for SalesReport."""
from typing import Optional


class SalesReportError(Exception):
    """Base exception for SalesReport."""
    pass


class ConfigError(SalesReportError):
    """Settings or group configuration errors."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        line: Optional[int] = None,
        content: Optional[str] = None
    ):
        super().__init__(message)
        self.path = path
        self.line = line
        self.content = content


class RecordError(SalesReportError):
    """CSV sales data errors."""

    def __init__(self, message: str, path: Optional[str] = None, line: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.line = line


class ParseError(SalesReportError):
    """Money amount parsing errors."""
    pass
