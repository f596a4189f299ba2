"""SalesReport: unit and revenue summaries of e-commerce sales exports."""
from .report import (
    ColumnAliases,
    GroupRule,
    GroupRules,
    Money,
    ProductAggregate,
    Report,
    SalesRecord,
    build,
    read_records,
    render
)
from .utils.exceptions import ConfigError, ParseError, RecordError, SalesReportError

__version__ = "0.3.0"

__all__ = [
    "ColumnAliases",
    "GroupRule",
    "GroupRules",
    "Money",
    "ProductAggregate",
    "Report",
    "SalesRecord",
    "build",
    "read_records",
    "render",
    "ConfigError",
    "ParseError",
    "RecordError",
    "SalesReportError"
]
