"""Sales grouping, aggregation and presentation."""
from .money import Money
from .groups import GroupRule, GroupRules
from .records import ColumnAliases, SalesRecord, read_records
from .aggregator import ProductAggregate, Report, build
from .presenter import render

__all__ = [
    "Money",
    "GroupRule",
    "GroupRules",
    "ColumnAliases",
    "SalesRecord",
    "read_records",
    "ProductAggregate",
    "Report",
    "build",
    "render"
]
