"""Fixed-width table rendering for a sales report."""
from typing import List

from .aggregator import Report

NAME_HEADER = "Product / Group"
UNITS_HEADER = "Units"
REVENUE_HEADER = "Revenue"
TOTAL_LABEL = "Total"


def render(
    report: Report,
    sort_by_revenue: bool = False,
    units_width: int = 6,
    revenue_width: int = 12
) -> str:
    """
    Render the report as an aligned table.

    The name column is as wide as the longest display name (never narrower
    than its header), so an empty report still renders header, rules and a
    zero totals row.

    Args:
        report: Aggregated sales
        sort_by_revenue: Order rows by revenue instead of unit sales
        units_width: Width of the units column
        revenue_width: Width of the revenue column

    Returns:
        Table text, one line per row, newline terminated
    """
    names = report.products_by_revenue() if sort_by_revenue else report.products_by_units()
    width = max([len(NAME_HEADER)] + [len(name) for name in names])
    rule = "-" * (width + units_width + revenue_width + 2)

    lines: List[str] = [
        f"{NAME_HEADER:<{width}} {UNITS_HEADER:>{units_width}} {REVENUE_HEADER:>{revenue_width}}",
        rule
    ]
    for name in names:
        product = report.products[name]
        lines.append(f"{name:<{width}} {product.units:>{units_width}} {product.revenue.format(revenue_width)}")
    lines.append(rule)
    lines.append(
        f"{TOTAL_LABEL:<{width}} {report.total_units:>{units_width}} {report.total_revenue.format(revenue_width)}"
    )
    return "\n".join(lines) + "\n"
