"""Sales aggregation by product or product group."""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

from ..utils.logger import get_logger, set_source_context
from .groups import GroupRules
from .money import Money
from .records import ColumnAliases, SalesRecord, read_records

logger = get_logger()


@dataclass
class ProductAggregate:
    """Accumulated sales for one display name."""
    units: int = 0
    revenue: Money = field(default_factory=Money)


class Report:
    """Holds sales data keyed by display name, plus grand totals.

    Display names are the group name of the first matching rule, or the
    line item name when nothing matches.
    """

    def __init__(
        self,
        groups: Optional[GroupRules] = None,
        aliases: Optional[ColumnAliases] = None,
        encoding: str = "utf-8-sig",
        fuzzy_threshold: int = 3
    ):
        self.groups = groups if groups is not None else GroupRules()
        self.aliases = aliases or ColumnAliases()
        self.encoding = encoding
        self.fuzzy_threshold = fuzzy_threshold
        self.products: Dict[str, ProductAggregate] = {}
        self.total_units = 0
        self.total_revenue = Money()

    def display_name(self, item_name: str) -> str:
        """Resolve the name a line item is reported under."""
        group = self.groups.resolve(item_name)
        return group if group is not None else item_name

    def add_record(self, record: SalesRecord) -> None:
        """Fold one record into its product and the grand totals."""
        name = self.display_name(record.item_name)
        product = self.products.setdefault(name, ProductAggregate())
        revenue = record.unit_price * record.quantity

        product.units += record.quantity
        product.revenue += revenue
        self.total_units += record.quantity
        self.total_revenue += revenue

    def add_records(self, records: Iterable[SalesRecord]) -> None:
        for record in records:
            self.add_record(record)

    def read_csv(self, path) -> None:
        """
        Read sales data from the CSV file at ``path`` into the report.

        The file is aggregated separately and merged only once fully read,
        so a bad file leaves the report untouched.

        Raises:
            RecordError: If the file cannot be opened or parsed
        """
        partial = Report(self.groups, self.aliases, self.encoding, self.fuzzy_threshold)
        set_source_context(str(path))
        try:
            partial.add_records(
                read_records(path, self.aliases, self.encoding, self.fuzzy_threshold)
            )
        finally:
            set_source_context(None)

        self.merge(partial)
        logger.info(
            f"Read {partial.total_units} units across {len(partial.products)} products from {path}"
        )

    def merge(self, other: "Report") -> None:
        """Add another report's per-product sums and totals to this one."""
        for name, theirs in other.products.items():
            product = self.products.setdefault(name, ProductAggregate())
            product.units += theirs.units
            product.revenue += theirs.revenue
        self.total_units += other.total_units
        self.total_revenue += other.total_revenue

    def products_by_units(self) -> List[str]:
        """Display names by unit sales, descending; ties alphabetical."""
        return sorted(self.products, key=lambda name: (-self.products[name].units, name))

    def products_by_revenue(self) -> List[str]:
        """Display names by revenue, descending; ties alphabetical."""
        return sorted(self.products, key=lambda name: (-self.products[name].revenue.cents, name))


def build(
    csv_paths: Iterable,
    groups: Optional[GroupRules] = None,
    aliases: Optional[ColumnAliases] = None,
    encoding: str = "utf-8-sig",
    fuzzy_threshold: int = 3
) -> Report:
    """
    Build a report from CSV files, processed in the given order.

    Args:
        csv_paths: Paths to sales exports
        groups: Optional group rules
        aliases: Accepted CSV header names
        encoding: CSV file encoding
        fuzzy_threshold: Edit distance for missing-column hints

    Returns:
        Report over all files

    Raises:
        RecordError: On the first bad file; no partial report is returned
    """
    report = Report(groups, aliases, encoding, fuzzy_threshold)
    for path in csv_paths:
        report.read_csv(path)

    logger.info(
        f"Aggregated {report.total_units} units into {len(report.products)} products "
        f"(revenue {report.total_revenue.format(0)})"
    )
    return report
