"""Command-line entry point for SalesReport."""
import argparse
import sys
from pathlib import Path
from typing import List, Optional

from .config.settings import DEFAULT_CONFIG_PATH, LOG_LEVELS, get_settings
from .report import ColumnAliases, GroupRules, build, render
from .utils.exceptions import SalesReportError
from .utils.logger import configure_logging


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="salesreport",
        description="Summarises sales data from CSV export files."
    )
    parser.add_argument(
        "-g", "--groups",
        type=Path,
        help="Group related line items using this config file"
    )
    parser.add_argument(
        "-r", "--revenue",
        action="store_true",
        help="Sort products by revenue (instead of unit sales)"
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Settings YAML file (default: packaged config.yaml)"
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        help="Override the configured console log level"
    )
    parser.add_argument(
        "csv",
        nargs="+",
        type=Path,
        help="Path(s) to the CSV sales data file(s)"
    )
    return parser


def run(args: argparse.Namespace) -> str:
    """Load settings and groups, aggregate the CSV files and render the table."""
    settings = get_settings(args.config or DEFAULT_CONFIG_PATH)
    logger = configure_logging(
        args.log_level or settings.log_level,
        settings.log_file,
        settings.log_max_file_size_mb,
        settings.log_backup_count
    )
    logger.debug(f"{settings.app_name} {settings.app_version} starting")

    groups = GroupRules.from_file(args.groups) if args.groups else None
    report = build(
        args.csv,
        groups,
        ColumnAliases.from_mapping(settings.csv_aliases),
        settings.csv_encoding,
        settings.header_fuzzy_threshold
    )

    sort_by_revenue = args.revenue or settings.default_sort == "revenue"
    return render(report, sort_by_revenue, settings.units_width, settings.revenue_width)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the salesreport command."""
    args = _build_parser().parse_args(argv)

    try:
        table = run(args)
    except SalesReportError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    sys.stdout.write(table)
    return 0


if __name__ == "__main__":
    sys.exit(main())
