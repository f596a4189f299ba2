"""Sales record parsing from CSV exports with differing column names."""
import csv
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Mapping, Optional

import Levenshtein

from ..utils.exceptions import ParseError, RecordError
from ..utils.logger import get_logger
from .money import Money

logger = get_logger()

DEFAULT_QUANTITY = 1


@dataclass
class SalesRecord:
    """One line item from a sales export."""
    quantity: int
    item_name: str
    unit_price: Money


@dataclass
class ColumnAliases:
    """Accepted header names for each logical field, in priority order."""
    quantity: List[str] = field(default_factory=lambda: ["Lineitem quantity", "Quantity"])
    name: List[str] = field(default_factory=lambda: ["Lineitem name", "Item Name"])
    price: List[str] = field(default_factory=lambda: ["Lineitem price", "Item Price ($)"])

    @classmethod
    def from_mapping(cls, aliases: Mapping[str, Iterable[str]]) -> "ColumnAliases":
        """Build from the ``csv.aliases`` settings section."""
        return cls(
            quantity=list(aliases["quantity"]),
            name=list(aliases["name"]),
            price=list(aliases["price"])
        )


def _normalize_header(header: Optional[str]) -> str:
    return re.sub(r"\s+", " ", str(header or "")).strip().lower()


def _find_column(columns: Mapping[str, str], candidates: Iterable[str]) -> Optional[str]:
    for candidate in candidates:
        alias = _normalize_header(candidate)
        if alias in columns:
            return columns[alias]
    return None


def _closest_header(headers: Iterable[str], candidates: Iterable[str], threshold: int) -> Optional[str]:
    """Return the actual header nearest to any alias, within ``threshold`` edits."""
    best = None
    best_distance = threshold + 1
    for header in headers:
        for candidate in candidates:
            distance = Levenshtein.distance(_normalize_header(header), _normalize_header(candidate))
            if distance < best_distance:
                best, best_distance = header, distance
    return best


def _missing_column(path: Path, field_name: str, candidates: List[str], headers: List[str], threshold: int) -> RecordError:
    message = f"{path}: no column for {field_name} (expected one of: {', '.join(candidates)})"
    suggestion = _closest_header(headers, candidates, threshold)
    if suggestion is not None:
        message += f"; did you mean {suggestion!r}?"
    return RecordError(message, path=str(path), line=1)


def _parse_quantity(value: str) -> int:
    digits = value.strip()
    if not (digits.isascii() and digits.isdigit()):
        raise ValueError(f"quantity {value!r} is not a whole number")
    return int(digits)


def read_records(
    path,
    aliases: Optional[ColumnAliases] = None,
    encoding: str = "utf-8-sig",
    fuzzy_threshold: int = 3
) -> Iterator[SalesRecord]:
    """
    Lazily read sales records from a CSV file.

    Columns are matched case-insensitively against ``aliases``. Exports
    without a quantity column list one unit per row.

    Args:
        path: CSV file path
        aliases: Accepted header names per field
        encoding: File encoding
        fuzzy_threshold: Maximum edit distance for "did you mean" hints

    Yields:
        SalesRecord for each row, in file order

    Raises:
        RecordError: On the first unreadable file, missing column or bad row
    """
    path = Path(path)
    aliases = aliases or ColumnAliases()

    try:
        with open(path, "r", encoding=encoding, newline="") as f:
            reader = csv.DictReader(f)
            headers = reader.fieldnames or []
            columns: Dict[str, str] = {_normalize_header(h): h for h in headers}

            name_col = _find_column(columns, aliases.name)
            if name_col is None:
                raise _missing_column(path, "name", aliases.name, headers, fuzzy_threshold)
            price_col = _find_column(columns, aliases.price)
            if price_col is None:
                raise _missing_column(path, "price", aliases.price, headers, fuzzy_threshold)
            quantity_col = _find_column(columns, aliases.quantity)
            if quantity_col is None:
                logger.debug(f"{path}: no quantity column, counting one unit per row")

            for row in reader:
                line_no = reader.line_num
                name = row.get(name_col)
                price = row.get(price_col)
                if name is None or price is None:
                    raise RecordError(f"{path}: line {line_no}: missing field", path=str(path), line=line_no)

                try:
                    unit_price = Money.parse(price)
                except ParseError as e:
                    raise RecordError(f"{path}: line {line_no}: {e}", path=str(path), line=line_no) from e

                quantity = DEFAULT_QUANTITY
                if quantity_col is not None:
                    raw_quantity = row.get(quantity_col)
                    if raw_quantity is None:
                        raise RecordError(f"{path}: line {line_no}: missing quantity", path=str(path), line=line_no)
                    try:
                        quantity = _parse_quantity(raw_quantity)
                    except ValueError as e:
                        raise RecordError(
                            f"{path}: line {line_no}: invalid quantity {raw_quantity!r}",
                            path=str(path),
                            line=line_no
                        ) from e

                yield SalesRecord(quantity=quantity, item_name=name, unit_price=unit_price)
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise RecordError(f"{path}: {e}", path=str(path)) from e
