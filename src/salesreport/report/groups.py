"""Regex-based product grouping rules."""
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional

from ..utils.exceptions import ConfigError
from ..utils.logger import get_logger

logger = get_logger()

DELIMITER = " | "


@dataclass(frozen=True)
class GroupRule:
    """A named pattern that collapses line item variants into one product."""
    name: str
    pattern: re.Pattern

    def matches(self, line_item: str) -> bool:
        """True if the pattern occurs anywhere in ``line_item``."""
        return self.pattern.search(line_item) is not None


class GroupRules:
    """Ordered group rules; the first matching rule wins.

    The configuration format is one rule per line::

        GROUP_NAME | GROUP_REGEX

    With ``Foo | foo`` loaded, every product whose name contains ``foo`` is
    reported as a single product named ``Foo``.
    """

    def __init__(self, rules: Optional[Iterable[GroupRule]] = None):
        self._rules: List[GroupRule] = list(rules or [])

    @classmethod
    def from_file(cls, path) -> "GroupRules":
        """
        Load rules from a UTF-8 configuration file.

        Args:
            path: Path to the group configuration file

        Returns:
            GroupRules in file order

        Raises:
            ConfigError: If the file cannot be read, a line lacks the
                ``" | "`` delimiter, or a pattern does not compile
        """
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return cls.from_lines(f, source=str(path))
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"reading {path}: {e}", path=str(path)) from e

    @classmethod
    def from_lines(cls, lines: Iterable[str], source: str = "<groups>") -> "GroupRules":
        """Load rules from an iterable of configuration lines."""
        groups = cls()
        for line_no, line in enumerate(lines, start=1):
            line = line.rstrip("\r\n")
            name, delimiter, pattern = line.partition(DELIMITER)
            if not delimiter:
                raise ConfigError(
                    f"reading {source}: bad line format (missing |) on line {line_no}: {line}",
                    path=source,
                    line=line_no,
                    content=line
                )
            try:
                groups.add(name, pattern)
            except ConfigError as e:
                raise ConfigError(
                    f"reading {source}: line {line_no}: {e}",
                    path=source,
                    line=line_no,
                    content=line
                ) from e

        logger.info(f"Loaded {len(groups)} group rules from {source}")
        return groups

    def add(self, name: str, pattern: str) -> None:
        """
        Append a rule.

        Products whose name matches ``pattern`` will be reported as part of
        group ``name`` rather than under their own line item names.

        Raises:
            ConfigError: If ``pattern`` is not a valid regular expression
        """
        try:
            compiled = re.compile(pattern)
        except re.error as e:
            raise ConfigError(f"invalid regex {pattern!r} for group {name!r}: {e}") from e
        self._rules.append(GroupRule(name=name, pattern=compiled))

    def resolve(self, line_item: str) -> Optional[str]:
        """Return the name of the first group matching ``line_item``, if any."""
        for rule in self._rules:
            if rule.matches(line_item):
                return rule.name
        return None

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self):
        return iter(self._rules)
