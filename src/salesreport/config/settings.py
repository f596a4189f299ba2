"""Application settings loader from YAML configuration."""
import yaml
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

from ..utils.exceptions import ConfigError

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.yaml"

SORT_KEYS = ("units", "revenue")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
ALIAS_FIELDS = ("quantity", "name", "price")


def _alias_list(field: str, aliases) -> List[str]:
    """Check that a csv.aliases entry is a list of header names."""
    if not isinstance(aliases, list) or not all(isinstance(alias, str) for alias in aliases):
        raise ValueError(f"csv.aliases.{field} must be a list of header names, got {aliases!r}")
    return aliases


@dataclass
class AppSettings:
    """Application-wide settings loaded from config.yaml."""

    # App info
    app_name: str
    app_version: str

    # Logging
    log_level: str
    log_file: Optional[str]
    log_max_file_size_mb: int
    log_backup_count: int

    # Report
    default_sort: str
    units_width: int
    revenue_width: int

    # CSV input
    csv_encoding: str
    header_fuzzy_threshold: int
    csv_aliases: Dict[str, List[str]]

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "AppSettings":
        """Load settings from YAML file."""
        if config_path is None:
            config_path = DEFAULT_CONFIG_PATH
        config_path = Path(config_path)

        if not config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}", path=str(config_path))

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Failed to read configuration {config_path}: {e}", path=str(config_path)) from e

        try:
            settings = cls(
                app_name=config["app"]["name"],
                app_version=str(config["app"]["version"]),
                log_level=str(config["logging"]["level"]).upper(),
                log_file=config["logging"].get("file"),
                log_max_file_size_mb=int(config["logging"]["max_file_size_mb"]),
                log_backup_count=int(config["logging"]["backup_count"]),
                default_sort=config["report"]["default_sort"],
                units_width=int(config["report"]["units_width"]),
                revenue_width=int(config["report"]["revenue_width"]),
                csv_encoding=config["csv"]["encoding"],
                header_fuzzy_threshold=int(config["csv"]["header_fuzzy_threshold"]),
                csv_aliases={
                    field: _alias_list(field, config["csv"]["aliases"][field])
                    for field in ALIAS_FIELDS
                }
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigError(f"Invalid configuration {config_path}: {e!r}", path=str(config_path)) from e

        is_valid, message = settings.validate()
        if not is_valid:
            raise ConfigError(f"Invalid configuration {config_path}: {message}", path=str(config_path))
        return settings

    def validate(self) -> tuple[bool, str]:
        """Validate settings values."""
        if self.log_level not in LOG_LEVELS:
            return False, f"Unknown log level {self.log_level!r}"

        if self.default_sort not in SORT_KEYS:
            return False, f"default_sort must be one of {', '.join(SORT_KEYS)}"

        if self.units_width < 1 or self.revenue_width < 1:
            return False, "Column widths must be at least 1"

        for field in ALIAS_FIELDS:
            if not self.csv_aliases.get(field):
                return False, f"At least one CSV alias is required for {field}"

        return True, "Configuration is valid"


# Global settings instance
_settings: Optional[AppSettings] = None


def get_settings(config_path: Optional[Path] = None) -> AppSettings:
    """Get or create global settings instance.

    Passing ``config_path`` always reloads from that file.
    """
    global _settings
    if _settings is None or config_path is not None:
        _settings = AppSettings.load(config_path)
    return _settings
