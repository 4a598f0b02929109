"""
Configuration module for DiffFeed.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    value = section_defaults.get(key, fallback)
    return fallback if value is None else value


@dataclass
class FeedConfig:
    """Configuration for the rendered feed and its history window."""

    title: str = field(default_factory=lambda: _get_default("feed", "title", "Directory changes"))
    link: str = field(
        default_factory=lambda: _get_default("feed", "link", "http://difffeed.example.com/")
    )
    description: Optional[str] = field(
        default_factory=lambda: _get_default("feed", "description", None)
    )
    language: str = field(default_factory=lambda: _get_default("feed", "language", "fr"))
    max_items: int = field(default_factory=lambda: _get_default("feed", "max_items", 30))

    def __post_init__(self) -> None:
        if self.max_items < 1:
            raise ValueError(f"max_items must be at least 1, got {self.max_items}")

    @property
    def effective_description(self) -> str:
        """Channel description, falling back to the title."""
        return self.description or self.title


@dataclass
class StorageConfig:
    """Configuration for the persisted history file."""

    path: str = field(default_factory=lambda: _get_default("storage", "path", "difffeed.yml"))


@dataclass
class ScanConfig:
    """Configuration for the directory scan."""

    ignore_prefixes: list[str] = field(
        default_factory=lambda: _get_default(
            "scan", "ignore_prefixes", [".", "cvs", ".svn", "trash"]
        )
    )
    extra_ignore_patterns: list[str] = field(
        default_factory=lambda: _get_default("scan", "extra_ignore_patterns", [])
    )


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "WARNING"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


@dataclass
class DiffFeedConfig:
    """Main configuration class for DiffFeed."""

    feed: FeedConfig = field(default_factory=FeedConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    scan: ScanConfig = field(default_factory=ScanConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_file(cls, path: Path | str) -> "DiffFeedConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            DiffFeedConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ValueError: If the file format is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(content) or {}
        elif path.suffix == ".json":
            data = json.loads(content) if content.strip() else {}
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "DiffFeedConfig":
        """Create DiffFeedConfig from a dictionary."""
        config = cls()

        if "feed" in data:
            config.feed = FeedConfig(**data["feed"])
        if "storage" in data:
            config.storage = StorageConfig(**data["storage"])
        if "scan" in data:
            config.scan = ScanConfig(**data["scan"])
        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def apply_env_overrides(self) -> "DiffFeedConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: DIFFFEED_<SECTION>_<KEY>
        Examples:
            - DIFFFEED_FEED_TITLE
            - DIFFFEED_FEED_MAX_ITEMS
            - DIFFFEED_STORAGE_PATH
            - DIFFFEED_LOGGING_LEVEL

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Feed config
            "DIFFFEED_FEED_TITLE": ("feed", "title", str),
            "DIFFFEED_FEED_LINK": ("feed", "link", str),
            "DIFFFEED_FEED_DESCRIPTION": ("feed", "description", str),
            "DIFFFEED_FEED_LANGUAGE": ("feed", "language", str),
            "DIFFFEED_FEED_MAX_ITEMS": ("feed", "max_items", _parse_positive_int),
            # Storage config
            "DIFFFEED_STORAGE_PATH": ("storage", "path", str),
            # Scan config
            "DIFFFEED_SCAN_IGNORE_PREFIXES": ("scan", "ignore_prefixes", _parse_list),
            "DIFFFEED_SCAN_EXTRA_IGNORE_PATTERNS": ("scan", "extra_ignore_patterns", _parse_list),
            # Logging config
            "DIFFFEED_LOGGING_LEVEL": ("logging", "level", str),
            "DIFFFEED_LOGGING_FORMAT": ("logging", "format", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                setattr(section_obj, key, converter(value))

        return self

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        return asdict(self)

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.safe_dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)

    def save(self, path: Path | str) -> None:
        """
        Save configuration to a file.

        Args:
            path: Path to save the configuration (.yaml, .yml, or .json)

        Raises:
            ValueError: If the file format is unsupported
        """
        path = Path(path)

        if path.suffix in (".yaml", ".yml"):
            content = self.to_yaml()
        elif path.suffix == ".json":
            content = self.to_json()
        else:
            raise ValueError(f"Unsupported config file format: {path.suffix}")

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


def _parse_positive_int(value: str) -> int:
    """Parse a string to an integer of at least 1."""
    number = int(value)
    if number < 1:
        raise ValueError(f"Expected a positive integer, got {value!r}")
    return number


def _parse_list(value: str) -> list[str]:
    """Parse a comma-separated string to a list, dropping empty items."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> DiffFeedConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        DiffFeedConfig instance
    """
    if config_path:
        config = DiffFeedConfig.from_file(config_path)
    else:
        config = DiffFeedConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
