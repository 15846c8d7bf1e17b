"""
Configuration Loader

Loads the YAML build defaults from the config directory and applies
environment overrides on top of them.
"""

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple

import yaml

from .errors import ConfigError

DEFAULT_CONFIG_FILE = "feed.yaml"


@dataclass(frozen=True)
class FeedConfig:
    """Settings consumed by the build pipeline."""
    output_dir: str = "output/feeds"
    errors_dir: str = "output/errors"
    sources_dir: str = "data/sources"
    settings_table: str = "settings"
    categories_table: str = "categories"
    products_table: str = "products"
    concurrency: int = 5
    timeout_ms: int = 12000
    source_ids: Tuple[str, ...] = field(default_factory=tuple)
    base_url: str = ""
    license_url: str = ""

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def with_overrides(self, **overrides: Any) -> "FeedConfig":
        """Return a copy with the non-None overrides applied."""
        changes = {k: v for k, v in overrides.items() if v is not None}
        if "source_ids" in changes:
            changes["source_ids"] = tuple(changes["source_ids"])
        return replace(self, **changes)


def _get_config_dir() -> Path:
    """Get the config directory path."""
    # Try relative to this file first
    module_dir = Path(__file__).parent.parent.parent
    config_dir = module_dir / 'config'

    if config_dir.exists():
        return config_dir

    # Try current working directory
    cwd_config = Path.cwd() / 'config'
    if cwd_config.exists():
        return cwd_config

    raise FileNotFoundError(
        f"Config directory not found. Tried: {config_dir}, {cwd_config}"
    )


def load_config(filename: str) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        filename: Name of the config file (e.g., 'feed.yaml') or a path

    Returns:
        Parsed YAML content as dictionary

    Raises:
        FileNotFoundError: If config file doesn't exist
    """
    config_path = Path(filename)
    if not config_path.is_absolute() and not config_path.exists():
        config_path = _get_config_dir() / filename

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _parse_int(name: str, value: Any) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def parse_source_ids(value: Any) -> Tuple[str, ...]:
    """
    Parse a source id list from YAML (list) or env (comma-separated string).

    Blank entries are dropped.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        items = value.split(',')
    else:
        items = list(value)
    return tuple(str(item).strip() for item in items if str(item).strip())


def config_from_mapping(data: Mapping[str, Any]) -> FeedConfig:
    """
    Build a FeedConfig from the parsed YAML structure.

    Missing keys keep the FeedConfig defaults.
    """
    defaults = FeedConfig()
    tables = data.get('tables') or {}
    scrape = data.get('scrape') or {}

    return FeedConfig(
        output_dir=str(data.get('output_dir') or defaults.output_dir),
        errors_dir=str(data.get('errors_dir') or defaults.errors_dir),
        sources_dir=str(data.get('sources_dir') or defaults.sources_dir),
        settings_table=str(tables.get('settings') or defaults.settings_table),
        categories_table=str(tables.get('categories') or defaults.categories_table),
        products_table=str(tables.get('products') or defaults.products_table),
        concurrency=_parse_int('scrape.concurrency', scrape.get('concurrency', defaults.concurrency)),
        timeout_ms=_parse_int('scrape.timeout_ms', scrape.get('timeout_ms', defaults.timeout_ms)),
        source_ids=parse_source_ids(data.get('source_ids')),
        base_url=str(data.get('base_url') or ''),
        license_url=str(data.get('license_url') or ''),
    )


def apply_env_overrides(config: FeedConfig, environ: Optional[Mapping[str, str]] = None) -> FeedConfig:
    """
    Apply environment variable overrides.

    Empty variables are ignored so a blank line in .env does not wipe a
    YAML default.
    """
    env = os.environ if environ is None else environ

    def get(name: str) -> Optional[str]:
        value = env.get(name)
        if value is None or not value.strip():
            return None
        return value.strip()

    concurrency = get('SCRAPE_CONCURRENCY')
    timeout_ms = get('SCRAPE_TIMEOUT_MS')
    source_ids = get('SPREADSHEET_IDS')

    return config.with_overrides(
        output_dir=get('FILES_DIR'),
        errors_dir=get('ERRORS_DIR'),
        sources_dir=get('SOURCES_DIR'),
        settings_table=get('SHEET_SETTINGS'),
        categories_table=get('SHEET_CATEGORIES'),
        products_table=get('SHEET_PRODUCTS'),
        concurrency=_parse_int('SCRAPE_CONCURRENCY', concurrency) if concurrency else None,
        timeout_ms=_parse_int('SCRAPE_TIMEOUT_MS', timeout_ms) if timeout_ms else None,
        source_ids=parse_source_ids(source_ids) if source_ids else None,
        base_url=get('BASE_URL'),
        license_url=get('LICENSE_URL'),
    )


def load_feed_config(
    filename: str = DEFAULT_CONFIG_FILE,
    environ: Optional[Mapping[str, str]] = None,
) -> FeedConfig:
    """
    Load build settings: YAML defaults, then environment overrides.

    Args:
        filename: Config file name in the config directory, or a path
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Resolved FeedConfig
    """
    return apply_env_overrides(config_from_mapping(load_config(filename)), environ)
