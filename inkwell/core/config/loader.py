"""
Configuration loader — reads config.yml into the site model.

It reads YAML, validates against the Pydantic schema, and returns
a typed SiteConfig.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from inkwell.core.models.site import SiteConfig

logger = logging.getLogger(__name__)

# Default config filename
SITE_CONFIG_FILE = "config.yml"

# Root tried when the requested one has no config.yml
DEFAULT_ROOT = "blog"


class ConfigError(Exception):
    """Raised when site configuration is invalid or missing."""


def find_site_root(path: Path | str | None = None) -> Path:
    """Resolve the site root directory.

    Uses ``path`` (default: cwd) when it contains config.yml, otherwise
    falls back to the ``blog`` directory next to the current one.

    Raises:
        ConfigError: If neither candidate holds a config.yml.
    """
    candidates = [Path(path) if path else Path.cwd(), Path(DEFAULT_ROOT)]
    for candidate in candidates:
        if (candidate / SITE_CONFIG_FILE).is_file():
            return candidate.resolve()

    raise ConfigError(
        f"Parse {SITE_CONFIG_FILE} failed, please specify a valid path"
    )


def load_site_config(path: Path) -> SiteConfig:
    """Load and validate site configuration.

    Args:
        path: Path to config.yml.

    Returns:
        Validated SiteConfig model.

    Raises:
        ConfigError: If the file is missing or invalid.
    """
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading site config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    try:
        config = SiteConfig.model_validate(data)
    except Exception as e:
        raise ConfigError(f"Invalid site configuration: {e}") from e

    logger.info("Loaded site config '%s' (port %d)", config.site.title, config.build.port)
    return config


def load_site(path: Path | str | None = None) -> tuple[Path, SiteConfig]:
    """Resolve the site root and load its config in one step."""
    root = find_site_root(path)
    return root, load_site_config(root / SITE_CONFIG_FILE)
