# ABOUTME: Configuration loading and validation for storage-backup.
# ABOUTME: Resolves project credentials from the environment, optionally via config.yaml.

from dataclasses import dataclass
from pathlib import Path
import os
import yaml

DEFAULT_URL_ENV = "SUPABASE_URL"
DEFAULT_KEY_ENV = "SUPABASE_SERVICE_ROLE"
DEFAULT_PAGE_SIZE = 1000


class ConfigError(Exception):
    """Raised when configuration is invalid."""
    pass


@dataclass
class Config:
    """Main configuration for storage-backup."""
    url: str
    service_key: str
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self):
        if self.page_size < 1:
            raise ConfigError(f"page_size must be at least 1, got {self.page_size}")


def _read_config_file(path: Path) -> dict:
    """Parse the optional YAML config file into a mapping."""
    if not path.exists():
        raise ConfigError(f"Config file not found: {path}")

    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config file: {e}")

    # An empty file is the same as no overrides
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError("Config file must contain a YAML mapping")
    return raw


def load_config(path: Path | None = None, environ: dict | None = None) -> Config:
    """Load and validate configuration.

    The endpoint URL and service credential always come from environment
    variables. A config file may only rename those variables and tune the
    listing page size.

    Args:
        path: Optional path to a YAML config file.
        environ: Environment mapping to read from (defaults to os.environ).

    Returns:
        Validated Config.

    Raises:
        ConfigError: If the file is invalid or a required variable is unset.
    """
    if environ is None:
        environ = os.environ

    raw = _read_config_file(path) if path is not None else {}

    url_env = raw.get("url_env", DEFAULT_URL_ENV)
    key_env = raw.get("key_env", DEFAULT_KEY_ENV)
    for field_name, value in (("url_env", url_env), ("key_env", key_env)):
        if not isinstance(value, str) or not value:
            raise ConfigError(f"{field_name} must be a non-empty string, got {value!r}")

    page_size = raw.get("page_size", DEFAULT_PAGE_SIZE)
    if not isinstance(page_size, int) or isinstance(page_size, bool):
        raise ConfigError(f"page_size must be an integer, got {page_size!r}")

    url = environ.get(url_env)
    service_key = environ.get(key_env)
    if not url or not service_key:
        raise ConfigError(f"Missing {url_env} or {key_env}")

    return Config(url=url, service_key=service_key, page_size=page_size)
