"""Per-user config: default SSH user and the per-category host allow-lists."""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import ConfigError

logger = logging.getLogger(__name__)

APP_DIR_NAME = "tssh"
CONFIG_FILE_NAME = "config.yaml"
DEFAULT_USER = "default_user"


class AppConfig(BaseModel):
    """Contents of the config file.

    The file uses the keys ``user`` and ``allowed``::

        user: alice
        allowed:
          prod: [web1, web2]
          dev: [sandbox]
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    default_user: str = Field(alias="user")
    categories: dict[str, list[str]] = Field(alias="allowed")

    @classmethod
    def default(cls) -> "AppConfig":
        return cls(default_user=DEFAULT_USER, categories={})


def default_config_dir() -> Path:
    """Return the platform's per-user configuration directory."""
    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if not appdata:
            raise ConfigError("Could not find config directory: APPDATA is not set")
        return Path(appdata)

    try:
        home = Path.home()
    except (RuntimeError, KeyError) as e:
        raise ConfigError(f"Could not find config directory: {e}") from e

    if sys.platform == "darwin":
        return home / "Library" / "Application Support"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg and Path(xdg).is_absolute():
        return Path(xdg)
    return home / ".config"


def default_config_path() -> Path:
    return default_config_dir() / APP_DIR_NAME / CONFIG_FILE_NAME


def save_config(config: AppConfig, path: Path) -> None:
    """Write config to path using the file's key names."""
    data = config.model_dump(by_alias=True)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
    except OSError as e:
        raise ConfigError(f"Error writing config file {path}: {e}") from e


def load_config(path: Optional[Path] = None) -> AppConfig:
    """Load the config, writing and returning the default one if missing.

    Raises:
        ConfigError: if the file cannot be read or does not describe an AppConfig
    """
    if path is None:
        path = default_config_path()

    if not path.exists():
        config = AppConfig.default()
        save_config(config, path)
        logger.info("Wrote default config to %s", path)
        return config

    logger.debug("Loading config from %s", path)
    try:
        with open(path) as f:
            # All scalars load as strings, so names like no, on or 1234 stay as written.
            data = yaml.load(f, Loader=yaml.BaseLoader)
    except OSError as e:
        raise ConfigError(f"Error reading config file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(
            f"Error parsing config file {path}: expected a mapping with "
            "'user' and 'allowed' keys"
        )

    try:
        return AppConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
