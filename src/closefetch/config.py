from dataclasses import dataclass, field, is_dataclass
from pathlib import Path
import sys
import tomllib
from typing import Any, TypeVar

from loguru import logger

from closefetch.adapters.base import DEFAULT_USER_AGENT
from closefetch.adapters.yahoo import DEFAULT_HOST

# --- Constants ---
APP_NAME = "closefetch"
# Use a platform-agnostic user config directory
if sys.platform == "win32":
    CONFIG_DIR = Path.home() / "AppData" / "Roaming" / APP_NAME
else:
    CONFIG_DIR = Path.home() / ".config" / APP_NAME

CONFIG_FILE = CONFIG_DIR / "config.toml"

# --- Dataclass Models for Settings ---
T = TypeVar("T")


@dataclass
class GeneralSettings:
    """General application settings."""

    log_level_console: str = "INFO"
    log_level_file: str = "DEBUG"
    # An empty string disables file logging.
    log_directory: str = ""


@dataclass
class ProviderSettings:
    """Settings for the market-data provider."""

    host: str = DEFAULT_HOST
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 20.0


@dataclass
class Settings:
    """Root container for all application settings."""

    general: GeneralSettings = field(default_factory=GeneralSettings)
    provider: ProviderSettings = field(default_factory=ProviderSettings)


def _update_dataclass(dc_instance: T, data: dict[str, Any]) -> T:
    """Recursively updates a dataclass instance from a dictionary.

    Raises:
        TypeError: If a nested settings section is not a TOML table.
    """
    for f in field_names(dc_instance):
        if f in data:
            field_value = getattr(dc_instance, f)
            if is_dataclass(field_value):
                if not isinstance(data[f], dict):
                    err_msg = (
                        f"Config section '{f}' must be a table, "
                        f"got {type(data[f]).__name__}."
                    )
                    raise TypeError(err_msg)
                _update_dataclass(field_value, data[f])
            else:
                setattr(dc_instance, f, data[f])
    return dc_instance


def field_names(dc_instance: Any) -> list[str]:
    """Helper to get field names from a dataclass instance."""
    return [f.name for f in dc_instance.__dataclass_fields__.values()]


def load_config(path: Path = CONFIG_FILE) -> Settings:
    """Loads settings from a TOML file, merging them with defaults.

    A missing file is not an error: the defaults are returned and nothing is
    written to disk.

    Args:
        path: The path to the configuration file.

    Returns:
        A populated Settings object.

    Raises:
        TypeError: If a settings section in the file is not a table.
    """
    settings_obj = Settings()

    if not path.exists():
        logger.debug(f"No configuration file at '{path}', using defaults.")
        return settings_obj

    logger.info(f"Loading configuration from '{path}'...")
    try:
        with path.open("rb") as f:
            user_config = tomllib.load(f)
        _update_dataclass(settings_obj, user_config)
        logger.success("Successfully loaded user configuration.")
    except tomllib.TOMLDecodeError as e:
        logger.error(f"Error decoding TOML from '{path}': {e}")
        logger.warning("Using default settings due to configuration error.")
        settings_obj = Settings()

    return settings_obj
