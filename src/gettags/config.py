"""Configuration management for gettags.

Reader limits and output defaults can be set in a TOML file
(~/.gettags/config.toml by default). Anything not set there falls back to
the built-in defaults.
"""

import copy
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, ValidationError

from .constants import DEFAULT_MAX_ALLOC, DEFAULT_OGG_WINDOW


class ReaderConfig(BaseModel):
    """Options passed down to the container readers.

    Attributes:
        debug: Log every frame, block and atom the readers visit
        max_alloc: Largest single buffer a declared length may ask for
        ogg_window: Bytes of the second Ogg page parsed as the comment header
    """

    model_config = {"frozen": True}

    debug: bool = False
    max_alloc: int = Field(default=DEFAULT_MAX_ALLOC, gt=0)
    ogg_window: int = Field(default=DEFAULT_OGG_WINDOW, ge=8)


def get_config_dir() -> Path:
    """Get the configuration directory.

    Returns:
        Path to config directory (~/.gettags on all platforms)
    """
    return Path.home() / ".gettags"


def get_config_path() -> Path:
    """Get the full path to the config file."""
    return get_config_dir() / "config.toml"


class Config:
    """Configuration manager for application settings."""

    DEFAULT_CONFIG: Dict[str, Any] = {
        "reader": {
            "debug": False,
            # Declared lengths above this many bytes are refused
            "max_alloc": DEFAULT_MAX_ALLOC,
            # Size of the window read from the second Ogg page
            "ogg_window": DEFAULT_OGG_WINDOW,
        },
        "output": {
            # Prefix results with OK / ERROR
            "script": False,
        },
    }

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        """Initialize configuration manager.

        Args:
            config_path: TOML file to read instead of the default location
        """
        self.config_path = Path(config_path) if config_path else get_config_path()
        self.data: Dict[str, Any] = copy.deepcopy(self.DEFAULT_CONFIG)
        self.load()

    def load(self) -> bool:
        """Load configuration from file.

        Returns:
            True if loaded successfully, False if file doesn't exist or error occurred
        """
        if not self.config_path.exists():
            return False

        try:
            with open(self.config_path, "rb") as f:
                loaded_data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as e:
            logging.warning(f"Error loading config {self.config_path}: {e}")
            return False

        self._merge_config(self.data, loaded_data)
        return True

    def _merge_config(self, base: Dict[str, Any], override: Dict[str, Any]) -> None:
        """Recursively merge override dict into base dict."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._merge_config(base[key], value)
            else:
                base[key] = value

    def reader_config(self, debug: Optional[bool] = None) -> ReaderConfig:
        """Build the reader options from the loaded settings.

        Args:
            debug: Overrides the configured debug flag when not None

        Raises:
            ValueError: If the configured values are out of range
        """
        settings = dict(self.data.get("reader", {}))
        if debug is not None:
            settings["debug"] = debug
        try:
            return ReaderConfig(**settings)
        except ValidationError as e:
            raise ValueError(f"Invalid [reader] settings in {self.config_path}: {e}") from e

    def get_script_mode(self) -> bool:
        """Whether results are prefixed with OK / ERROR by default."""
        return bool(self.data.get("output", {}).get("script", False))
