"""Configuration management module.

This module loads documentation settings from a TOML file. By default the
file is ./mddocs.toml; a custom path can be passed from the command line.
Values given on the command line take precedence over the file.

Example mddocs.toml:

    tool_name = "circleci-docs"
    output_dir = "docs"
    link_prefix = "/commands/"
    strip_link_extension = true
    intro_header_file = "docs/intro.md"
    overlay_dir = "docs/metadata"
"""

import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any

import tomli

from mddocs.assembler import DEFAULT_INTRO_HEADER, DEFAULT_TOOL_NAME

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "mddocs.toml"


class ConfigError(Exception):
    """Raised when configuration operations fail."""

    pass


@dataclass
class DocsConfig:
    """Documentation generation settings."""

    tool_name: str = DEFAULT_TOOL_NAME
    output_dir: str = "docs"
    intro_header: str = DEFAULT_INTRO_HEADER  # Empty string leaves it out
    intro_header_file: str | None = None
    link_prefix: str = ""
    strip_link_extension: bool = False
    front_matter: str | None = None  # Template, see mddocs.links.front_matter_prepender
    overlay_dir: str | None = None
    disable_auto_gen_tag: bool = False
    base_dir: Path | None = None  # Directory relative paths are resolved against

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary, excluding None values and base_dir."""
        data = asdict(self)
        data.pop("base_dir")
        return {k: v for k, v in data.items() if v is not None}

    @classmethod
    def from_dict(cls, data: dict[str, Any], base_dir: Path | None = None) -> "DocsConfig":
        """Create from dictionary, ignoring unknown keys.

        Raises:
            ConfigError: If a known key has a value of the wrong type
        """
        known = {f.name: f for f in fields(cls) if f.name != "base_dir"}
        values: dict[str, Any] = {}

        for key, value in data.items():
            if key not in known:
                logger.warning(f"Unknown config key: {key}")
                continue
            expected = bool if key in ("strip_link_extension", "disable_auto_gen_tag") else str
            if not isinstance(value, expected):
                raise ConfigError(
                    f"Invalid value for '{key}': expected {expected.__name__}, "
                    f"got {type(value).__name__}"
                )
            values[key] = value

        return cls(base_dir=base_dir, **values)

    def resolve_path(self, value: str) -> Path:
        path = Path(value).expanduser()
        if not path.is_absolute() and self.base_dir is not None:
            path = self.base_dir / path
        return path

    def resolve_intro_header(self) -> str:
        """Return the intro header text, reading intro_header_file if set.

        Raises:
            ConfigError: If the intro header file cannot be read
        """
        if not self.intro_header_file:
            return self.intro_header

        path = self.resolve_path(self.intro_header_file)
        try:
            return path.read_text(encoding="utf-8").strip("\n")
        except OSError as e:
            raise ConfigError(f"Failed to read intro header file {path}: {e}") from e


class ConfigManager:
    """Locate and load the mddocs configuration file."""

    @classmethod
    def get_config_path(cls, custom_path: str | None = None) -> Path:
        """Get configuration file path.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            Path to config file

        Raises:
            ConfigError: If a custom path is given and does not exist
        """
        if custom_path:
            path = Path(custom_path).expanduser().resolve()
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")
            return path

        return Path.cwd() / DEFAULT_CONFIG_FILE

    @classmethod
    def load_config(cls, custom_path: str | None = None) -> DocsConfig:
        """Load configuration from file.

        Args:
            custom_path: Custom config file path (optional)

        Returns:
            DocsConfig object; defaults when no file exists

        Raises:
            ConfigError: If loading fails
        """
        config_path = cls.get_config_path(custom_path)

        if not config_path.exists():
            logger.debug("Config file not found, using defaults")
            return DocsConfig()

        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug(f"Loaded config from: {config_path}")
        return DocsConfig.from_dict(data, base_dir=config_path.parent)

    @classmethod
    def merge_cli_values(cls, config: DocsConfig, **cli_values: Any) -> DocsConfig:
        """Override config values with the ones given on the command line.

        None means "not given" and leaves the config value in place.
        """
        for key, value in cli_values.items():
            if value is None:
                continue
            if hasattr(config, key):
                setattr(config, key, value)
            else:
                logger.warning(f"Unknown config key: {key}")
        return config


__all__ = ["ConfigError", "ConfigManager", "DocsConfig"]
