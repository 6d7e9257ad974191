"""Per-command metadata stored in YAML files.

Click commands carry no example text and no descriptions for positional
arguments. This module loads that text from YAML files, one per command,
named after the command's document (circleci_config_validate.yaml for
"circleci config validate").

YAML format:
    example: |
      circleci config validate .circleci/config.yml
    arguments:
      PATH: Path to the config file

Philosophy:
- Simple YAML loading
- Standard library + PyYAML
- Missing or malformed files never stop generation
"""

import logging
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from mddocs.links import filename

logger = logging.getLogger(__name__)

_SAFE_STEM = re.compile(r"^[a-zA-Z0-9_-]+$")


@dataclass
class CommandOverlay:
    """Extra metadata for one command.

    Attributes:
        example: Example text shown in the Examples section
        arguments: Positional argument name -> description
    """

    example: str = ""
    arguments: dict[str, str] = field(default_factory=dict)


class MetadataOverlay:
    """Loads command metadata from a directory of YAML files."""

    def __init__(self, overlay_dir: str | Path):
        """Initialize overlay.

        Args:
            overlay_dir: Directory containing the YAML files
        """
        self.overlay_dir = Path(overlay_dir)

    def _stem(self, path: Sequence[str]) -> str:
        """Return the YAML file stem for a command path.

        Raises:
            ValueError: If the command path contains characters that are not
                safe in a file name
        """
        stem = filename(path).removesuffix(".md")
        if not _SAFE_STEM.match(stem):
            raise ValueError(f"Invalid command path: {' '.join(path)}")
        return stem

    def load(self, path: Sequence[str]) -> CommandOverlay:
        """Load metadata for a command.

        Args:
            path: Command names from the root (e.g. ["circleci", "version"])

        Returns:
            CommandOverlay; empty when no usable file exists
        """
        try:
            stem = self._stem(path)
        except ValueError as e:
            logger.warning(f"Skipping metadata overlay: {e}")
            return CommandOverlay()

        yaml_file = self.overlay_dir / f"{stem}.yaml"
        if not yaml_file.exists():
            yaml_file = self.overlay_dir / f"{stem}.yml"
        if not yaml_file.exists():
            return CommandOverlay()

        return self._load_from_file(yaml_file)

    def _load_from_file(self, yaml_file: Path) -> CommandOverlay:
        try:
            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load metadata from '{yaml_file}': {e}")
            return CommandOverlay()

        if not data:
            return CommandOverlay()
        if not isinstance(data, dict):
            logger.warning(f"Ignoring '{yaml_file}': expected a mapping at the top level")
            return CommandOverlay()

        example = data.get("example") or ""
        arguments = data.get("arguments") or {}
        if not isinstance(arguments, dict):
            logger.warning(f"Ignoring 'arguments' in '{yaml_file}': expected a mapping")
            arguments = {}

        logger.debug(f"Loaded metadata overlay: {yaml_file}")
        return CommandOverlay(
            example=str(example).rstrip("\n"),
            arguments={str(k): str(v) for k, v in arguments.items()},
        )


__all__ = ["CommandOverlay", "MetadataOverlay"]
