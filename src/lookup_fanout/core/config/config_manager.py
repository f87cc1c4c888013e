"""Configuration discovery and loading."""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from lookup_fanout.schemas.lookup_config import LookupConfig

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = ".lookup-fanout"
CONFIG_FILE_NAME = "config.yaml"


class ConfigurationError(ValueError):
    """Configuration file could not be read or is invalid."""


def safe_load_yaml(file_path: Path) -> dict[str, Any]:
    """Load a YAML mapping from ``file_path``.

    Returns an empty dict for an empty file.

    Raises:
        ConfigurationError: If the file cannot be read, parsed, or does not
            hold a mapping
    """
    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Failed to parse YAML file {file_path}: {e}"
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Failed to read file {file_path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a mapping at the top of {file_path}, "
            f"got {type(data).__name__}"
        )
    return data


class ConfigurationManager:
    """Locates and validates the lookup configuration.

    Search order: an explicit path, the project config
    (``./.lookup-fanout/config.yaml``), the global config
    (``~/.config/lookup-fanout/config.yaml``), then built-in defaults.
    """

    def __init__(
        self,
        config_path: Path | str | None = None,
        *,
        project_dir: Path | None = None,
        global_config_dir: Path | None = None,
    ) -> None:
        self._explicit_path = Path(config_path) if config_path else None
        self._project_dir = project_dir or Path.cwd()
        self.global_config_dir = global_config_dir or (
            Path.home() / ".config" / "lookup-fanout"
        )

    @property
    def local_config_path(self) -> Path:
        return self._project_dir / CONFIG_DIR_NAME / CONFIG_FILE_NAME

    @property
    def global_config_path(self) -> Path:
        return self.global_config_dir / CONFIG_FILE_NAME

    def find_config_file(self) -> Path | None:
        """Return the config file that would be loaded, if any.

        Raises:
            ConfigurationError: If an explicit path was given but is missing
        """
        if self._explicit_path is not None:
            if not self._explicit_path.is_file():
                raise ConfigurationError(
                    f"Config file not found: {self._explicit_path}"
                )
            return self._explicit_path

        for candidate in (self.local_config_path, self.global_config_path):
            if candidate.is_file():
                return candidate
        return None

    def load_config(self) -> LookupConfig:
        """Load and validate the configuration.

        Raises:
            ConfigurationError: If the file is unreadable or invalid
        """
        config_file = self.find_config_file()
        if config_file is None:
            logger.debug("No config file found, using defaults")
            return LookupConfig()

        logger.debug("Loading config from %s", config_file)
        data = safe_load_yaml(config_file)
        try:
            return LookupConfig.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid config in {config_file}: {e}") from e
