"""Configuration loading and saving."""

import logging
import os
import shutil
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from macaudio.config.models import AudioConfig
from macaudio.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """Get the path to the configuration file.

    Checks MACAUDIO_CONFIG environment variable first, then falls back to default.
    """
    config_path = os.getenv("MACAUDIO_CONFIG")
    if config_path:
        return Path(config_path).expanduser()
    return Path.home() / ".config" / "macaudio" / "config.yaml"


class ConfigManager:
    """Manages configuration loading and saving."""

    def __init__(self, config_path: Path | str | None = None):
        """Initialize ConfigManager.

        Args:
            config_path: Optional path to the YAML file. If None, resolved from the environment.
        """
        self.config_path = Path(config_path) if config_path else get_config_path()

    def load(self) -> AudioConfig:
        """Load and validate the configuration.

        Returns:
            AudioConfig: Loaded configuration, or defaults when no file exists

        Raises:
            ConfigurationError: If the file cannot be parsed or fails validation
        """
        if not self.config_path.exists():
            logger.debug("No configuration at %s, using defaults", self.config_path)
            return AudioConfig()

        raw_config = self._read_yaml()
        try:
            return AudioConfig.model_validate(raw_config)
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed for {self.config_path}: {e}"
            ) from e

    def save(self, config: AudioConfig) -> None:
        """Save configuration to file with backup.

        Args:
            config: Configuration to save
        """
        self.config_path.parent.mkdir(parents=True, exist_ok=True)

        if self.config_path.exists():
            backup_path = self.config_path.with_suffix(".yaml.backup")
            shutil.copy2(self.config_path, backup_path)
            logger.debug("Backed up configuration to %s", backup_path)

        with open(self.config_path, "w") as f:
            yaml.safe_dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
        logger.info("Configuration saved to %s", self.config_path)

    def _read_yaml(self) -> dict[str, Any]:
        try:
            with open(self.config_path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Could not read {self.config_path}: {e}") from e

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"{self.config_path} must contain a mapping at the top level")
        return data
