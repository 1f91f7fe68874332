"""Configuration service for loading and saving config.yml."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from ..models import PublishConfig

logger = logging.getLogger(__name__)


class ConfigService:
    """Service for loading, caching and saving the publish configuration."""

    def __init__(self, config_file: Path) -> None:
        """Initialize the config service.

        Args:
            config_file: Path to the YAML configuration file
        """
        self.config_file = config_file
        self._config: PublishConfig | None = None
        self._config_error: str | None = None

    @property
    def has_config_error(self) -> bool:
        """Check if there was an error loading config."""
        return self._config_error is not None

    @property
    def config_error(self) -> str | None:
        """Get the config error message if any."""
        return self._config_error

    def get_config(self) -> PublishConfig:
        """Get configuration, loading from file if not cached."""
        if self._config is None:
            self._config = self._load_config()
        return self._config

    def reload(self) -> None:
        """Clear cached configuration, forcing reload on next access."""
        self._config = None
        self._config_error = None

    def save(self, config: PublishConfig) -> None:
        """Write configuration to file and cache it."""
        self.config_file.parent.mkdir(parents=True, exist_ok=True)
        with self.config_file.open("w") as f:
            yaml.safe_dump(config.to_yaml_dict(), f, sort_keys=False)
        self._config = config
        self._config_error = None
        logger.info("Saved configuration to %s", self.config_file)

    def update(self, **changes: str | None) -> PublishConfig:
        """Apply changed fields (None values are left alone) and save.

        Raises:
            pydantic.ValidationError: A changed value is invalid
        """
        current = self.get_config().model_dump()
        current.update({key: value for key, value in changes.items() if value is not None})
        config = PublishConfig.model_validate(current)
        self.save(config)
        return config

    def _load_config(self) -> PublishConfig:
        """Load configuration from file, merged over empty defaults."""
        self._config_error = None

        if not self.config_file.exists():
            logger.debug("No %s found, using defaults", self.config_file)
            return PublishConfig()

        try:
            with self.config_file.open() as f:
                data = yaml.safe_load(f)

            if data is None:
                return PublishConfig()
            if not isinstance(data, dict):
                self._config_error = f"{self.config_file} must contain a mapping"
                logger.warning(self._config_error)
                return PublishConfig()

            config = PublishConfig.model_validate(data)
            logger.info("Loaded configuration from %s", self.config_file)
            return config

        except yaml.YAMLError as e:
            self._config_error = f"Invalid YAML in {self.config_file}: {e}"
            logger.warning(self._config_error)
            return PublishConfig()

        except ValidationError as e:
            self._config_error = f"Invalid configuration in {self.config_file}: {e}"
            logger.warning(self._config_error)
            return PublishConfig()
