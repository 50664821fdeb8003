"""
Configuration loading with environment overrides and validation.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import ValidationError

from ..models.config_models import CSLBSyncConfig
from .environment_manager import EnvironmentManager
from .yaml_parser import YAMLConfigParser

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILENAME = "cslb-sync.yaml"


class ConfigurationError(Exception):
    """Base exception for configuration-related errors."""

    pass


class ConfigurationManager:
    """Loads, validates and saves the cslb-sync configuration."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        self.yaml_parser = YAMLConfigParser()
        self.env_manager = EnvironmentManager()
        self.explicit_path = config_path
        self.config_path: Optional[Path] = config_path
        self.current_config: Optional[CSLBSyncConfig] = None

    async def load_config(self, config_path: Optional[Path] = None) -> CSLBSyncConfig:
        """
        Load configuration from file with validation.

        A missing file at the default location falls back to built-in
        defaults. A missing file that was asked for explicitly is an error.
        """
        explicit = config_path or self.explicit_path or self._get_env_config_path()
        config_path = explicit or self._get_default_config_path()
        self.config_path = config_path

        try:
            if config_path.exists():
                config_data = await self.yaml_parser.load_yaml_config(config_path)
            elif explicit:
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            else:
                logger.debug(
                    f"No configuration file at {config_path}, using defaults"
                )
                config_data = {}

            self._apply_environment_overrides(config_data)
            validated_config = CSLBSyncConfig(**config_data)

        except (OSError, ValueError, ValidationError) as e:
            logger.error(f"Failed to load configuration: {e}")
            raise ConfigurationError(f"Configuration loading failed: {e}") from e

        self.current_config = validated_config
        logger.debug(f"Configuration loaded ({config_path})")
        return validated_config

    async def save_config(
        self, config: CSLBSyncConfig, config_path: Optional[Path] = None
    ) -> None:
        """Save configuration to file."""

        config_path = config_path or self.config_path or self._get_default_config_path()

        try:
            await self.yaml_parser.save_yaml_config(config.model_dump(), config_path)
        except RuntimeError as e:
            raise ConfigurationError(f"Configuration saving failed: {e}") from e

        self.config_path = config_path

    async def generate_default_config(
        self, config_path: Optional[Path] = None, force: bool = False
    ) -> Path:
        """Write a commented default configuration file."""

        config_path = (
            config_path
            or self.explicit_path
            or self._get_env_config_path()
            or self._get_default_config_path()
        )

        if config_path.exists() and not force:
            raise ConfigurationError(
                f"Configuration file already exists at {config_path}"
            )

        await self.save_config(CSLBSyncConfig(), config_path)
        logger.info(f"Default configuration generated at {config_path}")
        return config_path

    def _get_env_config_path(self) -> Optional[Path]:
        env_path = os.getenv("CSLB_SYNC_CONFIG_PATH")
        return Path(env_path).expanduser() if env_path else None

    def _get_default_config_path(self) -> Path:
        return Path.cwd() / DEFAULT_CONFIG_FILENAME

    def _apply_environment_overrides(self, config_data: Dict[str, Any]) -> None:
        """Apply environment variable overrides to configuration data."""

        overrides = self.env_manager.get_optional_config_overrides()

        def section(name: str) -> Dict[str, Any]:
            if not isinstance(config_data.get(name), dict):
                config_data[name] = {}
            return config_data[name]

        if "CSLB_SYNC_BASE_PATH" in overrides:
            section("storage")["base_path"] = overrides["CSLB_SYNC_BASE_PATH"]

        if "CSLB_SYNC_LOGS_PATH" in overrides:
            section("storage")["logs_path"] = overrides["CSLB_SYNC_LOGS_PATH"]

        if "CSLB_SYNC_RETENTION_DAYS" in overrides:
            section("storage")["retention_days"] = overrides["CSLB_SYNC_RETENTION_DAYS"]

        if "CSLB_SYNC_PDFTOTEXT" in overrides:
            section("extraction")["command"] = overrides["CSLB_SYNC_PDFTOTEXT"]

        if "CSLB_SYNC_LOG_LEVEL" in overrides:
            section("logging")["level"] = overrides["CSLB_SYNC_LOG_LEVEL"].upper()

        if "CSLB_SYNC_DEBUG_MODE" in overrides:
            debug_value = self.env_manager.parse_bool(overrides["CSLB_SYNC_DEBUG_MODE"])
            config_data["debug_mode"] = debug_value
            if debug_value:
                section("logging")["level"] = "DEBUG"
