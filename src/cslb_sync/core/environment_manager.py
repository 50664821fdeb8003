"""
Environment variable overrides for configuration.
"""

import logging
import os
from typing import Dict

logger = logging.getLogger(__name__)


class EnvironmentManager:
    """Reads the CSLB_SYNC_* environment overrides."""

    OVERRIDE_VARS = (
        "CSLB_SYNC_CONFIG_PATH",
        "CSLB_SYNC_BASE_PATH",
        "CSLB_SYNC_LOGS_PATH",
        "CSLB_SYNC_LOG_LEVEL",
        "CSLB_SYNC_DEBUG_MODE",
        "CSLB_SYNC_PDFTOTEXT",
        "CSLB_SYNC_RETENTION_DAYS",
    )

    def get_optional_config_overrides(self) -> Dict[str, str]:
        """Get optional configuration overrides from environment variables."""

        overrides = {name: os.getenv(name) for name in self.OVERRIDE_VARS}

        # Filter out None values
        present = {k: v for k, v in overrides.items() if v is not None}
        if present:
            logger.debug(f"Found environment overrides: {', '.join(sorted(present))}")
        return present

    @staticmethod
    def parse_bool(value: str) -> bool:
        return value.strip().lower() in ("true", "1", "yes", "on")
