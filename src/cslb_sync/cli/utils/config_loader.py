"""
Configuration loading shared by CLI commands
"""

from pathlib import Path
from typing import Optional

import click

from ...core.config_manager import ConfigurationManager
from ...core.logging_setup import apply_logging_config
from ...models.config_models import CSLBSyncConfig


def config_manager_for(ctx: click.Context) -> ConfigurationManager:
    config_path: Optional[str] = ctx.obj.get("config_path")
    return ConfigurationManager(Path(config_path) if config_path else None)


async def load_command_config(ctx: click.Context) -> CSLBSyncConfig:
    """
    Load configuration for a command and apply its logging settings.

    Raises:
        ConfigurationError: If the configuration cannot be loaded
    """
    config = await config_manager_for(ctx).load_config()
    apply_logging_config(
        config.logging, verbose=ctx.obj.get("verbose", False) or config.debug_mode
    )
    return config
