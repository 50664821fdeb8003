"""
Logging setup shared by the CLI commands.
"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

from ..models.config_models import LoggingConfig

PACKAGE_LOGGER = "cslb_sync"


def configure_console_logging(console: Console) -> None:
    """Route root logging through Rich; package logs default to INFO."""
    root = logging.getLogger()
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(
            console=console, rich_tracebacks=True, show_path=False
        )
        handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
        root.addHandler(handler)
    root.setLevel(logging.WARNING)
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.INFO)


def apply_logging_config(
    config: LoggingConfig, verbose: bool = False
) -> Optional[RotatingFileHandler]:
    """Apply level and optional rotating log file from configuration."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG if verbose else config.level)

    if not config.file_path:
        return None

    log_path = Path(config.file_path).expanduser()
    for existing in package_logger.handlers:
        if (
            isinstance(existing, RotatingFileHandler)
            and Path(existing.baseFilename) == log_path.resolve()
        ):
            return existing

    log_path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_file_size_mb * 1024 * 1024,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    package_logger.addHandler(file_handler)
    return file_handler
