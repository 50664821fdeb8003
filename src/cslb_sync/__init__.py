"""
cslb-sync - CSLB contractor listing ingestion

Converts California Contractors State License Board business (PL) and
personnel (PP) listing PDFs into CSV files, with run reports and
retention-based archiving.
"""

__version__ = "1.0.0"
__author__ = "NAMC NorCal Data Team"

from .core.config_manager import ConfigurationError, ConfigurationManager
from .core.sync_pipeline import CSLBSyncPipeline
from .models.config_models import CSLBSyncConfig

__all__ = [
    "ConfigurationManager",
    "ConfigurationError",
    "CSLBSyncConfig",
    "CSLBSyncPipeline",
]
