"""
Core pipeline logic for cslb-sync.
"""

from .acquisition import AcquisitionStage
from .archiver import FileArchiver
from .business_parser import BusinessListingParser, parse_business_listing
from .config_manager import ConfigurationError, ConfigurationManager
from .csv_writer import CSVRecordWriter
from .directory_manager import DirectoryManager
from .downloader import CSLBDownloader
from .environment_manager import EnvironmentManager
from .listing_processor import ListingProcessor
from .personnel_parser import parse_personnel_listing
from .report_generator import ReportWriter, render_sync_report
from .sync_pipeline import CSLBSyncPipeline
from .text_extractor import PDFTextExtractor
from .yaml_parser import YAMLConfigParser

__all__ = [
    # Configuration management
    "ConfigurationManager",
    "ConfigurationError",
    "YAMLConfigParser",
    "EnvironmentManager",
    # Pipeline stages
    "AcquisitionStage",
    "PDFTextExtractor",
    "BusinessListingParser",
    "parse_business_listing",
    "parse_personnel_listing",
    "CSVRecordWriter",
    "ListingProcessor",
    "FileArchiver",
    "ReportWriter",
    "render_sync_report",
    # Orchestration
    "CSLBSyncPipeline",
    "CSLBDownloader",
    "DirectoryManager",
]
