"""
Pydantic configuration models.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class StorageConfig(BaseModel):
    """Working directory layout."""

    base_path: str = Field(default="./data/cslb", description="Root data directory")
    raw_dir: str = Field(default="raw-pdfs")
    text_dir: str = Field(default="extracted-text")
    csv_dir: str = Field(default="processed-csv")
    archive_dir: str = Field(default="archive")
    logs_path: str = Field(default="./data/logs")
    retention_days: int = Field(default=30, ge=1, le=3650)

    @field_validator("raw_dir", "text_dir", "csv_dir", "archive_dir")
    @classmethod
    def validate_subdirectory(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Directory name cannot be empty")
        if Path(v).is_absolute() or ".." in Path(v).parts:
            raise ValueError(f"Directory must be relative to base_path: {v}")
        return v.strip()

    @property
    def base(self) -> Path:
        return Path(self.base_path).expanduser()

    @property
    def raw_path(self) -> Path:
        return self.base / self.raw_dir

    @property
    def text_path(self) -> Path:
        return self.base / self.text_dir

    @property
    def csv_path(self) -> Path:
        return self.base / self.csv_dir

    @property
    def archive_path(self) -> Path:
        return self.base / self.archive_dir

    @property
    def logs(self) -> Path:
        return Path(self.logs_path).expanduser()

    def all_directories(self) -> List[Path]:
        return [
            self.base,
            self.raw_path,
            self.text_path,
            self.csv_path,
            self.logs,
            self.archive_path,
        ]


class ExtractionConfig(BaseModel):
    """External text extraction tool settings."""

    command: str = Field(default="pdftotext", description="pdftotext executable")
    timeout_seconds: float = Field(default=300.0, gt=0, le=3600)
    use_cache: bool = Field(default=True)

    @field_validator("command")
    @classmethod
    def validate_command(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Extraction command cannot be empty")
        return v.strip()


class PipelineConfig(BaseModel):
    """Orchestration settings."""

    file_delay_seconds: float = Field(default=0.5, ge=0, le=60)
    daily_prefixes: List[str] = Field(default_factory=lambda: ["PL", "PP"])

    @field_validator("daily_prefixes")
    @classmethod
    def validate_prefixes(cls, v: List[str]) -> List[str]:
        prefixes = [p.strip().upper() for p in v if p and p.strip()]
        if not prefixes:
            raise ValueError("At least one daily prefix is required")
        return prefixes


class DownloadConfig(BaseModel):
    """CSLB download settings."""

    base_url: str = Field(default="https://www.cslb.ca.gov/Resources/CSLB/")
    user_agent: str = Field(default="NAMC-Data-Pipeline/1.0")
    request_timeout: float = Field(default=30.0, gt=0, le=600)
    max_retries: int = Field(default=3, ge=1, le=10)
    request_delay_seconds: float = Field(default=1.0, ge=0, le=60)
    date_delay_seconds: float = Field(default=2.0, ge=0, le=120)
    recent_days: int = Field(default=7, ge=1, le=90)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must be an http(s) URL")
        return v if v.endswith("/") else f"{v}/"


class LoggingConfig(BaseModel):
    """Logging settings."""

    level: str = Field(default="INFO")
    file_path: Optional[str] = Field(default=None)
    max_file_size_mb: int = Field(default=10, ge=1, le=1024)
    backup_count: int = Field(default=5, ge=0, le=100)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"Invalid logging level: {v}")
        return v.upper()


class CSLBSyncConfig(BaseModel):
    """Root configuration."""

    storage: StorageConfig = Field(default_factory=StorageConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    download: DownloadConfig = Field(default_factory=DownloadConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    debug_mode: bool = Field(default=False)
    config_version: str = Field(default="1.0")
