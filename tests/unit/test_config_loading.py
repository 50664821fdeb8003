"""
Unit tests for configuration models, YAML parsing and loading.
"""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from cslb_sync.core.config_manager import ConfigurationError, ConfigurationManager
from cslb_sync.core.environment_manager import EnvironmentManager
from cslb_sync.core.yaml_parser import YAMLConfigParser
from cslb_sync.models.config_models import (
    CSLBSyncConfig,
    DownloadConfig,
    LoggingConfig,
    PipelineConfig,
    StorageConfig,
)


class TestConfigurationModels:
    """Test Pydantic configuration model validation."""

    def test_default_values(self):
        config = CSLBSyncConfig()

        assert config.storage.base_path == "./data/cslb"
        assert config.storage.retention_days == 30
        assert config.extraction.command == "pdftotext"
        assert config.pipeline.file_delay_seconds == 0.5
        assert config.pipeline.daily_prefixes == ["PL", "PP"]
        assert config.download.user_agent == "NAMC-Data-Pipeline/1.0"
        assert config.logging.level == "INFO"
        assert config.debug_mode is False
        assert config.config_version == "1.0"

    def test_storage_paths(self):
        storage = StorageConfig(base_path="/srv/cslb", logs_path="/srv/logs")

        assert storage.raw_path == Path("/srv/cslb/raw-pdfs")
        assert storage.text_path == Path("/srv/cslb/extracted-text")
        assert storage.csv_path == Path("/srv/cslb/processed-csv")
        assert storage.archive_path == Path("/srv/cslb/archive")
        assert storage.logs == Path("/srv/logs")

    @pytest.mark.parametrize("subdir", ["", "/abs/path", "../escape"])
    def test_subdirectories_must_stay_under_base(self, subdir):
        with pytest.raises(ValidationError):
            StorageConfig(raw_dir=subdir)

    def test_validation_errors(self):
        with pytest.raises(ValidationError):
            StorageConfig(retention_days=0)
        with pytest.raises(ValidationError):
            LoggingConfig(level="INVALID")
        with pytest.raises(ValidationError):
            PipelineConfig(daily_prefixes=[])
        with pytest.raises(ValidationError):
            DownloadConfig(base_url="ftp://example.com")

    def test_normalisation(self):
        assert LoggingConfig(level="debug").level == "DEBUG"
        assert PipelineConfig(daily_prefixes=["pl", " pp "]).daily_prefixes == ["PL", "PP"]
        assert DownloadConfig(base_url="https://example.com/files").base_url == (
            "https://example.com/files/"
        )


class TestYAMLParser:
    """Test YAML parsing with environment variable substitution."""

    def setup_method(self):
        self.parser = YAMLConfigParser()

    @pytest.mark.asyncio
    async def test_environment_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("CSLB_TEST_BASE", "/srv/cslb")
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "# base path ${NOT_SUBSTITUTED}\n"
            "storage:\n"
            "  base_path: ${CSLB_TEST_BASE}\n"
            "  logs_path: ${CSLB_TEST_UNSET:/tmp/logs}\n"
        )

        data = await self.parser.load_yaml_config(config_file)

        assert data == {"storage": {"base_path": "/srv/cslb", "logs_path": "/tmp/logs"}}

    @pytest.mark.asyncio
    async def test_missing_variable_without_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("CSLB_TEST_UNSET", raising=False)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("storage:\n  base_path: ${CSLB_TEST_UNSET}\n")

        with pytest.raises(ValueError):
            await self.parser.load_yaml_config(config_file)

    @pytest.mark.asyncio
    async def test_empty_file_is_empty_dict(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("")

        assert await self.parser.load_yaml_config(config_file) == {}

    @pytest.mark.asyncio
    async def test_non_mapping_is_rejected(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- just\n- a list\n")

        with pytest.raises(ValueError):
            await self.parser.load_yaml_config(config_file)

    @pytest.mark.asyncio
    async def test_saved_file_is_commented_and_loadable(self, tmp_path):
        config_file = tmp_path / "nested" / "cslb-sync.yaml"

        await self.parser.save_yaml_config(CSLBSyncConfig().model_dump(), config_file)

        content = config_file.read_text()
        assert "# Working directory layout" in content
        assert "  # Files older than this are archived by daily runs" in content
        assert CSLBSyncConfig(**yaml.safe_load(content)) == CSLBSyncConfig()


class TestConfigurationManager:
    """Test configuration discovery, overrides and generation."""

    @pytest.mark.asyncio
    async def test_missing_default_file_uses_defaults(self, tmp_path, clean_env):
        clean_env.chdir(tmp_path)

        config = await ConfigurationManager().load_config()

        assert config == CSLBSyncConfig()

    @pytest.mark.asyncio
    async def test_missing_explicit_file_is_an_error(self, tmp_path, clean_env):
        manager = ConfigurationManager(tmp_path / "absent.yaml")

        with pytest.raises(ConfigurationError):
            await manager.load_config()

    @pytest.mark.asyncio
    async def test_env_config_path(self, tmp_path, clean_env):
        config_file = tmp_path / "custom.yaml"
        config_file.write_text("storage:\n  retention_days: 7\n")
        clean_env.setenv("CSLB_SYNC_CONFIG_PATH", str(config_file))

        config = await ConfigurationManager().load_config()

        assert config.storage.retention_days == 7

    @pytest.mark.asyncio
    async def test_environment_overrides_win_over_file(self, tmp_path, clean_env):
        config_file = tmp_path / "cslb-sync.yaml"
        config_file.write_text("storage:\n  base_path: /from/file\n")
        clean_env.setenv("CSLB_SYNC_BASE_PATH", "/from/env")
        clean_env.setenv("CSLB_SYNC_PDFTOTEXT", "/opt/poppler/bin/pdftotext")
        clean_env.setenv("CSLB_SYNC_RETENTION_DAYS", "14")
        clean_env.setenv("CSLB_SYNC_DEBUG_MODE", "true")

        config = await ConfigurationManager(config_file).load_config()

        assert config.storage.base_path == "/from/env"
        assert config.storage.retention_days == 14
        assert config.extraction.command == "/opt/poppler/bin/pdftotext"
        assert config.debug_mode is True
        assert config.logging.level == "DEBUG"

    @pytest.mark.asyncio
    async def test_invalid_values_raise_configuration_error(self, tmp_path, clean_env):
        config_file = tmp_path / "cslb-sync.yaml"
        config_file.write_text("storage:\n  retention_days: -1\n")

        with pytest.raises(ConfigurationError):
            await ConfigurationManager(config_file).load_config()

    @pytest.mark.asyncio
    async def test_generate_default_config(self, tmp_path, clean_env):
        config_file = tmp_path / "cslb-sync.yaml"
        manager = ConfigurationManager(config_file)

        assert await manager.generate_default_config() == config_file
        with pytest.raises(ConfigurationError):
            await manager.generate_default_config()
        await manager.generate_default_config(force=True)

        assert await manager.load_config() == CSLBSyncConfig()


def test_parse_bool():
    assert EnvironmentManager.parse_bool("Yes")
    assert EnvironmentManager.parse_bool(" 1 ")
    assert not EnvironmentManager.parse_bool("off")
