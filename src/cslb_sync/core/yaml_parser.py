"""
YAML configuration parser with environment variable substitution.
"""

import logging
import os
import re
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

logger = logging.getLogger(__name__)


CONFIG_COMMENTS: Dict[str, Dict[str, str]] = {
    "storage": {
        "_section_comment": "Working directory layout",
        "base_path": "Root directory for CSLB data",
        "raw_dir": "Downloaded listing PDFs (relative to base_path)",
        "text_dir": "Cached pdftotext output (relative to base_path)",
        "csv_dir": "Generated CSV files (relative to base_path)",
        "archive_dir": "Archived files (relative to base_path)",
        "logs_path": "Directory for run reports",
        "retention_days": "Files older than this are archived by daily runs",
    },
    "extraction": {
        "_section_comment": "Text extraction (poppler pdftotext)",
        "command": "pdftotext executable name or path",
        "timeout_seconds": "Per-invocation timeout in seconds",
        "use_cache": "Reuse previously extracted text files",
    },
    "pipeline": {
        "_section_comment": "Pipeline orchestration",
        "file_delay_seconds": "Pause between documents in seconds",
        "daily_prefixes": "Listing prefixes expected every day",
    },
    "download": {
        "_section_comment": "CSLB download settings",
        "base_url": "Base URL for listing PDFs",
        "user_agent": "User-Agent header sent with requests",
        "request_timeout": "Request timeout in seconds",
        "max_retries": "Attempts per file on transport errors (1-10)",
        "request_delay_seconds": "Pause between file requests",
        "date_delay_seconds": "Pause between dates in recent mode",
        "recent_days": "Default number of days for recent mode",
    },
    "logging": {
        "_section_comment": "Logging configuration",
        "level": "Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        "file_path": "Log file path (leave empty for console only)",
        "max_file_size_mb": "Maximum log file size in MB before rotation",
        "backup_count": "Number of rotated log files to keep",
    },
}


class YAMLConfigParser:
    """YAML configuration parser with environment variable substitution."""

    def __init__(self) -> None:
        self.env_var_pattern = re.compile(r"\$\{([^}]+)\}")

    async def load_yaml_config(self, config_path: Path) -> Dict[str, Any]:
        """Load and parse YAML configuration file with environment substitution."""

        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_content = f.read()

            substituted_content = self._substitute_environment_variables(yaml_content)
            config_data = yaml.safe_load(substituted_content)

            if config_data is None:
                return {}
            if not isinstance(config_data, dict):
                raise ValueError("Configuration file must contain a YAML dictionary")

            logger.debug(f"Loaded configuration from {config_path}")
            return config_data

        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file: {e}") from e

    async def save_yaml_config(
        self, config_data: Dict[str, Any], config_path: Path
    ) -> None:
        """Save configuration data to YAML file with comments."""

        temp_path: Optional[Path] = None
        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            yaml_content = self._generate_commented_yaml(config_data)

            # Write to temporary file first (atomic operation)
            temp_path = config_path.with_suffix(".tmp")
            with open(temp_path, "w", encoding="utf-8") as f:
                f.write(yaml_content)
            temp_path.replace(config_path)

            logger.info(f"Saved configuration to {config_path}")

        except OSError as e:
            if temp_path and temp_path.exists():
                temp_path.unlink(missing_ok=True)
            raise RuntimeError(f"Failed to save configuration file: {e}") from e

    def _substitute_environment_variables(self, content: str) -> str:
        """Substitute ${VAR} and ${VAR:default} in non-comment lines."""

        processed_lines = []

        def replace_env_var(match: Any) -> str:
            var_name = match.group(1)

            if ":" in var_name:
                var_name, default_value = var_name.split(":", 1)
                return os.getenv(var_name, default_value)

            env_value = os.getenv(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable '{var_name}' is not set")
            return env_value

        for line in content.split("\n"):
            if line.strip().startswith("#"):
                processed_lines.append(line)
                continue
            processed_lines.append(self.env_var_pattern.sub(replace_env_var, line))

        return "\n".join(processed_lines)

    def _generate_commented_yaml(self, config_data: Dict[str, Any]) -> str:
        """Generate YAML with a comment above every documented key."""

        lines = [
            "# cslb-sync configuration",
            "# Environment variables can be substituted using ${VAR_NAME} syntax",
            "",
        ]

        for section_name, section_data in config_data.items():
            section_comments = CONFIG_COMMENTS.get(section_name, {})

            if not isinstance(section_data, dict):
                lines.append(self._dump_entry(section_name, section_data))
                lines.append("")
                continue

            lines.append(
                f"# {section_comments.get('_section_comment', section_name + ' configuration')}"
            )
            lines.append(f"{section_name}:")
            for key, value in section_data.items():
                comment = section_comments.get(key)
                if comment:
                    lines.append(f"  # {comment}")
                lines.append("  " + self._dump_entry(key, value))
            lines.append("")

        return "\n".join(lines)

    @staticmethod
    def _dump_entry(key: str, value: Any) -> str:
        dumped = yaml.safe_dump(
            {key: value}, default_flow_style=True, sort_keys=False, width=10000
        )
        # safe_dump wraps flow mappings in braces: "{key: value}\n"
        return dumped.strip()[1:-1]
