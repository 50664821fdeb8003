"""
Shared fixtures for cslb-sync tests.
"""

import os
import stat
import sys
from pathlib import Path

import pytest

from cslb_sync.models.config_models import (
    CSLBSyncConfig,
    DownloadConfig,
    ExtractionConfig,
    PipelineConfig,
    StorageConfig,
)

BUSINESS_TEXT = """\
CONTRACTORS STATE LICENSE BOARD
BUSINESS LISTING                                  PAGE 1

1000001 ACME CONSTRUCTION INC ACTIVE 123 MAIN ST SACRAMENTO, CA 95814
        (916) 555-1234 $15,000 B C-10 EXP 12/31/2025
1000002 BAYSIDE PLUMBING ACTIVE 55 OCEAN AVE SAN FRANCISCO, CA 94112
        C-36 C-42
"""

PERSONNEL_TEXT = """\
PERSONNEL LISTING
1000001 SMITH, JOHN A RMO 01/15/2020
1000002 DOE, JANE OFFICER 03/01/2019 06/30/2024
not a personnel line
"""

FAKE_PDFTOTEXT = """\
#!{python}
import sys

args = [a for a in sys.argv[1:] if not a.startswith("-")]
layout = "-layout" in sys.argv
mode = {mode!r}

if mode == "fail" or (mode == "fail-layout" and layout):
    sys.stderr.write("Syntax Error: could not read PDF\\n")
    sys.exit(1)

pdf_path, out_path = args
with open(out_path, "w") as f:
    f.write("MODE " + ("layout" if layout else "plain") + "\\n")
    with open(pdf_path) as src:
        f.write(src.read())
"""


def make_fake_pdftotext(directory: Path, mode: str = "ok") -> Path:
    """
    Write an executable stand-in for pdftotext.

    ``mode`` is ``ok``, ``fail`` (every call exits 1) or ``fail-layout``
    (only ``-layout`` calls fail). The "PDF" is copied through as text.
    """
    script = directory / f"fake-pdftotext-{mode}"
    script.write_text(FAKE_PDFTOTEXT.format(python=sys.executable, mode=mode))
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


@pytest.fixture
def config(tmp_path: Path) -> CSLBSyncConfig:
    """Configuration rooted in a temporary directory, without pauses."""
    return CSLBSyncConfig(
        storage=StorageConfig(
            base_path=str(tmp_path / "data" / "cslb"),
            logs_path=str(tmp_path / "data" / "logs"),
        ),
        extraction=ExtractionConfig(
            command=str(tmp_path / "missing-pdftotext"), timeout_seconds=10
        ),
        pipeline=PipelineConfig(file_delay_seconds=0),
        download=DownloadConfig(request_delay_seconds=0, date_delay_seconds=0),
    )


@pytest.fixture
def clean_env(monkeypatch):
    """Remove CSLB_SYNC_* variables that would leak into configuration."""
    for name in list(os.environ):
        if name.startswith("CSLB_SYNC_"):
            monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def business_text() -> str:
    return BUSINESS_TEXT


@pytest.fixture
def personnel_text() -> str:
    return PERSONNEL_TEXT


@pytest.fixture
def fake_pdftotext(tmp_path: Path):
    """Factory for stand-in pdftotext executables."""

    def factory(mode: str = "ok") -> Path:
        return make_fake_pdftotext(tmp_path, mode)

    return factory
