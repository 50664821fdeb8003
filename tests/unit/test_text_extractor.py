"""
Unit tests for pdftotext-based extraction.
"""

import asyncio
from unittest.mock import AsyncMock, patch

import pytest

from cslb_sync.core.text_extractor import PDFTextExtractor
from cslb_sync.models.config_models import ExtractionConfig
from cslb_sync.models.errors import ExtractionError


@pytest.fixture
def pdf_path(tmp_path):
    path = tmp_path / "raw" / "PL250307.pdf"
    path.parent.mkdir()
    path.write_text("1000001 ACME CONSTRUCTION INC ACTIVE\n")
    return path


def make_extractor(tmp_path, command, **overrides):
    config = ExtractionConfig(command=str(command), timeout_seconds=10, **overrides)
    return PDFTextExtractor(tmp_path / "text", config)


class TestPDFTextExtractor:
    """Test extraction attempts, fallback and caching."""

    @pytest.mark.asyncio
    async def test_layout_mode_is_tried_first(self, tmp_path, pdf_path, fake_pdftotext):
        extractor = make_extractor(tmp_path, fake_pdftotext("ok"))

        text = await extractor.extract_text(pdf_path)

        assert text.startswith("MODE layout")
        assert "ACME CONSTRUCTION" in text
        assert extractor.cached_text_path(pdf_path) == tmp_path / "text" / "PL250307.txt"
        assert extractor.cached_text_path(pdf_path).exists()

    @pytest.mark.asyncio
    async def test_falls_back_to_plain_mode(self, tmp_path, pdf_path, fake_pdftotext):
        extractor = make_extractor(tmp_path, fake_pdftotext("fail-layout"))

        text = await extractor.extract_text(pdf_path)

        assert text.startswith("MODE plain")

    @pytest.mark.asyncio
    async def test_both_attempts_failing_raises(self, tmp_path, pdf_path, fake_pdftotext):
        extractor = make_extractor(tmp_path, fake_pdftotext("fail"))

        with pytest.raises(ExtractionError) as exc_info:
            await extractor.extract_text(pdf_path)

        message = str(exc_info.value)
        assert "PL250307.pdf" in message
        assert "Is pdftotext installed?" in message
        assert "could not read PDF" in message
        assert exc_info.value.filename == "PL250307.pdf"
        assert not extractor.cached_text_path(pdf_path).exists()

    @pytest.mark.asyncio
    async def test_missing_command_raises(self, tmp_path, pdf_path):
        extractor = make_extractor(tmp_path, tmp_path / "no-such-pdftotext")

        with pytest.raises(ExtractionError) as exc_info:
            await extractor.extract_text(pdf_path)

        assert "pdftotext command failed" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_cached_text_skips_subprocess(self, tmp_path, pdf_path):
        extractor = make_extractor(tmp_path, tmp_path / "no-such-pdftotext")
        cached = extractor.cached_text_path(pdf_path)
        cached.parent.mkdir(parents=True)
        cached.write_text("CACHED TEXT", encoding="utf-8")

        with patch("asyncio.create_subprocess_exec") as mock_exec:
            text = await extractor.extract_text(pdf_path)

        assert text == "CACHED TEXT"
        mock_exec.assert_not_called()

    @pytest.mark.asyncio
    async def test_cache_can_be_disabled(self, tmp_path, pdf_path, fake_pdftotext):
        extractor = make_extractor(tmp_path, fake_pdftotext("ok"), use_cache=False)
        cached = extractor.cached_text_path(pdf_path)
        cached.parent.mkdir(parents=True)
        cached.write_text("STALE", encoding="utf-8")

        text = await extractor.extract_text(pdf_path)

        assert text.startswith("MODE layout")

    @pytest.mark.asyncio
    async def test_timeout_fails_without_plain_retry(self, tmp_path, pdf_path):
        extractor = make_extractor(tmp_path, "pdftotext")

        process = AsyncMock()
        process.communicate.side_effect = asyncio.TimeoutError()
        process.kill = lambda: None

        with patch(
            "asyncio.create_subprocess_exec", AsyncMock(return_value=process)
        ) as mock_exec:
            with pytest.raises(ExtractionError) as exc_info:
                await extractor.extract_text(pdf_path)

        assert "timed out" in str(exc_info.value)
        assert mock_exec.await_count == 1
