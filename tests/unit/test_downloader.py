"""
Unit tests for the CSLB listing downloader.
"""

from datetime import date

import httpx
import pytest

from cslb_sync.core.downloader import CSLBDownloader
from cslb_sync.models.config_models import DownloadConfig

TODAY = date(2025, 3, 7)


@pytest.fixture
def download_config():
    return DownloadConfig(
        base_url="https://cslb.example/Resources/",
        max_retries=3,
        request_delay_seconds=0,
        date_delay_seconds=0,
    )


def make_downloader(tmp_path, download_config, handler):
    return CSLBDownloader(
        tmp_path / "raw",
        download_config,
        transport=httpx.MockTransport(handler),
        retry_wait_seconds=0,
    )


class TestCSLBDownloader:
    """Test HTTP download behaviour."""

    @pytest.mark.asyncio
    async def test_successful_download(self, tmp_path, download_config):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(200, content=b"%PDF-1.4 listing")

        async with make_downloader(tmp_path, download_config, handler) as downloader:
            result = await downloader.download_file("PL250307.pdf")

        assert result.success
        assert not result.already_exists
        assert result.file_size == len(b"%PDF-1.4 listing")
        assert (tmp_path / "raw" / "PL250307.pdf").read_bytes() == b"%PDF-1.4 listing"
        assert str(requests[0].url) == "https://cslb.example/Resources/PL250307.pdf"
        assert requests[0].headers["User-Agent"] == "NAMC-Data-Pipeline/1.0"

    @pytest.mark.asyncio
    async def test_existing_file_is_not_requested(self, tmp_path, download_config):
        raw = tmp_path / "raw"
        raw.mkdir()
        (raw / "PL250307.pdf").write_bytes(b"abc")

        def handler(request):
            raise AssertionError("no request expected")

        async with make_downloader(tmp_path, download_config, handler) as downloader:
            result = await downloader.download_file("PL250307.pdf")

        assert result.success
        assert result.already_exists
        assert result.file_size == 3

    @pytest.mark.asyncio
    async def test_not_found(self, tmp_path, download_config):
        async with make_downloader(
            tmp_path, download_config, lambda request: httpx.Response(404)
        ) as downloader:
            result = await downloader.download_file("PP250307.pdf")

        assert not result.success
        assert result.error == "File not found (may not be available yet)"
        assert not (tmp_path / "raw" / "PP250307.pdf").exists()

    @pytest.mark.asyncio
    async def test_other_status_codes(self, tmp_path, download_config):
        async with make_downloader(
            tmp_path, download_config, lambda request: httpx.Response(503)
        ) as downloader:
            result = await downloader.download_file("PP250307.pdf")

        assert result.error == "HTTP 503"

    @pytest.mark.asyncio
    async def test_transport_errors_are_retried(self, tmp_path, download_config):
        calls = []

        def handler(request):
            calls.append(request)
            if len(calls) < 3:
                raise httpx.ConnectError("connection refused", request=request)
            return httpx.Response(200, content=b"ok")

        async with make_downloader(tmp_path, download_config, handler) as downloader:
            result = await downloader.download_file("PL250307.pdf")

        assert result.success
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_timeout_after_retries(self, tmp_path, download_config):
        calls = []

        def handler(request):
            calls.append(request)
            raise httpx.ReadTimeout("timed out", request=request)

        async with make_downloader(tmp_path, download_config, handler) as downloader:
            result = await downloader.download_file("PL250307.pdf")

        assert not result.success
        assert result.error == "Download timeout"
        assert len(calls) == download_config.max_retries
        assert list((tmp_path / "raw").iterdir()) == []

    @pytest.mark.asyncio
    async def test_download_for_date_fetches_each_prefix(self, tmp_path, download_config):
        seen = []

        def handler(request):
            seen.append(request.url.path.rsplit("/", 1)[-1])
            return httpx.Response(200, content=b"x")

        async with make_downloader(tmp_path, download_config, handler) as downloader:
            results = await downloader.download_for_date(TODAY)

        assert seen == ["PL250307.pdf", "PP250307.pdf"]
        assert all(r.success for r in results)

    @pytest.mark.asyncio
    async def test_download_recent_walks_back_from_today(self, tmp_path, download_config):
        seen = []

        def handler(request):
            seen.append(request.url.path.rsplit("/", 1)[-1])
            return httpx.Response(404)

        async with make_downloader(tmp_path, download_config, handler) as downloader:
            results = await downloader.download_recent(2, today=TODAY)

        assert seen == ["PL250307.pdf", "PP250307.pdf", "PL250306.pdf", "PP250306.pdf"]
        assert len(results) == 4
        assert not any(r.success for r in results)
