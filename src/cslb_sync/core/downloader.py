"""
HTTP retrieval of CSLB listing PDFs.

Files are fetched from ``download.base_url`` into the raw document directory.
A file that already exists locally is never requested again.
"""

import asyncio
import logging
import time
from datetime import date, timedelta
from pathlib import Path
from typing import List, Optional, Sequence

import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from ..models.config_models import DownloadConfig
from ..models.errors import DownloadError
from ..models.session_models import DownloadResult
from .acquisition import NOT_YET_AVAILABLE
from .directory_manager import listing_filename

logger = logging.getLogger(__name__)


class CSLBDownloader:
    """
    Downloads daily business and personnel listings.

    Use as an async context manager so the HTTP client is closed::

        async with CSLBDownloader(raw_dir, config) as downloader:
            results = await downloader.download_daily()
    """

    def __init__(
        self,
        raw_dir: Path,
        config: Optional[DownloadConfig] = None,
        prefixes: Sequence[str] = ("PL", "PP"),
        transport: Optional[httpx.AsyncBaseTransport] = None,
        retry_wait_seconds: float = 1.0,
    ):
        self.raw_dir = raw_dir
        self.config = config or DownloadConfig()
        self.prefixes = list(prefixes)
        self.retry_wait_seconds = retry_wait_seconds
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "CSLBDownloader":
        self._get_client()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
        return False

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers={"User-Agent": self.config.user_agent},
                timeout=httpx.Timeout(self.config.request_timeout),
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    def url_for(self, filename: str) -> str:
        return f"{self.config.base_url}{filename}"

    async def download_file(self, filename: str) -> DownloadResult:
        """
        Download one listing file unless it is already present.

        Failures are returned as unsuccessful results, never raised.
        """
        target = self.raw_dir / filename
        if target.exists():
            logger.info(f"File already exists: {filename}")
            return DownloadResult(
                filename=filename,
                success=True,
                file_size=target.stat().st_size,
                already_exists=True,
            )

        self.raw_dir.mkdir(parents=True, exist_ok=True)
        url = self.url_for(filename)
        logger.info(f"Downloading: {url}")
        start_time = time.monotonic()

        try:
            file_size = await self._fetch(url, target)
        except DownloadError as e:
            error = str(e)
        except httpx.TimeoutException:
            error = "Download timeout"
        except httpx.TransportError as e:
            error = f"Download failed: {e}"
        else:
            elapsed = time.monotonic() - start_time
            logger.info(f"Downloaded {filename} ({file_size} bytes)")
            return DownloadResult(
                filename=filename,
                success=True,
                file_size=file_size,
                download_time=elapsed,
            )

        self._partial_path(target).unlink(missing_ok=True)
        logger.warning(f"Failed to download {filename}: {error}")
        return DownloadResult(filename=filename, success=False, error=error)

    async def download_for_date(self, day: date) -> List[DownloadResult]:
        """Download every listing prefix for one date."""
        logger.info(f"Downloading CSLB files for {day.isoformat()}")
        results = []
        for index, prefix in enumerate(self.prefixes):
            if index and self.config.request_delay_seconds:
                await asyncio.sleep(self.config.request_delay_seconds)
            results.append(await self.download_file(listing_filename(prefix, day)))
        return results

    async def download_daily(self, today: Optional[date] = None) -> List[DownloadResult]:
        return await self.download_for_date(today or date.today())

    async def download_recent(
        self, days: Optional[int] = None, today: Optional[date] = None
    ) -> List[DownloadResult]:
        """Download today's listings and those of the preceding ``days - 1`` days."""
        days = days or self.config.recent_days
        today = today or date.today()
        results: List[DownloadResult] = []
        for offset in range(days):
            if offset and self.config.date_delay_seconds:
                await asyncio.sleep(self.config.date_delay_seconds)
            results.extend(await self.download_for_date(today - timedelta(days=offset)))
        return results

    async def _fetch(self, url: str, target: Path) -> int:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.config.max_retries),
            wait=wait_exponential(multiplier=self.retry_wait_seconds, max=30),
            retry=retry_if_exception_type(httpx.TransportError),
            reraise=True,
        ):
            with attempt:
                return await self._stream_to_file(url, target)
        raise DownloadError(f"No download attempt made for {url}")

    async def _stream_to_file(self, url: str, target: Path) -> int:
        partial = self._partial_path(target)
        client = self._get_client()

        async with client.stream("GET", url) as response:
            if response.status_code == 404:
                raise DownloadError(
                    NOT_YET_AVAILABLE, filename=target.name, status_code=404
                )
            if response.status_code != 200:
                raise DownloadError(
                    f"HTTP {response.status_code}",
                    filename=target.name,
                    status_code=response.status_code,
                )

            file_size = 0
            with open(partial, "wb") as f:
                async for chunk in response.aiter_bytes():
                    f.write(chunk)
                    file_size += len(chunk)

        partial.replace(target)
        return file_size

    @staticmethod
    def _partial_path(target: Path) -> Path:
        return target.with_name(f"{target.name}.part")
