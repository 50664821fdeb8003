"""
PDF text extraction through poppler's ``pdftotext``.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from ..models.config_models import ExtractionConfig
from ..models.errors import ExtractionError

logger = logging.getLogger(__name__)

INSTALL_HINT = "Is pdftotext installed? (apt install poppler-utils / brew install poppler)"


class PDFTextExtractor:
    """
    Converts listing PDFs to text, reusing cached output.

    Extraction runs ``pdftotext -layout`` first and falls back to plain mode
    if that fails. Every invocation is bounded by ``timeout_seconds``.
    """

    def __init__(self, text_dir: Path, config: Optional[ExtractionConfig] = None):
        self.text_dir = text_dir
        self.config = config or ExtractionConfig()

    def cached_text_path(self, pdf_path: Path) -> Path:
        return self.text_dir / f"{pdf_path.stem}.txt"

    async def extract_text(self, pdf_path: Path) -> str:
        """
        Get the text of one listing PDF.

        Raises:
            ExtractionError: If both extraction attempts fail or time out
        """
        output_path = self.cached_text_path(pdf_path)

        if self.config.use_cache and output_path.exists():
            logger.debug(f"Text already extracted: {output_path.name}")
            return output_path.read_text(encoding="utf-8", errors="replace")

        self.text_dir.mkdir(parents=True, exist_ok=True)
        logger.info(f"Extracting text from: {pdf_path.name}")

        attempts: Sequence[Tuple[str, Sequence[str]]] = (
            ("layout", ("-layout",)),
            ("plain", ()),
        )
        failures = []

        for label, flags in attempts:
            ok, detail = await self._run_pdftotext(pdf_path, output_path, flags)
            if ok:
                text = output_path.read_text(encoding="utf-8", errors="replace")
                logger.info(
                    f"Extracted text ({label}): {output_path.name} ({len(text)} chars)"
                )
                return text

            failures.append(f"{label}: {detail}")
            output_path.unlink(missing_ok=True)
            logger.debug(f"pdftotext {label} attempt failed for {pdf_path.name}: {detail}")

        raise ExtractionError(
            f"Failed to extract text from {pdf_path.name} "
            f"({'; '.join(failures)}). {INSTALL_HINT}",
            filename=pdf_path.name,
            operation="extract_text",
        )

    async def _run_pdftotext(
        self, pdf_path: Path, output_path: Path, flags: Sequence[str]
    ) -> Tuple[bool, str]:
        """Run one pdftotext invocation; returns (succeeded, detail)."""
        try:
            process = await asyncio.create_subprocess_exec(
                self.config.command,
                *flags,
                str(pdf_path),
                str(output_path),
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            return False, f"pdftotext command failed: {e}"

        try:
            _, stderr = await asyncio.wait_for(
                process.communicate(), timeout=self.config.timeout_seconds
            )
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()
            output_path.unlink(missing_ok=True)
            # No plain-mode retry after a timeout
            raise ExtractionError(
                f"pdftotext timed out after {self.config.timeout_seconds:.0f}s "
                f"on {pdf_path.name}",
                filename=pdf_path.name,
                operation="extract_text",
            ) from None

        if process.returncode == 0 and output_path.exists():
            return True, "ok"

        message = stderr.decode("utf-8", errors="replace").strip() if stderr else ""
        detail = f"exit code {process.returncode}"
        if message:
            detail = f"{detail}: {message.splitlines()[-1]}"
        elif process.returncode == 0:
            detail = "no output file produced"
        return False, detail
