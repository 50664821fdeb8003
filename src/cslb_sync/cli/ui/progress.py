"""
Rich progress tracking for per-file processing
"""

from typing import Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    SpinnerColumn,
    TaskID,
    TextColumn,
    TimeElapsedColumn,
)


class FileProgressTracker:
    """
    Progress bar driven by the pipeline's ``(filename, index, total)`` callback

    Use as a context manager around the run; pass ``callback`` to the pipeline.
    """

    def __init__(self, console: Console, description: str = "Processing PDFs"):
        self.console = console
        self.description = description
        self.progress = Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TimeElapsedColumn(),
            console=console,
            transient=True,
        )
        self.task_id: Optional[TaskID] = None

    def __enter__(self) -> "FileProgressTracker":
        self.progress.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.progress.stop()

    def callback(self, filename: str, index: int, total: int) -> None:
        """Advance to ``index`` of ``total``; ``index`` is 1-based."""
        if self.task_id is None:
            self.task_id = self.progress.add_task(self.description, total=total)
        self.progress.update(
            self.task_id,
            completed=index - 1,
            total=total,
            description=f"{self.description}: {filename}",
        )
