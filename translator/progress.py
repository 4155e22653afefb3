from __future__ import annotations

from abc import ABC, abstractmethod

from loguru import logger
from rich.console import Console
from rich.progress import BarColumn, MofNCompleteColumn, Progress, TextColumn, TimeElapsedColumn

from .base import TranslationResponse
from .engine import ProgressCallback


class ProgressReporter(ABC):
    """Hands out one progress callback per target language."""

    @abstractmethod
    def for_language(self, language: str, total: int) -> ProgressCallback:
        """Return the callback for one language's batch of ``total`` requests."""


class LogProgressReporter(ProgressReporter):
    def __init__(self, *, step: int = 10) -> None:
        self.step = max(1, min(step, 100))

    def for_language(self, language: str, total: int) -> ProgressCallback:
        last_reported = 0

        def callback(done: int, total: int, response: TranslationResponse) -> None:
            nonlocal last_reported
            if not response.ok:
                logger.warning(f"[{language}] {response.key!r} failed: {response.error}")
            percent = done * 100 // total if total else 100
            if done == total or percent >= last_reported + self.step:
                last_reported = percent
                logger.info(f"[{language}] {done}/{total} ({percent}%)")

        return callback


class RichProgressReporter(ProgressReporter):
    """Live progress bars, one task per language.

    Use as a context manager so the bars are started and torn down around
    the run::

        with RichProgressReporter() as progress:
            await TranslationOrchestrator(engine, progress=progress).translate(catalog, ["fr", "de"])
    """

    def __init__(self, console: Console | None = None) -> None:
        self.progress = Progress(
            TextColumn("{task.description}"),
            BarColumn(),
            MofNCompleteColumn(),
            TextColumn("[red]{task.fields[failed]} failed"),
            TimeElapsedColumn(),
            console=console,
        )

    def __enter__(self) -> "RichProgressReporter":
        self.progress.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.progress.stop()

    def for_language(self, language: str, total: int) -> ProgressCallback:
        task_id = self.progress.add_task(f"Translating {language}", total=total, failed=0)
        failed = 0

        def callback(done: int, total: int, response: TranslationResponse) -> None:
            nonlocal failed
            if not response.ok:
                failed += 1
            self.progress.update(task_id, completed=done, total=total, failed=failed)

        return callback
