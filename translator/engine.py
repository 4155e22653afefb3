from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Sequence

from loguru import logger

from .base import BaseTranslator, TranslationRequest, TranslationResponse
from .errors import BatchAbortedError, BatchTimeoutError, ProviderError, TranslationError

if TYPE_CHECKING:
    from config import AppSettings


ProgressCallback = Callable[[int, int, TranslationResponse], None]


@dataclass(slots=True)
class BatchResult:
    """Responses collected by one run plus the error that ended it, if any.

    ``responses`` is in completion order. When ``error`` is set the batch
    must be treated as incomplete, but applying ``responses`` is still safe.
    """

    responses: List[TranslationResponse] = field(default_factory=list)
    error: TranslationError | None = None
    total: int = 0

    @property
    def failures(self) -> List[TranslationResponse]:
        return [resp for resp in self.responses if not resp.ok]

    @property
    def success_count(self) -> int:
        return sum(1 for resp in self.responses if resp.ok)

    @property
    def error_count(self) -> int:
        return len(self.responses) - self.success_count

    @property
    def complete(self) -> bool:
        return self.error is None and len(self.responses) == self.total

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error


class _BatchRun:
    """State shared by the workers of a single ``translate_batch`` call."""

    def __init__(self, total: int, *, abort_on_failure: bool, progress_cb: ProgressCallback | None) -> None:
        self.total = total
        self.abort_on_failure = abort_on_failure
        self.progress_cb = progress_cb
        self.responses: List[TranslationResponse] = []
        self.error: TranslationError | None = None
        self._stop = asyncio.Event()
        # Set once the run itself starts cancelling its tasks.
        self.closing = False

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def cancel(self, reason: str) -> None:
        if self._stop.is_set():
            return
        logger.debug(f"Stopping dispatch: {reason}")
        self._stop.set()

    def record(self, response: TranslationResponse) -> None:
        self.responses.append(response)
        if not response.ok and self.error is None:
            self.error = BatchAbortedError(response.key, response.target_lang, response.error)
            if self.abort_on_failure:
                self.cancel(str(self.error))
        if self.progress_cb is None:
            return
        try:
            self.progress_cb(len(self.responses), self.total, response)
        except Exception:
            logger.exception("Progress callback failed")


class BatchTranslator:
    """Fan a list of requests out over a fixed pool of async workers.

    Workers share one bounded queue. The whole run is bounded by ``timeout``
    and, with ``abort_on_failure``, stops dispatching as soon as one response
    carries an error. Requests already handed to the provider are allowed to
    finish. The engine never retries; wrap the provider in
    :class:`translator.retry.RetryingTranslator` for that.
    """

    def __init__(
        self,
        translator: BaseTranslator,
        *,
        concurrency: int = 4,
        timeout: float | None = 300.0,
        abort_on_failure: bool = True,
    ) -> None:
        self.translator = translator
        self.concurrency = max(1, concurrency)
        self.timeout = timeout if timeout and timeout > 0 else None
        self.abort_on_failure = abort_on_failure

    @classmethod
    def from_settings(cls, translator: BaseTranslator, settings: "AppSettings | None" = None) -> "BatchTranslator":
        if settings is None:
            from config import SETTINGS

            settings = SETTINGS
        return cls(
            translator,
            concurrency=settings.engine.concurrency,
            timeout=settings.engine.timeout,
            abort_on_failure=settings.engine.abort_on_failure,
        )

    async def translate_batch(
        self,
        requests: Sequence[TranslationRequest],
        progress_cb: ProgressCallback | None = None,
    ) -> BatchResult:
        pending = list(requests)
        total = len(pending)
        if not pending:
            return BatchResult()

        workers = min(self.concurrency, total)
        queue: asyncio.Queue[TranslationRequest | None] = asyncio.Queue(maxsize=min(2 * self.concurrency, total))
        run = _BatchRun(total, abort_on_failure=self.abort_on_failure, progress_cb=progress_cb)
        logger.debug(f"Dispatching {total} requests to {self.translator.name} with {workers} workers")

        tasks = [asyncio.create_task(self._produce(pending, queue, run, workers))]
        tasks.extend(asyncio.create_task(self._worker(queue, run)) for _ in range(workers))
        try:
            done, unfinished = await asyncio.wait(tasks, timeout=self.timeout)
        except asyncio.CancelledError:
            await self._cancel_tasks(tasks, run)
            raise

        if unfinished:
            run.cancel("deadline exceeded")
            await self._cancel_tasks(unfinished, run)
            if run.error is None:
                run.error = BatchTimeoutError(len(run.responses), total, self.timeout or 0.0)

        for task in done:
            if not task.cancelled() and task.exception() is not None:
                raise task.exception()

        result = BatchResult(responses=run.responses, error=run.error, total=total)
        if result.error is None:
            logger.debug(f"Batch finished: {result.success_count}/{total} translated")
        else:
            logger.warning(f"Batch stopped after {len(result.responses)}/{total} responses: {result.error}")
        return result

    async def _produce(
        self,
        requests: Sequence[TranslationRequest],
        queue: asyncio.Queue[TranslationRequest | None],
        run: _BatchRun,
        workers: int,
    ) -> None:
        for request in requests:
            if run.stopped:
                break
            await queue.put(request)
        # One sentinel per worker; workers keep draining until they see theirs.
        for _ in range(workers):
            await queue.put(None)

    async def _worker(self, queue: asyncio.Queue[TranslationRequest | None], run: _BatchRun) -> None:
        while True:
            request = await queue.get()
            if request is None:
                return
            if run.stopped:
                continue
            run.record(await self._dispatch(request, run))

    async def _dispatch(self, request: TranslationRequest, run: _BatchRun) -> TranslationResponse:
        try:
            response = await self.translator.translate(request)
        except asyncio.CancelledError as exc:
            if run.closing:
                raise
            # Cancellation that did not come from this run belongs to the provider.
            logger.error(f"{self.translator.name} was cancelled while translating {request.key!r}")
            return request.failure(ProviderError(f"provider call cancelled: {exc}", provider=self.translator.name))
        except Exception as exc:
            logger.opt(exception=exc).error(f"{self.translator.name} raised while translating {request.key!r}")
            return request.failure(exc)

        if not isinstance(response, TranslationResponse):
            return request.failure(
                ProviderError(
                    f"provider returned {type(response).__name__} instead of a response",
                    provider=self.translator.name,
                )
            )
        if not response.answers(request):
            return request.failure(
                ProviderError(
                    f"provider answered {response.key!r}/{response.target_lang} "
                    f"for request {request.key!r}/{request.target_lang}",
                    provider=self.translator.name,
                )
            )
        return response

    @staticmethod
    async def _cancel_tasks(tasks, run: _BatchRun) -> None:
        run.closing = True
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
