from __future__ import annotations

import asyncio
import random

from loguru import logger

from config import SETTINGS, RetryPolicy

from .base import BaseTranslator, TranslationRequest, TranslationResponse


class RetryingTranslator(BaseTranslator):
    """Re-issue failed requests to a wrapped provider with exponential backoff."""

    def __init__(self, inner: BaseTranslator, retry_policy: RetryPolicy | None = None, *, base_delay: float = 1.0) -> None:
        super().__init__(timeout=inner.timeout, proxy=inner.proxy)
        self.inner = inner
        self.retry_policy = retry_policy or SETTINGS.retry
        self.base_delay = base_delay
        self.name = f"{inner.name}+retry"

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        attempt = 0
        delay = self.base_delay
        while True:
            attempt += 1
            response = await self.inner.translate(request)
            if response.ok or attempt >= self.retry_policy.max_attempts:
                return response
            logger.debug(f"{self.inner.name}: attempt {attempt} for {request.key!r} failed: {response.error}")
            jitter = random.uniform(0, self.retry_policy.backoff_jitter) if self.retry_policy.backoff_jitter else 0.0
            await asyncio.sleep(delay + jitter)
            delay *= self.retry_policy.backoff_factor

    async def close(self) -> None:
        await self.inner.close()
