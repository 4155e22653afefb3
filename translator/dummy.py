"""Offline provider that tags each string with its target language.

Example: "Hello" to "fr" becomes "[FR] Hello".
"""
from __future__ import annotations

import asyncio
from typing import Iterable

from .base import BaseTranslator, TranslationRequest, TranslationResponse
from .errors import ProviderError


class DummyTranslator(BaseTranslator):
    name = "dummy"

    def __init__(
        self,
        *,
        delay: float = 0.0,
        fail_keys: Iterable[str] = (),
        timeout: float = 20.0,
        proxy: str | None = None,
    ) -> None:
        super().__init__(timeout=timeout, proxy=proxy)
        self.delay = delay
        self.fail_keys = frozenset(fail_keys)
        self.calls = 0

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        self.calls += 1
        if self.delay:
            await asyncio.sleep(self.delay)
        if request.key in self.fail_keys:
            return request.failure(ProviderError(f"refusing to translate {request.key!r}", provider=self.name))
        return request.success(f"[{request.target_lang.upper()}] {request.text}")
