from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TranslationRequest:
    key: str
    text: str
    source_lang: str
    target_lang: str

    def success(self, text: str) -> "TranslationResponse":
        return TranslationResponse(key=self.key, target_lang=self.target_lang, text=text)

    def failure(self, error: BaseException) -> "TranslationResponse":
        return TranslationResponse(key=self.key, target_lang=self.target_lang, error=error)


@dataclass(frozen=True, slots=True)
class TranslationResponse:
    key: str
    target_lang: str
    text: str = ""
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def answers(self, request: TranslationRequest) -> bool:
        return self.key == request.key and self.target_lang == request.target_lang


class BaseTranslator(ABC):
    name: str = "base"

    def __init__(self, *, timeout: float = 20.0, proxy: str | None = None) -> None:
        self.timeout = timeout
        self.proxy = proxy

    @abstractmethod
    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        """Translate one request.

        Ordinary failures (network errors, vendor error codes, malformed
        payloads) are returned as ``request.failure(exc)``. Cancellation must
        be allowed to propagate.
        """

    async def close(self) -> None:
        """Release sessions or other resources held by the provider."""
