"""Shared fixtures and fake providers for the test suite."""

from __future__ import annotations

import asyncio

import pytest
from loguru import logger

from catalog import Catalog, CatalogEntry, LocalizationUnit
from translator.base import BaseTranslator, TranslationRequest, TranslationResponse
from translator.errors import ProviderError


class ScriptedTranslator(BaseTranslator):
    """Fake provider whose behaviour is scripted per key or per (key, language)."""

    name = "scripted"

    def __init__(self, *, delay: float = 0.0, fail=(), explode=()) -> None:
        super().__init__()
        self.delay = delay
        self.fail = set(fail)
        self.explode = set(explode)
        self.calls: list[TranslationRequest] = []
        self.in_flight = 0
        self.max_in_flight = 0

    def _matches(self, targets: set, request: TranslationRequest) -> bool:
        return request.key in targets or (request.key, request.target_lang) in targets

    async def translate(self, request: TranslationRequest) -> TranslationResponse:
        self.calls.append(request)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            else:
                await asyncio.sleep(0)
            if self._matches(self.explode, request):
                raise RuntimeError(f"provider crashed on {request.key}")
            if self._matches(self.fail, request):
                return request.failure(ProviderError(f"HTTP 500 for {request.key}", provider=self.name, status=500))
            return request.success(f"{request.text} ({request.target_lang})")
        finally:
            self.in_flight -= 1


def make_requests(count: int, target_lang: str = "fr") -> list[TranslationRequest]:
    return [
        TranslationRequest(key=f"k{i}", text=f"text {i}", source_lang="en", target_lang=target_lang)
        for i in range(count)
    ]


def make_entry(source: str | None = None, *, source_lang: str = "en", **translations: str) -> CatalogEntry:
    entry = CatalogEntry()
    if source is not None:
        entry.localizations[source_lang] = LocalizationUnit(state="translated", value=source)
    for lang, value in translations.items():
        entry.localizations[lang] = LocalizationUnit(state="needs_review", value=value)
    return entry


@pytest.fixture
def scenario_catalog() -> Catalog:
    """Three keys: A untranslated, B already has fr, C excluded."""
    return Catalog(
        source_language="en",
        strings={
            "A": make_entry("Hello"),
            "B": make_entry("Hi", fr="Salut"),
            "C": CatalogEntry(localizations={}, should_translate=False),
        },
    )


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(messages.append, format="{level}|{message}", level="DEBUG")
    yield messages
    logger.remove(handler_id)
