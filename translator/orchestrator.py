from __future__ import annotations

from typing import Iterable

from loguru import logger

from catalog import Catalog
from config import SETTINGS
from utils.lang import normalize_languages

from .apply import apply_translations
from .engine import BatchResult, BatchTranslator
from .errors import LanguageFailedError
from .progress import ProgressReporter
from .requests import build_language_requests


class TranslationOrchestrator:
    """Run the batch engine one target language at a time.

    Only one language's requests exist at any moment, and a failing
    language leaves the results of the languages before it intact.
    """

    def __init__(self, engine: BatchTranslator, *, progress: ProgressReporter | None = None) -> None:
        self.engine = engine
        self.progress = progress

    async def translate(self, catalog: Catalog, target_languages: Iterable[str]) -> BatchResult:
        merged = BatchResult()
        for target_lang in normalize_languages(target_languages):
            requests = build_language_requests(catalog, target_lang)
            if not requests:
                logger.debug(f"Nothing to translate for {target_lang}")
                continue

            logger.info(f"Translating {len(requests)} strings to {target_lang}")
            progress_cb = self.progress.for_language(target_lang, len(requests)) if self.progress else None
            result = await self.engine.translate_batch(requests, progress_cb=progress_cb)

            merged.responses.extend(result.responses)
            merged.total += result.total
            if result.error is not None:
                merged.error = LanguageFailedError(target_lang, result.error)
                logger.error(str(merged.error))
                break
        return merged


async def translate_catalog(
    catalog: Catalog,
    target_languages: Iterable[str] | None,
    engine: BatchTranslator,
    *,
    progress: ProgressReporter | None = None,
) -> BatchResult:
    """Translate ``catalog`` in place and return what the engine produced.

    ``target_languages=None`` uses ``SETTINGS.default_target_langs``.
    Whatever was collected is applied even when a language failed, so the
    error on the returned result only says the catalog is not fully covered.
    """
    targets = normalize_languages(SETTINGS.default_target_langs if target_languages is None else target_languages)
    result = await TranslationOrchestrator(engine, progress=progress).translate(catalog, targets)
    written = apply_translations(catalog, result.responses)
    logger.info(f"Applied {written} translations ({result.error_count} failed)")

    incomplete = [
        key for key, entry in catalog.strings.items() if not entry.excluded and catalog.missing_languages(key, targets)
    ]
    if incomplete:
        logger.warning(f"{len(incomplete)} strings still lack one of {', '.join(targets)}")
    logger.debug(f"Catalog languages: {', '.join(catalog.languages())}")
    return result
