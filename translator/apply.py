from __future__ import annotations

from typing import Iterable

from loguru import logger

from catalog import TRANSLATED_STATE, Catalog, LocalizationUnit

from .base import TranslationResponse


def apply_translations(catalog: Catalog, responses: Iterable[TranslationResponse]) -> int:
    """Write successful responses into ``catalog`` and return how many were written.

    Failed responses are logged and left out. Responses for keys the catalog
    does not contain are ignored. Applying the same responses twice leaves
    the catalog as applying them once.
    """
    written = 0
    for response in responses:
        if not response.ok:
            logger.warning(f"Error translating {response.key!r} to {response.target_lang}: {response.error}")
            continue
        entry = catalog.strings.get(response.key)
        if entry is None:
            logger.debug(f"Ignoring translation for unknown key {response.key!r}")
            continue
        entry.localizations[response.target_lang] = LocalizationUnit(state=TRANSLATED_STATE, value=response.text)
        written += 1
    return written
