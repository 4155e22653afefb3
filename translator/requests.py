from __future__ import annotations

from typing import Iterable, List

from catalog import Catalog
from utils.lang import normalize_languages

from .base import TranslationRequest


def build_requests(catalog: Catalog, target_languages: Iterable[str]) -> List[TranslationRequest]:
    """Collect the requests still needed to cover ``target_languages``.

    Entries marked ``should_translate=False`` are skipped. The source text is
    the source-language value, or the key when that is missing; entries with
    neither are skipped. A target language the entry already has any
    localization for, whatever its state, is never requested again.
    """
    targets = normalize_languages(target_languages)
    requests: List[TranslationRequest] = []
    if not targets:
        return requests

    for key, entry in catalog.strings.items():
        if entry.excluded:
            continue
        text = catalog.source_text(key)
        if not text:
            continue
        for target in targets:
            if target in entry.localizations:
                continue
            requests.append(
                TranslationRequest(
                    key=key,
                    text=text,
                    source_lang=catalog.source_language,
                    target_lang=target,
                )
            )
    return requests


def build_language_requests(catalog: Catalog, target_lang: str) -> List[TranslationRequest]:
    return build_requests(catalog, [target_lang])
