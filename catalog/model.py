from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional

TRANSLATED_STATE = "translated"


@dataclass(slots=True)
class LocalizationUnit:
    state: str
    value: str


@dataclass(slots=True)
class CatalogEntry:
    localizations: Dict[str, LocalizationUnit] = field(default_factory=dict)
    # Only an explicit False excludes the entry; None means "not specified".
    should_translate: Optional[bool] = None
    comment: Optional[str] = None

    @property
    def excluded(self) -> bool:
        return self.should_translate is False

    def value_for(self, language: str) -> str:
        unit = self.localizations.get(language)
        return unit.value if unit else ""


@dataclass(slots=True)
class Catalog:
    """In-memory string catalog: key -> per-language localization units.

    The catalog belongs to the caller. Request building only reads it and
    :func:`translator.apply.apply_translations` is the only writer.
    """

    source_language: str
    strings: Dict[str, CatalogEntry] = field(default_factory=dict)
    version: str = "1.0"

    def __contains__(self, key: str) -> bool:
        return key in self.strings

    def __len__(self) -> int:
        return len(self.strings)

    def source_text(self, key: str) -> str:
        """Source-language value of ``key``, or the key itself when that is empty."""
        entry = self.strings.get(key)
        text = entry.value_for(self.source_language) if entry else ""
        return text or key

    def languages(self) -> List[str]:
        found = {self.source_language} if self.source_language else set()
        for entry in self.strings.values():
            found.update(entry.localizations)
        return sorted(found)

    def missing_languages(self, key: str, targets: Iterable[str]) -> List[str]:
        entry = self.strings.get(key)
        if entry is None:
            return []
        return [lang for lang in targets if not entry.value_for(lang)]
