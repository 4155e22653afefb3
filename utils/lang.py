from __future__ import annotations

from typing import Iterable, List, Set


def normalize_languages(languages: Iterable[str]) -> List[str]:
    """Trim language codes, drop blanks and duplicates, keep first-seen order."""
    seen: Set[str] = set()
    result: List[str] = []
    for code in languages:
        code = (code or "").strip()
        if not code or code in seen:
            continue
        seen.add(code)
        result.append(code)
    return result
