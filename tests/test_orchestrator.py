"""Tests for per-language orchestration."""

from __future__ import annotations

import asyncio

from catalog import TRANSLATED_STATE, Catalog
from config import SETTINGS
from translator.engine import BatchTranslator
from translator.errors import BatchAbortedError, LanguageFailedError
from translator.orchestrator import TranslationOrchestrator, translate_catalog
from translator.progress import ProgressReporter
from tests.conftest import ScriptedTranslator, make_entry


def three_key_catalog() -> Catalog:
    return Catalog(
        source_language="en",
        strings={
            "hello": make_entry("Hello"),
            "bye": make_entry("Goodbye"),
            "thanks": make_entry("Thanks"),
        },
    )


class RecordingProgress(ProgressReporter):
    def __init__(self) -> None:
        self.languages: list[tuple[str, int]] = []
        self.events: list[tuple[str, int, int]] = []

    def for_language(self, language: str, total: int):
        self.languages.append((language, total))

        def callback(done, total, response):
            self.events.append((language, done, total))

        return callback


class TestTranslationOrchestrator:
    def test_all_languages_succeed(self):
        provider = ScriptedTranslator()
        orchestrator = TranslationOrchestrator(BatchTranslator(provider, concurrency=2))
        result = asyncio.run(orchestrator.translate(three_key_catalog(), ["fr", "de"]))

        assert result.error is None
        assert result.total == 6
        assert len(result.responses) == 6
        assert {r.target_lang for r in result.responses} == {"fr", "de"}

    def test_languages_run_in_order(self):
        provider = ScriptedTranslator()
        orchestrator = TranslationOrchestrator(BatchTranslator(provider, concurrency=4))
        asyncio.run(orchestrator.translate(three_key_catalog(), ["ja", "fr", "de"]))

        langs = [r.target_lang for r in provider.calls]
        assert langs == ["ja"] * 3 + ["fr"] * 3 + ["de"] * 3

    def test_failure_stops_later_languages(self):
        catalog = three_key_catalog()
        provider = ScriptedTranslator(fail={(key, "de") for key in catalog.strings})
        orchestrator = TranslationOrchestrator(BatchTranslator(provider, concurrency=1))

        result = asyncio.run(orchestrator.translate(catalog, ["fr", "de", "es"]))

        assert isinstance(result.error, LanguageFailedError)
        assert result.error.target_lang == "de"
        assert isinstance(result.error.cause, BatchAbortedError)
        assert "de" in str(result.error)
        fr = [r for r in result.responses if r.target_lang == "fr"]
        de = [r for r in result.responses if r.target_lang == "de"]
        assert len(fr) == 3 and all(r.ok for r in fr)
        assert len(de) == 1 and not de[0].ok
        assert "es" not in {r.target_lang for r in provider.calls}

    def test_languages_without_work_are_skipped(self):
        catalog = Catalog(
            source_language="en",
            strings={"hello": make_entry("Hello", fr="Bonjour"), "bye": make_entry("Bye", fr="Au revoir")},
        )
        provider = ScriptedTranslator()
        progress = RecordingProgress()
        orchestrator = TranslationOrchestrator(BatchTranslator(provider), progress=progress)

        result = asyncio.run(orchestrator.translate(catalog, ["fr", "de"]))

        assert progress.languages == [("de", 2)]
        assert {lang for lang, _, _ in progress.events} == {"de"}
        assert {r.target_lang for r in provider.calls} == {"de"}
        assert result.total == 2

    def test_fresh_progress_per_language(self):
        progress = RecordingProgress()
        orchestrator = TranslationOrchestrator(BatchTranslator(ScriptedTranslator()), progress=progress)
        asyncio.run(orchestrator.translate(three_key_catalog(), ["fr", "de"]))

        assert progress.languages == [("fr", 3), ("de", 3)]
        de_counts = [done for lang, done, _ in progress.events if lang == "de"]
        assert de_counts == [1, 2, 3]

    def test_nothing_to_do(self):
        provider = ScriptedTranslator()
        orchestrator = TranslationOrchestrator(BatchTranslator(provider))
        result = asyncio.run(orchestrator.translate(three_key_catalog(), []))
        assert result.responses == []
        assert result.error is None
        assert provider.calls == []

    def test_does_not_write_to_catalog(self):
        catalog = three_key_catalog()
        orchestrator = TranslationOrchestrator(BatchTranslator(ScriptedTranslator()))
        asyncio.run(orchestrator.translate(catalog, ["fr"]))
        assert all("fr" not in entry.localizations for entry in catalog.strings.values())


class TestTranslateCatalog:
    def test_applies_results(self, scenario_catalog):
        result = asyncio.run(translate_catalog(scenario_catalog, ["fr"], BatchTranslator(ScriptedTranslator())))

        assert result.error is None
        unit = scenario_catalog.strings["A"].localizations["fr"]
        assert unit.state == TRANSLATED_STATE
        assert unit.value == "Hello (fr)"
        assert scenario_catalog.strings["B"].localizations["fr"].value == "Salut"
        assert scenario_catalog.strings["C"].localizations == {}

    def test_default_targets_from_settings(self, monkeypatch):
        monkeypatch.setattr(SETTINGS, "default_target_langs", ["ja"])
        catalog = three_key_catalog()
        result = asyncio.run(translate_catalog(catalog, None, BatchTranslator(ScriptedTranslator())))

        assert {r.target_lang for r in result.responses} == {"ja"}
        assert all(entry.localizations["ja"].state == TRANSLATED_STATE for entry in catalog.strings.values())

    def test_partial_results_applied_on_failure(self):
        catalog = three_key_catalog()
        provider = ScriptedTranslator(fail={("hello", "de")})
        result = asyncio.run(
            translate_catalog(catalog, ["fr", "de", "es"], BatchTranslator(provider, concurrency=1))
        )

        assert isinstance(result.error, LanguageFailedError)
        assert all("fr" in entry.localizations for entry in catalog.strings.values())
        assert "de" not in catalog.strings["hello"].localizations
        assert all("es" not in entry.localizations for entry in catalog.strings.values())

    def test_warns_about_strings_left_uncovered(self, log_messages):
        catalog = three_key_catalog()
        provider = ScriptedTranslator(fail={("hello", "de")})
        asyncio.run(translate_catalog(catalog, ["fr", "de"], BatchTranslator(provider, concurrency=1)))

        warnings = [m for m in log_messages if m.startswith("WARNING|") and "still lack" in m]
        assert len(warnings) == 1
        assert warnings[0].startswith("WARNING|3 strings still lack one of fr, de")

    def test_no_coverage_warning_when_complete(self, scenario_catalog, log_messages):
        asyncio.run(translate_catalog(scenario_catalog, ["fr"], BatchTranslator(ScriptedTranslator())))
        assert not any("still lack" in m for m in log_messages)
