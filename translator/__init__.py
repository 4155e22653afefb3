"""
Concurrent translation of string catalogs.

Pieces:
- BaseTranslator: provider capability, one request in, one response out
- build_requests: what is still missing from a catalog
- BatchTranslator: bounded async worker pool with deadline and fail-fast
- TranslationOrchestrator: one batch per target language
- apply_translations: write results back into the catalog
"""
from .apply import apply_translations
from .base import BaseTranslator, TranslationRequest, TranslationResponse
from .dummy import DummyTranslator
from .engine import BatchResult, BatchTranslator, ProgressCallback
from .errors import (
    BatchAbortedError,
    BatchTimeoutError,
    LanguageFailedError,
    ProviderError,
    TranslationError,
)
from .orchestrator import TranslationOrchestrator, translate_catalog
from .progress import LogProgressReporter, ProgressReporter, RichProgressReporter
from .requests import build_language_requests, build_requests
from .retry import RetryingTranslator

__all__ = [
    "BaseTranslator",
    "TranslationRequest",
    "TranslationResponse",
    "DummyTranslator",
    "RetryingTranslator",
    "BatchResult",
    "BatchTranslator",
    "ProgressCallback",
    "ProgressReporter",
    "LogProgressReporter",
    "RichProgressReporter",
    "TranslationOrchestrator",
    "translate_catalog",
    "apply_translations",
    "build_requests",
    "build_language_requests",
    "TranslationError",
    "ProviderError",
    "BatchAbortedError",
    "BatchTimeoutError",
    "LanguageFailedError",
]
