from __future__ import annotations


class TranslationError(Exception):
    """Base class for every translation failure."""


class ProviderError(TranslationError):
    """A single request could not be translated by a provider."""

    def __init__(self, message: str, *, provider: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.provider = provider
        self.status = status


class BatchAbortedError(TranslationError):
    """The first failed response of a batch; the rest of the batch was not dispatched."""

    def __init__(self, key: str, target_lang: str, cause: BaseException) -> None:
        super().__init__(f"translation of {key!r} to {target_lang} failed: {cause}")
        self.key = key
        self.target_lang = target_lang
        self.cause = cause


class BatchTimeoutError(TranslationError):
    def __init__(self, completed: int, total: int, timeout: float) -> None:
        super().__init__(f"translation timed out after {timeout:g}s ({completed}/{total} completed)")
        self.completed = completed
        self.total = total
        self.timeout = timeout


class LanguageFailedError(TranslationError):
    def __init__(self, target_lang: str, cause: TranslationError) -> None:
        super().__init__(f"translation to {target_lang} failed: {cause}")
        self.target_lang = target_lang
        self.cause = cause
        self.__cause__ = cause
