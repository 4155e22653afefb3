from __future__ import annotations

from dataclasses import dataclass, field
import os


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_list(name: str, default: list[str]) -> list[str]:
    raw = os.getenv(name)
    if not raw:
        return list(default)
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass(slots=True)
class RetryPolicy:
    max_attempts: int = 4
    backoff_factor: float = 1.5
    backoff_jitter: float = 0.25


@dataclass(slots=True)
class EngineSettings:
    concurrency: int = field(default_factory=lambda: _env_int("XCSTRINGS_CONCURRENCY", 4))
    # Whole-batch deadline in seconds; 0 disables it.
    timeout: float = field(default_factory=lambda: _env_float("XCSTRINGS_TIMEOUT", 300.0))
    abort_on_failure: bool = True


@dataclass(slots=True)
class AppSettings:
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    engine: EngineSettings = field(default_factory=EngineSettings)
    default_target_langs: list[str] = field(default_factory=lambda: _env_list("XCSTRINGS_TARGETS", ["zh-Hans"]))


SETTINGS = AppSettings()
