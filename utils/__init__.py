from .lang import normalize_languages
from .logging_config import configure_logging

__all__ = [
    "configure_logging",
    "normalize_languages",
]
