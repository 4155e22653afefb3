from __future__ import annotations

import sys
from pathlib import Path

from loguru import logger


def configure_logging(log_file: Path | None = None, *, verbose: bool = False) -> None:
    logger.remove()
    logger.add(sys.stdout, level="DEBUG" if verbose else "INFO")
    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level="DEBUG", rotation="1 MB", retention=5)
