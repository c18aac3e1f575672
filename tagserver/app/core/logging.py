"""Loguru sink setup for the service process."""
from __future__ import annotations

import sys

from loguru import logger


def configure_logging(level: str) -> None:
    """Replace loguru's default sink with a stderr sink at `level`.

    Bound fields (service_name, event, ...) are rendered from `extra` so the
    empty-message event style used across the routers stays readable.
    """
    logger.remove()
    logger.add(
        sys.stderr,
        level=level.strip().upper(),
        format="{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{line} | {message} {extra}",
    )
