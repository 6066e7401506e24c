"""Logging setup for the orbitsync entry points."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV_VAR = "ORBITSYNC_LOG_LEVEL"

# Chatty third-party loggers that would otherwise print one line per request.
_NOISY_LOGGERS = ("httpx", "httpcore", "hishel")


def resolve_log_level(default: int = logging.INFO) -> int:
    """Return the level named by ``ORBITSYNC_LOG_LEVEL`` or ``default``."""

    raw = os.getenv(LOG_LEVEL_ENV_VAR)
    if raw is None or not raw.strip():
        return default
    level = logging.getLevelNamesMapping().get(raw.strip().upper())
    return default if level is None else level


def configure_logging(*, level: int | None = None, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    ``level`` falls back to ``ORBITSYNC_LOG_LEVEL`` and then INFO. Pass ``force=True``
    to reconfigure during tests. HTTP client loggers are capped at WARNING unless
    the root level is DEBUG.
    """

    effective = resolve_log_level() if level is None else level
    logging.basicConfig(
        level=effective,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if effective > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)
