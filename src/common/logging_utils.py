"""Centralized logging helpers.

Provides a single ``configure_logging`` entry point plus small helpers for
structured ``extra=`` payloads and cheap DEBUG guards.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional
from urllib.parse import urlsplit, urlunsplit

from constants import Constants

_HANDLER_NAME = "cruby-console"


def _resolve_level(value: Optional[str]) -> Optional[int]:
    """Map a level name to its numeric value, or None when unrecognized."""
    if not value:
        return None
    level = getattr(logging, str(value).strip().upper(), None)
    return level if isinstance(level, int) else None


def configure_logging(level: Optional[str] = None) -> None:
    """Install the console handler on the root logger.

    The level is ``level`` when given, else ``CRUBY_LOG_LEVEL``, else
    ``Constants.DEFAULT_LOG_LEVEL``. Calling this more than once adds no
    duplicate handlers.
    """
    root = logging.getLogger()
    resolved = _resolve_level(level)
    if resolved is None:
        resolved = _resolve_level(os.environ.get(Constants.ENV_LOG_LEVEL))
    if resolved is None:
        resolved = _resolve_level(Constants.DEFAULT_LOG_LEVEL)
    root.setLevel(resolved)
    for handler in root.handlers:
        if handler.get_name() == _HANDLER_NAME:
            return
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
    root.addHandler(handler)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` payload, dropping fields whose value is None."""
    return {k: v for k, v in fields.items() if v is not None}


def safe_url(url: Optional[str]) -> str:
    """Strip credentials, query and fragment from a URL for logging."""
    if not url:
        return ""
    try:
        parts = urlsplit(url)
    except ValueError:
        return "<unparseable-url>"
    netloc = parts.hostname or ""
    if parts.port:
        netloc = f"{netloc}:{parts.port}"
    return urlunsplit((parts.scheme, netloc, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        self._end = None
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 3)
