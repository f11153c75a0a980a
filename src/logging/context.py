# src/logging/context.py — v1
"""Contextual logging support — attach fingerprint, source URL, cleanup
strategy and attempt number to log records of one extraction.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

# Set per extraction by the pipeline; asyncio tasks inherit a copy.
_fingerprint: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "fingerprint", default=None
)
_source_url: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "source_url", default=None
)
_strategy: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "strategy", default=None
)
_attempt: contextvars.ContextVar[int | None] = contextvars.ContextVar(
    "attempt", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    fingerprint: str | None = None
    source_url: str | None = None
    strategy: str | None = None
    attempt: int | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        fingerprint=_fingerprint.get(),
        source_url=_source_url.get(),
        strategy=_strategy.get(),
        attempt=_attempt.get(),
    )


def set_extraction_context(fingerprint: str, source_url: str | None = None) -> None:
    """Set request-level context (called once per extraction)."""
    _fingerprint.set(fingerprint)
    _source_url.set(source_url)


def set_strategy_context(strategy: str) -> None:
    """Record which cleanup strategy produced the HTML being processed."""
    _strategy.set(strategy)


def set_attempt_context(attempt: int | None) -> None:
    """Record the current model-call attempt (1-based)."""
    _attempt.set(attempt)


def clear_context() -> None:
    """Reset all context variables."""
    _fingerprint.set(None)
    _source_url.set(None)
    _strategy.set(None)
    _attempt.set(None)
