# src/cleanup/base_strategy.py — v1
"""Abstract cleanup strategy interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from recipextract.config.cleanup import CleanupConfig
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName


class BaseCleanupStrategy(ABC):
    """One noise-reduction technique over raw HTML.

    ``clean`` returns None to decline and must never raise: malformed markup
    is a decline, not a pipeline failure.
    """

    def __init__(self, config: CleanupConfig) -> None:
        self._config = config

    @property
    @abstractmethod
    def name(self) -> StrategyName:
        """Strategy identifier."""

    @abstractmethod
    def clean(self, raw: RawDocument) -> CleanedDocument | None:
        """Produce a candidate document, or None to decline."""

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def min_confidence(self) -> float:
        """Minimum candidate confidence the orchestrator accepts."""
        return 0.0

    @property
    def min_output_size(self) -> int:
        """Minimum candidate size in bytes the orchestrator accepts."""
        return self._config.min_output_size
