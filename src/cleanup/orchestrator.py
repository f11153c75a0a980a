# src/cleanup/orchestrator.py — v1
"""Cleanup cascade: greedy, priority-ordered strategy selection.

The first candidate whose confidence meets its strategy's minimum and
whose size meets its strategy's minimum output size wins. If nothing
qualifies the raw document is returned tagged "raw". ``clean`` never
raises on bad markup.
"""

from __future__ import annotations

import logging

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.cleanup.strategy_factory import create_strategies
from recipextract.config.cleanup import CleanupConfig
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName

logger = logging.getLogger(__name__)


class CleanupOrchestrator:
    """Runs the ordered strategy list over one RawDocument."""

    def __init__(
        self,
        config: CleanupConfig | None = None,
        strategies: list[BaseCleanupStrategy] | None = None,
    ) -> None:
        self._config = config or CleanupConfig()
        self._strategies = strategies if strategies is not None else create_strategies(self._config)

    @property
    def config(self) -> CleanupConfig:
        return self._config

    @property
    def strategy_names(self) -> list[StrategyName]:
        return [s.name for s in self._strategies]

    def clean(self, raw: RawDocument | str) -> CleanedDocument:
        """Run the full cascade from the highest-priority strategy."""
        return self._run(self._as_raw(raw), self._strategies)

    def clean_with_strategy(
        self, raw: RawDocument | str, start: StrategyName
    ) -> CleanedDocument:
        """Run the cascade starting at ``start`` (skipping more restrictive strategies)."""
        names = self.strategy_names
        if start in names:
            strategies = self._strategies[names.index(start):]
        else:
            strategies = []
        return self._run(self._as_raw(raw), strategies)

    def _run(
        self, raw: RawDocument, strategies: list[BaseCleanupStrategy]
    ) -> CleanedDocument:
        if not self._config.enabled:
            logger.debug("HTML cleanup disabled, using raw HTML")
            return self._fallback(raw)

        for strategy in strategies:
            if strategy.name is StrategyName.RAW:
                break
            try:
                candidate = strategy.clean(raw)
            except Exception as e:
                logger.debug("Strategy %s raised, treating as decline: %s", strategy.name.value, e)
                continue
            if candidate is None:
                continue
            if self._accepts(strategy, candidate):
                logger.info("HTML cleaning successful. %s", candidate.summary())
                return candidate

        logger.info("No cleanup strategy qualified, using raw HTML")
        return self._fallback(raw)

    @staticmethod
    def _accepts(strategy: BaseCleanupStrategy, candidate: CleanedDocument) -> bool:
        if candidate.confidence < strategy.min_confidence:
            logger.debug(
                "Strategy %s rejected: confidence %.0f < %.0f",
                strategy.name.value, candidate.confidence, strategy.min_confidence,
            )
            return False
        if candidate.cleaned_size < strategy.min_output_size:
            logger.debug(
                "Strategy %s rejected: output too small (%d < %d bytes)",
                strategy.name.value, candidate.cleaned_size, strategy.min_output_size,
            )
            return False
        return True

    @staticmethod
    def _fallback(raw: RawDocument) -> CleanedDocument:
        return CleanedDocument.build(raw.html, StrategyName.RAW, 0.0, raw)

    @staticmethod
    def _as_raw(raw: RawDocument | str) -> RawDocument:
        return raw if isinstance(raw, RawDocument) else RawDocument(html=raw)
