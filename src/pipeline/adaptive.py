# src/pipeline/adaptive.py — v2
"""Adaptive re-clean on suspected over-cleaning.

A negative verdict whose ``recipe_confidence`` is at or above the
threshold suggests the cleanup cascade trimmed the recipe away. The page
is then re-run from the next less restrictive strategy:

    STRUCTURED_DATA → SECTION_BASED → CONTENT_FILTER → RAW

Each re-run is a fresh bounded loop. The signal is always logged with the
``over_cleaned_suspected`` marker, even when re-cleaning is disabled.
A negative verdict on RAW output is never suspect: nothing was trimmed.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from recipextract.core.models import ADAPTIVE_ORDER, ExtractionResult, RawDocument, StrategyName
from recipextract.pipeline.retry_loop import ExtractionRetryLoop, LoopOutcome

logger = logging.getLogger(__name__)

OVER_CLEANED_MARKER = "over_cleaned_suspected"


def next_strategy(current: StrategyName) -> StrategyName | None:
    """Next less restrictive strategy, or None after RAW."""
    index = ADAPTIVE_ORDER.index(current)
    if index + 1 >= len(ADAPTIVE_ORDER):
        return None
    return ADAPTIVE_ORDER[index + 1]


@dataclass
class AdaptiveOutcome:
    """Final loop outcome plus the adaptive bookkeeping."""

    outcome: LoopOutcome
    total_attempts: int
    strategies_tried: list[StrategyName] = field(default_factory=list)
    over_cleaned_suspected: bool = False

    @property
    def result(self) -> ExtractionResult:
        return self.outcome.result

    @property
    def strategy(self) -> StrategyName:
        return self.outcome.cleaned.strategy


class AdaptiveExtractor:
    """Wraps the retry loop with strategy escalation."""

    def __init__(
        self,
        loop: ExtractionRetryLoop,
        enabled: bool = True,
        confidence_threshold: float = 0.5,
    ) -> None:
        self._loop = loop
        self._enabled = enabled
        self._threshold = confidence_threshold

    def is_over_cleaned(self, result: ExtractionResult) -> bool:
        return not result.is_recipe and result.confidence >= self._threshold

    async def run(self, raw: RawDocument) -> AdaptiveOutcome:
        outcome = await self._loop.run(raw)
        total = outcome.attempts
        tried = [outcome.cleaned.strategy]
        suspected = False

        # RAW trimmed nothing, so a negative there is a genuine non-recipe
        while (
            outcome.cleaned.strategy is not StrategyName.RAW
            and self.is_over_cleaned(outcome.result)
        ):
            suspected = True
            current = outcome.cleaned.strategy
            following = next_strategy(current)
            logger.info(
                "%s: not a recipe with confidence %.2f >= %.2f after %s cleanup",
                OVER_CLEANED_MARKER, outcome.result.confidence, self._threshold,
                current.value,
            )
            if not self._enabled or following is None:
                break

            logger.info("Re-cleaning with less restrictive strategy: %s", following.value)
            outcome = await self._loop.run(raw, start=following)
            total += outcome.attempts
            tried.append(outcome.cleaned.strategy)

        return AdaptiveOutcome(
            outcome=outcome,
            total_attempts=total,
            strategies_tried=tried,
            over_cleaned_suspected=suspected,
        )
