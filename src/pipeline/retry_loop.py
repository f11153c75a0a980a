# src/pipeline/retry_loop.py — v2
"""Bounded extraction loop with validation feedback.

States:
  CLEANING → REQUESTING → VALIDATING → SUCCESS
                               └→ RETRYING → REQUESTING   (attempt < max)
                               └→ EXHAUSTED               (attempt == max)

Cleanup runs once per loop; only the model call is retried. Transport,
blocked and parse failures are terminal and propagate unchanged.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from enum import Enum

from recipextract.cleanup.orchestrator import CleanupOrchestrator
from recipextract.core.errors import RetryExhausted, TransportFailure, ValidationFailure
from recipextract.core.models import (
    CleanedDocument,
    ExtractionResult,
    RawDocument,
    StrategyName,
    ValidationOutcome,
)
from recipextract.core.recipe import Recipe
from recipextract.llm.base_client import BaseExtractionClient
from recipextract.llm.models import ExtractionRequest
from recipextract.llm.request_builder import RequestBuilder
from recipextract.logging.context import set_attempt_context, set_strategy_context
from recipextract.validation.validator import RecipeValidator

logger = logging.getLogger(__name__)


class LoopState(str, Enum):
    CLEANING = "cleaning"
    REQUESTING = "requesting"
    VALIDATING = "validating"
    RETRYING = "retrying"
    SUCCESS = "success"
    EXHAUSTED = "exhausted"


@dataclass
class LoopOutcome:
    """Terminal SUCCESS of one loop run (EXHAUSTED raises instead)."""

    result: ExtractionResult
    cleaned: CleanedDocument
    attempts: int
    transitions: list[LoopState] = field(default_factory=list)

    @property
    def state(self) -> LoopState:
        return self.transitions[-1] if self.transitions else LoopState.SUCCESS


class ExtractionRetryLoop:
    """Cleanup → request → validate, retrying with feedback up to ``max_attempts``."""

    def __init__(
        self,
        orchestrator: CleanupOrchestrator,
        request_builder: RequestBuilder,
        client: BaseExtractionClient,
        validator: RecipeValidator,
        max_attempts: int = 3,
        validation_enabled: bool = True,
        request_timeout_s: float | None = None,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        self._orchestrator = orchestrator
        self._builder = request_builder
        self._client = client
        self._validator = validator
        self._max_attempts = max_attempts
        self._validation_enabled = validation_enabled
        self._timeout_s = request_timeout_s

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    async def run(
        self, raw: RawDocument, start: StrategyName | None = None
    ) -> LoopOutcome:
        """Run one bounded loop.

        Args:
            raw: The fetched document.
            start: Begin the cleanup cascade at this strategy (adaptive re-clean).

        Raises:
            RetryExhausted: Validation still failing after ``max_attempts`` calls;
                chained from the last ValidationFailure.
            TransportFailure, BlockedContent, ParseError: From the client.
        """
        transitions = [LoopState.CLEANING]
        cleaned = (
            self._orchestrator.clean(raw)
            if start is None
            else self._orchestrator.clean_with_strategy(raw, start)
        )
        set_strategy_context(cleaned.strategy.value)

        previous: Recipe | None = None
        error: str | None = None
        attempt = 0
        while True:
            attempt += 1
            transitions.append(LoopState.REQUESTING)
            set_attempt_context(attempt)
            request = self._builder.build(cleaned.html, previous, error)
            result = await self._send(request)

            transitions.append(LoopState.VALIDATING)
            outcome = self._check(result)
            if outcome.valid:
                transitions.append(LoopState.SUCCESS)
                if attempt > 1:
                    logger.info("Recipe validated after %d attempt(s)", attempt)
                return LoopOutcome(result, cleaned, attempt, transitions)

            failure = ValidationFailure(
                outcome.reason or "invalid result", self._failing_recipe(result)
            )
            error = failure.reason
            if attempt >= self._max_attempts:
                transitions.append(LoopState.EXHAUSTED)
                logger.error(
                    "Validation failed after %d attempt(s). Final error: %s",
                    attempt, error,
                )
                raise RetryExhausted(attempt, error) from failure

            transitions.append(LoopState.RETRYING)
            previous = failure.recipe
            logger.info(
                "Retry attempt %d/%d - sending validation feedback: %s",
                attempt + 1, self._max_attempts, error[:200],
            )

    def _failing_recipe(self, result: ExtractionResult) -> Recipe | None:
        """Recipe echoed back as feedback: the first invalid one, else the first."""
        return self._validator.first_invalid(result.recipes) or (
            result.recipes[0] if result.recipes else None
        )

    def _check(self, result: ExtractionResult) -> ValidationOutcome:
        """Decide SUCCESS vs RETRYING for one decoded result.

        A clean negative verdict (no recipes) is a success. Protocol
        violations always retry, even with validation disabled.
        """
        violation = result.protocol_violation()
        if violation is not None:
            logger.warning("Extraction protocol violation: %s", violation)
            return ValidationOutcome.invalid(violation)
        if not result.is_recipe:
            logger.info(
                "Content identified as NOT a recipe (confidence %.2f)", result.confidence
            )
            return ValidationOutcome.ok()
        if not self._validation_enabled:
            return ValidationOutcome.ok()
        return self._validator.validate_result(result)

    async def _send(self, request: ExtractionRequest) -> ExtractionResult:
        if self._timeout_s is None:
            return await self._client.send(request)
        try:
            return await asyncio.wait_for(
                self._client.send(request, timeout=self._timeout_s),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError as e:
            raise TransportFailure(
                f"LLM call timed out after {self._timeout_s:.1f}s"
            ) from e
