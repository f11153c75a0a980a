# src/llm/request_builder.py — v1
"""Assemble ExtractionRequest payloads.

Prompt order: instruction template, today's date, cleaned HTML, then on a
retry only, the validation error and the previous failing recipe. The
output schema travels as ``generationConfig.responseSchema`` so the
endpoint enforces it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date
from typing import Any

from recipextract.config.settings import Settings
from recipextract.core.recipe import Recipe
from recipextract.llm.models import (
    Content,
    ExtractionRequest,
    GenerationConfig,
    Part,
    SafetySetting,
)
from recipextract.llm.prompts import render_extraction_prompt, render_feedback_prompt
from recipextract.llm.schema import response_schema

logger = logging.getLogger(__name__)

_NO_PREVIOUS_RECIPE = "(no recipe was returned)"


class RequestBuilder:
    """Builds a fresh request per attempt; generation parameters are fixed."""

    def __init__(
        self,
        temperature: float = 0.1,
        top_p: float = 0.8,
        max_output_tokens: int = 4096,
        safety_categories: list[str] | None = None,
        safety_threshold: str = "BLOCK_NONE",
        schema: dict[str, Any] | None = None,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._temperature = temperature
        self._top_p = top_p
        self._max_output_tokens = max_output_tokens
        self._safety_settings = [
            SafetySetting(category=c, threshold=safety_threshold)
            for c in (safety_categories or [])
        ]
        self._schema = response_schema(schema)
        self._clock = clock

    @classmethod
    def from_settings(
        cls, settings: Settings, clock: Callable[[], date] = date.today
    ) -> RequestBuilder:
        return cls(
            temperature=settings.llm_temperature,
            top_p=settings.llm_top_p,
            max_output_tokens=settings.llm_max_output_tokens,
            safety_categories=settings.llm_safety_categories_list,
            safety_threshold=settings.llm_safety_threshold,
            clock=clock,
        )

    def build(
        self,
        cleaned_html: str,
        previous_recipe: Recipe | None = None,
        validation_error: str | None = None,
    ) -> ExtractionRequest:
        """Build the first-attempt request, or a feedback request when
        ``validation_error`` is given."""
        prompt = render_extraction_prompt(cleaned_html, self._clock())
        if validation_error is not None:
            previous = (
                previous_recipe.model_dump_json(indent=2, exclude_none=True)
                if previous_recipe is not None
                else _NO_PREVIOUS_RECIPE
            )
            prompt += render_feedback_prompt(validation_error, previous)
            logger.debug("Built feedback request (error: %s)", validation_error)
        elif previous_recipe is not None:
            raise ValueError("previous_recipe requires a validation_error")

        return ExtractionRequest(
            contents=[Content(parts=[Part(text=prompt)])],
            generation_config=GenerationConfig(
                temperature=self._temperature,
                top_p=self._top_p,
                max_output_tokens=self._max_output_tokens,
                response_schema=self._schema,
            ),
            safety_settings=list(self._safety_settings),
            previous_recipe=previous_recipe,
            validation_error=validation_error,
        )
