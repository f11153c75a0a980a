# tests/unit/llm/test_request_builder.py — v1
"""Tests for llm/request_builder.py — first-attempt and feedback requests."""

from __future__ import annotations

from datetime import date

import pytest

from recipextract.config.settings import Settings
from recipextract.llm.request_builder import RequestBuilder


def _make_builder(**overrides) -> RequestBuilder:
    defaults = dict(
        safety_categories=["HARM_CATEGORY_HARASSMENT", "HARM_CATEGORY_HATE_SPEECH"],
        clock=lambda: date(2026, 3, 14),
    )
    defaults.update(overrides)
    return RequestBuilder(**defaults)


class TestFirstAttempt:
    def test_prompt_contains_date_and_html(self):
        request = _make_builder().build("<h2>Ingredients</h2>")
        assert "2026-03-14" in request.prompt
        assert "<h2>Ingredients</h2>" in request.prompt
        assert "Validation error" not in request.prompt
        assert request.is_retry is False

    def test_schema_is_stripped(self):
        payload = _make_builder().build("<p>x</p>").to_payload()
        schema = payload["generationConfig"]["responseSchema"]
        assert "$id" not in schema
        assert "$schema" not in schema
        assert "recipes" in schema["properties"]

    def test_generation_parameters(self):
        builder = _make_builder(temperature=0.2, top_p=0.9, max_output_tokens=2048)
        config = builder.build("x").to_payload()["generationConfig"]
        assert config["temperature"] == 0.2
        assert config["topP"] == 0.9
        assert config["maxOutputTokens"] == 2048
        assert config["responseMimeType"] == "application/json"

    def test_safety_settings(self):
        payload = _make_builder(safety_threshold="BLOCK_ONLY_HIGH").build("x").to_payload()
        assert payload["safetySettings"] == [
            {"category": "HARM_CATEGORY_HARASSMENT", "threshold": "BLOCK_ONLY_HIGH"},
            {"category": "HARM_CATEGORY_HATE_SPEECH", "threshold": "BLOCK_ONLY_HIGH"},
        ]

    def test_fresh_date_per_build(self):
        days = iter([date(2026, 1, 1), date(2026, 1, 2)])
        builder = _make_builder(clock=lambda: next(days))
        assert "2026-01-01" in builder.build("x").prompt
        assert "2026-01-02" in builder.build("x").prompt


class TestFeedbackAttempt:
    def test_feedback_appended_after_html(self, invalid_recipe):
        request = _make_builder().build(
            "<p>page</p>", previous_recipe=invalid_recipe,
            validation_error="instructions: empty",
        )
        prompt = request.prompt
        assert request.is_retry is True
        assert prompt.index("<p>page</p>") < prompt.index("instructions: empty")
        assert '"flour"' in prompt
        assert request.previous_recipe is invalid_recipe

    def test_previous_recipe_omits_nulls(self, invalid_recipe):
        prompt = _make_builder().build(
            "x", previous_recipe=invalid_recipe, validation_error="e"
        ).prompt
        assert "null" not in prompt

    def test_error_without_previous_recipe(self):
        prompt = _make_builder().build("x", validation_error="recipes: empty").prompt
        assert "(no recipe was returned)" in prompt

    def test_previous_recipe_requires_error(self, invalid_recipe):
        with pytest.raises(ValueError, match="validation_error"):
            _make_builder().build("x", previous_recipe=invalid_recipe)


class TestFromSettings:
    def test_uses_settings(self):
        s = Settings(
            _env_file=None,
            llm_temperature=0.3,
            llm_max_output_tokens=1024,
            llm_safety_categories="HARM_CATEGORY_DANGEROUS_CONTENT",
        )
        payload = RequestBuilder.from_settings(s).build("x").to_payload()
        assert payload["generationConfig"]["temperature"] == 0.3
        assert payload["generationConfig"]["maxOutputTokens"] == 1024
        assert len(payload["safetySettings"]) == 1
