# src/llm/gemini_client.py — v1
"""Gemini generateContent client over raw HTTP (httpx).

The REST envelope is parsed by hand rather than through an SDK so that
blocked prompts, missing candidates, truncation and multi-part outputs
can each be told apart.
"""

from __future__ import annotations

import json
import logging
import time
from typing import Any

import httpx
from pydantic import ValidationError

from recipextract.core.errors import BlockedContent, ParseError, TransportFailure
from recipextract.core.models import ExtractionResult
from recipextract.llm.base_client import BaseExtractionClient
from recipextract.llm.models import ExtractionRequest, GenerateContentResponse

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"

# Candidate finish reasons that mean the output itself was filtered
_BLOCKING_FINISH_REASONS = frozenset({"SAFETY", "PROHIBITED_CONTENT", "BLOCKLIST", "SPII"})


def parse_response(body: Any) -> ExtractionResult:
    """Decode a generateContent response body into an ExtractionResult.

    Raises:
        BlockedContent: The prompt or the candidate was blocked.
        TransportFailure: No candidates, or the envelope itself is malformed.
        ParseError: The candidate text does not decode against the schema.
    """
    try:
        envelope = GenerateContentResponse.model_validate(body)
    except ValidationError as e:
        raise TransportFailure(f"Malformed Gemini response envelope: {e.error_count()} error(s)") from e

    feedback = envelope.prompt_feedback
    if feedback is not None and feedback.block_reason:
        logger.error("Gemini response BLOCKED - Reason: %s", feedback.block_reason)
        raise BlockedContent(feedback.block_reason)

    if not envelope.candidates:
        raise TransportFailure("No candidates in Gemini response")

    candidate = envelope.candidates[0]
    text = candidate.joined_text()

    if candidate.finish_reason in _BLOCKING_FINISH_REASONS and not text:
        logger.error("Gemini candidate BLOCKED - finishReason: %s", candidate.finish_reason)
        raise BlockedContent(candidate.finish_reason)
    if candidate.finish_reason is not None and candidate.finish_reason != "STOP":
        logger.warning(
            "Gemini response may be truncated - finishReason: %s", candidate.finish_reason
        )

    part_count = len(candidate.content.parts) if candidate.content is not None else 0
    logger.debug("Gemini response has %d part(s), %d chars", part_count, len(text))

    try:
        data = json.loads(text)
        return ExtractionResult.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error(
            "Invalid JSON structure received from Gemini API (payload length: %d)", len(text)
        )
        raise ParseError(
            f"Invalid JSON structure received from Gemini API: {e}",
            payload_length=len(text),
        ) from e


class GeminiClient(BaseExtractionClient):
    """Async Gemini client. Owns its httpx client unless one is injected."""

    def __init__(
        self,
        api_key: str,
        model: str = "gemini-2.0-flash",
        base_url: str = DEFAULT_BASE_URL,
        timeout_s: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout_s = timeout_s
        self._path = f"/models/{model}:generateContent"
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            base_url=base_url.rstrip("/"), timeout=timeout_s
        )

    @property
    def provider_name(self) -> str:
        return "gemini"

    @property
    def model(self) -> str:
        return self._model

    async def send(
        self, request: ExtractionRequest, timeout: float | None = None
    ) -> ExtractionResult:
        t0 = time.monotonic()
        try:
            response = await self._client.post(
                self._path,
                json=request.to_payload(),
                headers={"x-goog-api-key": self._api_key},
                timeout=timeout if timeout is not None else self._timeout_s,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Gemini API HTTP error: %d - %s", status, e.response.text[:500])
            raise TransportFailure(
                f"Gemini API error: {status} - {e.response.reason_phrase}",
                status_code=status,
            ) from e
        except httpx.TimeoutException as e:
            raise TransportFailure(f"Gemini API timeout: {e!r}") from e
        except httpx.HTTPError as e:
            logger.error("Failed to call Gemini API: %s", e)
            raise TransportFailure(f"Network error: {e}") from e

        latency_ms = int((time.monotonic() - t0) * 1000)
        try:
            body = response.json()
        except ValueError as e:
            raise TransportFailure("Gemini API returned a non-JSON envelope") from e

        result = parse_response(body)
        logger.info(
            "Gemini API request successful (is_recipe=%s, recipes=%d, %d ms)",
            result.is_recipe, len(result.recipes), latency_ms,
        )
        return result

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()
