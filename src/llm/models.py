# src/llm/models.py — v2
"""Gemini generateContent wire types: ExtractionRequest and response envelope.

Field names are snake_case in Python and camelCase on the wire (aliases).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from recipextract.core.recipe import Recipe


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# --- Request ---


class Part(_WireModel):
    """Single text part of a message."""

    text: str


class Content(_WireModel):
    """One message: role plus ordered parts."""

    role: str = "user"
    parts: list[Part]


class GenerationConfig(_WireModel):
    temperature: float
    top_p: float = Field(alias="topP")
    max_output_tokens: int = Field(alias="maxOutputTokens")
    response_mime_type: str = Field(default="application/json", alias="responseMimeType")
    response_schema: dict[str, Any] = Field(alias="responseSchema")


class SafetySetting(_WireModel):
    category: str
    threshold: str


class ExtractionRequest(_WireModel):
    """Fully assembled prompt payload for one attempt.

    ``previous_recipe`` and ``validation_error`` are set only on a feedback
    retry; they are already rendered into the prompt text and are not sent
    as separate fields.
    """

    contents: list[Content]
    generation_config: GenerationConfig = Field(alias="generationConfig")
    safety_settings: list[SafetySetting] = Field(default_factory=list, alias="safetySettings")
    previous_recipe: Recipe | None = Field(default=None, exclude=True)
    validation_error: str | None = Field(default=None, exclude=True)

    @property
    def prompt(self) -> str:
        """Concatenated text of every request part."""
        return "".join(part.text for content in self.contents for part in content.parts)

    @property
    def is_retry(self) -> bool:
        return self.validation_error is not None

    def to_payload(self) -> dict[str, Any]:
        """JSON body for the generateContent endpoint."""
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Response envelope ---


class ResponsePart(_WireModel):
    text: str | None = None


class CandidateContent(_WireModel):
    role: str | None = None
    parts: list[ResponsePart] = Field(default_factory=list)


class Candidate(_WireModel):
    content: CandidateContent | None = None
    finish_reason: str | None = Field(default=None, alias="finishReason")
    safety_ratings: list[dict[str, Any]] = Field(default_factory=list, alias="safetyRatings")

    def joined_text(self) -> str:
        """Concatenate every text part in order (long outputs arrive split)."""
        if self.content is None:
            return ""
        return "".join(p.text for p in self.content.parts if p.text is not None)


class PromptFeedback(_WireModel):
    block_reason: str | None = Field(default=None, alias="blockReason")
    safety_ratings: list[dict[str, Any]] = Field(default_factory=list, alias="safetyRatings")


class UsageMetadata(_WireModel):
    prompt_token_count: int = Field(default=0, alias="promptTokenCount")
    candidates_token_count: int = Field(default=0, alias="candidatesTokenCount")
    total_token_count: int = Field(default=0, alias="totalTokenCount")


class GenerateContentResponse(_WireModel):
    """Top-level generateContent response."""

    candidates: list[Candidate] = Field(default_factory=list)
    prompt_feedback: PromptFeedback | None = Field(default=None, alias="promptFeedback")
    usage_metadata: UsageMetadata | None = Field(default=None, alias="usageMetadata")
    served_model: str | None = Field(default=None, alias="modelVersion")
