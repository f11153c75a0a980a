# src/core/models.py — v1
"""Shared Pydantic models for one extraction pass.

RawDocument, CleanedDocument, ExtractionResult and ValidationOutcome live
only for the duration of a single pipeline call; CachedEntry (cache/models.py)
is the only type that outlives it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field, model_validator

from recipextract.core.recipe import Recipe


class StrategyName(str, Enum):
    """Cleanup strategies, most restrictive first."""

    STRUCTURED_DATA = "structured_data"
    SECTION_BASED = "section_based"
    CONTENT_FILTER = "content_filter"
    RAW = "raw"


# Order used both by the cascade and by the adaptive re-clean.
ADAPTIVE_ORDER: tuple[StrategyName, ...] = (
    StrategyName.STRUCTURED_DATA,
    StrategyName.SECTION_BASED,
    StrategyName.CONTENT_FILTER,
    StrategyName.RAW,
)


class RawDocument(BaseModel):
    """Fetched markup plus its origin. Never mutated after creation."""

    model_config = ConfigDict(frozen=True)

    html: str
    url: str | None = None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def byte_length(self) -> int:
        return len(self.html.encode("utf-8"))


class CleanedDocument(BaseModel):
    """Output of one cleanup strategy."""

    model_config = ConfigDict(frozen=True)

    html: str
    strategy: StrategyName
    confidence: float = Field(ge=0.0, le=100.0)
    original_size: int
    cleaned_size: int

    @computed_field  # type: ignore[prop-decorator]
    @property
    def reduction_ratio(self) -> float:
        if self.original_size <= 0:
            return 0.0
        return (self.original_size - self.cleaned_size) / self.original_size

    @classmethod
    def build(
        cls,
        html: str,
        strategy: StrategyName,
        confidence: float,
        raw: RawDocument,
    ) -> CleanedDocument:
        return cls(
            html=html,
            strategy=strategy,
            confidence=max(0.0, min(100.0, confidence)),
            original_size=raw.byte_length,
            cleaned_size=len(html.encode("utf-8")),
        )

    def summary(self) -> str:
        """One-line metrics message for logs."""
        return (
            f"Strategy: {self.strategy.value}, {self.original_size} -> "
            f"{self.cleaned_size} bytes ({self.reduction_ratio * 100:.1f}% reduction)"
        )


class ExtractionResult(BaseModel):
    """Decoded model output for one page.

    ``is_recipe`` false must come with an empty recipe list and true with a
    non-empty one; ``protocol_violation()`` reports when the model broke that.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    is_recipe: bool
    confidence: float = Field(default=0.0, alias="recipe_confidence", ge=0.0, le=1.0)
    internal_reasoning: str | None = None
    recipes: list[Recipe] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _null_defaults(cls, data: object) -> object:  # noqa: N805
        if isinstance(data, dict):
            data = dict(data)
            for key in ("recipe_confidence", "confidence", "recipes"):
                if key in data and data[key] is None:
                    del data[key]
        return data

    def protocol_violation(self) -> str | None:
        """Return a feedback string if is_recipe and recipes disagree."""
        if self.is_recipe and not self.recipes:
            return "recipes: empty although is_recipe is true"
        if not self.is_recipe and self.recipes:
            return (
                f"recipes: {len(self.recipes)} recipe(s) returned although "
                "is_recipe is false"
            )
        return None


class ValidationOutcome(BaseModel):
    """Result of semantic recipe validation."""

    valid: bool
    reason: str | None = None

    @classmethod
    def ok(cls) -> ValidationOutcome:
        return cls(valid=True)

    @classmethod
    def invalid(cls, reason: str) -> ValidationOutcome:
        return cls(valid=False, reason=reason)
