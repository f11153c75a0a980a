# src/config/cleanup.py — v1
"""Immutable HTML cleanup configuration injected into the cleanup cascade.

Built once from Settings; the orchestrator and every strategy receive the
same frozen instance at construction time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from recipextract.config.settings import Settings

DEFAULT_SECTION_KEYWORDS: tuple[str, ...] = (
    "ingredients",
    "instructions",
    "directions",
    "method",
    "preparation",
    "recipe",
    "servings",
    "prep time",
    "cook time",
)


@dataclass(frozen=True)
class StructuredDataConfig:
    """JSON-LD extraction thresholds."""

    enabled: bool = True
    min_completeness: int = 60
    min_output_size: int = 50


@dataclass(frozen=True)
class SectionBasedConfig:
    """Keyword-scored section extraction thresholds."""

    enabled: bool = True
    min_confidence: int = 30
    keywords: tuple[str, ...] = DEFAULT_SECTION_KEYWORDS
    long_text_threshold: int = 1000


@dataclass(frozen=True)
class ContentFilterConfig:
    """Minimum size any heuristic output must reach to be accepted."""

    min_output_size: int = 500


@dataclass(frozen=True)
class CleanupConfig:
    """Top-level cleanup configuration."""

    enabled: bool = True
    structured_data: StructuredDataConfig = field(default_factory=StructuredDataConfig)
    section_based: SectionBasedConfig = field(default_factory=SectionBasedConfig)
    content_filter: ContentFilterConfig = field(default_factory=ContentFilterConfig)

    @property
    def min_output_size(self) -> int:
        return self.content_filter.min_output_size

    @classmethod
    def from_settings(cls, settings: Settings) -> CleanupConfig:
        """Build the frozen config from flat settings fields."""
        return cls(
            enabled=settings.cleanup_enabled,
            structured_data=StructuredDataConfig(
                enabled=settings.cleanup_structured_data_enabled,
                min_completeness=settings.cleanup_structured_min_completeness,
                min_output_size=settings.cleanup_structured_min_output_size,
            ),
            section_based=SectionBasedConfig(
                enabled=settings.cleanup_section_enabled,
                min_confidence=settings.cleanup_section_min_confidence,
                keywords=tuple(settings.cleanup_section_keywords_list),
            ),
            content_filter=ContentFilterConfig(
                min_output_size=settings.cleanup_min_output_size,
            ),
        )
