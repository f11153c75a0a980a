# src/config/settings.py — v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for all deployment-specific settings: the Gemini
endpoint and generation parameters, cleanup thresholds, retry ceiling,
cache backend, fetcher, storage and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


_DEFAULT_SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT,"
    "HARM_CATEGORY_HATE_SPEECH,"
    "HARM_CATEGORY_SEXUALLY_EXPLICIT,"
    "HARM_CATEGORY_DANGEROUS_CONTENT"
)

_DEFAULT_SECTION_KEYWORDS = (
    "ingredients,instructions,directions,method,preparation,"
    "recipe,servings,prep time,cook time"
)


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === LLM (Gemini REST) ===
    llm_provider: str = "gemini"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.0-flash"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    llm_temperature: float = 0.1
    llm_top_p: float = 0.8
    llm_max_output_tokens: int = 4096
    llm_timeout_s: float = 60.0
    llm_safety_threshold: str = "BLOCK_NONE"
    llm_safety_categories: str = _DEFAULT_SAFETY_CATEGORIES

    # === Feedback retry loop ===
    llm_max_attempts: int = 3
    validation_enabled: bool = True

    # === Adaptive re-clean on suspected over-cleaning ===
    adaptive_cleaning_enabled: bool = True
    adaptive_confidence_threshold: float = 0.5

    # === HTML cleanup cascade ===
    cleanup_enabled: bool = True
    cleanup_structured_data_enabled: bool = True
    cleanup_structured_min_completeness: int = 60
    cleanup_structured_min_output_size: int = 50
    cleanup_section_enabled: bool = True
    cleanup_section_min_confidence: int = 30
    cleanup_section_keywords: str = _DEFAULT_SECTION_KEYWORDS
    cleanup_min_output_size: int = 500

    # === Recipe ===
    recipe_schema_version: str = "1.0.0"

    # === Cache ===
    cache_enabled: bool = True
    cache_backend: Literal["json", "sqlite", "redis"] = "json"
    cache_root: Path = Path("~/.recipextract/cache")
    cache_redis_url: str = ""
    single_flight_enabled: bool = True

    # === HTML fetcher ===
    fetch_timeout_s: float = 20.0
    fetch_user_agent: str = (
        "Mozilla/5.0 (compatible; recipextract/0.1; +https://example.invalid/bot)"
    )

    # === Storage provider ===
    storage_root: Path = Path("~/.recipextract/recipes")

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("llm_max_attempts")
    @classmethod
    def validate_max_attempts(cls, v: int) -> int:  # noqa: N805
        if v < 1:
            raise ValueError("llm_max_attempts must be >= 1")
        return v

    @field_validator("llm_temperature", "llm_top_p", "adaptive_confidence_threshold")
    @classmethod
    def validate_unit_interval(cls, v: float) -> float:  # noqa: N805
        if not 0.0 <= v <= 2.0:
            raise ValueError("value must be within [0, 2]")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cache_backend == "redis" and not self.cache_redis_url:
            errors.append("CACHE_BACKEND=redis requires CACHE_REDIS_URL")

        if not 0 <= self.cleanup_structured_min_completeness <= 100:
            errors.append("CLEANUP_STRUCTURED_MIN_COMPLETENESS must be in [0, 100]")

        if not 0 <= self.cleanup_section_min_confidence <= 100:
            errors.append("CLEANUP_SECTION_MIN_CONFIDENCE must be in [0, 100]")

        if self.cleanup_structured_min_output_size < 0:
            errors.append("CLEANUP_STRUCTURED_MIN_OUTPUT_SIZE must be >= 0")

        if self.cleanup_min_output_size < 0:
            errors.append("CLEANUP_MIN_OUTPUT_SIZE must be >= 0")

        if self.adaptive_confidence_threshold > 1.0:
            errors.append("ADAPTIVE_CONFIDENCE_THRESHOLD must be <= 1.0")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self

    # --- Helpers ---

    @property
    def llm_safety_categories_list(self) -> list[str]:
        """Parse comma-separated safety categories."""
        return [c.strip() for c in self.llm_safety_categories.split(",") if c.strip()]

    @property
    def cleanup_section_keywords_list(self) -> list[str]:
        """Parse comma-separated section keywords (lower-cased)."""
        return [
            k.strip().lower()
            for k in self.cleanup_section_keywords.split(",")
            if k.strip()
        ]


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-request config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
