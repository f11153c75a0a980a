# src/api/models.py — v2
"""API-level models: ExtractRequest, ExtractResponse."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, model_validator

from recipextract.core.models import StrategyName
from recipextract.core.recipe import Recipe
from recipextract.storage.base_storage_provider import UploadResult


class ExtractRequest(BaseModel):
    """One extraction request from the caller.

    At least one of ``url``, ``html`` or ``text`` is required. When both
    ``url`` and ``html`` are given the HTML is used and the URL only
    identifies the page (fingerprint, ``metadata.source``).
    """

    url: str | None = None
    html: str | None = None
    text: str | None = None
    compression: Literal["none", "base64-gzip"] = "none"
    skip_cache: bool = False
    folder_id: str | None = None
    title: str | None = None

    @model_validator(mode="after")
    def require_input(self) -> ExtractRequest:
        if not any(v and v.strip() for v in (self.url, self.html, self.text)):
            raise ValueError("one of url, html or text is required")
        return self


class ExtractResponse(BaseModel):
    """Result returned to the caller."""

    fingerprint: str
    is_recipe: bool
    from_cache: bool = False
    strategy: StrategyName | None = None
    attempts: int = 0
    serialized: str = ""
    recipes: list[Recipe] = Field(default_factory=list)
    stored_files: list[UploadResult] = Field(default_factory=list)
    version: int | None = None
