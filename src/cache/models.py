# src/cache/models.py — v2
"""Cache domain model: CachedEntry."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CachedEntry(BaseModel):
    """Stored extraction outcome for one fingerprint.

    ``serialized_result`` is the canonical YAML stream of the recipes, or
    an empty string for a confident "not a recipe" verdict
    (``is_valid=False``). ``version`` starts at 0 and increments on every
    overwrite.
    """

    fingerprint: str
    serialized_result: str = ""
    is_valid: bool
    source_url: str | None = None
    created_at: datetime
    last_updated_at: datetime
    version: int = Field(default=0, ge=0)

    def with_updated_version(
        self, serialized_result: str, is_valid: bool, now: datetime
    ) -> CachedEntry:
        """Return the overwrite of this entry: new result, version + 1."""
        return self.model_copy(
            update={
                "serialized_result": serialized_result,
                "is_valid": is_valid,
                "last_updated_at": now,
                "version": self.version + 1,
            }
        )
