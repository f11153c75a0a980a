# src/validation/post_processor.py — v1
"""Overwrite deterministic recipe fields after validation."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from recipextract.core.recipe import Recipe, RecipeMetadata

logger = logging.getLogger(__name__)

UNTITLED_RECIPE = "Untitled Recipe"
RECIPE_VERSION = "1.0.0"


class RecipePostProcessor:
    """Stamps schema version, source URL and creation date onto a recipe.

    Model output for these fields is never trusted.
    """

    def __init__(
        self,
        schema_version: str = "1.0.0",
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._schema_version = schema_version
        self._clock = clock

    def process(self, recipe: Recipe, source_url: str | None) -> Recipe:
        """Return a new Recipe with deterministic fields populated."""
        logger.debug(
            "Post-processing recipe: schema_version=%s, source_url=%s",
            self._schema_version, source_url,
        )
        today = self._clock()
        if recipe.metadata is None:
            metadata = RecipeMetadata(
                title=UNTITLED_RECIPE, source=source_url, date_created=today
            )
        else:
            metadata = recipe.metadata.model_copy(
                update={"source": source_url, "date_created": today}
            )
        return recipe.model_copy(
            update={
                "schema_version": self._schema_version,
                "recipe_version": RECIPE_VERSION,
                "metadata": metadata,
            }
        )

    def process_all(self, recipes: list[Recipe], source_url: str | None) -> list[Recipe]:
        return [self.process(r, source_url) for r in recipes]
