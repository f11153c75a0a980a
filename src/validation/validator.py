# src/validation/validator.py — v1
"""Semantic recipe validation and canonical YAML serialization.

The endpoint's constrained output already guarantees the schema shape;
this layer checks completeness. Reasons are joined with "; " and name the
field and the defect, since they are fed verbatim into the retry prompt.
"""

from __future__ import annotations

import logging
from typing import Any

import yaml
from pydantic import ValidationError

from recipextract.core.models import ExtractionResult, ValidationOutcome
from recipextract.core.recipe import Recipe

logger = logging.getLogger(__name__)


class RecipeValidator:
    """Validates decoded recipes and renders them to canonical YAML."""

    def validate(self, recipe: Recipe) -> ValidationOutcome:
        defects = self._defects(recipe)
        if defects:
            reason = "; ".join(defects)
            logger.warning("Recipe validation failed: %s", reason)
            return ValidationOutcome.invalid(reason)
        return ValidationOutcome.ok()

    def validate_result(self, result: ExtractionResult) -> ValidationOutcome:
        """Validate a whole page verdict: protocol first, then every recipe.

        With several recipes each reason is prefixed ``recipes[i].``.
        """
        violation = result.protocol_violation()
        if violation is not None:
            logger.warning("Extraction protocol violation: %s", violation)
            return ValidationOutcome.invalid(violation)

        many = len(result.recipes) > 1
        defects: list[str] = []
        for i, recipe in enumerate(result.recipes):
            prefix = f"recipes[{i}]." if many else ""
            defects.extend(prefix + d for d in self._defects(recipe))
        if defects:
            reason = "; ".join(defects)
            logger.warning("Recipe validation failed: %s", reason)
            return ValidationOutcome.invalid(reason)
        return ValidationOutcome.ok()

    def first_invalid(self, recipes: list[Recipe]) -> Recipe | None:
        """First recipe with at least one defect, or None."""
        return next((r for r in recipes if self._defects(r)), None)

    @staticmethod
    def _defects(recipe: Recipe) -> list[str]:
        defects: list[str] = []

        if recipe.metadata is None:
            defects.append("metadata: missing")
        else:
            if not recipe.metadata.title.strip():
                defects.append("metadata.title: blank")
            if recipe.metadata.servings is not None and recipe.metadata.servings <= 0:
                defects.append(
                    f"metadata.servings: must be positive, got {recipe.metadata.servings}"
                )

        if not recipe.ingredients:
            defects.append("ingredients: empty")
        for i, ingredient in enumerate(recipe.ingredients):
            if not ingredient.item.strip():
                defects.append(f"ingredients[{i}].item: blank")

        if not recipe.instructions:
            defects.append("instructions: empty")
        for i, instruction in enumerate(recipe.instructions):
            if not instruction.description.strip():
                defects.append(f"instructions[{i}].description: blank")

        return defects

    # --- Serialization ---

    def serialize(self, recipe: Recipe) -> str:
        """Render one recipe as canonical YAML."""
        return yaml.safe_dump(
            _to_plain(recipe),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    def serialize_many(self, recipes: list[Recipe]) -> str:
        """Render recipes as a YAML stream, one document per recipe."""
        if not recipes:
            return ""
        return yaml.safe_dump_all(
            [_to_plain(r) for r in recipes],
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    def deserialize(self, text: str) -> list[Recipe]:
        """Parse a serialized YAML stream back into recipes.

        Raises:
            ValueError: If the text is not valid recipe YAML.
        """
        if not text.strip():
            return []
        try:
            documents = [d for d in yaml.safe_load_all(text) if d]
            return [Recipe.model_validate(d) for d in documents]
        except (yaml.YAMLError, ValidationError) as e:
            raise ValueError(f"Invalid recipe YAML: {e}") from e


def _to_plain(recipe: Recipe) -> dict[str, Any]:
    return recipe.model_dump(mode="python", exclude_none=True)
