# src/llm/schema.py — v2
"""Output schema contract sent to the model as a generation constraint.

RECIPE_EXTRACTION_SCHEMA describes the page-level verdict wrapper
(``is_recipe``, ``recipe_confidence``, ``internal_reasoning``, ``recipes``)
and the recipe 1.0.0 shape mirrored by ``core/recipe.py``.
"""

from __future__ import annotations

import copy
from typing import Any

SCHEMA_ID = "https://recipextract.dev/schemas/recipe-extraction-1.0.0.json"

# Keys the endpoint does not accept inside responseSchema.
_STRIPPED_KEYS = ("$id", "$schema")


def _string(description: str | None = None) -> dict[str, Any]:
    node: dict[str, Any] = {"type": "string"}
    if description:
        node["description"] = description
    return node


def _nullable_string(description: str | None = None) -> dict[str, Any]:
    node = _string(description)
    node["nullable"] = True
    return node


def _string_list() -> dict[str, Any]:
    return {"type": "array", "items": {"type": "string"}}


_SUBSTITUTION = {
    "type": "object",
    "properties": {
        "item": _string(),
        "amount": _nullable_string(),
        "unit": _nullable_string(),
        "notes": _nullable_string(),
        "ratio": _nullable_string(),
    },
    "required": ["item"],
}

_INGREDIENT = {
    "type": "object",
    "properties": {
        "item": _string("Ingredient name"),
        "amount": _nullable_string("Quantity as written, e.g. '1 1/2' or 'to taste'"),
        "unit": _nullable_string(),
        "notes": _nullable_string(),
        "optional": {"type": "boolean"},
        "substitutions": {"type": "array", "items": _SUBSTITUTION},
        "component": _string("Recipe component this ingredient belongs to, default 'main'"),
    },
    "required": ["item"],
}

_MEDIA = {
    "type": "object",
    "properties": {
        "type": {"type": "string", "enum": ["image", "video"]},
        "path": _string(),
        "alt": _nullable_string(),
        "thumbnail": _nullable_string(),
        "duration": _nullable_string(),
    },
    "required": ["type", "path"],
}

_INSTRUCTION = {
    "type": "object",
    "properties": {
        "step": {"type": "integer", "nullable": True},
        "description": _string(),
        "time": _nullable_string(),
        "temperature": _nullable_string(),
        "media": {"type": "array", "items": _MEDIA},
    },
    "required": ["description"],
}

_METADATA = {
    "type": "object",
    "properties": {
        "title": _string(),
        "source": _nullable_string(),
        "author": _nullable_string(),
        "language": _string("ISO 639-1 language code"),
        "date_created": _nullable_string("ISO date YYYY-MM-DD"),
        "category": _string_list(),
        "tags": _string_list(),
        "servings": {"type": "integer", "nullable": True},
        "prep_time": _nullable_string(),
        "cook_time": _nullable_string(),
        "total_time": _nullable_string(),
        "difficulty": {"type": "string", "enum": ["easy", "medium", "hard"]},
        "cover_image": {
            "type": "object",
            "nullable": True,
            "properties": {"path": _string(), "alt": _nullable_string()},
            "required": ["path"],
        },
    },
    "required": ["title"],
}

_NUTRITION = {
    "type": "object",
    "nullable": True,
    "properties": {
        "serving_size": _nullable_string(),
        "calories": {"type": "integer", "nullable": True},
        "protein": {"type": "number", "nullable": True},
        "carbohydrates": {"type": "number", "nullable": True},
        "fat": {"type": "number", "nullable": True},
        "fiber": {"type": "number", "nullable": True},
        "sugar": {"type": "number", "nullable": True},
        "sodium": {"type": "number", "nullable": True},
        "notes": _nullable_string(),
    },
}

_STORAGE = {
    "type": "object",
    "nullable": True,
    "properties": {
        "refrigerator": _nullable_string(),
        "freezer": _nullable_string(),
        "room_temperature": _nullable_string(),
    },
}

_RECIPE = {
    "type": "object",
    "properties": {
        "is_recipe": {"type": "boolean"},
        "schema_version": _string(),
        "recipe_version": _string(),
        "metadata": _METADATA,
        "description": _string(),
        "ingredients": {"type": "array", "items": _INGREDIENT},
        "equipment": _string_list(),
        "instructions": {"type": "array", "items": _INSTRUCTION},
        "nutrition": _NUTRITION,
        "notes": _string(),
        "storage": _STORAGE,
    },
    "required": ["metadata", "ingredients", "instructions"],
}

RECIPE_EXTRACTION_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "$id": SCHEMA_ID,
    "type": "object",
    "properties": {
        "is_recipe": {
            "type": "boolean",
            "description": "Whether the page contains at least one recipe",
        },
        "recipe_confidence": {
            "type": "number",
            "minimum": 0,
            "maximum": 1,
            "description": "Likelihood, 0.0 to 1.0, that the source page is a recipe page",
        },
        "internal_reasoning": _nullable_string("Short justification of the verdict"),
        "recipes": {
            "type": "array",
            "description": "Every recipe found on the page; empty when is_recipe is false",
            "items": _RECIPE,
        },
    },
    "required": ["is_recipe", "recipe_confidence", "recipes"],
}


def response_schema(schema: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return a copy of the schema without identifier/versioning metadata."""
    cleaned = copy.deepcopy(schema if schema is not None else RECIPE_EXTRACTION_SCHEMA)
    for key in _STRIPPED_KEYS:
        cleaned.pop(key, None)
    return cleaned
