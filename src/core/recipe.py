# src/core/recipe.py — v1
"""Recipe domain entity (schema 1.0.0).

The pipeline treats a Recipe as opaque beyond validation; its shape is
owned by the output schema contract sent to the model. Field names match
the serialized YAML/JSON keys.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class _RecipeModel(BaseModel):
    """Shared config: ignore unknown keys coming back from the model."""

    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: object) -> object:  # noqa: N805
        # Explicit nulls from the model fall back to field defaults
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CoverImage(_RecipeModel):
    path: str
    alt: str = ""


class ImageMedia(_RecipeModel):
    type: Literal["image"] = "image"
    path: str
    alt: str = ""


class VideoMedia(_RecipeModel):
    type: Literal["video"] = "video"
    path: str
    thumbnail: str | None = None
    duration: str | None = None


Media = Annotated[Union[ImageMedia, VideoMedia], Field(discriminator="type")]


class Substitution(_RecipeModel):
    item: str
    amount: str | None = None
    unit: str | None = None
    notes: str | None = None
    ratio: str | None = None


class Ingredient(_RecipeModel):
    """Single ingredient line. ``amount`` is kept as text ("1 1/2", "to taste")."""

    item: str = ""
    amount: str | None = None
    unit: str | None = None
    notes: str | None = None
    optional: bool = False
    substitutions: list[Substitution] = Field(default_factory=list)
    component: str = "main"

    @field_validator("amount", mode="before")
    @classmethod
    def _amount_as_text(cls, v: object) -> object:  # noqa: N805
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return f"{v:g}"
        return v


class Instruction(_RecipeModel):
    step: int | None = None
    description: str = ""
    time: str | None = None
    temperature: str | None = None
    media: list[Media] = Field(default_factory=list)


class Nutrition(_RecipeModel):
    serving_size: str | None = None
    calories: int | None = None
    protein: float | None = None
    carbohydrates: float | None = None
    fat: float | None = None
    fiber: float | None = None
    sugar: float | None = None
    sodium: float | None = None
    notes: str | None = None


class Storage(_RecipeModel):
    refrigerator: str | None = None
    freezer: str | None = None
    room_temperature: str | None = None


class RecipeMetadata(_RecipeModel):
    title: str = ""
    source: str | None = None
    author: str | None = None
    language: str = "en"
    date_created: date | None = None
    category: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    servings: int | None = None
    prep_time: str | None = None
    cook_time: str | None = None
    total_time: str | None = None
    difficulty: str = "medium"
    cover_image: CoverImage | None = None

    @field_validator("date_created", mode="before")
    @classmethod
    def _lenient_date(cls, v: object) -> object:  # noqa: N805
        # Free-form dates ("last spring") decode as None
        if isinstance(v, str):
            try:
                return date.fromisoformat(v.strip()[:10])
            except ValueError:
                return None
        return v


class Recipe(_RecipeModel):
    """Root recipe entity."""

    is_recipe: bool = True
    schema_version: str = "1.0.0"
    recipe_version: str = "1.0.0"
    metadata: RecipeMetadata | None = None
    description: str = ""
    ingredients: list[Ingredient] = Field(default_factory=list)
    equipment: list[str] = Field(default_factory=list)
    instructions: list[Instruction] = Field(default_factory=list)
    nutrition: Nutrition | None = None
    notes: str = ""
    storage: Storage | None = None

    @property
    def title(self) -> str:
        """Recipe title, or empty string when metadata is missing."""
        return self.metadata.title if self.metadata is not None else ""
