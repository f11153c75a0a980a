# tests/conftest.py — v2
"""Shared test fixtures for all unit and integration tests.

Provides sample recipes and pages, a mock extraction client, and temp
directories. No network access: HTTP is served by httpx.MockTransport.
"""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from recipextract.core.models import ExtractionResult, RawDocument
from recipextract.core.recipe import Ingredient, Instruction, Recipe, RecipeMetadata
from recipextract.logging.context import clear_context

FIXED_TODAY = date(2026, 3, 14)


# === FIXTURES: Sample data ===


@pytest.fixture
def sample_recipe() -> Recipe:
    """Minimal valid Recipe."""
    return Recipe(
        metadata=RecipeMetadata(title="Tomato Soup", servings=4, language="en"),
        description="A quick weeknight soup.",
        ingredients=[
            Ingredient(item="tomatoes", amount="800", unit="g"),
            Ingredient(item="onion", amount="1"),
            Ingredient(item="salt", amount="to taste"),
        ],
        instructions=[
            Instruction(step=1, description="Chop the onion and soften it in oil."),
            Instruction(step=2, description="Add the tomatoes and simmer 20 minutes."),
            Instruction(step=3, description="Blend and season with salt."),
        ],
    )


@pytest.fixture
def invalid_recipe() -> Recipe:
    """Recipe that fails validation: blank title, no instructions."""
    return Recipe(
        metadata=RecipeMetadata(title=" "),
        ingredients=[Ingredient(item="flour", amount="200", unit="g")],
        instructions=[],
    )


@pytest.fixture
def recipe_result(sample_recipe: Recipe) -> ExtractionResult:
    """Positive verdict with one valid recipe."""
    return ExtractionResult(
        is_recipe=True,
        confidence=0.97,
        internal_reasoning="Ingredients and steps present.",
        recipes=[sample_recipe],
    )


@pytest.fixture
def not_recipe_result() -> ExtractionResult:
    """Confident negative verdict."""
    return ExtractionResult(is_recipe=False, confidence=0.05, recipes=[])


@pytest.fixture
def recipe_page_html() -> str:
    """Recipe page with an embedded, complete JSON-LD Recipe node."""
    ld = {
        "@context": "https://schema.org",
        "@graph": [
            {"@type": "WebSite", "name": "Soup Blog"},
            {
                "@type": "Recipe",
                "name": "Tomato Soup",
                "description": "A quick weeknight soup.",
                "recipeYield": "4",
                "totalTime": "PT30M",
                "image": "https://example.com/soup.jpg",
                "recipeIngredient": ["800 g tomatoes", "1 onion", "salt"],
                "recipeInstructions": [
                    {"@type": "HowToStep", "text": "Chop the onion."},
                    {"@type": "HowToStep", "text": "Simmer the tomatoes."},
                ],
            },
        ],
    }
    return (
        "<html><head><title>Tomato Soup</title>"
        f'<script type="application/ld+json">{json.dumps(ld)}</script>'
        "</head><body><nav>Home | Soups</nav>"
        "<article><h1>Tomato Soup</h1><p>Our favourite.</p></article>"
        "<footer>(c) Soup Blog</footer></body></html>"
    )


@pytest.fixture
def article_page_html() -> str:
    """Recipe page without structured data; the recipe lives in an <article>."""
    filler = "Stir gently and keep the heat low so nothing catches. " * 25
    return (
        "<html><head><script>var tracking = 1;</script>"
        "<style>body { color: red; }</style></head><body>"
        "<nav><a href='/'>Home</a></nav>"
        "<div class='ad-banner'>Buy now</div>"
        "<article class='post'>"
        "<h2>Ingredients</h2><ul><li>2 eggs</li><li>200 g flour</li></ul>"
        "<h2>Instructions</h2><ol><li>Whisk the eggs.</li><li>Fold in flour.</li></ol>"
        f"<p>Recipe notes: {filler}</p>"
        "<div class='share-buttons'>Share on social</div>"
        "</article>"
        "<footer>Contact</footer></body></html>"
    )


@pytest.fixture
def raw_document(article_page_html: str) -> RawDocument:
    return RawDocument(html=article_page_html, url="https://example.com/crepes")


@pytest.fixture
def fixed_today() -> date:
    return FIXED_TODAY


# === FIXTURES: Mock LLM ===


@pytest.fixture
def mock_llm_client(recipe_result: ExtractionResult) -> AsyncMock:
    """Mock BaseExtractionClient returning a valid recipe verdict."""
    client = AsyncMock()
    client.send = AsyncMock(return_value=recipe_result)
    client.provider_name = "mock"
    return client


# === FIXTURES: Temp dirs ===


@pytest.fixture
def tmp_cache_dir(tmp_path: Path) -> Path:
    """Temporary cache directory."""
    cache = tmp_path / "cache"
    cache.mkdir()
    return cache


@pytest.fixture
def tmp_storage_dir(tmp_path: Path) -> Path:
    """Temporary storage root."""
    root = tmp_path / "recipes"
    root.mkdir()
    return root


@pytest.fixture(autouse=True)
def _reset_log_context():
    clear_context()
    yield
    clear_context()
