# tests/unit/cleanup/test_structured_data.py — v1
"""Tests for cleanup/structured_data.py — JSON-LD Recipe extraction."""

from __future__ import annotations

import json

import pytest

from recipextract.cleanup.structured_data import (
    StructuredDataStrategy,
    find_recipe_nodes,
    is_recipe_type,
    score_completeness,
)
from recipextract.config.cleanup import CleanupConfig, StructuredDataConfig
from recipextract.core.models import RawDocument, StrategyName


def _page(*payloads: object) -> RawDocument:
    scripts = "".join(
        f'<script type="application/ld+json">{p if isinstance(p, str) else json.dumps(p)}</script>'
        for p in payloads
    )
    return RawDocument(html=f"<html><head>{scripts}</head><body><p>x</p></body></html>")


_FULL_NODE = {
    "@type": "Recipe",
    "name": "Pancakes",
    "recipeIngredient": ["flour", "milk"],
    "recipeInstructions": ["Mix", "Fry"],
    "totalTime": "PT20M",
    "recipeYield": "4",
    "description": "Fluffy.",
    "image": "p.jpg",
}


class TestHelpers:
    def test_find_nodes_graph(self):
        nodes = find_recipe_nodes({"@graph": [{"@type": "WebPage"}, {"@type": "Recipe"}]})
        assert len(nodes) == 2

    def test_find_nodes_list(self):
        assert len(find_recipe_nodes([{"@type": "Recipe"}, [{"@type": "Recipe"}]])) == 2

    def test_find_nodes_scalar(self):
        assert find_recipe_nodes("nope") == []

    def test_is_recipe_type(self):
        assert is_recipe_type({"@type": "Recipe"})
        assert is_recipe_type({"@type": ["Thing", "Recipe"]})
        assert not is_recipe_type({"@type": "Article"})
        assert not is_recipe_type({})

    def test_score_completeness(self):
        assert score_completeness(_FULL_NODE) == 100
        assert score_completeness({"name": "x", "recipeIngredient": []}) == 40
        assert score_completeness({}) == 0


class TestStructuredDataStrategy:
    def test_name(self):
        assert StructuredDataStrategy(CleanupConfig()).name is StrategyName.STRUCTURED_DATA

    def test_extracts_complete_node(self, recipe_page_html):
        raw = RawDocument(html=recipe_page_html)
        cleaned = StructuredDataStrategy(CleanupConfig()).clean(raw)
        assert cleaned is not None
        assert cleaned.strategy is StrategyName.STRUCTURED_DATA
        assert cleaned.confidence == 100
        node = json.loads(cleaned.html)
        assert node["name"] == "Tomato Soup"
        assert node["@type"] == "Recipe"

    def test_incomplete_node_declines(self):
        raw = _page({"@type": "Recipe", "name": "Only a name"})
        assert StructuredDataStrategy(CleanupConfig()).clean(raw) is None

    def test_skips_invalid_json(self):
        raw = _page("{not json", _FULL_NODE)
        cleaned = StructuredDataStrategy(CleanupConfig()).clean(raw)
        assert cleaned is not None
        assert json.loads(cleaned.html)["name"] == "Pancakes"

    def test_type_attribute_case_insensitive(self):
        html = (
            '<html><head><script type="Application/LD+JSON">'
            f"{json.dumps(_FULL_NODE)}</script></head><body></body></html>"
        )
        assert StructuredDataStrategy(CleanupConfig()).clean(RawDocument(html=html)) is not None

    def test_non_recipe_nodes_ignored(self):
        raw = _page({"@type": "Article", "name": "News", "description": "x"})
        assert StructuredDataStrategy(CleanupConfig()).clean(raw) is None

    def test_no_scripts(self):
        raw = RawDocument(html="<html><body><p>plain</p></body></html>")
        assert StructuredDataStrategy(CleanupConfig()).clean(raw) is None

    def test_disabled(self, recipe_page_html):
        config = CleanupConfig(structured_data=StructuredDataConfig(enabled=False))
        strategy = StructuredDataStrategy(config)
        assert strategy.enabled is False
        assert strategy.clean(RawDocument(html=recipe_page_html)) is None

    @pytest.mark.parametrize("min_completeness", [40, 60])
    def test_thresholds_from_config(self, min_completeness):
        config = CleanupConfig(
            structured_data=StructuredDataConfig(min_completeness=min_completeness)
        )
        strategy = StructuredDataStrategy(config)
        assert strategy.min_confidence == float(min_completeness)
        assert strategy.min_output_size == 50

    def test_unicode_preserved(self):
        node = dict(_FULL_NODE, name="Crêpes à la crème")
        cleaned = StructuredDataStrategy(CleanupConfig()).clean(_page(node))
        assert "Crêpes à la crème" in cleaned.html
