# src/cleanup/structured_data.py — v1
"""JSON-LD schema.org/Recipe extraction.

When a page embeds a sufficiently complete Recipe node, that node (as
JSON) replaces the whole page: it is authoritative and tiny.
"""

from __future__ import annotations

import json
import logging
from typing import Any

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.cleanup.html_utils import parse_document
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName

logger = logging.getLogger(__name__)

# field -> completeness points
_COMPLETENESS_WEIGHTS: dict[str, int] = {
    "name": 20,
    "recipeIngredient": 20,
    "recipeInstructions": 20,
    "totalTime": 10,
    "recipeYield": 10,
    "description": 10,
    "image": 10,
}

_LD_JSON_XPATH = (
    "//script[translate(normalize-space(@type), "
    "'ABCDEFGHIJKLMNOPQRSTUVWXYZ', 'abcdefghijklmnopqrstuvwxyz')"
    " = 'application/ld+json']"
)


def find_recipe_nodes(data: Any) -> list[dict[str, Any]]:
    """Flatten a JSON-LD payload into candidate nodes (handles @graph and arrays)."""
    if isinstance(data, list):
        nodes: list[dict[str, Any]] = []
        for item in data:
            nodes.extend(find_recipe_nodes(item))
        return nodes
    if isinstance(data, dict):
        graph = data.get("@graph")
        if isinstance(graph, list):
            return [node for node in graph if isinstance(node, dict)]
        return [data]
    return []


def is_recipe_type(node: dict[str, Any]) -> bool:
    """True when ``@type`` is "Recipe" or a list containing it."""
    node_type = node.get("@type")
    if isinstance(node_type, str):
        return node_type == "Recipe"
    if isinstance(node_type, list):
        return "Recipe" in node_type
    return False


def score_completeness(node: dict[str, Any]) -> int:
    """Score a Recipe node 0-100 by which key fields are present."""
    score = sum(weight for key, weight in _COMPLETENESS_WEIGHTS.items() if key in node)
    return min(100, score)


class StructuredDataStrategy(BaseCleanupStrategy):
    """Highest-priority strategy: embedded structured recipe data."""

    @property
    def name(self) -> StrategyName:
        return StrategyName.STRUCTURED_DATA

    @property
    def enabled(self) -> bool:
        return self._config.enabled and self._config.structured_data.enabled

    @property
    def min_confidence(self) -> float:
        return float(self._config.structured_data.min_completeness)

    @property
    def min_output_size(self) -> int:
        return self._config.structured_data.min_output_size

    def clean(self, raw: RawDocument) -> CleanedDocument | None:
        if not self.enabled:
            return None
        try:
            doc = parse_document(raw.html)
            scripts = doc.xpath(_LD_JSON_XPATH)
        except Exception as e:
            logger.debug("Structured data: HTML parse failed (%s), declining", e)
            return None

        for script in scripts:
            try:
                payload = json.loads(script.text_content() or "")
            except ValueError:
                logger.debug("Invalid JSON-LD in script tag, skipping")
                continue

            for node in find_recipe_nodes(payload):
                if not is_recipe_type(node):
                    continue
                completeness = score_completeness(node)
                if completeness >= self.min_confidence:
                    logger.debug(
                        "Found structured recipe data, completeness: %d%%", completeness
                    )
                    return CleanedDocument.build(
                        json.dumps(node, ensure_ascii=False),
                        self.name,
                        completeness,
                        raw,
                    )
                logger.debug(
                    "Structured recipe node below completeness bar (%d < %d)",
                    completeness, self.min_confidence,
                )
        return None
