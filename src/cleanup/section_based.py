# src/cleanup/section_based.py — v1
"""Keyword-scored section extraction.

Scores article/section/main-like containers and keeps the best one:
  +10 per recognized keyword in the subtree text
  +20 if it holds >= 2 lists (ul/ol)
  +10 if it holds >= 2 subheadings (h2/h3)
  +10 if its text is longer than the configured threshold
capped at 100.
"""

from __future__ import annotations

import logging

import lxml.html

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.cleanup.html_utils import (
    clean_element,
    inner_html,
    normalized_text,
    parse_document,
)
from recipextract.config.cleanup import SectionBasedConfig
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName

logger = logging.getLogger(__name__)

_LOWER = "translate({}, 'ABCDEFGHIJKLMNOPQRSTUVWXYZ', 'abcdefghijklmnopqrstuvwxyz')"
_CANDIDATE_XPATH = (
    "//article | //section | //main"
    f" | //div[contains({_LOWER.format('@class')}, 'recipe')"
    f" or contains({_LOWER.format('@id')}, 'recipe')]"
)


def score_section(el: lxml.html.HtmlElement, config: SectionBasedConfig) -> int:
    """Score one candidate container for recipe relevance (0-100)."""
    text = normalized_text(el).lower()
    score = 0
    for keyword in config.keywords:
        if keyword in text:
            score += 10
    if len(el.xpath(".//ul | .//ol")) >= 2:
        score += 20
    if len(el.xpath(".//h2 | .//h3")) >= 2:
        score += 10
    if len(text) > config.long_text_threshold:
        score += 10
    return min(100, score)


class SectionBasedStrategy(BaseCleanupStrategy):
    """Localize the recipe-bearing subtree by heuristic scoring."""

    @property
    def name(self) -> StrategyName:
        return StrategyName.SECTION_BASED

    @property
    def enabled(self) -> bool:
        return self._config.enabled and self._config.section_based.enabled

    @property
    def min_confidence(self) -> float:
        return float(self._config.section_based.min_confidence)

    def clean(self, raw: RawDocument) -> CleanedDocument | None:
        if not self.enabled:
            return None
        try:
            doc = parse_document(raw.html)
            best, best_score = self._best_candidate(doc)
            if best is None or best_score < self.min_confidence:
                logger.debug(
                    "Section-based: best score %d below %d, declining",
                    best_score, self.min_confidence,
                )
                return None

            clean_element(best)
            section_html = inner_html(best)
        except Exception as e:
            logger.debug("Error during section-based extraction: %s", e)
            return None

        logger.debug(
            "Section-based extraction, score: %d, size: %d chars",
            best_score, len(section_html),
        )
        return CleanedDocument.build(section_html, self.name, best_score, raw)

    def _best_candidate(
        self, doc: lxml.html.HtmlElement
    ) -> tuple[lxml.html.HtmlElement | None, int]:
        best: lxml.html.HtmlElement | None = None
        best_score = 0
        for candidate in doc.xpath(_CANDIDATE_XPATH):
            score = score_section(candidate, self._config.section_based)
            # Strictly greater: on ties the first (outermost) container wins
            if score > best_score:
                best, best_score = candidate, score
        return best, best_score
