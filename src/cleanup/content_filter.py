# src/cleanup/content_filter.py — v1
"""Whole-document boilerplate removal.

Weaker than section extraction: strips nav/footer/ads/social widgets,
scripts and styles from the entire body without localizing a section.
"""

from __future__ import annotations

import logging

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.cleanup.html_utils import (
    body_of,
    clean_element,
    inner_html,
    normalized_text,
    parse_document,
)
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName

logger = logging.getLogger(__name__)


class ContentFilterStrategy(BaseCleanupStrategy):
    """Permissive noise filter over the full body."""

    @property
    def name(self) -> StrategyName:
        return StrategyName.CONTENT_FILTER

    def clean(self, raw: RawDocument) -> CleanedDocument | None:
        if not self.enabled:
            return None
        try:
            body = body_of(parse_document(raw.html))
            clean_element(body, include_sidebar=True)
            filtered = inner_html(body)
            text = normalized_text(body).lower()
        except Exception as e:
            logger.debug("Error during content filtering: %s", e)
            return None

        # Informational only: keyword coverage of what survived the filter
        keywords = self._config.section_based.keywords
        confidence = min(100, 10 * sum(1 for k in keywords if k in text))
        logger.debug("Content filtering applied, size: %d chars", len(filtered))
        return CleanedDocument.build(filtered, self.name, confidence, raw)
