# src/cleanup/passthrough.py — v1
"""Identity strategy: the terminal fallback of the cascade."""

from __future__ import annotations

import logging

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName

logger = logging.getLogger(__name__)


class RawPassthroughStrategy(BaseCleanupStrategy):
    """Always succeeds with the unmodified markup."""

    @property
    def name(self) -> StrategyName:
        return StrategyName.RAW

    @property
    def enabled(self) -> bool:
        return True

    @property
    def min_output_size(self) -> int:
        return 0

    def clean(self, raw: RawDocument) -> CleanedDocument | None:
        logger.debug("Raw passthrough: returning original HTML")
        return CleanedDocument.build(raw.html, self.name, 0.0, raw)
