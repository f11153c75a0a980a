# tests/unit/cleanup/test_cleanup_orchestrator.py — v1
"""Tests for cleanup/orchestrator.py — greedy cascade selection."""

from __future__ import annotations

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.cleanup.orchestrator import CleanupOrchestrator
from recipextract.cleanup.passthrough import RawPassthroughStrategy
from recipextract.config.cleanup import CleanupConfig
from recipextract.core.models import CleanedDocument, RawDocument, StrategyName


class _FakeStrategy(BaseCleanupStrategy):
    """Returns a fixed candidate (or raises) and records calls."""

    def __init__(
        self,
        config: CleanupConfig,
        name: StrategyName,
        html: str | None = "x" * 600,
        confidence: float = 100.0,
        min_confidence: float = 0.0,
        raises: bool = False,
    ) -> None:
        super().__init__(config)
        self._name = name
        self._html = html
        self._confidence = confidence
        self._min_confidence = min_confidence
        self._raises = raises
        self.calls = 0

    @property
    def name(self) -> StrategyName:
        return self._name

    @property
    def min_confidence(self) -> float:
        return self._min_confidence

    def clean(self, raw: RawDocument) -> CleanedDocument | None:
        self.calls += 1
        if self._raises:
            raise RuntimeError("broken markup")
        if self._html is None:
            return None
        return CleanedDocument.build(self._html, self._name, self._confidence, raw)


def _orchestrator(*strategies: BaseCleanupStrategy, config: CleanupConfig | None = None):
    config = config or CleanupConfig()
    return CleanupOrchestrator(
        config, list(strategies) + [RawPassthroughStrategy(config)]
    )


class TestCascadeWithRealStrategies:
    def test_structured_data_wins(self, recipe_page_html):
        cleaned = CleanupOrchestrator().clean(recipe_page_html)
        assert cleaned.strategy is StrategyName.STRUCTURED_DATA

    def test_section_based_without_json_ld(self, raw_document):
        cleaned = CleanupOrchestrator().clean(raw_document)
        assert cleaned.strategy is StrategyName.SECTION_BASED

    def test_empty_body_falls_back_to_raw(self):
        html = "<html><body></body></html>"
        cleaned = CleanupOrchestrator().clean(html)
        assert cleaned.strategy is StrategyName.RAW
        assert cleaned.html == html

    def test_small_outputs_fall_back_to_raw(self):
        html = (
            "<html><body><article><h2>Ingredients</h2><ul><li>egg</li></ul>"
            "<h2>Instructions</h2><ol><li>boil</li></ol><p>recipe</p>"
            "</article></body></html>"
        )
        cleaned = CleanupOrchestrator().clean(html)
        assert cleaned.strategy is StrategyName.RAW
        assert cleaned.html == html

    def test_disabled_returns_raw(self, recipe_page_html):
        cleaned = CleanupOrchestrator(CleanupConfig(enabled=False)).clean(recipe_page_html)
        assert cleaned.strategy is StrategyName.RAW
        assert cleaned.html == recipe_page_html

    def test_start_skips_more_restrictive(self, recipe_page_html):
        cleaned = CleanupOrchestrator().clean_with_strategy(
            recipe_page_html, StrategyName.SECTION_BASED
        )
        assert cleaned.strategy is not StrategyName.STRUCTURED_DATA

    def test_start_at_raw(self, raw_document):
        cleaned = CleanupOrchestrator().clean_with_strategy(raw_document, StrategyName.RAW)
        assert cleaned.strategy is StrategyName.RAW
        assert cleaned.html == raw_document.html


class TestCascadeSelection:
    def test_first_qualifying_wins(self):
        config = CleanupConfig()
        first = _FakeStrategy(config, StrategyName.STRUCTURED_DATA)
        second = _FakeStrategy(config, StrategyName.SECTION_BASED)
        cleaned = _orchestrator(first, second, config=config).clean("<p>raw</p>")
        assert cleaned.strategy is StrategyName.STRUCTURED_DATA
        assert second.calls == 0

    def test_decline_moves_on(self):
        config = CleanupConfig()
        first = _FakeStrategy(config, StrategyName.STRUCTURED_DATA, html=None)
        second = _FakeStrategy(config, StrategyName.SECTION_BASED)
        cleaned = _orchestrator(first, second, config=config).clean("<p>raw</p>")
        assert cleaned.strategy is StrategyName.SECTION_BASED

    def test_low_confidence_rejected(self):
        config = CleanupConfig()
        first = _FakeStrategy(
            config, StrategyName.STRUCTURED_DATA, confidence=20, min_confidence=60
        )
        second = _FakeStrategy(config, StrategyName.CONTENT_FILTER)
        cleaned = _orchestrator(first, second, config=config).clean("<p>raw</p>")
        assert cleaned.strategy is StrategyName.CONTENT_FILTER

    def test_small_output_rejected(self):
        config = CleanupConfig()
        first = _FakeStrategy(config, StrategyName.SECTION_BASED, html="<p>tiny</p>")
        cleaned = _orchestrator(first, config=config).clean("<p>raw</p>")
        assert cleaned.strategy is StrategyName.RAW
        assert cleaned.html == "<p>raw</p>"

    def test_raising_strategy_is_a_decline(self):
        config = CleanupConfig()
        first = _FakeStrategy(config, StrategyName.STRUCTURED_DATA, raises=True)
        second = _FakeStrategy(config, StrategyName.SECTION_BASED)
        cleaned = _orchestrator(first, second, config=config).clean("<p>raw</p>")
        assert cleaned.strategy is StrategyName.SECTION_BASED

    def test_strategy_names(self):
        orchestrator = CleanupOrchestrator()
        assert orchestrator.strategy_names[-1] is StrategyName.RAW
