# src/cleanup/strategy_factory.py — v1
"""Factory: ordered registry of cleanup strategies.

Priority is a property of the registry, not of any individual strategy:
registration order is cascade order. Raw passthrough is always last.
"""

from __future__ import annotations

from recipextract.cleanup.base_strategy import BaseCleanupStrategy
from recipextract.cleanup.content_filter import ContentFilterStrategy
from recipextract.cleanup.passthrough import RawPassthroughStrategy
from recipextract.cleanup.section_based import SectionBasedStrategy
from recipextract.cleanup.structured_data import StructuredDataStrategy
from recipextract.config.cleanup import CleanupConfig
from recipextract.core.models import ADAPTIVE_ORDER, StrategyName

# Registry maps strategy name → class; dict order is priority order.
_STRATEGY_REGISTRY: dict[StrategyName, type[BaseCleanupStrategy]] = {}


def _register_defaults() -> None:
    """Register built-in strategies in priority order."""
    defaults: dict[StrategyName, type[BaseCleanupStrategy]] = {
        StrategyName.STRUCTURED_DATA: StructuredDataStrategy,
        StrategyName.SECTION_BASED: SectionBasedStrategy,
        StrategyName.CONTENT_FILTER: ContentFilterStrategy,
        StrategyName.RAW: RawPassthroughStrategy,
    }
    for name in ADAPTIVE_ORDER:
        _STRATEGY_REGISTRY[name] = defaults[name]


_register_defaults()


class UnknownStrategyError(ValueError):
    """Raised when a strategy name is not registered."""


def create_strategies(config: CleanupConfig) -> list[BaseCleanupStrategy]:
    """Instantiate every registered strategy, in priority order."""
    strategies = [
        cls(config)
        for name, cls in _STRATEGY_REGISTRY.items()
        if name is not StrategyName.RAW
    ]
    strategies.append(_STRATEGY_REGISTRY[StrategyName.RAW](config))
    return strategies


def create_strategy(name: StrategyName | str, config: CleanupConfig) -> BaseCleanupStrategy:
    """Instantiate a single strategy by name.

    Raises:
        UnknownStrategyError: If no strategy is registered under ``name``.
    """
    try:
        key = StrategyName(name)
    except ValueError:
        key = None
    cls = _STRATEGY_REGISTRY.get(key) if key is not None else None
    if cls is None:
        raise UnknownStrategyError(
            f"Unknown cleanup strategy: {name!r}. "
            f"Available: {', '.join(s.value for s in _STRATEGY_REGISTRY)}"
        )
    return cls(config)


def register_strategy(name: StrategyName, cls: type[BaseCleanupStrategy]) -> None:
    """Replace the implementation registered for ``name`` (keeps its position)."""
    _STRATEGY_REGISTRY[name] = cls


def registered_strategies() -> list[StrategyName]:
    """Return strategy names in priority order."""
    return list(_STRATEGY_REGISTRY)
