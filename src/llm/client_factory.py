# src/llm/client_factory.py — v3
"""Factory: instantiate the extraction client from provider name."""

from __future__ import annotations

import importlib
import logging

from recipextract.config.settings import Settings
from recipextract.llm.base_client import BaseExtractionClient

logger = logging.getLogger(__name__)

# Registry of provider name → client class path (lazy import).
_PROVIDER_REGISTRY: dict[str, str] = {
    "gemini": "recipextract.llm.gemini_client.GeminiClient",
}


class UnsupportedProviderError(ValueError):
    """Raised when a provider is not registered."""


def create_llm_client(settings: Settings, **kwargs: object) -> BaseExtractionClient:
    """Instantiate the configured extraction client.

    Args:
        settings: Application settings (provider, model, API key, timeout).
        **kwargs: Extra constructor arguments (e.g. ``http_client``).

    Raises:
        UnsupportedProviderError: If ``settings.llm_provider`` is not registered.
    """
    provider = settings.llm_provider
    if provider not in _PROVIDER_REGISTRY:
        raise UnsupportedProviderError(
            f"Unsupported LLM provider: {provider!r}. "
            f"Available: {', '.join(sorted(_PROVIDER_REGISTRY))}"
        )

    client_cls = _import_class(_PROVIDER_REGISTRY[provider])

    init_kwargs = dict(kwargs)
    if provider == "gemini":
        init_kwargs.setdefault("api_key", settings.gemini_api_key)
        init_kwargs.setdefault("model", settings.gemini_model)
        init_kwargs.setdefault("base_url", settings.gemini_base_url)
        init_kwargs.setdefault("timeout_s", settings.llm_timeout_s)

    logger.debug("Creating LLM client: provider=%s", provider)
    return client_cls(**init_kwargs)


def register_provider(name: str, class_path: str) -> None:
    """Register a custom client implementing BaseExtractionClient."""
    _PROVIDER_REGISTRY[name] = class_path
    logger.info("Registered LLM provider: %s → %s", name, class_path)


def _import_class(class_path: str) -> type:
    """Dynamically import a class from its fully qualified path."""
    module_path, class_name = class_path.rsplit(".", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)
