# src/__init__.py — v1
"""recipextract — adaptive LLM recipe extraction pipeline."""

from recipextract.version import __version__

__all__ = ["__version__"]
