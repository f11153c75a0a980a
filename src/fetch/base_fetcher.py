# src/fetch/base_fetcher.py — v1
"""Abstract HTML source fetcher interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseFetcher(ABC):
    """Given a URL, return raw markup."""

    @abstractmethod
    async def fetch(self, url: str) -> str:
        """Download the page.

        Raises:
            TransportFailure: On network error or non-2xx status.
        """

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""
