# src/llm/base_client.py — v2
"""Abstract extraction client interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from recipextract.core.models import ExtractionResult
from recipextract.llm.models import ExtractionRequest


class BaseExtractionClient(ABC):
    """Sends one ExtractionRequest and decodes the model's verdict.

    Implementations raise ``TransportFailure``, ``BlockedContent`` or
    ``ParseError`` (each exposing a ``code``) instead of returning partial
    results.
    """

    @abstractmethod
    async def send(
        self, request: ExtractionRequest, timeout: float | None = None
    ) -> ExtractionResult:
        """Send the request and decode the response envelope."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (gemini)."""

    async def aclose(self) -> None:
        """Release transport resources. No-op by default."""

    async def __aenter__(self) -> BaseExtractionClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
