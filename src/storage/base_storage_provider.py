# src/storage/base_storage_provider.py — v1
"""Abstract storage provider interface for final recipe artifacts."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pydantic import BaseModel


class UploadResult(BaseModel):
    """Identifier and URL of a stored artifact."""

    file_id: str
    file_url: str


class BaseStorageProvider(ABC):
    """Persist a named file inside a folder, replacing any same-named file."""

    @abstractmethod
    async def upload_or_update(
        self, folder_id: str, file_name: str, content: str
    ) -> UploadResult:
        """Create the file, or overwrite it if it already exists.

        Raises:
            StorageError: If the upload cannot be completed.
        """

    @abstractmethod
    async def find_file(self, folder_id: str, file_name: str) -> str | None:
        """Return the file id of a same-named file in the folder, if any."""

    @property
    @abstractmethod
    def provider_name(self) -> str:
        """Provider identifier (local)."""
