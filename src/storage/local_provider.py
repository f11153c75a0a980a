# src/storage/local_provider.py — v1
"""Local filesystem storage provider (default backend).

Folders are directories under ``root``; the file id is the POSIX path
relative to ``root``.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePosixPath

from recipextract.core.errors import StorageError
from recipextract.storage.base_storage_provider import BaseStorageProvider, UploadResult

logger = logging.getLogger(__name__)


class LocalStorageProvider(BaseStorageProvider):
    """Write recipe files to the local filesystem."""

    def __init__(self, root: Path | str) -> None:
        self._root = Path(root).expanduser()

    @property
    def provider_name(self) -> str:
        return "local"

    def _resolve(self, folder_id: str, file_name: str) -> Path:
        """Resolve a folder/file pair under root, rejecting traversal."""
        if not file_name or "/" in file_name or "\\" in file_name or file_name in (".", ".."):
            raise StorageError(f"Invalid file name: {file_name!r}")
        folder = PurePosixPath(folder_id or ".")
        if folder.is_absolute() or ".." in folder.parts:
            raise StorageError(f"Invalid folder id: {folder_id!r}")
        return self._root / folder / file_name

    async def upload_or_update(
        self, folder_id: str, file_name: str, content: str
    ) -> UploadResult:
        path = self._resolve(folder_id, file_name)
        existed = path.exists()
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to write {path}: {e}") from e

        file_id = path.relative_to(self._root).as_posix()
        logger.info(
            "File %s successfully: %s", "updated" if existed else "created", file_id
        )
        return UploadResult(file_id=file_id, file_url=path.resolve().as_uri())

    async def find_file(self, folder_id: str, file_name: str) -> str | None:
        path = self._resolve(folder_id, file_name)
        if not path.is_file():
            return None
        return path.relative_to(self._root).as_posix()
