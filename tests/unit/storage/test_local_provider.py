# tests/unit/storage/test_local_provider.py — v1
"""Tests for storage/local_provider.py — filesystem upload-or-update."""

from __future__ import annotations

import pytest

from recipextract.core.errors import StorageError
from recipextract.storage.local_provider import LocalStorageProvider


class TestLocalStorageProvider:
    @pytest.mark.asyncio
    async def test_create(self, tmp_storage_dir):
        provider = LocalStorageProvider(tmp_storage_dir)
        result = await provider.upload_or_update("soups", "tomato-soup.yaml", "title: x\n")
        path = tmp_storage_dir / "soups" / "tomato-soup.yaml"
        assert path.read_text(encoding="utf-8") == "title: x\n"
        assert result.file_id == "soups/tomato-soup.yaml"
        assert result.file_url == path.resolve().as_uri()

    @pytest.mark.asyncio
    async def test_update_replaces(self, tmp_storage_dir):
        provider = LocalStorageProvider(tmp_storage_dir)
        first = await provider.upload_or_update("soups", "a.yaml", "v1")
        second = await provider.upload_or_update("soups", "a.yaml", "v2")
        assert first.file_id == second.file_id
        assert (tmp_storage_dir / "soups" / "a.yaml").read_text(encoding="utf-8") == "v2"
        assert len(list((tmp_storage_dir / "soups").iterdir())) == 1

    @pytest.mark.asyncio
    async def test_find_file(self, tmp_storage_dir):
        provider = LocalStorageProvider(tmp_storage_dir)
        assert await provider.find_file("soups", "a.yaml") is None
        await provider.upload_or_update("soups", "a.yaml", "v1")
        assert await provider.find_file("soups", "a.yaml") == "soups/a.yaml"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("folder", ["../outside", "/etc", "a/../../b"])
    async def test_rejects_folder_traversal(self, tmp_storage_dir, folder):
        provider = LocalStorageProvider(tmp_storage_dir)
        with pytest.raises(StorageError, match="Invalid folder"):
            await provider.upload_or_update(folder, "a.yaml", "x")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["", "..", "a/b.yaml"])
    async def test_rejects_bad_file_names(self, tmp_storage_dir, name):
        provider = LocalStorageProvider(tmp_storage_dir)
        with pytest.raises(StorageError, match="Invalid file name"):
            await provider.upload_or_update("soups", name, "x")

    def test_provider_name(self, tmp_storage_dir):
        assert LocalStorageProvider(tmp_storage_dir).provider_name == "local"
