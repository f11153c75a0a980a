# tests/unit/test_main.py — v2
"""Tests for main.py — CLI entry point."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from recipextract.api.models import ExtractResponse
from recipextract.core.errors import BlockedContent, RetryExhausted, TransportFailure
from recipextract.main import _build_parser, main

_URL = "https://example.com/soup"


def _make_response(**overrides) -> ExtractResponse:
    defaults = dict(
        fingerprint="f" * 64,
        is_recipe=True,
        strategy="section_based",
        attempts=1,
        serialized="metadata:\n  title: Tomato Soup\n",
    )
    defaults.update(overrides)
    return ExtractResponse(**defaults)


@pytest.fixture
def _no_env():
    with patch("recipextract.config.settings.Settings", return_value=MagicMock()):
        yield


# ---------------------------------------------------------------------------
# Parser tests
# ---------------------------------------------------------------------------

class TestBuildParser:
    def test_version_flag(self):
        parser = _build_parser()
        with pytest.raises(SystemExit) as exc_info:
            parser.parse_args(["--version"])
        assert exc_info.value.code == 0

    def test_extract_defaults(self):
        args = _build_parser().parse_args(["extract", _URL])
        assert args.command == "extract"
        assert args.url == _URL
        assert args.html_file is None
        assert args.skip_cache is False
        assert args.folder is None
        assert args.format == "yaml"

    def test_extract_options(self):
        args = _build_parser().parse_args([
            "extract", _URL, "--html-file", "page.html", "--skip-cache",
            "--folder", "soups", "--format", "json",
        ])
        assert args.html_file == Path("page.html")
        assert args.skip_cache is True
        assert args.folder == "soups"
        assert args.format == "json"

    def test_cache_delete(self):
        args = _build_parser().parse_args(["cache", "delete", "abc"])
        assert args.cache_command == "delete"
        assert args.fingerprint == "abc"

    def test_invalid_format_rejected(self):
        with pytest.raises(SystemExit):
            _build_parser().parse_args(["extract", _URL, "--format", "xml"])


# ---------------------------------------------------------------------------
# Extract command
# ---------------------------------------------------------------------------

@pytest.mark.usefixtures("_no_env")
class TestExtractCommand:
    def test_success_prints_yaml(self, capsys):
        with patch(
            "recipextract.api.facade.extract_recipe",
            AsyncMock(return_value=_make_response()),
        ) as mock_extract:
            assert main(["extract", _URL]) == 0

        request = mock_extract.await_args.args[0]
        assert request.url == _URL
        assert request.html is None
        out = capsys.readouterr().out
        assert "title: Tomato Soup" in out

    def test_html_file_is_read(self, tmp_path):
        page = tmp_path / "page.html"
        page.write_text("<html><body>soup</body></html>", encoding="utf-8")
        with patch(
            "recipextract.api.facade.extract_recipe",
            AsyncMock(return_value=_make_response()),
        ) as mock_extract:
            assert main(["extract", _URL, "--html-file", str(page), "--skip-cache"]) == 0

        request = mock_extract.await_args.args[0]
        assert request.html == "<html><body>soup</body></html>"
        assert request.skip_cache is True

    def test_missing_html_file(self, tmp_path):
        with patch("recipextract.api.facade.extract_recipe", AsyncMock()) as mock_extract:
            assert main(["extract", _URL, "--html-file", str(tmp_path / "nope.html")]) == 1
        mock_extract.assert_not_awaited()

    def test_not_a_recipe(self, capsys):
        response = _make_response(is_recipe=False, serialized="", strategy=None)
        with patch("recipextract.api.facade.extract_recipe", AsyncMock(return_value=response)):
            assert main(["extract", _URL]) == 2
        assert "Not a recipe." in capsys.readouterr().err

    def test_blocked(self):
        with patch(
            "recipextract.api.facade.extract_recipe",
            AsyncMock(side_effect=BlockedContent("SAFETY")),
        ):
            assert main(["extract", _URL]) == 3

    @pytest.mark.parametrize("error", [
        RetryExhausted(3, "instructions: empty"),
        TransportFailure("connection reset"),
    ])
    def test_extraction_error(self, error):
        with patch("recipextract.api.facade.extract_recipe", AsyncMock(side_effect=error)):
            assert main(["extract", _URL]) == 1

    def test_unexpected_error(self):
        with patch(
            "recipextract.api.facade.extract_recipe",
            AsyncMock(side_effect=RuntimeError("boom")),
        ):
            assert main(["extract", _URL]) == 1


# ---------------------------------------------------------------------------
# Cache commands
# ---------------------------------------------------------------------------

@pytest.mark.usefixtures("_no_env")
class TestCacheCommands:
    def _make_store(self, count: int = 0, deleted: bool = True) -> MagicMock:
        store = MagicMock()
        store.count = AsyncMock(return_value=count)
        store.delete = AsyncMock(return_value=deleted)
        return store

    def test_count(self, capsys):
        store = self._make_store(count=7)
        with patch("recipextract.cache.cache_factory.create_cache_store", return_value=store):
            assert main(["cache", "count"]) == 0
        assert capsys.readouterr().out.strip() == "7"
        store.close.assert_called_once()

    def test_delete(self, capsys):
        store = self._make_store(deleted=True)
        with patch("recipextract.cache.cache_factory.create_cache_store", return_value=store):
            assert main(["cache", "delete", "abc"]) == 0
        store.delete.assert_awaited_once_with("abc")
        assert "Deleted abc" in capsys.readouterr().out

    def test_delete_missing(self):
        store = self._make_store(deleted=False)
        with patch("recipextract.cache.cache_factory.create_cache_store", return_value=store):
            assert main(["cache", "delete", "abc"]) == 1
        store.close.assert_called_once()


class TestNoCommand:
    def test_prints_help(self, capsys):
        assert main([]) == 1
        assert "recipextract" in capsys.readouterr().out

    def test_cache_without_subcommand(self):
        assert main(["cache"]) == 1
