# tests/unit/cache/test_fingerprint.py — v1
"""Tests for cache/fingerprint.py — URL normalization and hashing."""

from __future__ import annotations

import hashlib

import pytest

from recipextract.cache.fingerprint import (
    clear_fingerprint_memo,
    compute_fingerprint,
    fingerprint_text,
    fingerprint_url,
    normalize_url,
)


class TestNormalizeUrl:
    def test_lowercases_scheme_and_host(self):
        assert normalize_url("HTTPS://Example.COM/Soup") == "https://example.com/Soup"

    def test_drops_fragment(self):
        assert normalize_url("https://example.com/soup#step-3") == "https://example.com/soup"

    def test_drops_tracking_parameters(self):
        url = "https://example.com/soup?utm_source=x&id=7&fbclid=abc&UTM_Medium=y"
        assert normalize_url(url) == "https://example.com/soup?id=7"

    def test_keeps_parameter_order(self):
        assert normalize_url("https://e.com/?b=2&a=1") == "https://e.com/?b=2&a=1"


class TestFingerprint:
    def setup_method(self):
        clear_fingerprint_memo()

    def test_url_is_sha256_hex(self):
        fp = fingerprint_url("https://example.com/soup")
        assert fp == hashlib.sha256(b"https://example.com/soup").hexdigest()
        assert len(fp) == 64

    def test_same_source_same_fingerprint(self):
        assert fingerprint_url("https://example.com/soup?utm_campaign=spring") == (
            fingerprint_url("https://EXAMPLE.com/soup#comments")
        )

    def test_different_pages_differ(self):
        assert fingerprint_url("https://example.com/a") != fingerprint_url("https://example.com/b")

    def test_text_domain_separated(self):
        url = "https://example.com/soup"
        assert fingerprint_text(url) != fingerprint_url(url)

    def test_empty_url(self):
        with pytest.raises(ValueError):
            fingerprint_url("  ")

    def test_empty_text(self):
        with pytest.raises(ValueError):
            fingerprint_text("")

    def test_memoized(self):
        fingerprint_url("https://example.com/memo")
        fingerprint_url("https://example.com/memo")
        assert fingerprint_url.cache_info().hits == 1


class TestComputeFingerprint:
    def test_url_preferred(self):
        assert compute_fingerprint(url="https://e.com/x", text="body") == fingerprint_url(
            "https://e.com/x"
        )

    def test_text_fallback(self):
        assert compute_fingerprint(url=" ", text="body") == fingerprint_text("body")

    def test_nothing_given(self):
        with pytest.raises(ValueError, match="URL or raw text"):
            compute_fingerprint()
