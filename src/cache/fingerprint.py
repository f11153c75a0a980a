# src/cache/fingerprint.py — v3
"""Content fingerprinting: the sole cache key.

Fingerprints identify the *source*, not the exact bytes: a URL is
normalized (scheme/host case, fragment, tracking parameters) before
hashing, so re-fetches of a page with rotating ads map to one entry.
Raw text is hashed with a ``text:`` prefix so it can never collide with
a URL fingerprint.
"""

from __future__ import annotations

import hashlib
import logging
from functools import lru_cache
from urllib.parse import urlsplit, urlunsplit

logger = logging.getLogger(__name__)

TRACKING_PARAMETERS = frozenset({
    "utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content",
    "fbclid", "gclid", "dclid", "msclkid", "twclid", "ref", "source",
})

_MEMO_SIZE = 4096


def normalize_url(url: str) -> str:
    """Lower-case scheme and host, drop the fragment and tracking parameters.

    Remaining query parameters keep their original order and encoding.
    """
    parts = urlsplit(url.strip())
    kept = [
        param
        for param in parts.query.split("&")
        if param and param.split("=", 1)[0].lower() not in TRACKING_PARAMETERS
    ]
    return urlunsplit((
        parts.scheme.lower(),
        parts.netloc.lower(),
        parts.path,
        "&".join(kept),
        "",
    ))


@lru_cache(maxsize=_MEMO_SIZE)
def fingerprint_url(url: str) -> str:
    """SHA-256 hex digest of the normalized URL.

    Raises:
        ValueError: If the URL is empty or blank.
    """
    if not url or not url.strip():
        raise ValueError("URL cannot be empty")
    normalized = normalize_url(url)
    logger.debug("Fingerprinting URL %s (normalized: %s)", url, normalized)
    return _sha256(normalized)


@lru_cache(maxsize=_MEMO_SIZE)
def fingerprint_text(text: str) -> str:
    """SHA-256 hex digest of raw text, domain-separated from URLs.

    Raises:
        ValueError: If the text is empty or blank.
    """
    if not text or not text.strip():
        raise ValueError("Text cannot be empty")
    return _sha256("text:" + text)


def compute_fingerprint(url: str | None = None, text: str | None = None) -> str:
    """Fingerprint the identifying input: the URL when present, else the text.

    Raises:
        ValueError: If neither a non-blank URL nor non-blank text is given.
    """
    if url and url.strip():
        return fingerprint_url(url)
    if text and text.strip():
        return fingerprint_text(text)
    raise ValueError("A URL or raw text is required to compute a fingerprint")


def clear_fingerprint_memo() -> None:
    """Empty the in-process fingerprint memo."""
    fingerprint_url.cache_clear()
    fingerprint_text.cache_clear()


def _sha256(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()
