# src/fetch/source.py — v1
"""Resolve the RawDocument for a request: inline HTML or a fetch.

Inline HTML may arrive as plain text or base64-encoded gzip. A payload
that fails to decode falls back to fetching the URL.
"""

from __future__ import annotations

import base64
import binascii
import gzip
import logging
import zlib
from typing import Literal

from recipextract.core.models import RawDocument
from recipextract.fetch.base_fetcher import BaseFetcher

logger = logging.getLogger(__name__)

Compression = Literal["none", "base64-gzip"]


def decompress_html(content: str) -> str:
    """Decode base64, then gunzip, then UTF-8 decode.

    Raises:
        ValueError: If the content is not base64-encoded gzip.
    """
    try:
        compressed = base64.b64decode(content, validate=True)
        html = gzip.decompress(compressed).decode("utf-8")
    except (binascii.Error, OSError, EOFError, zlib.error, UnicodeDecodeError) as e:
        raise ValueError(f"Content isn't base64-encoded gzip: {e}") from e
    logger.debug(
        "Decompressed inline HTML: %d -> %d chars", len(content), len(html)
    )
    return html


async def resolve_source(
    url: str | None,
    html: str | None,
    compression: Compression,
    fetcher: BaseFetcher | None,
) -> RawDocument:
    """Build the RawDocument from inline HTML, or download it.

    Raises:
        ValueError: If there is neither usable inline HTML nor a URL to fetch.
        TransportFailure: If the fetch fails.
    """
    if html:
        if compression == "base64-gzip":
            try:
                return RawDocument(html=decompress_html(html), url=url)
            except ValueError as e:
                logger.warning("Inline HTML could not be decoded, fetching instead: %s", e)
        else:
            return RawDocument(html=html, url=url)

    if not url:
        raise ValueError("No usable inline HTML and no URL to fetch")
    if fetcher is None:
        raise ValueError(f"No fetcher configured to download {url}")
    return RawDocument(html=await fetcher.fetch(url), url=url)
