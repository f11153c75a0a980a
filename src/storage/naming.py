# src/storage/naming.py — v2
"""Recipe file naming: ASCII kebab-case slug of the title + ".yaml"."""

from __future__ import annotations

import time
from collections.abc import Callable

from slugify import slugify

FILE_EXTENSION = ".yaml"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def generate_file_name(
    title: str | None, clock_ms: Callable[[], int] = _epoch_ms
) -> str:
    """File name for a recipe; falls back to ``recipe-<epoch-ms>.yaml``.

    python-slugify transliterates any script to ASCII and joins words
    with "-".
    """
    slug = slugify(title) if title and title.strip() else ""
    if not slug:
        slug = f"recipe-{clock_ms()}"
    return slug + FILE_EXTENSION
