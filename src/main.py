# src/main.py — v2
"""CLI entry point — extract and cache maintenance commands.

Usage:
    recipextract extract <url> [--html-file F] [--skip-cache] [--folder DIR] [--format yaml|json]
    recipextract cache count
    recipextract cache delete <fingerprint>

Exit codes: 0 success, 1 error, 2 not a recipe, 3 blocked, 130 interrupted.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

from recipextract.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_RECIPE = 2
EXIT_BLOCKED = 3
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.verbose)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="recipextract",
        description=f"recipextract v{__version__} — recipe extraction from web pages",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- extract ---
    p_extract = subparsers.add_parser(
        "extract", help="Extract recipes from a web page",
    )
    p_extract.add_argument("url", help="Page URL (also the cache identity)")
    p_extract.add_argument(
        "--html-file", type=Path, default=None,
        help="Use this saved HTML instead of downloading the URL",
    )
    p_extract.add_argument(
        "--skip-cache", action="store_true",
        help="Bypass the cache lookup and overwrite the cached entry",
    )
    p_extract.add_argument(
        "--folder", default=None,
        help="Store each recipe as YAML in this folder under STORAGE_ROOT",
    )
    p_extract.add_argument(
        "--format", choices=("yaml", "json"), default="yaml",
        help="Output format on stdout (default: yaml)",
    )
    p_extract.set_defaults(func=_cmd_extract)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Cache maintenance")
    cache_sub = p_cache.add_subparsers(dest="cache_command")

    p_count = cache_sub.add_parser("count", help="Number of cached entries")
    p_count.set_defaults(func=_cmd_cache_count)

    p_delete = cache_sub.add_parser("delete", help="Delete one cached entry")
    p_delete.add_argument("fingerprint", help="Fingerprint (SHA-256 hex)")
    p_delete.set_defaults(func=_cmd_cache_delete)

    return parser


async def _cmd_extract(args: argparse.Namespace) -> int:
    """Execute a single extraction."""
    from recipextract.api.facade import extract_recipe
    from recipextract.api.models import ExtractRequest
    from recipextract.config.settings import Settings
    from recipextract.core.errors import BlockedContent, ExtractionError

    html = None
    if args.html_file is not None:
        if not args.html_file.exists():
            logger.error("File not found: %s", args.html_file)
            return EXIT_ERROR
        html = args.html_file.read_text(encoding="utf-8")

    request = ExtractRequest(
        url=args.url,
        html=html,
        skip_cache=args.skip_cache,
        folder_id=args.folder,
    )

    try:
        response = await extract_recipe(request, Settings())
    except BlockedContent as exc:
        logger.error("%s", exc.reason)
        return EXIT_BLOCKED
    except ExtractionError as exc:
        logger.error("Extraction failed (%s): %s", exc.cause.value, exc.reason)
        return EXIT_ERROR

    if not response.is_recipe:
        print("Not a recipe.", file=sys.stderr)
        return EXIT_NOT_RECIPE

    if args.format == "json":
        payload = [r.model_dump(mode="json", exclude_none=True) for r in response.recipes]
        print(json.dumps(payload, indent=2, ensure_ascii=False))
    else:
        print(response.serialized, end="")

    _print_result_summary(response)
    return EXIT_OK


async def _cmd_cache_count(args: argparse.Namespace) -> int:
    from recipextract.cache.cache_factory import create_cache_store
    from recipextract.config.settings import Settings

    store = create_cache_store(Settings())
    try:
        print(await store.count())
    finally:
        store.close()
    return EXIT_OK


async def _cmd_cache_delete(args: argparse.Namespace) -> int:
    from recipextract.cache.cache_factory import create_cache_store
    from recipextract.config.settings import Settings

    store = create_cache_store(Settings())
    try:
        deleted = await store.delete(args.fingerprint)
    finally:
        store.close()
    if not deleted:
        logger.error("No cache entry for %s", args.fingerprint)
        return EXIT_ERROR
    print(f"Deleted {args.fingerprint}")
    return EXIT_OK


def _print_result_summary(response: object) -> None:
    """Print a short summary of an ExtractResponse to stderr."""
    print("\nExtraction complete:", file=sys.stderr)
    print(f"  Fingerprint:  {response.fingerprint}", file=sys.stderr)
    print(f"  Recipes:      {len(response.recipes)}", file=sys.stderr)
    print(f"  From cache:   {response.from_cache}", file=sys.stderr)
    if response.strategy is not None:
        print(f"  Strategy:     {response.strategy.value}", file=sys.stderr)
        print(f"  Attempts:     {response.attempts}", file=sys.stderr)
    for stored in response.stored_files:
        print(f"  Stored:       {stored.file_url}", file=sys.stderr)


def _setup_logging(verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from recipextract.logging.logger import setup_logging

    setup_logging(level="DEBUG" if verbose else "INFO", log_format="text")
    # Quiet noisy libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


if __name__ == "__main__":
    sys.exit(main())
