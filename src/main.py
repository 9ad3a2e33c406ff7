# src/main.py
"""CLI entry point: pages, parse commands.

Usage:
    rangefetch pages <index-url> [--range EXPR] [options]
    rangefetch parse <EXPR>
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from rangefetch.errors import InvalidRangeFormatError
from rangefetch.version import __version__

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INVALID_RANGE = 2
EXIT_INTERRUPTED = 130


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return EXIT_ERROR

    try:
        _setup_logging(args)
        return asyncio.run(args.func(args))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return EXIT_INTERRUPTED
    except InvalidRangeFormatError as exc:
        logger.error("%s", exc)
        return EXIT_INVALID_RANGE
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return EXIT_ERROR


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="rangefetch",
        description=f"rangefetch v{__version__}: fetch only the registration pages a version range needs",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- pages ---
    p_pages = subparsers.add_parser(
        "pages", help="Fetch the pages of a registration index matching a range",
    )
    p_pages.add_argument("index_url", help="Registration index URL")
    p_pages.add_argument(
        "-r", "--range", dest="version_range", default="",
        help="Version range, e.g. '[1.0, 2.0)' (default: all versions)",
    )
    p_pages.add_argument(
        "--cache-backend", choices=["memory", "json", "sqlite", "redis"], default=None,
        help="Override CACHE_BACKEND",
    )
    p_pages.add_argument(
        "--no-cache", action="store_true",
        help="Disable the response cache",
    )
    p_pages.add_argument(
        "--max-concurrency", type=int, default=None,
        help="Cap on simultaneous page fetches (0 = no cap)",
    )
    p_pages.set_defaults(func=_cmd_pages)

    # --- parse ---
    p_parse = subparsers.add_parser(
        "parse", help="Parse a version range and print its canonical form",
    )
    p_parse.add_argument("expression", nargs="?", default="", help="Range expression")
    p_parse.set_defaults(func=_cmd_parse)

    return parser


async def _cmd_pages(args: argparse.Namespace) -> int:
    """Fetch matching pages and print them as a JSON array."""
    from rangefetch.api.facade import fetch_range_pages, open_source
    from rangefetch.config.settings import Settings

    overrides: dict[str, object] = {}
    if args.cache_backend:
        overrides["cache_backend"] = args.cache_backend
    if args.no_cache:
        overrides["cache_enabled"] = False
    if args.max_concurrency is not None:
        overrides["fetch_max_concurrency"] = args.max_concurrency
    settings = Settings(**overrides)  # type: ignore[arg-type]

    async with open_source(settings) as source:
        pages = await fetch_range_pages(source, args.index_url, args.version_range)

    json.dump(pages, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return EXIT_OK


async def _cmd_parse(args: argparse.Namespace) -> int:
    """Print the canonical form of a range expression."""
    from rangefetch.versioning.range_parser import parse_version_range

    print(parse_version_range(args.expression).to_canonical_string())
    return EXIT_OK


def _setup_logging(args: argparse.Namespace) -> None:
    """Configure logging for CLI usage from settings and flags."""
    from rangefetch.config.settings import Settings
    from rangefetch.logging.logger import setup_logging

    settings = Settings()
    setup_logging(
        level="DEBUG" if args.verbose else settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
