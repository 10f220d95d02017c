"""Command line entry point for rdt."""
from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from rdt import __version__
from rdt.core.config import ApiSettings
from rdt.core.errors import RdtError
from rdt.core.schemas import PartialParams
from rdt.core.types import MAX_LIMIT
from rdt.nlp.router import QueryRouter
from rdt.services.reddit import create_reddit_searcher

logger = logging.getLogger(__name__)

SORT_CHOICES = ["relevance", "hot", "new", "top", "comments"]
TIME_CHOICES = ["hour", "day", "week", "month", "year", "all"]


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}") from exc
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value!r}")
    return number


def _emit(payload: Any) -> None:
    print(json.dumps(payload, ensure_ascii=False, default=str))


def _overrides(args: argparse.Namespace) -> PartialParams:
    """Collect only the flags the user actually passed."""

    return PartialParams(
        subreddit=args.subreddit,
        sort=args.sort,
        time_range=args.time,
        limit=args.limit,
    )


def _add_override_flags(parser: argparse.ArgumentParser) -> None:
    # Defaults stay None so an explicit "--sort relevance" differs from no flag.
    parser.add_argument("-s", "--subreddit", default=None, help="Limit to a specific subreddit")
    parser.add_argument("--sort", choices=SORT_CHOICES, default=None, help="Sort order")
    parser.add_argument("--time", choices=TIME_CHOICES, default=None, help="Time filter")
    parser.add_argument(
        "-l",
        "--limit",
        type=_positive_int,
        default=None,
        help=f"Maximum number of results (capped at {MAX_LIMIT})",
    )
    parser.add_argument("--no-ai", action="store_true", help="Never call the AI fallback")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rdt", description="Reddit search with natural-language queries")
    parser.add_argument("--version", action="version", version=f"rdt {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    search = sub.add_parser("search", help="Search Reddit (supports natural language)")
    search.add_argument("query", help='e.g. "top rust in programming from this week"')
    _add_override_flags(search)
    search.add_argument("--dry-run", action="store_true", help="Print resolved parameters without searching")

    parse = sub.add_parser("parse", help="Resolve queries to search parameters without searching")
    parse.add_argument("queries", nargs="+", help="One or more queries")
    _add_override_flags(parse)

    return parser


async def cmd_search(args: argparse.Namespace, settings: ApiSettings) -> None:
    router = QueryRouter.from_settings(settings, ai_enabled=not args.no_ai)
    params = await router.resolve(args.query, _overrides(args))
    if args.dry_run:
        _emit(params.model_dump())
        return

    searcher = create_reddit_searcher(settings)
    results = await searcher.search(params)
    _emit(results.model_dump())


async def cmd_parse(args: argparse.Namespace, settings: ApiSettings) -> None:
    router = QueryRouter.from_settings(settings, ai_enabled=not args.no_ai)
    for params in await router.resolve_many(args.queries, _overrides(args)):
        _emit(params.model_dump())


def main(argv: Optional[list[str]] = None) -> int:
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = ApiSettings.from_env()
        if args.command == "search":
            asyncio.run(cmd_search(args, settings))
        elif args.command == "parse":
            asyncio.run(cmd_parse(args, settings))
        else:
            parser.error(f"unsupported command {args.command!r}")
        return 0
    except (RdtError, ValidationError) as exc:
        logger.debug("Command failed", exc_info=True)
        print(json.dumps({"error": str(exc), "type": type(exc).__name__}), file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
