"""CLI entrypoint: print the top Hacker News stories as JSON."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from aggregator import fetch_listing
from config import get_general_settings, get_settings
from models import ListingKind
from outputs import encode_stories
from utils import ListingScraperError, setup_logger
from utils.logger import ROOT_LOGGER


def _posts_arg(max_posts: int):
    def _parse(raw: str) -> int:
        try:
            value = int(raw)
        except ValueError:
            raise argparse.ArgumentTypeError(f"invalid integer: {raw!r}") from None
        if not 1 <= value <= max_posts:
            raise argparse.ArgumentTypeError(
                f"Posts must be between 1 and {max_posts}, inclusive."
            )
        return value

    return _parse


def build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(
        prog="hn-listing",
        description="Print the top Hacker News stories as JSON",
    )
    parser.add_argument(
        "--posts",
        type=_posts_arg(settings.listing.max_posts),
        default=settings.listing.default_posts,
        help=f"How many posts to print. A positive integer <= {settings.listing.max_posts}.",
    )
    parser.add_argument(
        "--new",
        action="store_true",
        help="Read the newest listing instead of the front page",
    )
    parser.add_argument(
        "--log-level",
        default=settings.general.log_level,
        help="Log level for stderr diagnostics (default: %(default)s)",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar on stderr",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # root logger, so every module's records reach stderr
    try:
        setup_logger(None, level=args.log_level, log_file=get_general_settings().log_file)
    except ValueError as e:
        parser.error(str(e))
    logger = logging.getLogger(ROOT_LOGGER)

    kind = ListingKind.NEWEST if args.new else ListingKind.NEWS
    try:
        stories = asyncio.run(fetch_listing(args.posts, kind, args.progress))
    except ListingScraperError as e:
        logger.error(f"Failed to fetch listing: {e}")
        return 1

    sys.stdout.write(encode_stories(stories) + "\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
