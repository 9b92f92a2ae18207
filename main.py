# main.py

"""Entry point for the storefront client (TUI or headless CLI)."""

import argparse
import asyncio
import logging
import sys

from storefront.config.logging_config import setup_logging
from storefront.config.settings import Settings
from storefront.models.listing_query import ListingQuery

logger = logging.getLogger("storefront.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    sort_ids = ", ".join(s["id"] for s in Settings.SORT_OPTIONS if s["id"])

    parser = argparse.ArgumentParser(
        prog="storefront",
        description="Browse the product catalogue from the terminal.",
        epilog=f"Sort keys: {sort_ids}",
    )
    parser.add_argument(
        "-l",
        "--list",
        action="store_true",
        default=False,
        dest="headless",
        help="Print one listing page instead of launching the TUI.",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        default=False,
        help="Print the available categories and exit.",
    )
    parser.add_argument(
        "--location",
        default=None,
        help="Start from a storefront location, e.g. '/?search=phone&page=2'.",
    )
    parser.add_argument("-s", "--search", default=None, help="Search text.")
    parser.add_argument("--sort", default=None, help="Sort key.")
    parser.add_argument(
        "-c", "--category", default=None, help="Category filter."
    )
    parser.add_argument(
        "-p", "--page", type=int, default=None, help="Page number (from 1)."
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format for --list (default: json).",
    )
    return parser


def build_query(args: argparse.Namespace) -> ListingQuery:
    """Combine --location with the explicit filter flags.

    Explicit flags win over values parsed from the location.
    """
    query = (
        ListingQuery.from_location(args.location)
        if args.location
        else ListingQuery()
    )
    params = query.to_params()
    if args.search is not None:
        params["search"] = args.search
    if args.sort is not None:
        params["sort"] = args.sort
    if args.category is not None:
        params["category"] = args.category
    if args.page is not None:
        params["page"] = str(args.page)
    return ListingQuery.from_params(params)


def _run_tui(query: ListingQuery) -> None:
    """Launch the interactive Textual storefront."""
    from storefront.ui.app import StorefrontApp

    try:
        app = StorefrontApp(initial_query=query)
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("storefront TUI shutting down")


def _run_list(query: ListingQuery, output_format: str) -> None:
    """Print one listing page and exit."""
    from storefront.cli.runner import cli_list

    exit_code = asyncio.run(cli_list(query, output_format))
    sys.exit(exit_code)


def _run_categories() -> None:
    """Print the category list and exit."""
    from storefront.cli.runner import run_categories

    exit_code = asyncio.run(run_categories())
    sys.exit(exit_code)


def main() -> None:
    """Route to the TUI, the headless listing, or the category list."""
    log_file = setup_logging()
    logger.info("storefront starting, log file: %s", log_file)

    parser = _build_parser()
    args = parser.parse_args()
    query = build_query(args)

    if args.categories:
        _run_categories()
    elif args.headless:
        _run_list(query, args.output_format)
    else:
        _run_tui(query)


if __name__ == "__main__":
    main()
