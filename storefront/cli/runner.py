# storefront/cli/runner.py

"""Headless listing runner, driven by the same controller as the TUI."""

import json
import logging
import sys
from dataclasses import asdict

from rich.console import Console
from rich.table import Table

from storefront.config.settings import Settings
from storefront.models.listing_query import ListingQuery
from storefront.models.product import Product
from storefront.services.listing_controller import ListingController
from storefront.ui.formatting import format_price, render_stars

logger = logging.getLogger("storefront.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def products_to_dicts(products: list[Product]) -> list[dict[str, object]]:
    """Serialise a product list to plain dicts for JSON output."""
    return [asdict(p) for p in products]


def _print_table(products: list[Product], query: ListingQuery) -> None:
    """Render a Rich table of products to stdout."""
    table = Table(
        title=f"Products, page {query.page}",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("ID", style="dim", justify="right")
    table.add_column("Title", max_width=40)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Rating")
    table.add_column("Category", style="magenta")
    table.add_column("Stock", justify="right")
    table.add_column("Images", justify="right", style="dim")

    for p in products:
        table.add_row(
            str(p.id),
            p.title,
            format_price(p.price),
            render_stars(p.rating),
            p.category,
            str(p.stock),
            str(len(p.images)),
        )

    Console().print(table)


async def cli_list(
    query: ListingQuery,
    output_format: str,
    controller: ListingController | None = None,
) -> int:
    """Load one listing page and print it; returns 0 on results, 1 otherwise."""
    controller = controller or ListingController()
    _err.print(f"[bold]Listing:[/bold] {query.to_location()}")

    page = await controller.load_products(query)
    if page is None:
        return 1

    if page.error:
        _err.print(f"[red]Error: {page.error}[/red]")
    if page.malformed_count:
        _err.print(
            f"[yellow]Skipped {page.malformed_count} "
            "malformed products[/yellow]"
        )

    if page.is_empty:
        _err.print(f"[yellow]{Settings.EMPTY_MESSAGE}[/yellow]")
        return 1

    more = (
        "next page available"
        if controller.can_go_next
        else "last page"
    )
    _err.print(
        f"[green]✓ {len(page.products)} products "
        f"on page {query.page} ({more})[/green]"
    )

    if output_format == "table":
        _print_table(page.products, query)
    else:
        json.dump(
            products_to_dicts(page.products),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return 0


async def run_categories(
    controller: ListingController | None = None,
) -> int:
    """Print the category list, one per line; 1 when none are available."""
    controller = controller or ListingController()
    categories = await controller.load_categories()
    if not categories:
        _err.print("[yellow]No categories available.[/yellow]")
        return 1
    for category in categories:
        sys.stdout.write(f"{category}\n")
    return 0
