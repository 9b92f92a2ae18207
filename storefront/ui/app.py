# storefront/ui/app.py

"""Terminal storefront: product listing with filters and pagination."""

import logging
import webbrowser

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal, VerticalScroll
from textual.widget import Widget
from textual.widgets import (
    Button,
    Footer,
    Header,
    Input,
    LoadingIndicator,
    Select,
    Static,
)

from storefront.config.settings import Settings
from storefront.models.listing_query import ListingQuery
from storefront.models.product import Product
from storefront.services.listing_controller import (
    ListingController,
    ListingPage,
)
from storefront.ui.formatting import cart_path, detail_path, site_url
from storefront.ui.product_card import ProductCard

logger = logging.getLogger("storefront.ui")

ALL_CATEGORIES = ("All categories", "")


def _sort_options(selected: str) -> list[tuple[str, str]]:
    """Sort choices from settings, keeping an unknown current key."""
    options = [(o["label"], o["id"]) for o in Settings.SORT_OPTIONS]
    if selected and selected not in {value for _, value in options}:
        options.append((selected, selected))
    return options


def _category_options(
    categories: list[str], selected: str
) -> list[tuple[str, str]]:
    options = [ALL_CATEGORIES]
    options.extend((c, c) for c in categories)
    if selected and selected not in categories:
        options.append((selected, selected))
    return options


class StorefrontApp(App[object]):
    """Terminal storefront: product listing with filters and pagination."""

    CSS_PATH = "styles.tcss"
    TITLE = "Storefront"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("n", "next_page", "Next"),
        Binding("p", "previous_page", "Previous"),
        Binding("r", "reset", "Reset"),
        Binding("o", "open_detail", "Details"),
        Binding("a", "add_to_cart", "Add to cart"),
        Binding("c", "copy_url", "Copy URL"),
    ]

    def __init__(
        self,
        initial_query: ListingQuery | None = None,
        controller: ListingController | None = None,
    ) -> None:
        super().__init__()
        self.settings = Settings()
        self.controller = controller or ListingController()
        self.current_query = initial_query or ListingQuery()

    def compose(self) -> ComposeResult:
        """Build the widget tree for the storefront."""
        query = self.current_query
        yield Header()
        yield Container(
            Static("Discover Amazing Products", id="title"),
            Horizontal(
                Input(
                    value=query.search,
                    placeholder="Search products...",
                    id="search_input",
                ),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),
            Horizontal(
                Select(
                    _sort_options(query.sort),
                    value=query.sort,
                    allow_blank=False,
                    id="sort_select",
                ),
                Select(
                    _category_options([], query.category),
                    value=query.category,
                    allow_blank=False,
                    id="category_select",
                ),
                Button(
                    "Reset All Filters", variant="error", id="reset_btn"
                ),
                id="filter_bar",
            ),
            Static("Ready", id="status"),
            LoadingIndicator(id="loader"),
            Static(self.settings.EMPTY_MESSAGE, id="empty_state"),
            VerticalScroll(id="product_grid"),
            Horizontal(
                Button("Previous", id="prev_btn", disabled=True),
                Static("Page 1", id="page_label"),
                Button("Next", id="next_btn", disabled=True),
                id="pagination",
            ),
            id="main_container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Hide transient widgets and start the initial loads."""
        self.query_one("#loader", LoadingIndicator).display = False
        self.query_one("#empty_state", Static).display = False
        self.run_worker(self.load_categories(), group="categories")
        self.navigate(self.current_query)

    # ── Loading ──────────────────────────────────────────

    def navigate(self, query: ListingQuery) -> None:
        """Make *query* current and load it in a background worker."""
        self.current_query = query
        self.run_worker(self.load_listing(query), group="listing")

    async def load_categories(self) -> None:
        """Fill the category filter once categories arrive."""
        categories = await self.controller.load_categories()
        select: Select[str] = self.query_one("#category_select", Select)
        with self.prevent(Select.Changed):
            select.set_options(
                _category_options(categories, self.current_query.category)
            )
            select.value = self.current_query.category

    async def load_listing(self, query: ListingQuery) -> None:
        """Load *query* through the controller and render the result."""
        if not self.controller.needs_load(query):
            return
        self._sync_controls(query)
        self._show_loading(query)
        page = await self.controller.load_products(query)
        if page is None:
            # A newer load owns the view
            return
        await self.render_page(page)

    def _sync_controls(self, query: ListingQuery) -> None:
        """Reflect *query* in the inputs without re-triggering loads."""
        search_input = self.query_one("#search_input", Input)
        sort_select: Select[str] = self.query_one("#sort_select", Select)
        category_select: Select[str] = self.query_one(
            "#category_select", Select
        )
        with self.prevent(Input.Changed, Select.Changed):
            search_input.value = query.search
            sort_select.set_options(_sort_options(query.sort))
            sort_select.value = query.sort
            category_select.set_options(
                _category_options(self.controller.categories, query.category)
            )
            category_select.value = query.category

    def _show_loading(self, query: ListingQuery) -> None:
        self.query_one("#loader", LoadingIndicator).display = True
        self.query_one("#empty_state", Static).display = False
        self.query_one("#product_grid", VerticalScroll).display = False
        self.query_one("#status", Static).update("Loading products...")

        # Both directions are locked while a load is in flight
        prev_btn = self.query_one("#prev_btn", Button)
        next_btn = self.query_one("#next_btn", Button)
        prev_btn.disabled = True
        next_btn.disabled = True
        if query.page > 1:
            prev_btn.label = "Loading..."
        if len(self.controller.products) == self.controller.page_size:
            next_btn.label = "Loading..."
        self.query_one("#page_label", Static).update(f"Page {query.page}")

    async def render_page(self, page: ListingPage) -> None:
        """Replace the card grid with the products of *page*."""
        grid = self.query_one("#product_grid", VerticalScroll)
        await grid.remove_children()
        if page.products:
            await grid.mount_all(ProductCard(p) for p in page.products)

        self.query_one("#loader", LoadingIndicator).display = False
        grid.display = not page.is_empty
        self.query_one("#empty_state", Static).display = page.is_empty

        status = self.query_one("#status", Static)
        if page.is_empty:
            status.update(self.settings.EMPTY_MESSAGE)
        else:
            status.update(
                f"Showing {len(page.products)} products "
                f"({page.query.to_location()})"
            )
        if page.malformed_count:
            self.notify(
                f"Skipped {page.malformed_count} malformed products",
                severity="warning",
            )
        self._update_pagination()

    def _update_pagination(self) -> None:
        controller = self.controller
        page = controller.query.page
        prev_btn = self.query_one("#prev_btn", Button)
        next_btn = self.query_one("#next_btn", Button)

        prev_btn.disabled = not controller.can_go_previous
        next_btn.disabled = not controller.can_go_next
        prev_btn.label = "Previous"
        next_btn.label = "Next"
        self.query_one("#page_label", Static).update(f"Page {page}")

    # ── Events ───────────────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle search, reset and pagination buttons."""
        button_id = event.button.id
        if button_id == "search_btn":
            self._submit_search()
        elif button_id == "reset_btn":
            self.action_reset()
        elif button_id == "prev_btn":
            self.action_previous_page()
        elif button_id == "next_btn":
            self.action_next_page()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the search input."""
        if event.input.id == "search_input":
            self._submit_search()

    def _submit_search(self) -> None:
        value = self.query_one("#search_input", Input).value
        query = self.current_query.with_search(value)
        if query != self.current_query:
            self.navigate(query)

    def on_select_changed(self, event: Select.Changed) -> None:
        """Apply a new sort key or category filter."""
        value = "" if event.value is None else str(event.value)
        if event.select.id == "sort_select":
            if value != self.current_query.sort:
                self.navigate(self.current_query.with_sort(value))
        elif event.select.id == "category_select":
            if value != self.current_query.category:
                self.navigate(self.current_query.with_category(value))

    def on_product_card_link_requested(
        self, event: ProductCard.LinkRequested
    ) -> None:
        """Open a card's detail or add-to-cart route in the browser."""
        self._open(event.path)

    # ── Actions ──────────────────────────────────────────

    def action_next_page(self) -> None:
        if self.controller.can_go_next:
            self.navigate(self.controller.next_query())

    def action_previous_page(self) -> None:
        if self.controller.can_go_previous:
            self.navigate(self.controller.previous_query())

    def action_reset(self) -> None:
        """Clear search, sort and category and return to page 1."""
        self.navigate(self.controller.reset_query())

    def _focused_product(self) -> Product | None:
        node: Widget | None = self.focused
        while node is not None:
            if isinstance(node, ProductCard):
                return node.product
            parent = node.parent
            node = parent if isinstance(parent, Widget) else None
        return None

    def _open(self, path: str) -> None:
        url = site_url(path)
        logger.info("Opening %s", url)
        webbrowser.open(url)

    def action_open_detail(self) -> None:
        product = self._focused_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        self._open(detail_path(product))

    def action_add_to_cart(self) -> None:
        product = self._focused_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        self._open(cart_path(product))

    def action_copy_url(self) -> None:
        """Copy the focused product's detail URL to the clipboard."""
        product = self._focused_product()
        if product is None:
            self.notify("Select a product first", severity="warning")
            return
        try:
            import pyperclip  # type: ignore[import-untyped]

            pyperclip.copy(site_url(detail_path(product)))
            self.notify("URL Copied")
        except Exception:
            logger.error(
                "Failed to copy URL to clipboard",
                exc_info=True,
            )
            self.notify("Clipboard unavailable", severity="warning")
