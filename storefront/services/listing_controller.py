# storefront/services/listing_controller.py

"""Turns a ListingQuery into product and category loads."""

import asyncio
import logging
from dataclasses import dataclass, field

from storefront.api.product_api import ProductApiClient
from storefront.config.settings import Settings
from storefront.errors import FetchFailure
from storefront.models.listing_query import ListingQuery
from storefront.models.product import Product
from storefront.normalizers.document_normalizer import normalize_documents

logger = logging.getLogger("storefront.listing")


@dataclass
class ListingPage:
    """Outcome of one product load.

    A failed fetch and an empty result both carry no products and are
    rendered the same way; ``error`` keeps the cause for diagnostics.
    """

    query: ListingQuery
    products: list[Product] = field(
        default_factory=lambda: list[Product]()
    )
    malformed_count: int = 0
    error: str | None = None
    generation: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.products


class ListingController:
    """Owns loading, category and pagination state for the listing.

    Every product load takes a new generation number. A response that
    arrives after a newer load has started is discarded, so rapid
    filter changes can never leave an outdated page on screen.
    """

    def __init__(
        self,
        client: ProductApiClient | None = None,
        page_size: int | None = None,
    ) -> None:
        self.settings = Settings()
        self.client = client or ProductApiClient()
        self.page_size: int = page_size or self.settings.PAGE_SIZE
        self.query = ListingQuery()
        self.products: list[Product] = []
        self.categories: list[str] = []
        self.loading: bool = False
        self.last_page: ListingPage | None = None
        self._generation: int = 0
        self._categories_requested: bool = False

    @property
    def generation(self) -> int:
        return self._generation

    # ── Categories ───────────────────────────────────────

    async def load_categories(self) -> list[str]:
        """Fetch the category list on the first call only.

        A failed fetch is logged and leaves the list empty.
        """
        if self._categories_requested:
            return self.categories
        self._categories_requested = True

        try:
            self.categories = await asyncio.to_thread(
                self.client.list_categories
            )
        except FetchFailure as exc:
            logger.error(
                "Error fetching categories from %s: %s",
                exc.url,
                exc.message,
                exc_info=True,
            )
            self.categories = []
        return self.categories

    # ── Products ─────────────────────────────────────────

    def needs_load(self, query: ListingQuery) -> bool:
        """True unless *query* is already loaded or being loaded."""
        if query != self.query:
            return True
        return not self.loading and self.last_page is None

    async def apply(self, query: ListingQuery) -> ListingPage | None:
        """Load *query* if it differs from the current one."""
        if not self.needs_load(query):
            logger.debug("Query unchanged, skipping load: %s", query)
            return None
        return await self.load_products(query)

    async def load_products(
        self, query: ListingQuery
    ) -> ListingPage | None:
        """Fetch and normalize one page of products.

        Returns ``None`` when a newer load superseded this one while
        it was in flight; view state is then left to the newer load.
        """
        self._generation += 1
        generation = self._generation
        self.query = query
        self.loading = True
        logger.info(
            "Loading products (generation %d): %s",
            generation,
            query.to_location(),
        )

        error: str | None = None
        try:
            documents = await asyncio.to_thread(
                self.client.list_products, query, self.page_size
            )
        except FetchFailure as exc:
            logger.error(
                "Error fetching products from %s: %s",
                exc.url,
                exc.message,
                exc_info=True,
            )
            documents = []
            error = exc.message
        except Exception:
            if generation == self._generation:
                self.loading = False
            raise

        if generation != self._generation:
            logger.info(
                "Discarding stale product response "
                "(generation %d, latest %d)",
                generation,
                self._generation,
            )
            return None

        products, dropped = normalize_documents(documents)
        page = ListingPage(
            query=query,
            products=products,
            malformed_count=dropped,
            error=error,
            generation=generation,
        )
        self.products = products
        self.last_page = page
        self.loading = False
        return page

    # ── Pagination ───────────────────────────────────────

    @property
    def can_go_previous(self) -> bool:
        return self.query.page > 1 and not self.loading

    @property
    def can_go_next(self) -> bool:
        """Whether another page may exist.

        The API returns no total count, so a full page is taken to
        mean more pages follow. A final page of exactly ``page_size``
        items therefore still enables Next, which leads to an empty
        page.
        """
        return len(self.products) >= self.page_size and not self.loading

    def previous_query(self) -> ListingQuery:
        return self.query.with_page(self.query.page - 1)

    def next_query(self) -> ListingQuery:
        return self.query.with_page(self.query.page + 1)

    @staticmethod
    def reset_query() -> ListingQuery:
        """The default query: page 1, no search, sort or category."""
        return ListingQuery()
