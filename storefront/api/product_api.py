# storefront/api/product_api.py

"""HTTP client for the remote product and category endpoints."""

import json
import logging
from typing import Any
from urllib.parse import urlencode

from curl_cffi import requests as curl_requests

from storefront.config.settings import Settings
from storefront.errors import FetchFailure
from storefront.models.listing_query import ListingQuery

_SORT_ORDERS: frozenset[str] = frozenset({"asc", "desc"})


def split_sort(sort: str) -> tuple[str, str | None]:
    """Split a sort key like ``price-asc`` into field and order.

    A key without a recognised ``-asc``/``-desc`` suffix is taken as a
    bare field name with the API's default order.
    """
    field_name, sep, order = sort.rpartition("-")
    if sep and field_name and order in _SORT_ORDERS:
        return field_name, order
    return sort, None


def build_product_params(
    query: ListingQuery, page_size: int
) -> dict[str, str]:
    """Map a listing query onto the product endpoint's parameters."""
    params: dict[str, str] = {
        "limit": str(page_size),
        "skip": str(query.offset(page_size)),
    }
    if query.search:
        params["q"] = query.search
    if query.sort:
        sort_by, order = split_sort(query.sort)
        params["sortBy"] = sort_by
        if order:
            params["order"] = order
    if query.category:
        params["category"] = query.category
    return params


class ProductApiClient:
    """Blocking client for the product API.

    Calls are single-shot: there is no retry and no cache. Every
    failure is raised as :class:`FetchFailure`.
    """

    def __init__(self, base_url: str | None = None) -> None:
        self.logger = logging.getLogger("storefront.api")
        self.settings = Settings()
        self.base_url = (base_url or self.settings.API_BASE_URL).rstrip("/")
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )

    def categories_url(self) -> str:
        return f"{self.base_url}/categories"

    def products_url(
        self, query: ListingQuery, page_size: int | None = None
    ) -> str:
        size = page_size or self.settings.PAGE_SIZE
        params = build_product_params(query, size)
        return f"{self.base_url}/products?{urlencode(params)}"

    def _get_json(self, url: str) -> Any:
        """GET *url* once and decode the JSON body."""
        try:
            resp = self.session.get(
                url,
                headers=self.settings.DEFAULT_HEADERS,
                timeout=self.settings.REQUEST_TIMEOUT,
            )
        except Exception as exc:
            self.logger.warning(
                "Request error for %s: %s", url, exc, exc_info=True
            )
            raise FetchFailure(
                f"Request failed: {exc}", url=url
            ) from exc

        if not 200 <= resp.status_code < 300:
            self.logger.warning(
                "HTTP %d for %s", resp.status_code, url
            )
            raise FetchFailure(
                f"HTTP {resp.status_code}",
                url=url,
                status_code=resp.status_code,
            )

        try:
            return json.loads(resp.text)
        except json.JSONDecodeError as exc:
            self.logger.warning(
                "Invalid JSON from %s: %s", url, exc
            )
            raise FetchFailure(
                "Response body is not valid JSON",
                url=url,
                status_code=resp.status_code,
            ) from exc

    def list_categories(self) -> list[str]:
        """Fetch the category identifiers used as filter values."""
        url = self.categories_url()
        data = self._get_json(url)
        if not isinstance(data, list):
            raise FetchFailure(
                "Category response is not a JSON array", url=url
            )
        categories = [item for item in data if isinstance(item, str)]
        skipped = len(data) - len(categories)
        if skipped:
            self.logger.debug(
                "Skipped %d non-string category entries", skipped
            )
        self.logger.info("Fetched %d categories", len(categories))
        return categories

    def list_products(
        self, query: ListingQuery, page_size: int | None = None
    ) -> list[Any]:
        """Fetch one page of raw product documents.

        The body is a JSON array; a ``{"products": [...]}`` envelope is
        accepted as well.
        """
        url = self.products_url(query, page_size)
        data = self._get_json(url)
        if isinstance(data, dict) and isinstance(
            data.get("products"), list
        ):
            data = data["products"]
        if not isinstance(data, list):
            raise FetchFailure(
                "Product response is not a JSON array", url=url
            )
        self.logger.info(
            "Fetched %d product documents for %s", len(data), url
        )
        return data
