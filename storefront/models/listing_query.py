# storefront/models/listing_query.py

"""Immutable listing state derived from navigational query parameters."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from urllib.parse import parse_qs, urlencode, urlsplit


def _parse_page(raw: str | None) -> int:
    """Parse a ``page`` parameter, falling back to 1 on junk input."""
    if not raw:
        return 1
    try:
        page = int(raw.strip())
    except ValueError:
        return 1
    return page if page >= 1 else 1


@dataclass(frozen=True)
class ListingQuery:
    """Search text, sort key, category filter and page number.

    A query is never mutated; every ``with_*`` helper returns a new
    value and the controller reloads whenever the value changes.
    """

    search: str = ""
    sort: str = ""
    category: str = ""
    page: int = 1

    def __post_init__(self) -> None:
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")

    @classmethod
    def from_params(cls, params: Mapping[str, str]) -> "ListingQuery":
        """Build a query from already-decoded URL parameters."""
        return cls(
            search=params.get("search", "") or "",
            sort=params.get("sort", "") or "",
            category=params.get("category", "") or "",
            page=_parse_page(params.get("page")),
        )

    @classmethod
    def from_location(cls, location: str) -> "ListingQuery":
        """Build a query from a URL, a path with a query string, or
        a bare ``?search=...`` string."""
        raw_query = urlsplit(location).query
        if not raw_query and "=" in location and "?" not in location:
            raw_query = location
        parsed = parse_qs(raw_query, keep_blank_values=True)
        return cls.from_params(
            {key: values[0] for key, values in parsed.items() if values}
        )

    def to_params(self) -> dict[str, str]:
        """Return the non-default fields as URL parameters."""
        params: dict[str, str] = {}
        if self.search:
            params["search"] = self.search
        if self.sort:
            params["sort"] = self.sort
        if self.category:
            params["category"] = self.category
        if self.page != 1:
            params["page"] = str(self.page)
        return params

    def to_location(self) -> str:
        """Render the query as a storefront path, ``/`` when default."""
        params = self.to_params()
        return f"/?{urlencode(params)}" if params else "/"

    @property
    def is_default(self) -> bool:
        return self == ListingQuery()

    def offset(self, page_size: int) -> int:
        """Index of the first product on this page."""
        return (self.page - 1) * page_size

    def with_page(self, page: int) -> "ListingQuery":
        return replace(self, page=max(1, page))

    # Filter changes start over from the first page
    def with_search(self, search: str) -> "ListingQuery":
        return replace(self, search=search.strip(), page=1)

    def with_sort(self, sort: str) -> "ListingQuery":
        return replace(self, sort=sort, page=1)

    def with_category(self, category: str) -> "ListingQuery":
        return replace(self, category=category, page=1)
