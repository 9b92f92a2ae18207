# storefront/config/settings.py

"""Central configuration for the storefront client."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the storefront client."""

    # --- Remote API ---
    API_BASE_URL: str = os.getenv(
        "STOREFRONT_API_URL", "https://next-ecommerce-api.vercel.app"
    ).rstrip("/")
    SITE_URL: str = os.getenv(
        "STOREFRONT_SITE_URL", "http://localhost:3000"
    ).rstrip("/")
    REQUEST_TIMEOUT: int = int(
        os.getenv("STOREFRONT_REQUEST_TIMEOUT", "15")
    )                                   # Seconds before a request times out

    # --- Listing ---
    PAGE_SIZE: int = 20                 # Products per page, also the has-more threshold
    SORT_OPTIONS: list[dict[str, str]] = [
        {"id": "", "label": "Default order"},
        {"id": "price-asc", "label": "Price: Low to High"},
        {"id": "price-desc", "label": "Price: High to Low"},
        {"id": "rating-desc", "label": "Top rated"},
        {"id": "title-asc", "label": "Name: A to Z"},
    ]
    EMPTY_MESSAGE: str = "No products available."

    # --- Product card ---
    DETAIL_ROUTE: str = "/api/products/{id}"
    CART_ROUTE: str = "/cart/add/{id}"
    PLACEHOLDER_IMAGE: str = "/path/to/placeholder-image.jpg"
    MAX_STARS: int = 5

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Logging ---
    CONSOLE_LOG_LEVEL: str = os.getenv(
        "STOREFRONT_LOG_LEVEL", "WARNING"
    ).upper()
    LOG_RETENTION: int = 20              # Run logs kept in LOGS_DIR

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
