# storefront/ui/formatting.py

"""Presentation helpers shared by the product card and the CLI."""

from rich.text import Text

from storefront.config.settings import Settings
from storefront.models.product import Product
from storefront.services.gallery import GalleryState

FILLED_STAR = "★"
EMPTY_STAR = "☆"


def format_price(price: float) -> str:
    """Render a price with two decimals, e.g. ``$19.99``."""
    return f"${price:.2f}"


def star_states(
    rating: float, max_stars: int = Settings.MAX_STARS
) -> list[bool]:
    """Return one flag per star; star *i* is lit when rating >= i + 1."""
    return [rating >= i + 1 for i in range(max_stars)]


def render_stars(rating: float) -> Text:
    """Star row followed by the numeric rating badge."""
    text = Text()
    for lit in star_states(rating):
        if lit:
            text.append(FILLED_STAR, style="bold yellow")
        else:
            text.append(EMPTY_STAR, style="grey50")
    text.append(f" {rating:g}", style="bold blue")
    return text


def stock_label(stock: int) -> str:
    return f"Stock: {stock} available"


def detail_path(product: Product) -> str:
    return Settings.DETAIL_ROUTE.format(id=product.id)


def cart_path(product: Product) -> str:
    return Settings.CART_ROUTE.format(id=product.id)


def site_url(path: str) -> str:
    """Resolve a storefront route against the configured site URL."""
    return f"{Settings.SITE_URL}{path}"


def display_image(product: Product, gallery: GalleryState) -> str:
    """Image to show: gallery image, then thumbnail, then placeholder."""
    return gallery.current or product.thumbnail or Settings.PLACEHOLDER_IMAGE
