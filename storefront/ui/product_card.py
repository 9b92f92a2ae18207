# storefront/ui/product_card.py

"""Product card widget with a cyclic image gallery."""

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.message import Message
from textual.widgets import Button, Static

from storefront.models.product import Product
from storefront.services.gallery import GalleryState
from storefront.ui.formatting import (
    cart_path,
    detail_path,
    display_image,
    format_price,
    render_stars,
    stock_label,
)


class ProductCard(Vertical):
    """Displays one product; the gallery resets whenever it is rebuilt."""

    class LinkRequested(Message):
        """The user asked to open one of the card's routes."""

        def __init__(self, product: Product, path: str) -> None:
            super().__init__()
            self.product = product
            self.path = path

    def __init__(self, product: Product) -> None:
        super().__init__(classes="product_card")
        self.product = product
        self.gallery = GalleryState(tuple(product.images))

    def image_label(self) -> Text:
        image = display_image(self.product, self.gallery)
        text = Text()
        if self.gallery.size:
            text.append(
                f"[{self.gallery.index + 1}/{self.gallery.size}] ",
                style="dim",
            )
        text.append(image, style="underline")
        return text

    def compose(self) -> ComposeResult:
        p = self.product
        yield Static(self.image_label(), classes="card_image")
        if self.gallery.has_controls:
            yield Horizontal(
                Button("<", classes="prev_image"),
                Button(">", classes="next_image"),
                classes="gallery_controls",
            )
        yield Static(Text(p.title, style="bold"), classes="card_title")
        yield Static(p.description, classes="card_description")
        yield Static(render_stars(p.rating), classes="card_rating")
        yield Static(f"Category: {p.category}", classes="card_meta")
        yield Static(stock_label(p.stock), classes="card_meta")
        yield Horizontal(
            Static(
                Text(format_price(p.price), style="bold"),
                classes="card_price",
            ),
            Button("Details", classes="open_detail"),
            Button("Add to cart", variant="primary", classes="add_to_cart"),
            classes="card_actions",
        )

    def _refresh_image(self) -> None:
        self.query_one(".card_image", Static).update(self.image_label())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle gallery and link buttons inside this card."""
        button = event.button
        event.stop()
        if button.has_class("prev_image"):
            self.gallery.previous()
            self._refresh_image()
        elif button.has_class("next_image"):
            self.gallery.next()
            self._refresh_image()
        elif button.has_class("open_detail"):
            self.post_message(
                self.LinkRequested(self.product, detail_path(self.product))
            )
        elif button.has_class("add_to_cart"):
            self.post_message(
                self.LinkRequested(self.product, cart_path(self.product))
            )
