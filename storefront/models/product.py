# storefront/models/product.py

"""Normalized product model shared by the listing and the card UI."""

from dataclasses import dataclass, field


@dataclass
class Review:
    """A single customer review attached to a product."""

    reviewer_name: str
    rating: int
    comment: str
    date: str


@dataclass
class Product:
    """A product as rendered by the storefront.

    Price and rating are stored as received; range checks are left to
    the presentation layer.
    """

    id: int
    title: str
    description: str
    price: float
    category: str
    stock: int
    rating: float
    images: list[str] = field(default_factory=lambda: list[str]())
    thumbnail: str = ""
    reviews: list[Review] = field(
        default_factory=lambda: list[Review]()
    )
