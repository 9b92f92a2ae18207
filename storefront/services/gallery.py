# storefront/services/gallery.py

"""Cyclic image navigation for a single product card."""

from dataclasses import dataclass, field


@dataclass
class GalleryState:
    """Current image position within a product's image list.

    The index is always in ``[0, len(images))`` for a non-empty list
    and stays at 0 for an empty one.
    """

    images: tuple[str, ...] = field(default_factory=tuple)
    index: int = 0

    def __post_init__(self) -> None:
        self.images = tuple(self.images)
        self.index = self.index % self.size if self.size else 0

    @property
    def size(self) -> int:
        return len(self.images)

    @property
    def has_controls(self) -> bool:
        """Navigation buttons are only shown for two or more images."""
        return self.size > 1

    @property
    def current(self) -> str | None:
        return self.images[self.index] if self.images else None

    def next(self) -> int:
        if self.images:
            self.index = (self.index + 1) % self.size
        return self.index

    def previous(self) -> int:
        if self.images:
            self.index = (self.index - 1 + self.size) % self.size
        return self.index
