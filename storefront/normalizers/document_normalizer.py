# storefront/normalizers/document_normalizer.py

"""Turn product API documents into :class:`Product` records."""

import logging
from collections.abc import Mapping
from typing import Any

from storefront.errors import MalformedDocument
from storefront.models.product import Product, Review
from storefront.models.typed_value import TypedDocument

logger = logging.getLogger("storefront.normalizer")


class PlainDocument:
    """Reader for un-boxed JSON products with the same field names.

    Mirrors the accessor surface of :class:`TypedDocument` so both
    shapes go through a single normalization routine.
    """

    def __init__(self, fields: Mapping[str, Any], path: str = "") -> None:
        self._fields = fields
        self.path = path

    def _path(self, name: str) -> str:
        return f"{self.path}.{name}" if self.path else name

    def _get(self, name: str) -> Any:
        if name not in self._fields:
            raise MalformedDocument(
                f"Missing field '{self._path(name)}'",
                field=self._path(name),
            )
        return self._fields[name]

    def _fail(self, name: str, expected: str) -> MalformedDocument:
        return MalformedDocument(
            f"Field '{self._path(name)}' is not a {expected}",
            field=self._path(name),
        )

    def string(self, name: str) -> str:
        raw = self._get(name)
        if not isinstance(raw, str):
            raise self._fail(name, "string")
        return raw

    def integer(self, name: str) -> int:
        raw = self._get(name)
        if isinstance(raw, bool) or not isinstance(raw, int):
            raise self._fail(name, "integer")
        return raw

    def double(self, name: str) -> float:
        raw = self._get(name)
        if isinstance(raw, bool) or not isinstance(raw, (int, float)):
            raise self._fail(name, "number")
        return float(raw)

    def strings(self, name: str) -> list[str]:
        raw = self._get(name)
        if not isinstance(raw, list) or not all(
            isinstance(item, str) for item in raw
        ):
            raise self._fail(name, "list of strings")
        return list(raw)

    def maps(self, name: str) -> list["PlainDocument"]:
        raw = self._get(name)
        if not isinstance(raw, list) or not all(
            isinstance(item, Mapping) for item in raw
        ):
            raise self._fail(name, "list of objects")
        return [
            PlainDocument(item, f"{self._path(name)}[{i}]")
            for i, item in enumerate(raw)
        ]


def is_typed_document(document: Mapping[str, Any]) -> bool:
    """Return True when *document* uses ``{<tag>Value: ...}`` boxes."""
    if isinstance(document.get("fields"), Mapping):
        return True
    return any(
        isinstance(value, Mapping)
        and len(value) == 1
        and next(iter(value)).endswith("Value")
        for value in document.values()
    )


def _build_review(reader: TypedDocument | PlainDocument) -> Review:
    return Review(
        reviewer_name=reader.string("reviewerName"),
        rating=reader.integer("rating"),
        comment=reader.string("comment"),
        date=reader.string("date"),
    )


def _build_product(reader: TypedDocument | PlainDocument) -> Product:
    return Product(
        id=reader.integer("id"),
        title=reader.string("title"),
        description=reader.string("description"),
        price=reader.double("price"),
        category=reader.string("category"),
        stock=reader.integer("stock"),
        rating=reader.double("rating"),
        images=reader.strings("images"),
        thumbnail=reader.string("thumbnail"),
        reviews=[_build_review(r) for r in reader.maps("reviews")],
    )


def normalize_product(document: Any) -> Product:
    """Normalize one typed or plain product document.

    Raises:
        MalformedDocument: a field is missing or carries the wrong
            tag. No placeholder values are substituted.
    """
    if not isinstance(document, Mapping):
        raise MalformedDocument(
            "Document is not a JSON object", field="<document>"
        )
    reader: TypedDocument | PlainDocument
    if is_typed_document(document):
        reader = TypedDocument.from_json(document)
    else:
        reader = PlainDocument(document)
    return _build_product(reader)


def normalize_documents(
    documents: list[Any],
) -> tuple[list[Product], int]:
    """Normalize a page of documents, dropping malformed ones.

    Returns the normalized products in input order and the count of
    dropped documents.
    """
    products: list[Product] = []
    dropped = 0

    for position, document in enumerate(documents):
        try:
            products.append(normalize_product(document))
        except MalformedDocument as exc:
            logger.warning(
                "Dropped malformed document at position %d: %s",
                position,
                exc.message,
            )
            dropped += 1

    if dropped:
        logger.info(
            "Normalization dropped %d of %d documents",
            dropped,
            len(documents),
        )

    return products, dropped
