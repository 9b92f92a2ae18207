# storefront/models/typed_value.py

"""Tagged values of the Firestore REST document format.

The product API stores every field boxed with its type, e.g.
``{"price": {"doubleValue": 19.99}}``. Boxed values are parsed into
explicit variant classes and read back through accessors that check
the expected variant, so a missing or mismatched tag raises
:class:`~storefront.errors.MalformedDocument` instead of surfacing
as a ``KeyError`` deep inside the UI.

Fields are parsed on access. Tags this client does not model
(``timestampValue``, ``booleanValue`` ...) only fail when the field
carrying them is actually read.
"""

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from storefront.errors import MalformedDocument

# Keys a Firestore REST envelope may carry next to ``fields``
_ENVELOPE_KEYS: frozenset[str] = frozenset(
    {"name", "fields", "createTime", "updateTime"}
)

# int64 values arrive as plain ASCII decimal strings
_DECIMAL_INTEGER = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class StringValue:
    """A ``stringValue`` box."""

    TAG: ClassVar[str] = "stringValue"
    value: str


@dataclass(frozen=True)
class IntegerValue:
    """An ``integerValue`` box (JSON number or decimal string)."""

    TAG: ClassVar[str] = "integerValue"
    value: int


@dataclass(frozen=True)
class DoubleValue:
    """A ``doubleValue`` box."""

    TAG: ClassVar[str] = "doubleValue"
    value: float


@dataclass(frozen=True)
class ArrayValue:
    """An ``arrayValue`` box holding ordered, already-parsed values."""

    TAG: ClassVar[str] = "arrayValue"
    values: tuple["TypedValue", ...] = ()


@dataclass(frozen=True)
class MapValue:
    """A ``mapValue`` box holding a nested typed document."""

    TAG: ClassVar[str] = "mapValue"
    fields: "TypedDocument"


TypedValue = StringValue | IntegerValue | DoubleValue | ArrayValue | MapValue


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


def _parse_string(payload: Any, path: str) -> StringValue:
    if not isinstance(payload, str):
        raise MalformedDocument(
            f"Field '{path}' has a non-string stringValue",
            field=path,
            expected_tag=StringValue.TAG,
        )
    return StringValue(payload)


def _parse_integer(payload: Any, path: str) -> IntegerValue:
    if isinstance(payload, bool):
        raise MalformedDocument(
            f"Field '{path}' has a boolean integerValue",
            field=path,
            expected_tag=IntegerValue.TAG,
        )
    if isinstance(payload, int):
        return IntegerValue(payload)
    if isinstance(payload, str) and _DECIMAL_INTEGER.fullmatch(payload):
        return IntegerValue(int(payload))
    raise MalformedDocument(
        f"Field '{path}' has an invalid integerValue: {payload!r}",
        field=path,
        expected_tag=IntegerValue.TAG,
    )


def _parse_double(payload: Any, path: str) -> DoubleValue:
    if isinstance(payload, bool) or not isinstance(payload, (int, float)):
        raise MalformedDocument(
            f"Field '{path}' has an invalid doubleValue: {payload!r}",
            field=path,
            expected_tag=DoubleValue.TAG,
        )
    return DoubleValue(float(payload))


def _parse_array(payload: Any, path: str) -> ArrayValue:
    if not isinstance(payload, Mapping):
        raise MalformedDocument(
            f"Field '{path}' has an invalid arrayValue",
            field=path,
            expected_tag=ArrayValue.TAG,
        )
    # Firestore omits ``values`` entirely for an empty array
    raw_values = payload.get("values", [])
    if not isinstance(raw_values, list):
        raise MalformedDocument(
            f"Field '{path}' has a non-list arrayValue.values",
            field=path,
            expected_tag=ArrayValue.TAG,
        )
    return ArrayValue(
        tuple(
            parse_value(item, f"{path}[{i}]")
            for i, item in enumerate(raw_values)
        )
    )


def _parse_map(payload: Any, path: str) -> MapValue:
    if not isinstance(payload, Mapping):
        raise MalformedDocument(
            f"Field '{path}' has an invalid mapValue",
            field=path,
            expected_tag=MapValue.TAG,
        )
    raw_fields = payload.get("fields", {})
    if not isinstance(raw_fields, Mapping):
        raise MalformedDocument(
            f"Field '{path}' has a non-object mapValue.fields",
            field=path,
            expected_tag=MapValue.TAG,
        )
    return MapValue(TypedDocument(raw_fields, path))


_PARSERS: dict[str, Callable[[Any, str], TypedValue]] = {
    StringValue.TAG: _parse_string,
    IntegerValue.TAG: _parse_integer,
    DoubleValue.TAG: _parse_double,
    ArrayValue.TAG: _parse_array,
    MapValue.TAG: _parse_map,
}


def parse_value(raw: Any, path: str = "<value>") -> TypedValue:
    """Parse one boxed value into its variant.

    The box must be an object with exactly one key, and that key must
    be one of the supported tags.
    """
    if not isinstance(raw, Mapping) or len(raw) != 1:
        raise MalformedDocument(
            f"Field '{path}' must carry exactly one type tag",
            field=path,
        )
    ((tag, payload),) = raw.items()
    parser = _PARSERS.get(tag)
    if parser is None:
        raise MalformedDocument(
            f"Field '{path}' has unsupported tag '{tag}'",
            field=path,
        )
    return parser(payload, path)


def _expect(value: TypedValue, expected: type[Any], path: str) -> Any:
    if not isinstance(value, expected):
        raise MalformedDocument(
            f"Field '{path}' is tagged {type(value).TAG}, "
            f"expected {expected.TAG}",
            field=path,
            expected_tag=expected.TAG,
        )
    return value


class TypedDocument:
    """Read-only view over the boxed fields of one document."""

    def __init__(
        self, fields: Mapping[str, Any], path: str = ""
    ) -> None:
        self._fields = fields
        self.path = path

    @classmethod
    def from_json(cls, raw: Any) -> "TypedDocument":
        """Wrap a decoded JSON document, unwrapping a REST envelope.

        Accepts either the bare field mapping or the Firestore REST
        shape ``{"name": ..., "fields": {...}, "createTime": ...}``.
        """
        if not isinstance(raw, Mapping):
            raise MalformedDocument(
                "Document is not a JSON object", field="<document>"
            )
        fields = raw.get("fields")
        if isinstance(fields, Mapping) and set(raw) <= _ENVELOPE_KEYS:
            return cls(fields)
        return cls(raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TypedDocument):
            return NotImplemented
        return self.path == other.path and dict(self._fields) == dict(
            other._fields
        )

    def __repr__(self) -> str:
        return f"TypedDocument(path={self.path!r}, fields={sorted(self._fields)})"

    def value(self, name: str) -> TypedValue:
        """Parse and return the boxed value of *name*."""
        path = _join(self.path, name)
        if name not in self._fields:
            raise MalformedDocument(
                f"Missing field '{path}'", field=path
            )
        return parse_value(self._fields[name], path)

    def string(self, name: str) -> str:
        value: StringValue = _expect(
            self.value(name), StringValue, _join(self.path, name)
        )
        return value.value

    def integer(self, name: str) -> int:
        value: IntegerValue = _expect(
            self.value(name), IntegerValue, _join(self.path, name)
        )
        return value.value

    def double(self, name: str) -> float:
        value: DoubleValue = _expect(
            self.value(name), DoubleValue, _join(self.path, name)
        )
        return value.value

    def array(self, name: str) -> tuple[TypedValue, ...]:
        value: ArrayValue = _expect(
            self.value(name), ArrayValue, _join(self.path, name)
        )
        return value.values

    def strings(self, name: str) -> list[str]:
        """Read an array field whose elements are all ``stringValue``."""
        path = _join(self.path, name)
        result: list[str] = []
        for i, item in enumerate(self.array(name)):
            element: StringValue = _expect(
                item, StringValue, f"{path}[{i}]"
            )
            result.append(element.value)
        return result

    def maps(self, name: str) -> list["TypedDocument"]:
        """Read an array field whose elements are all ``mapValue``."""
        path = _join(self.path, name)
        result: list[TypedDocument] = []
        for i, item in enumerate(self.array(name)):
            element: MapValue = _expect(item, MapValue, f"{path}[{i}]")
            result.append(element.fields)
        return result
