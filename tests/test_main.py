# tests/test_main.py

"""Tests for command-line query construction."""

import unittest

from main import _build_parser, build_query
from storefront.models.listing_query import ListingQuery


def _query(*argv: str) -> ListingQuery:
    return build_query(_build_parser().parse_args(list(argv)))


class TestBuildQuery(unittest.TestCase):
    """Flags and --location combine into one ListingQuery."""

    def test_no_flags_is_default(self) -> None:
        self.assertEqual(_query(), ListingQuery())

    def test_flags(self) -> None:
        self.assertEqual(
            _query("-s", "phone", "--sort", "price-asc", "-c", "beauty", "-p", "3"),
            ListingQuery("phone", "price-asc", "beauty", 3),
        )

    def test_location(self) -> None:
        self.assertEqual(
            _query("--location", "/?search=lamp&page=2"),
            ListingQuery(search="lamp", page=2),
        )

    def test_flags_override_location(self) -> None:
        self.assertEqual(
            _query("--location", "/?search=lamp&page=2", "-p", "5"),
            ListingQuery(search="lamp", page=5),
        )

    def test_list_mode_defaults_to_json(self) -> None:
        args = _build_parser().parse_args(["--list"])
        self.assertTrue(args.headless)
        self.assertEqual(args.output_format, "json")


if __name__ == "__main__":
    unittest.main()
