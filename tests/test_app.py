# tests/test_app.py

"""Smoke tests for the TUI application using Textual's Pilot."""

import unittest
from typing import Any
from unittest.mock import MagicMock, patch

from textual.pilot import Pilot
from textual.widgets import Button, Input, LoadingIndicator, Select, Static

from storefront.config.settings import Settings
from storefront.errors import FetchFailure
from storefront.models.listing_query import ListingQuery
from storefront.services.listing_controller import ListingController
from storefront.ui.app import StorefrontApp
from storefront.ui.product_card import ProductCard


def _doc(product_id: int, images: int = 1) -> dict[str, Any]:
    return {
        "id": product_id,
        "title": f"Product {product_id}",
        "description": "A product",
        "price": 10.0,
        "category": "beauty",
        "stock": 2,
        "rating": 4.5,
        "images": [
            f"https://cdn.example.com/{product_id}/{i}.png"
            for i in range(images)
        ],
        "thumbnail": "",
        "reviews": [],
    }


class FakeClient:
    """Serves the same document list for every query."""

    def __init__(
        self,
        documents: list[Any] | None = None,
        categories: list[str] | None = None,
        fail: bool = False,
    ) -> None:
        self.documents = documents or []
        self.categories = categories or []
        self.fail = fail
        self.queries: list[ListingQuery] = []

    def list_categories(self) -> list[str]:
        return list(self.categories)

    def list_products(
        self, query: ListingQuery, page_size: int | None = None
    ) -> list[Any]:
        self.queries.append(query)
        if self.fail:
            raise FetchFailure("HTTP 500", url="fake", status_code=500)
        return list(self.documents)


def _app(
    client: FakeClient, query: ListingQuery | None = None
) -> StorefrontApp:
    controller = ListingController(client=client)  # type: ignore[arg-type]
    return StorefrontApp(initial_query=query, controller=controller)


async def _settle(app: StorefrontApp, pilot: Pilot[object]) -> None:
    """Let pending messages and workers finish."""
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()


class TestStorefrontApp(unittest.IsolatedAsyncioTestCase):
    """Smoke tests for the Textual TUI."""

    async def test_app_composes_without_crash(self) -> None:
        """Verify the app starts and renders all widgets."""
        app = _app(FakeClient())
        async with app.run_test() as pilot:
            app.query_one("#search_input", Input)
            app.query_one("#search_btn", Button)
            app.query_one("#sort_select", Select)
            app.query_one("#category_select", Select)
            app.query_one("#reset_btn", Button)
            app.query_one("#status", Static)
            app.query_one("#loader", LoadingIndicator)
            await _settle(app, pilot)

    async def test_initial_load_renders_cards(self) -> None:
        client = FakeClient(documents=[_doc(1), _doc(2), _doc(3)])
        app = _app(client)
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            cards = list(app.query(ProductCard))
            self.assertEqual([c.product.id for c in cards], [1, 2, 3])
            self.assertFalse(app.query_one("#loader").display)
            self.assertFalse(app.query_one("#empty_state").display)
            self.assertEqual(client.queries, [ListingQuery()])

    async def test_initial_query_is_reflected_in_controls(self) -> None:
        query = ListingQuery(search="lamp", sort="price-asc", page=2)
        app = _app(FakeClient(documents=[_doc(1)]), query)
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            self.assertEqual(
                app.query_one("#search_input", Input).value, "lamp"
            )
            self.assertEqual(
                app.query_one("#sort_select", Select).value, "price-asc"
            )
            self.assertEqual(app.controller.query, query)

    async def test_empty_result_shows_empty_state(self) -> None:
        app = _app(FakeClient())
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            self.assertTrue(app.query_one("#empty_state").display)
            self.assertFalse(app.query_one("#product_grid").display)
            self.assertEqual(len(app.query(ProductCard)), 0)

    async def test_fetch_failure_shows_empty_state(self) -> None:
        app = _app(FakeClient(fail=True))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            self.assertTrue(app.query_one("#empty_state").display)
            assert app.controller.last_page is not None
            self.assertEqual(app.controller.last_page.error, "HTTP 500")

    async def test_gallery_controls_need_two_images(self) -> None:
        client = FakeClient(documents=[_doc(1, images=3), _doc(2, images=1)])
        app = _app(client)
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            first, second = list(app.query(ProductCard))
            self.assertEqual(len(first.query(".gallery_controls")), 1)
            self.assertEqual(len(second.query(".gallery_controls")), 0)

    async def test_gallery_buttons_cycle_images(self) -> None:
        app = _app(FakeClient(documents=[_doc(1, images=3)]))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            card = app.query_one(ProductCard)
            card.query_one(".prev_image", Button).press()
            await _settle(app, pilot)
            self.assertEqual(card.gallery.index, 2)

            card.query_one(".next_image", Button).press()
            await _settle(app, pilot)
            self.assertEqual(card.gallery.index, 0)

    async def test_full_page_enables_next_only(self) -> None:
        documents = [_doc(i) for i in range(1, Settings.PAGE_SIZE + 1)]
        app = _app(FakeClient(documents=documents))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            self.assertTrue(app.query_one("#prev_btn", Button).disabled)
            self.assertFalse(app.query_one("#next_btn", Button).disabled)

            app.action_next_page()
            await _settle(app, pilot)

            self.assertEqual(app.current_query.page, 2)
            self.assertEqual(app.controller.query.page, 2)
            self.assertFalse(app.query_one("#prev_btn", Button).disabled)

    async def test_short_page_disables_next(self) -> None:
        app = _app(FakeClient(documents=[_doc(1)]))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            self.assertTrue(app.query_one("#next_btn", Button).disabled)
            app.action_next_page()
            await _settle(app, pilot)
            self.assertEqual(app.current_query.page, 1)

    async def test_search_submits_and_resets_page(self) -> None:
        client = FakeClient(documents=[_doc(1)])
        app = _app(client, ListingQuery(page=4))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            app.query_one("#search_input", Input).value = "  phone "
            app.query_one("#search_btn", Button).press()
            await _settle(app, pilot)

            self.assertEqual(
                app.current_query, ListingQuery(search="phone")
            )
            self.assertEqual(client.queries[-1], ListingQuery(search="phone"))

    async def test_category_change_loads_first_page(self) -> None:
        client = FakeClient(
            documents=[_doc(1)], categories=["beauty", "furniture"]
        )
        app = _app(client, ListingQuery(page=3))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            app.query_one("#category_select", Select).value = "furniture"
            await _settle(app, pilot)

            self.assertEqual(
                app.current_query, ListingQuery(category="furniture")
            )
            self.assertEqual(client.queries[-1].category, "furniture")

    async def test_reset_clears_everything(self) -> None:
        query = ListingQuery("lamp", "price-desc", "furniture", 5)
        app = _app(FakeClient(documents=[_doc(1)]), query)
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            app.query_one("#reset_btn", Button).press()
            await _settle(app, pilot)

            self.assertEqual(app.current_query, ListingQuery())
            self.assertEqual(
                app.query_one("#search_input", Input).value, ""
            )
            self.assertEqual(
                app.query_one("#category_select", Select).value, ""
            )

    async def test_card_buttons_open_routes(self) -> None:
        app = _app(FakeClient(documents=[_doc(7)]))
        with patch("storefront.ui.app.webbrowser.open") as mock_open:
            async with app.run_test() as pilot:
                await _settle(app, pilot)

                card = app.query_one(ProductCard)
                card.query_one(".add_to_cart", Button).press()
                await _settle(app, pilot)
                card.query_one(".open_detail", Button).press()
                await _settle(app, pilot)

        opened = [c.args[0] for c in mock_open.call_args_list]
        self.assertEqual(
            opened,
            [
                f"{Settings.SITE_URL}/cart/add/7",
                f"{Settings.SITE_URL}/api/products/7",
            ],
        )

    async def test_copy_url_copies_detail_link(self) -> None:
        app = _app(FakeClient(documents=[_doc(3)]))
        async with app.run_test() as pilot:
            await _settle(app, pilot)

            card = app.query_one(ProductCard)
            card.query_one(".open_detail", Button).focus()
            await pilot.pause()

            mock_clip = MagicMock()
            with patch.dict("sys.modules", {"pyperclip": mock_clip}):
                app.action_copy_url()
                await pilot.pause()

            mock_clip.copy.assert_called_once_with(
                f"{Settings.SITE_URL}/api/products/3"
            )


if __name__ == "__main__":
    unittest.main()
