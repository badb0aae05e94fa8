"""Application tests for batch cart synchronization and cart reads."""

import json

import pytest
from protean import current_domain
from protean.exceptions import ValidationError

from storefront.cart.cart import MAX_BATCH_SIZE, Cart, CartItem
from storefront.cart.synchronization import SyncCart, get_cart
from storefront.catalogue.product import Product

USER_ID = "user-001"


def _sync(*entries, user_id=USER_ID):
    items = [{"product_id": product_id, "quantity": quantity} for product_id, quantity in entries]
    return current_domain.process(SyncCart(user_id=user_id, items=json.dumps(items)), asynchronous=False)


def _reprice(product, price_cents):
    repo = current_domain.repository_for(Product)
    stored = repo.get(product.id)
    stored.update_details(name=stored.name, slug=stored.slug, price_cents=price_cents, currency=stored.currency)
    repo.add(stored)


class TestSyncCart:
    def test_empty_cart(self):
        assert get_cart(USER_ID) == []

    def test_insert_snapshots_product(self, make_product):
        lamp = make_product(name="Lamp", price_cents=1999, images=["/uploads/lamp.jpg"])
        _sync((str(lamp.id), 2))
        assert get_cart(USER_ID) == [
            {
                "product_id": str(lamp.id),
                "quantity": 2,
                "unit_price_cents": 1999,
                "currency": "GBP",
                "name": "Lamp",
                "image": "/uploads/lamp.jpg",
            }
        ]

    def test_upsert_is_idempotent(self, make_product):
        lamp = make_product(name="Lamp")
        _sync((str(lamp.id), 3))
        first = get_cart(USER_ID)
        _sync((str(lamp.id), 3))
        assert get_cart(USER_ID) == first
        assert len(current_domain.repository_for(Cart).find_by_user(USER_ID).items) == 1

    def test_quantity_zero_removes_exactly_that_item(self, make_product):
        lamp = make_product(name="Lamp")
        rug = make_product(name="Rug")
        _sync((str(lamp.id), 1), (str(rug.id), 1))
        _sync((str(lamp.id), 0))
        assert [line["product_id"] for line in get_cart(USER_ID)] == [str(rug.id)]

    def test_negative_quantity_removes(self, make_product):
        lamp = make_product(name="Lamp")
        _sync((str(lamp.id), 1))
        _sync((str(lamp.id), -3))
        assert get_cart(USER_ID) == []

    def test_removing_absent_item_is_not_an_error(self):
        assert _sync(("never-added", 0)) == 0

    def test_unknown_ids_are_skipped_in_mixed_batch(self, make_product):
        lamp = make_product(name="Lamp")
        applied = _sync(("ghost-product", 2), (str(lamp.id), 1))
        assert applied == 1
        assert [line["product_id"] for line in get_cart(USER_ID)] == [str(lamp.id)]

    def test_blank_ids_are_skipped(self, make_product):
        lamp = make_product(name="Lamp")
        _sync(("", 1), ("   ", 1), (str(lamp.id), 1))
        assert len(get_cart(USER_ID)) == 1

    def test_entries_beyond_batch_limit_are_ignored(self, make_product):
        lamp = make_product(name="Lamp")
        filler = [("ghost", 1)] * MAX_BATCH_SIZE
        _sync(*filler, (str(lamp.id), 1))
        assert get_cart(USER_ID) == []

    def test_carts_are_per_user(self, make_product):
        lamp = make_product(name="Lamp")
        _sync((str(lamp.id), 1), user_id="user-a")
        assert get_cart("user-b") == []

    def test_malformed_batch(self):
        with pytest.raises(ValidationError):
            current_domain.process(SyncCart(user_id=USER_ID, items="{not json"), asynchronous=False)


class TestSnapshots:
    def test_snapshot_survives_price_change(self, make_product):
        lamp = make_product(name="Lamp", price_cents=500)
        _sync((str(lamp.id), 1))
        _reprice(lamp, 900)
        assert get_cart(USER_ID)[0]["unit_price_cents"] == 500

    def test_write_refreshes_snapshot(self, make_product):
        lamp = make_product(name="Lamp", price_cents=500)
        _sync((str(lamp.id), 1))
        _reprice(lamp, 900)
        _sync((str(lamp.id), 2))
        line = get_cart(USER_ID)[0]
        assert line["unit_price_cents"] == 900
        assert line["quantity"] == 2

    def test_snapshot_survives_product_deletion(self, make_product):
        lamp = make_product(name="Lamp", price_cents=500)
        _sync((str(lamp.id), 1))
        repo = current_domain.repository_for(Product)
        repo._dao.delete(repo.get(lamp.id))
        assert get_cart(USER_ID)[0]["name"] == "Lamp"


class TestSnapshotFallback:
    def _cart_with_bare_line(self, product_id):
        cart = Cart.create(user_id=USER_ID)
        cart.add_items(CartItem(product_id=product_id, quantity=1))
        current_domain.repository_for(Cart).add(cart)

    def test_missing_snapshot_falls_back_to_live_product(self, make_product):
        lamp = make_product(name="Lamp", price_cents=700, images=["/uploads/lamp.jpg"])
        self._cart_with_bare_line(str(lamp.id))
        line = get_cart(USER_ID)[0]
        assert line["unit_price_cents"] == 700
        assert line["name"] == "Lamp"
        assert line["image"] == "/uploads/lamp.jpg"

    def test_missing_snapshot_and_product_use_defaults(self):
        self._cart_with_bare_line("deleted-product")
        line = get_cart(USER_ID)[0]
        assert line["unit_price_cents"] == 0
        assert line["currency"] == "GBP"
        assert line["name"] == "Unknown"
        assert line["image"] == ""
