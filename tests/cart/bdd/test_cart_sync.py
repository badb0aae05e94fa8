"""BDD tests for batch cart synchronization."""

import json

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, scenarios, then, when

from storefront.cart.synchronization import SyncCart, get_cart
from storefront.catalogue.product import Product

scenarios("features/cart_sync.feature")


@pytest.fixture()
def products():
    return {}


def _save(user, entries):
    items = [{"product_id": product_id, "quantity": quantity} for product_id, quantity in entries]
    current_domain.process(SyncCart(user_id=str(user.id), items=json.dumps(items)), asynchronous=False)


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a signed-in shopper", target_fixture="shopper")
def _(make_user):
    return make_user()


@given(parsers.cfparse('a product "{name}" priced {price:d}'))
def _(make_product, products, name, price):
    products[name] = make_product(name=name, price_cents=price)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper saves {qty_a:d} of "{name_a}" and {qty_b:d} of "{name_b}"'))
def _(shopper, products, qty_a, name_a, qty_b, name_b):
    _save(shopper, [(str(products[name_a].id), qty_a), (str(products[name_b].id), qty_b)])


@when(parsers.cfparse('the shopper sets "{name}" to {qty:d}'))
def _(shopper, products, qty, name):
    _save(shopper, [(str(products[name].id), qty)])


@when(parsers.cfparse('the shopper saves {qty_a:d} of an unknown product and {qty_b:d} of "{name}"'))
def _(shopper, products, qty_a, qty_b, name):
    _save(shopper, [("no-such-product", qty_a), (str(products[name].id), qty_b)])


@when(parsers.cfparse('the price of "{name}" changes to {price:d}'))
def _(products, name, price):
    repo = current_domain.repository_for(Product)
    product = repo.get(products[name].id)
    product.update_details(name=product.name, slug=product.slug, price_cents=price, currency=product.currency)
    repo.add(product)


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse("the cart holds {count:d} lines"))
@then(parsers.cfparse("the cart holds {count:d} line"))
def _(shopper, count):
    assert len(get_cart(str(shopper.id))) == count


@then(parsers.cfparse('the "{name}" line is {qty:d} at {price:d}'))
def _(shopper, products, name, qty, price):
    line = next(line for line in get_cart(str(shopper.id)) if line["product_id"] == str(products[name].id))
    assert line["quantity"] == qty
    assert line["unit_price_cents"] == price
