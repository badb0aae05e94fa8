"""Order queries for shoppers and administrators."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.identity.user import User
from storefront.ordering.order import Order


def _live_product(product_id, cache: dict):
    key = str(product_id)
    if key not in cache:
        try:
            cache[key] = current_domain.repository_for(Product).get(key)
        except ObjectNotFoundError:
            cache[key] = None
    return cache[key]


def _summary(order: Order) -> dict:
    return {
        "id": str(order.id),
        "user_id": str(order.user_id) if order.user_id else None,
        "status": order.status,
        "payment_status": order.payment_status,
        "total_cents": order.total_cents,
        "currency": order.currency,
        "vat_rate": order.vat_rate,
        "created_at": order.created_at.isoformat() if order.created_at else None,
    }


def list_my_orders(user_id) -> list[dict]:
    """The user's orders, newest first.

    Quantities and prices come from the order's own snapshot. Name, slug and
    image are read from the product as it is now and are ``None`` once the
    product has been deleted.
    """
    products: dict = {}
    orders = []
    for order in current_domain.repository_for(Order).for_user(user_id):
        items = []
        for item in order.ordered_items():
            product = _live_product(item.product_id, products)
            items.append(
                {
                    "product_id": str(item.product_id),
                    "quantity": item.quantity,
                    "unit_price_cents": item.price_cents,
                    "name": product.name if product is not None else None,
                    "slug": product.slug if product is not None else None,
                    "image": product.primary_image() if product is not None else None,
                }
            )
        orders.append({**_summary(order), "items": items})
    return orders


def list_all_orders(status: str | None = None, payment_status: str | None = None) -> list[dict]:
    """Every order, newest first, with the owner's email (the contact email for guests)."""
    user_repo = current_domain.repository_for(User)
    emails: dict = {}

    orders = []
    for order in current_domain.repository_for(Order).matching(status=status, payment_status=payment_status):
        email = order.email
        if order.user_id:
            key = str(order.user_id)
            if key not in emails:
                try:
                    emails[key] = user_repo.get(key).email
                except ObjectNotFoundError:
                    emails[key] = None
            email = emails[key] or order.email
        orders.append({**_summary(order), "email": email})
    return orders
