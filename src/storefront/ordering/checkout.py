"""Checkout — turn submitted line items into a pending order and a hosted payment page."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.payments.gateway import get_gateway
from storefront.payments.gateway.port import LineItem
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

ADDRESS_FIELDS = ("name", "email", "line1", "city", "postal_code")


@storefront.command(part_of="Order")
class StartCheckout:
    user_id = Identifier()  # Set when the shopper is signed in
    address = Text()  # JSON: {name, email, line1, city, postal_code}
    items = Text()  # JSON: [{"id": product_id, "qty": n}]


def _requested_lines(raw) -> list[tuple[str, int]]:
    try:
        entries = json.loads(raw) if raw else []
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"items": ["Items must be a JSON array"]}) from None
    if not isinstance(entries, list) or not entries:
        raise ValidationError({"items": ["No items"]})

    lines = []
    for entry in entries:
        if not isinstance(entry, dict) or not str(entry.get("id") or "").strip():
            raise ValidationError({"items": ["Invalid item in cart"]})
        try:
            quantity = int(entry.get("qty") or 1)
        except (TypeError, ValueError):
            raise ValidationError({"items": ["Invalid item in cart"]}) from None
        lines.append((str(entry["id"]).strip(), max(1, quantity)))
    return lines


def _address(raw) -> dict:
    try:
        address = json.loads(raw) if raw else {}
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"address": ["Address must be a JSON object"]}) from None
    if not isinstance(address, dict):
        raise ValidationError({"address": ["Address must be a JSON object"]})
    return {field: str(address.get(field) or "").strip() or None for field in ADDRESS_FIELDS}


@storefront.command_handler(part_of=Order)
class StartCheckoutHandler:
    @handle(StartCheckout)
    def start_checkout(self, command):
        """Create the order and its payment page in one unit of work.

        Prices come from the catalogue as it is now; any unknown product
        rejects the whole request. The order is only stored once the
        processor has issued a session, so a gateway failure leaves nothing behind.
        """
        settings = get_settings()
        requested = _requested_lines(command.items)
        address = _address(command.address)

        product_repo = current_domain.repository_for(Product)
        products = {}
        for product_id, _ in requested:
            if product_id in products:
                continue
            try:
                products[product_id] = product_repo.get(product_id)
            except ObjectNotFoundError:
                raise ValidationError({"items": ["Invalid item in cart"]}) from None

        order = Order.place(
            lines=[(product_id, quantity, products[product_id].price_cents) for product_id, quantity in requested],
            currency=settings.currency,
            address=address,
            vat_rate=settings.vat_rate,
            user_id=command.user_id,
        )
        order_id = str(order.id)
        session = get_gateway().create_checkout_session(
            order_id=order_id,
            line_items=[
                LineItem(
                    name=products[product_id].name,
                    unit_amount=products[product_id].price_cents,
                    quantity=quantity,
                    currency=products[product_id].currency.lower(),
                )
                for product_id, quantity in requested
            ],
            success_url=f"{settings.frontend_url.rstrip('/')}/checkout?success=1&order={order_id}",
            cancel_url=f"{settings.frontend_url.rstrip('/')}/checkout?canceled=1&order={order_id}",
        )
        current_domain.repository_for(Order).add(order)

        logger.info(
            "Checkout started",
            order_id=order_id,
            total_cents=order.total_cents,
            session_id=session.session_id,
        )
        return {"url": session.url, "order_id": order_id}
