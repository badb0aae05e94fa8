"""Domain events for the Order aggregate."""

from protean.fields import Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    __version__ = 1

    order_id = Identifier(required=True)
    user_id = Identifier()
    total_cents = Integer(required=True)
    currency = String(required=True, max_length=3)
    item_count = Integer(required=True)


@storefront.event(part_of="Order")
class OrderPaid:
    __version__ = 1

    order_id = Identifier(required=True)
    payment_intent_id = String(max_length=255)


@storefront.event(part_of="Order")
class OrderCancelled:
    """A pending order whose payment never happened."""

    __version__ = 1

    order_id = Identifier(required=True)
    reason = String(required=True, max_length=50)


@storefront.event(part_of="Order")
class OrderStatusUpdated:
    __version__ = 1

    order_id = Identifier(required=True)
    previous_status = String(max_length=50)
    new_status = String(max_length=50)
    previous_payment_status = String(max_length=50)
    new_payment_status = String(max_length=50)
