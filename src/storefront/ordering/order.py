"""Order aggregate (CQRS) — a placed order and its immutable line snapshots.

Lifecycle driven by the payment processor:
    pending/pending → paid/paid           (checkout.session.completed)
    pending/pending → cancelled/cancelled (checkout.session.expired)
    pending/pending → cancelled/expired   (stale order sweep)

Administrators may overwrite either status with any value.
"""

from datetime import UTC, datetime
from enum import Enum

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String

from storefront.domain import storefront
from storefront.ordering.events import OrderCancelled, OrderPaid, OrderPlaced, OrderStatusUpdated
from storefront.utils.db import SCAN_LIMIT


class OrderStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class PaymentStatus(Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"
    EXPIRED = "expired"


@storefront.entity(part_of="Order")
class OrderItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    price_cents = Integer(required=True, min_value=0)
    position = Integer(default=0)


@storefront.aggregate
class Order:
    user_id = Identifier()  # Null for guest checkout
    # Free-form so administrators can record states outside the payment flow
    status = String(max_length=50, default=OrderStatus.PENDING.value)
    payment_status = String(max_length=50, default=PaymentStatus.PENDING.value)
    total_cents = Integer(required=True, min_value=0)
    currency = String(required=True, max_length=3)
    name = String(max_length=255)
    email = String(max_length=254)
    address_line1 = String(max_length=255)
    city = String(max_length=100)
    postal_code = String(max_length=20)
    vat_rate = Float()
    stripe_payment_intent_id = String(max_length=255)
    items = HasMany(OrderItem)
    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def place(cls, lines, currency, address, vat_rate, user_id=None):
        """Create a pending order from ``(product_id, quantity, price_cents)`` lines.

        The total is computed here and never taken from the client.
        """
        if not lines:
            raise ValidationError({"items": ["No items"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            status=OrderStatus.PENDING.value,
            payment_status=PaymentStatus.PENDING.value,
            total_cents=sum(price_cents * quantity for _, quantity, price_cents in lines),
            currency=currency,
            name=address.get("name"),
            email=address.get("email"),
            address_line1=address.get("line1"),
            city=address.get("city"),
            postal_code=address.get("postal_code"),
            vat_rate=vat_rate,
            created_at=now,
            updated_at=now,
        )
        for position, (product_id, quantity, price_cents) in enumerate(lines):
            order.add_items(
                OrderItem(
                    product_id=product_id,
                    quantity=quantity,
                    price_cents=price_cents,
                    position=position,
                )
            )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id) if user_id else None,
                total_cents=order.total_cents,
                currency=currency,
                item_count=len(lines),
            )
        )
        return order

    # -------------------------------------------------------------------
    # Payment transitions
    # -------------------------------------------------------------------
    @property
    def is_paid(self) -> bool:
        return self.payment_status == PaymentStatus.PAID.value

    @property
    def is_pending(self) -> bool:
        return (
            self.status == OrderStatus.PENDING.value and self.payment_status == PaymentStatus.PENDING.value
        )

    def mark_paid(self, payment_intent_id=None) -> bool:
        """Record a successful payment. A repeat delivery changes nothing."""
        if self.is_paid:
            return False

        self.status = OrderStatus.PAID.value
        self.payment_status = PaymentStatus.PAID.value
        self.stripe_payment_intent_id = payment_intent_id
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderPaid(order_id=str(self.id), payment_intent_id=payment_intent_id))
        return True

    def cancel_unpaid(self, payment_status=PaymentStatus.CANCELLED) -> bool:
        """Cancel a still-pending order; anything else is left alone."""
        if not self.is_pending:
            return False

        self.status = OrderStatus.CANCELLED.value
        self.payment_status = payment_status.value
        self.updated_at = datetime.now(UTC)
        self.raise_(OrderCancelled(order_id=str(self.id), reason=payment_status.value))
        return True

    # -------------------------------------------------------------------
    # Administration
    # -------------------------------------------------------------------
    def update_status(self, status=None, payment_status=None):
        if not status and not payment_status:
            raise ValidationError({"_entity": ["No fields to update"]})

        previous_status, previous_payment_status = self.status, self.payment_status
        if status:
            self.status = status
        if payment_status:
            self.payment_status = payment_status
        self.updated_at = datetime.now(UTC)

        self.raise_(
            OrderStatusUpdated(
                order_id=str(self.id),
                previous_status=previous_status,
                new_status=self.status,
                previous_payment_status=previous_payment_status,
                new_payment_status=self.payment_status,
            )
        )

    def ordered_items(self) -> list[OrderItem]:
        return sorted(self.items, key=lambda item: item.position or 0)


@storefront.repository(part_of=Order)
class OrderRepository:
    def for_user(self, user_id) -> list[Order]:
        return self._dao.query.filter(user_id=str(user_id)).order_by("-created_at").limit(SCAN_LIMIT).all().items

    def matching(self, status=None, payment_status=None) -> list[Order]:
        filters = {}
        if status:
            filters["status"] = status
        if payment_status:
            filters["payment_status"] = payment_status
        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return query.order_by("-created_at").limit(SCAN_LIMIT).all().items

    def pending_before(self, cutoff: datetime, since: datetime | None = None, limit: int = SCAN_LIMIT) -> list[Order]:
        """Oldest pending orders created before ``cutoff`` (and not before ``since``), at most ``limit``."""
        filters = {
            "status": OrderStatus.PENDING.value,
            "payment_status": PaymentStatus.PENDING.value,
            "created_at__lt": cutoff,
        }
        if since is not None:
            filters["created_at__gte"] = since
        return self._dao.query.filter(**filters).order_by("created_at").limit(limit).all().items
