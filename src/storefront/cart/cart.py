"""Cart aggregate (CQRS) — one cart per user, one line per product.

Each line keeps a snapshot of the product's name, unit price, currency and
image as they were when the line was last written. Reads trust the snapshot;
it is only refreshed by another write to the same line.
"""

from dataclasses import dataclass
from datetime import UTC, datetime

from protean.fields import DateTime, HasMany, Identifier, Integer, String

from storefront.cart.events import CartItemRemoved, CartItemSaved
from storefront.domain import storefront

MAX_BATCH_SIZE = 100


@dataclass(frozen=True)
class ProductSnapshot:
    product_id: str
    name: str
    unit_price_cents: int
    currency: str
    image: str

    @classmethod
    def of(cls, product) -> "ProductSnapshot":
        return cls(
            product_id=str(product.id),
            name=product.name,
            unit_price_cents=product.price_cents,
            currency=product.currency,
            image=product.primary_image() or "",
        )


@storefront.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    # Snapshot columns; null means "fall back to the live product"
    unit_price_cents = Integer()
    currency = String(max_length=3)
    name = String(max_length=255)
    image = String(max_length=500)
    position = Integer(default=0)
    added_at = DateTime()
    updated_at = DateTime()


@storefront.aggregate
class Cart:
    user_id = Identifier(required=True, unique=True)
    items = HasMany(CartItem)
    created_at = DateTime()
    updated_at = DateTime()

    @classmethod
    def create(cls, user_id):
        now = datetime.now(UTC)
        return cls(user_id=user_id, created_at=now, updated_at=now)

    def item_for(self, product_id) -> CartItem | None:
        return next((i for i in self.items if str(i.product_id) == str(product_id)), None)

    def ordered_items(self) -> list[CartItem]:
        """Lines in insertion order."""
        return sorted(self.items, key=lambda item: item.position or 0)

    def set_item(self, snapshot: ProductSnapshot, quantity: int):
        """Insert the line for ``snapshot.product_id`` or overwrite its quantity and snapshot."""
        now = datetime.now(UTC)
        existing = self.item_for(snapshot.product_id)

        if existing:
            existing.quantity = quantity
            existing.unit_price_cents = snapshot.unit_price_cents
            existing.currency = snapshot.currency
            existing.name = snapshot.name
            existing.image = snapshot.image
            existing.updated_at = now
        else:
            next_position = max((item.position or 0 for item in self.items), default=-1) + 1
            self.add_items(
                CartItem(
                    product_id=snapshot.product_id,
                    quantity=quantity,
                    unit_price_cents=snapshot.unit_price_cents,
                    currency=snapshot.currency,
                    name=snapshot.name,
                    image=snapshot.image,
                    position=next_position,
                    added_at=now,
                    updated_at=now,
                )
            )

        self.updated_at = now
        self.raise_(
            CartItemSaved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=snapshot.product_id,
                quantity=quantity,
                unit_price_cents=snapshot.unit_price_cents,
            )
        )

    def remove_product(self, product_id) -> bool:
        """Drop the line for ``product_id``; a missing line is not an error."""
        item = self.item_for(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.updated_at = datetime.now(UTC)
        self.raise_(
            CartItemRemoved(
                cart_id=str(self.id),
                user_id=str(self.user_id),
                product_id=str(product_id),
            )
        )
        return True


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_by_user(self, user_id) -> Cart | None:
        return self._dao.query.filter(user_id=str(user_id)).all().first
