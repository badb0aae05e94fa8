"""Cart synchronization — the client writes its whole cart as one batch."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Text
from protean.utils.globals import current_domain

from storefront.cart.cart import MAX_BATCH_SIZE, Cart, ProductSnapshot
from storefront.catalogue.product import Product
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Cart")
class SyncCart:
    user_id = Identifier(required=True)
    items = Text()  # JSON array of {"product_id": ..., "quantity": ...}


def _entries(raw) -> list[tuple[str, int]]:
    """Decode the batch, keep the first entries and drop those without a product id."""
    if not raw:
        return []
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"items": ["Items must be a JSON array"]}) from None
    if not isinstance(decoded, list):
        raise ValidationError({"items": ["Items must be a JSON array"]})

    entries = []
    for entry in decoded[:MAX_BATCH_SIZE]:
        if not isinstance(entry, dict):
            continue
        product_id = str(entry.get("product_id") or "").strip()
        if not product_id:
            continue
        try:
            quantity = int(entry.get("quantity") or 0)
        except (TypeError, ValueError):
            raise ValidationError({"quantity": ["Quantity must be a whole number"]}) from None
        entries.append((product_id, quantity))
    return entries


@storefront.command_handler(part_of=Cart)
class SyncCartHandler:
    @handle(SyncCart)
    def sync_cart(self, command):
        """Apply every entry in one unit of work.

        ``quantity <= 0`` removes the line, unknown products are skipped and
        known ones are inserted or re-snapshotted. Returns the number of lines
        written or removed.
        """
        entries = _entries(command.items)
        if not entries:
            return 0

        cart_repo = current_domain.repository_for(Cart)
        product_repo = current_domain.repository_for(Product)

        cart = cart_repo.find_by_user(command.user_id)
        if cart is None:
            cart = Cart.create(user_id=command.user_id)

        applied = 0
        skipped = 0
        for product_id, quantity in entries:
            if quantity <= 0:
                applied += int(cart.remove_product(product_id))
                continue

            try:
                product = product_repo.get(product_id)
            except ObjectNotFoundError:
                skipped += 1
                continue

            cart.set_item(ProductSnapshot.of(product), quantity)
            applied += 1

        cart_repo.add(cart)
        if skipped:
            logger.info("Skipped unknown products in cart batch", user_id=str(command.user_id), skipped=skipped)
        return applied


def get_cart(user_id) -> list[dict]:
    """The user's cart lines in insertion order.

    Each field comes from the line's snapshot; only a null snapshot field falls
    back to the live product, then to a fixed default.
    """
    cart = current_domain.repository_for(Cart).find_by_user(user_id)
    if cart is None:
        return []

    default_currency = get_settings().currency
    product_repo = current_domain.repository_for(Product)

    lines = []
    for item in cart.ordered_items():
        live = None
        if None in (item.unit_price_cents, item.currency, item.name, item.image):
            try:
                live = product_repo.get(item.product_id)
            except ObjectNotFoundError:
                live = None

        lines.append(
            {
                "product_id": str(item.product_id),
                "quantity": item.quantity,
                "unit_price_cents": _first_set(item.unit_price_cents, live.price_cents if live is not None else None, 0),
                "currency": _first_set(item.currency, live.currency if live is not None else None, default_currency),
                "name": _first_set(item.name, live.name if live is not None else None, "Unknown"),
                "image": _first_set(item.image, live.primary_image() if live is not None else None, ""),
            }
        )
    return lines


def _first_set(*values):
    return next(value for value in values if value is not None)
