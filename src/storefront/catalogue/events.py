"""Domain events for the Product and Category aggregates."""

from protean.fields import Boolean, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductCreated:
    __version__ = 1

    product_id: Identifier(required=True)
    slug: String(required=True, max_length=200)
    price_cents: Integer(required=True)
    currency: String(required=True, max_length=3)


@storefront.event(part_of="Product")
class ProductDetailsUpdated:
    __version__ = 1

    product_id: Identifier(required=True)
    slug: String(required=True, max_length=200)


@storefront.event(part_of="Product")
class ProductPriceChanged:
    """Carts keep their snapshot; only new cart writes and checkouts see the new price."""

    __version__ = 1

    product_id: Identifier(required=True)
    previous_price_cents: Integer(required=True)
    new_price_cents: Integer(required=True)
    currency: String(required=True, max_length=3)


@storefront.event(part_of="Product")
class ProductImageAdded:
    __version__ = 1

    product_id: Identifier(required=True)
    image_id: Identifier(required=True)
    path: String(required=True, max_length=500)
    is_primary: Boolean(default=False)


@storefront.event(part_of="Product")
class ProductDeleted:
    __version__ = 1

    product_id: Identifier(required=True)


@storefront.event(part_of="Category")
class CategoryCreated:
    __version__ = 1

    category_id: Identifier(required=True)
    slug: String(required=True, max_length=200)
