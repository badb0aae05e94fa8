"""Product aggregate root with the ProductImage entity."""

from datetime import UTC, datetime

from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String, Text
from protean.utils.query import Q

from storefront.catalogue.events import (
    ProductCreated,
    ProductDetailsUpdated,
    ProductImageAdded,
    ProductPriceChanged,
)
from storefront.catalogue.validation import validate_slug
from storefront.domain import storefront


@storefront.entity(part_of="Product")
class ProductImage:
    """An image attached by path.

    More than one image may carry the primary flag; ``Product.primary_image``
    decides which one is shown.
    """

    path: String(required=True, max_length=500)
    is_primary: Boolean(default=False)
    position: Integer(default=0)


@storefront.aggregate
class Product:
    """Product aggregate root."""

    name: String(required=True, max_length=255)
    slug: String(required=True, max_length=200, unique=True)
    description: Text()
    price_cents: Integer(required=True, min_value=0)
    currency: String(required=True, max_length=3)
    category_id: Identifier()
    images: HasMany(ProductImage)
    created_at: DateTime(default=lambda: datetime.now(UTC))
    updated_at: DateTime(default=lambda: datetime.now(UTC))

    @classmethod
    def create(cls, name, slug, price_cents, currency, description=None, category_id=None):
        now = datetime.now(UTC)
        product = cls(
            name=name.strip(),
            slug=validate_slug(slug),
            description=description or "",
            price_cents=price_cents,
            currency=currency,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductCreated(
                product_id=str(product.id),
                slug=product.slug,
                price_cents=product.price_cents,
                currency=product.currency,
            )
        )
        return product

    def update_details(self, name, slug, price_cents, currency, description=None, category_id=None):
        """Replace every editable field at once."""
        previous_price = self.price_cents

        self.name = name.strip()
        self.slug = validate_slug(slug)
        self.description = description or ""
        self.price_cents = price_cents
        self.currency = currency
        self.category_id = category_id
        self.updated_at = datetime.now(UTC)

        self.raise_(ProductDetailsUpdated(product_id=str(self.id), slug=self.slug))

        if previous_price != self.price_cents:
            self.raise_(
                ProductPriceChanged(
                    product_id=str(self.id),
                    previous_price_cents=previous_price,
                    new_price_cents=self.price_cents,
                    currency=self.currency,
                )
            )

    def add_image(self, path, is_primary=False):
        image = ProductImage(
            path=path.strip(),
            is_primary=bool(is_primary),
            position=len(self.images),
        )
        self.add_images(image)
        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImageAdded(
                product_id=str(self.id),
                image_id=str(image.id),
                path=image.path,
                is_primary=image.is_primary,
            )
        )
        return image

    def primary_image(self) -> str | None:
        """Path of the first primary image, else of the first image attached."""
        if not self.images:
            return None
        ordered = sorted(self.images, key=lambda image: (not image.is_primary, image.position))
        return ordered[0].path

    def to_dict(self, category=None) -> dict:
        return {
            "id": str(self.id),
            "name": self.name,
            "slug": self.slug,
            "description": self.description or "",
            "price_cents": self.price_cents,
            "currency": self.currency,
            "category_id": str(self.category_id) if self.category_id else None,
            "category_name": category.name if category else None,
            "category_slug": category.slug if category else None,
            "image": self.primary_image(),
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_slug(self, slug: str) -> Product | None:
        return self._dao.query.filter(slug=(slug or "").strip().lower()).all().first

    def search(self, needle: str = "", category_id=None, order_by=("-created_at",), offset: int = 0, limit: int = 12):
        """One page of products; the result set's ``total`` counts every match."""
        query = self._dao.query
        if needle:
            query = query.filter(Q(name__icontains=needle) | Q(description__icontains=needle))
        if category_id:
            query = query.filter(category_id=str(category_id))
        return query.order_by(list(order_by)).offset(offset).limit(limit).all()
