"""Catalogue administration — product and category commands and handlers."""

import json

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Boolean, Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.events import ProductDeleted
from storefront.catalogue.product import Product
from storefront.catalogue.validation import normalize_currency, parse_price_cents, validate_slug
from storefront.config import get_settings
from storefront.domain import storefront
from storefront.exceptions import ConflictError
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(max_length=255)
    slug: String(max_length=200)
    description: Text()
    # Raw client value: integer minor units or a decimal major-unit string
    price: String(max_length=50)
    currency: String(max_length=3)
    category_id: Identifier()
    image_paths: Text()  # JSON array of paths; the first becomes primary


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    name: String(max_length=255)
    slug: String(max_length=200)
    description: Text()
    price: String(max_length=50)
    currency: String(max_length=3)
    category_id: Identifier()
    image_paths: Text()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


@storefront.command(part_of="Product")
class AddProductImage:
    product_id: Identifier(required=True)
    path: String(required=True, max_length=500)
    is_primary: Boolean(default=False)


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(max_length=100)
    slug: String(max_length=200)


def _image_paths(raw) -> list[str]:
    if not raw:
        return []
    try:
        paths = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        raise ValidationError({"image_paths": ["Image paths must be a JSON array"]}) from None
    if not isinstance(paths, list):
        raise ValidationError({"image_paths": ["Image paths must be a JSON array"]})
    return [str(path).strip() for path in paths if str(path).strip()]


def _product_fields(command) -> dict:
    """Validate the editable product fields shared by create and update."""
    name = (command.name or "").strip()
    if not name:
        raise ValidationError({"name": ["Name is required"]})

    category_id = command.category_id or None
    if category_id is not None:
        try:
            current_domain.repository_for(Category).get(category_id)
        except ObjectNotFoundError:
            raise ValidationError({"category_id": ["Invalid category"]}) from None

    return {
        "name": name,
        "slug": validate_slug(command.slug),
        "description": (command.description or "").strip(),
        "price_cents": parse_price_cents(command.price),
        "currency": normalize_currency(command.currency, get_settings().currency),
        "category_id": category_id,
    }


def _ensure_slug_available(slug: str, product_id=None) -> None:
    existing = current_domain.repository_for(Product).find_by_slug(slug)
    if existing is not None and str(existing.id) != str(product_id):
        raise ConflictError("Slug already exists. Choose a different slug.")


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        fields = _product_fields(command)
        _ensure_slug_available(fields["slug"])

        product = Product.create(**fields)
        for index, path in enumerate(_image_paths(command.image_paths)):
            product.add_image(path, is_primary=index == 0)

        current_domain.repository_for(Product).add(product)
        logger.info("Product created", product_id=str(product.id), slug=product.slug)
        return product.to_dict(self._category_of(product))

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)

        fields = _product_fields(command)
        _ensure_slug_available(fields["slug"], product.id)

        product.update_details(**fields)
        for path in _image_paths(command.image_paths):
            product.add_image(path, is_primary=not product.images)

        repo.add(product)
        logger.info("Product updated", product_id=str(product.id))
        return product.to_dict(self._category_of(product))

    @handle(DeleteProduct)
    def delete_product(self, command):
        repo = current_domain.repository_for(Product)
        try:
            product = repo.get(command.product_id)
        except ObjectNotFoundError:
            return False

        for image in list(product.images):
            product.remove_images(image)
        product.raise_(ProductDeleted(product_id=str(product.id)))
        repo.add(product)
        repo._dao.delete(product)
        logger.info("Product deleted", product_id=str(command.product_id))
        return True

    @handle(AddProductImage)
    def add_product_image(self, command):
        path = (command.path or "").strip()
        if not path:
            raise ValidationError({"path": ["Image path is required"]})

        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.add_image(path, is_primary=command.is_primary)
        repo.add(product)
        return product.to_dict(self._category_of(product))

    @staticmethod
    def _category_of(product):
        if not product.category_id:
            return None
        try:
            return current_domain.repository_for(Category).get(product.category_id)
        except ObjectNotFoundError:
            return None


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        name = (command.name or "").strip()
        if not name:
            raise ValidationError({"name": ["Name is required"]})

        slug = validate_slug(command.slug)
        repo = current_domain.repository_for(Category)
        if repo.find_by_slug(slug) is not None:
            raise ConflictError("Slug already exists. Choose a different slug.")

        category = Category.create(name=name, slug=slug)
        repo.add(category)
        logger.info("Category created", category_id=str(category.id), slug=slug)
        return category.to_dict()
