"""Public catalogue queries: product search, product detail and categories."""

from protean.utils.globals import current_domain

from storefront.catalogue.category import Category
from storefront.catalogue.product import Product

PAGE_SIZE = 12

_SORT_ORDER = {
    "new": ["-created_at"],
    "price_asc": ["price_cents", "-created_at"],
    "price_desc": ["-price_cents", "-created_at"],
}


def _categories_by_id() -> dict:
    categories = current_domain.repository_for(Category).all_categories()
    return {str(category.id): category for category in categories}


def _empty_page(page: int) -> dict:
    return {"items": [], "total": 0, "page": page, "pageSize": PAGE_SIZE}


def list_products(page: int = 1, q: str = "", category: str = "", sort: str = "new") -> dict:
    """One page of products, newest first unless ``sort`` says otherwise.

    ``q`` matches name or description case-insensitively and ``category`` is
    a category slug. Unknown sort keys fall back to ``new``.
    """
    page = max(page or 1, 1)
    needle = (q or "").strip()
    category_slug = (category or "").strip().lower()
    order_by = _SORT_ORDER.get((sort or "new").strip(), _SORT_ORDER["new"])

    category_id = None
    if category_slug:
        found = current_domain.repository_for(Category).find_by_slug(category_slug)
        if found is None:
            return _empty_page(page)
        category_id = found.id

    results = current_domain.repository_for(Product).search(
        needle=needle,
        category_id=category_id,
        order_by=order_by,
        offset=(page - 1) * PAGE_SIZE,
        limit=PAGE_SIZE,
    )

    categories = _categories_by_id()
    return {
        "items": [product.to_dict(categories.get(str(product.category_id))) for product in results.items],
        "total": results.total,
        "page": page,
        "pageSize": PAGE_SIZE,
    }


def get_product(product_id: str) -> dict:
    """Raises ``ObjectNotFoundError`` when the product does not exist."""
    product = current_domain.repository_for(Product).get(product_id)
    return product.to_dict(_categories_by_id().get(str(product.category_id)))


def list_categories() -> list[dict]:
    return [category.to_dict() for category in current_domain.repository_for(Category).all_categories()]
