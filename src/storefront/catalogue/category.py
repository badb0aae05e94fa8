"""Category aggregate — a named, slug-addressable grouping of products."""

from protean.fields import String

from storefront.catalogue.events import CategoryCreated
from storefront.catalogue.validation import validate_slug
from storefront.domain import storefront
from storefront.utils.db import SCAN_LIMIT


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=200, unique=True)

    @classmethod
    def create(cls, name, slug):
        category = cls(name=name.strip(), slug=validate_slug(slug))
        category.raise_(CategoryCreated(category_id=str(category.id), slug=category.slug))
        return category

    def to_dict(self) -> dict:
        return {"id": str(self.id), "name": self.name, "slug": self.slug}


@storefront.repository(part_of=Category)
class CategoryRepository:
    def find_by_slug(self, slug: str) -> Category | None:
        return self._dao.query.filter(slug=(slug or "").strip().lower()).all().first

    def all_categories(self) -> list[Category]:
        categories = self._dao.query.order_by("name").limit(SCAN_LIMIT).all().items
        return sorted(categories, key=lambda category: category.name.lower())
