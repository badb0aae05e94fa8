"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- Product Request Schemas ---


class ProductRequest(BaseModel):
    """Body of product create and full update."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Linen Throw Cushion",
                    "slug": "linen-throw-cushion",
                    "description": "Stonewashed linen cover with a feather insert.",
                    "price_cents": "24.50",
                    "currency": "GBP",
                    "category_id": None,
                    "image_paths": ["/uploads/cushion-front.jpg", "/uploads/cushion-back.jpg"],
                }
            ]
        }
    }

    name: str = ""
    slug: str = ""
    description: str | None = None
    # Integer minor units, or a decimal string in major units ("12.50")
    price_cents: int | float | str | None = None
    currency: str | None = Field(None, max_length=3)
    category_id: str | None = None
    image_paths: list[str] = Field(default_factory=list, max_length=4)


class AddProductImageRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "path": "/uploads/cushion-detail.jpg",
                    "is_primary": False,
                }
            ]
        }
    }

    path: str = Field(..., max_length=500)
    is_primary: bool = False


# --- Category Request Schemas ---


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Home & Living",
                    "slug": "home-living",
                }
            ]
        }
    }

    name: str = ""
    slug: str = ""


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str = ""
    price_cents: int
    currency: str
    category_id: str | None = None
    category_name: str | None = None
    category_slug: str | None = None
    image: str | None = None
    created_at: str | None = None


class ProductPageResponse(BaseModel):
    items: list[ProductResponse]
    total: int
    page: int
    pageSize: int  # noqa: N815


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str


class OkResponse(BaseModel):
    ok: bool = True
