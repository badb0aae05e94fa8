"""FastAPI endpoints for the catalogue: public browsing, admin management."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.catalogue.api.schemas import (
    AddProductImageRequest,
    CategoryResponse,
    CreateCategoryRequest,
    OkResponse,
    ProductPageResponse,
    ProductRequest,
    ProductResponse,
)
from storefront.catalogue.browsing import get_product, list_categories, list_products
from storefront.catalogue.management import (
    AddProductImage,
    CreateCategory,
    CreateProduct,
    DeleteProduct,
    UpdateProduct,
)
from storefront.identity.api.dependencies import admin_principal

product_router = APIRouter(prefix="/products", tags=["products"])
category_router = APIRouter(prefix="/categories", tags=["categories"])


def _raw_price(value) -> str | None:
    return None if value is None else str(value)


# --- Product endpoints ---


@product_router.get("", response_model=ProductPageResponse)
async def browse_products(
    page: int = Query(1),
    q: str = Query(""),
    category: str = Query(""),
    sort: str = Query("new"),
) -> ProductPageResponse:
    return ProductPageResponse(**list_products(page=page, q=q, category=category, sort=sort))


@product_router.get("/{product_id}", response_model=ProductResponse)
async def product_detail(product_id: str) -> ProductResponse:
    return ProductResponse(**get_product(product_id.strip()))


@product_router.post(
    "", status_code=201, response_model=ProductResponse, dependencies=[Depends(admin_principal)]
)
async def create_product(body: ProductRequest) -> ProductResponse:
    command = CreateProduct(
        name=body.name,
        slug=body.slug,
        description=body.description,
        price=_raw_price(body.price_cents),
        currency=body.currency,
        category_id=body.category_id or None,
        image_paths=json.dumps(body.image_paths),
    )
    return ProductResponse(**current_domain.process(command, asynchronous=False))


@product_router.put("/{product_id}", response_model=ProductResponse, dependencies=[Depends(admin_principal)])
async def update_product(product_id: str, body: ProductRequest) -> ProductResponse:
    command = UpdateProduct(
        product_id=product_id.strip(),
        name=body.name,
        slug=body.slug,
        description=body.description,
        price=_raw_price(body.price_cents),
        currency=body.currency,
        category_id=body.category_id or None,
        image_paths=json.dumps(body.image_paths),
    )
    return ProductResponse(**current_domain.process(command, asynchronous=False))


@product_router.delete("/{product_id}", response_model=OkResponse, dependencies=[Depends(admin_principal)])
async def delete_product(product_id: str) -> OkResponse:
    current_domain.process(DeleteProduct(product_id=product_id.strip()), asynchronous=False)
    return OkResponse()


@product_router.post(
    "/{product_id}/images",
    status_code=201,
    response_model=ProductResponse,
    dependencies=[Depends(admin_principal)],
)
async def add_product_image(product_id: str, body: AddProductImageRequest) -> ProductResponse:
    command = AddProductImage(product_id=product_id.strip(), path=body.path, is_primary=body.is_primary)
    return ProductResponse(**current_domain.process(command, asynchronous=False))


# --- Category endpoints ---


@category_router.get("", response_model=list[CategoryResponse])
async def categories() -> list[CategoryResponse]:
    return [CategoryResponse(**category) for category in list_categories()]


@category_router.post(
    "", status_code=201, response_model=CategoryResponse, dependencies=[Depends(admin_principal)]
)
async def create_category(body: CreateCategoryRequest) -> CategoryResponse:
    command = CreateCategory(name=body.name, slug=body.slug)
    return CategoryResponse(**current_domain.process(command, asynchronous=False))
