"""FastAPI endpoints for the authenticated user's cart."""

import json

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from storefront.cart.api.schemas import CartLine, CartResponse, OkResponse, SyncCartRequest
from storefront.cart.cart import MAX_BATCH_SIZE
from storefront.cart.synchronization import SyncCart, get_cart
from storefront.identity.api.dependencies import current_principal
from storefront.identity.principal import Principal

cart_router = APIRouter(prefix="/cart", tags=["cart"])


@cart_router.get("", response_model=CartResponse)
async def read_cart(principal: Principal = Depends(current_principal)) -> CartResponse:
    return CartResponse(items=[CartLine(**line) for line in get_cart(principal.user_id)])


@cart_router.post("", response_model=OkResponse)
async def write_cart(body: SyncCartRequest, principal: Principal = Depends(current_principal)) -> OkResponse:
    entries = [
        {"product_id": str(entry.product_id or ""), "quantity": entry.quantity or 0}
        for entry in body.items[:MAX_BATCH_SIZE]
    ]
    current_domain.process(SyncCart(user_id=principal.user_id, items=json.dumps(entries)), asynchronous=False)
    return OkResponse()
