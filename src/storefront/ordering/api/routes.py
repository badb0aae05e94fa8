"""FastAPI endpoints for checkout and order retrieval/administration."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.identity.api.dependencies import admin_principal, current_principal, optional_principal
from storefront.identity.principal import Principal
from storefront.ordering.administration import UpdateOrderStatus
from storefront.ordering.api.schemas import (
    AdminOrdersResponse,
    CheckoutRequest,
    CheckoutResponse,
    MyOrdersResponse,
    OkResponse,
    UpdateOrderStatusRequest,
)
from storefront.ordering.checkout import StartCheckout
from storefront.ordering.history import list_all_orders, list_my_orders

checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


# ---------------------------------------------------------------------------
# Checkout Router
# ---------------------------------------------------------------------------
@checkout_router.post("/session", response_model=CheckoutResponse)
def create_checkout_session(
    body: CheckoutRequest,
    principal: Principal | None = Depends(optional_principal),
) -> CheckoutResponse:
    """Create a pending order and return the hosted payment page URL.

    Declared ``def`` so the processor call runs in the threadpool.
    """
    command = StartCheckout(
        user_id=principal.user_id if principal else None,
        address=json.dumps(body.address.model_dump()),
        items=json.dumps([item.model_dump() for item in body.items]),
    )
    result = current_domain.process(command, asynchronous=False)
    return CheckoutResponse(url=result["url"])


# ---------------------------------------------------------------------------
# Order Router
# ---------------------------------------------------------------------------
@order_router.get("/me", response_model=MyOrdersResponse)
async def my_orders(principal: Principal = Depends(current_principal)) -> MyOrdersResponse:
    return MyOrdersResponse(orders=list_my_orders(principal.user_id))


@order_router.get("", response_model=AdminOrdersResponse, dependencies=[Depends(admin_principal)])
async def all_orders(
    status: str | None = Query(None),
    payment_status: str | None = Query(None),
) -> AdminOrdersResponse:
    return AdminOrdersResponse(orders=list_all_orders(status=status, payment_status=payment_status))


@order_router.patch("/{order_id}", response_model=OkResponse, dependencies=[Depends(admin_principal)])
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest) -> OkResponse:
    command = UpdateOrderStatus(order_id=order_id, status=body.status, payment_status=body.payment_status)
    current_domain.process(command, asynchronous=False)
    return OkResponse()
