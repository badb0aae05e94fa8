"""Pydantic request/response schemas for checkout and orders."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddressSchema(BaseModel):
    name: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=254)
    line1: str | None = Field(None, max_length=255)
    city: str | None = Field(None, max_length=100)
    postal_code: str | None = Field(None, max_length=20)


class CheckoutItem(BaseModel):
    id: str
    # Anything below one is charged as one
    qty: int | None = 1


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "address": {
                        "name": "Ada Lovelace",
                        "email": "ada@example.com",
                        "line1": "12 St James's Square",
                        "city": "London",
                        "postal_code": "SW1Y 4JH",
                    },
                    "items": [
                        {"id": "0f8c2a9e-2b1d-4c55-9a43-6a3b1f0e7d21", "qty": 2},
                        {"id": "5d1e7b3c-8f42-4a0e-b6c9-1e2f3a4b5c6d", "qty": 1},
                    ],
                }
            ]
        }
    }

    address: AddressSchema = Field(default_factory=AddressSchema)
    items: list[CheckoutItem] = Field(default_factory=list)


class CheckoutResponse(BaseModel):
    url: str


class UpdateOrderStatusRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {"status": "shipped"},
                {"status": "refunded", "payment_status": "refunded"},
            ]
        }
    }

    status: str | None = Field(None, max_length=50)
    payment_status: str | None = Field(None, max_length=50)


class OrderItemSchema(BaseModel):
    product_id: str
    quantity: int
    unit_price_cents: int
    name: str | None = None
    slug: str | None = None
    image: str | None = None


class OrderSchema(BaseModel):
    id: str
    user_id: str | None = None
    status: str
    payment_status: str
    total_cents: int
    currency: str
    vat_rate: float | None = None
    created_at: str | None = None


class MyOrderSchema(OrderSchema):
    items: list[OrderItemSchema]


class AdminOrderSchema(OrderSchema):
    email: str | None = None


class MyOrdersResponse(BaseModel):
    orders: list[MyOrderSchema]


class AdminOrdersResponse(BaseModel):
    orders: list[AdminOrderSchema]


class OkResponse(BaseModel):
    ok: bool = True
