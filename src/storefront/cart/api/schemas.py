"""Pydantic request/response schemas for the Cart API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CartEntry(BaseModel):
    product_id: str | int | None = None
    quantity: int | None = 0


class SyncCartRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"product_id": "0f8c2a9e-2b1d-4c55-9a43-6a3b1f0e7d21", "quantity": 2},
                        {"product_id": "5d1e7b3c-8f42-4a0e-b6c9-1e2f3a4b5c6d", "quantity": 0},
                    ]
                }
            ]
        }
    }

    items: list[CartEntry] = Field(default_factory=list)


class CartLine(BaseModel):
    product_id: str
    quantity: int
    unit_price_cents: int
    currency: str
    name: str
    image: str


class CartResponse(BaseModel):
    items: list[CartLine]


class OkResponse(BaseModel):
    ok: bool = True
