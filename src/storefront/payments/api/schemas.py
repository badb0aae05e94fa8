"""Pydantic response schemas for the payment callback endpoint."""

from pydantic import BaseModel


class WebhookAck(BaseModel):
    received: bool = True
