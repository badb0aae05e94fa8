"""Payments API package."""

from storefront.payments.api.routes import webhook_router

__all__ = ["webhook_router"]
