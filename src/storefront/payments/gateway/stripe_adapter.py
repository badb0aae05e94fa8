"""Stripe payment gateway adapter (hosted Checkout Sessions).

Uses the stripe-python SDK: ``stripe.checkout.Session.create`` for the
hosted payment page and ``stripe.Webhook.construct_event`` for callback
signature verification.
"""

import json

import stripe

from storefront.exceptions import PaymentGatewayError, WebhookVerificationError
from storefront.payments.gateway.port import CheckoutSession, LineItem, PaymentGateway, WebhookEvent
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class StripeGateway(PaymentGateway):
    """Production Stripe gateway adapter."""

    def __init__(self, api_key: str, webhook_secret: str) -> None:
        self.api_key = api_key
        self.webhook_secret = webhook_secret

    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        try:
            session = stripe.checkout.Session.create(
                api_key=self.api_key,
                mode="payment",
                payment_method_types=["card"],
                line_items=[
                    {
                        "price_data": {
                            "currency": item.currency.lower(),
                            "product_data": {"name": item.name},
                            "unit_amount": item.unit_amount,
                        },
                        "quantity": item.quantity,
                    }
                    for item in line_items
                ],
                metadata={"order_id": order_id},
                success_url=success_url,
                cancel_url=cancel_url,
            )
        except stripe.StripeError as exc:
            logger.error("Stripe checkout session failed", order_id=order_id, error=str(exc))
            raise PaymentGatewayError("Payment processor error") from exc

        return CheckoutSession(session_id=session.id, url=session.url)

    def parse_webhook_event(self, payload: bytes, signature: str) -> WebhookEvent:
        try:
            stripe.Webhook.construct_event(payload, signature, self.webhook_secret)
        except (ValueError, stripe.SignatureVerificationError) as exc:
            raise WebhookVerificationError(f"Webhook Error: {exc}") from exc

        # Signature checked; decode the raw body into plain dicts
        event = json.loads(payload)
        return WebhookEvent(type=event.get("type", ""), data=(event.get("data") or {}).get("object") or {})
