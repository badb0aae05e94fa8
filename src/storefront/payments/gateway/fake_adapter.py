"""Configurable fake payment gateway for development and testing.

No external calls are made. Sessions point at a local URL, every call is
recorded in ``calls``, and the gateway can be told to fail so tests can
exercise the rollback path. Webhooks are accepted when signed with
``test-signature``.
"""

import json
from uuid import uuid4

from storefront.exceptions import PaymentGatewayError, WebhookVerificationError
from storefront.payments.gateway.port import CheckoutSession, LineItem, PaymentGateway, WebhookEvent

TEST_SIGNATURE = "test-signature"


class FakeGateway(PaymentGateway):
    """Configurable fake payment gateway."""

    def __init__(self) -> None:
        self.should_succeed: bool = True
        self.failure_reason: str = "Payment processor unavailable"
        self.calls: list[dict] = []

    def configure(self, should_succeed: bool, failure_reason: str = "Payment processor unavailable") -> None:
        """Configure gateway behavior at runtime."""
        self.should_succeed = should_succeed
        self.failure_reason = failure_reason

    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        self.calls.append(
            {
                "method": "create_checkout_session",
                "order_id": order_id,
                "line_items": list(line_items),
                "success_url": success_url,
                "cancel_url": cancel_url,
            }
        )

        if not self.should_succeed:
            raise PaymentGatewayError(self.failure_reason)

        session_id = f"cs_fake_{uuid4().hex[:16]}"
        return CheckoutSession(session_id=session_id, url=f"https://checkout.fake.local/pay/{session_id}")

    def parse_webhook_event(self, payload: bytes, signature: str) -> WebhookEvent:
        if signature != TEST_SIGNATURE:
            raise WebhookVerificationError("Webhook Error: No signatures found matching the expected signature")
        try:
            event = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise WebhookVerificationError("Webhook Error: Invalid payload") from None
        if not isinstance(event, dict):
            raise WebhookVerificationError("Webhook Error: Invalid payload")

        return WebhookEvent(type=event.get("type", ""), data=(event.get("data") or {}).get("object") or {})
