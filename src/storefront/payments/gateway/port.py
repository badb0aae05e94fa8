"""Payment gateway port (abstract interface).

The checkout flow only ever talks to this contract, so the hosted payment
page can come from Stripe in production and from ``FakeGateway`` in tests
and local development.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineItem:
    """One line on the hosted payment page. Amounts are minor units."""

    name: str
    unit_amount: int
    quantity: int
    currency: str


@dataclass(frozen=True)
class CheckoutSession:
    session_id: str
    url: str


@dataclass(frozen=True)
class WebhookEvent:
    """A verified callback from the processor."""

    type: str
    data: dict = field(default_factory=dict)

    @property
    def order_id(self) -> str | None:
        metadata = self.data.get("metadata") or {}
        return metadata.get("order_id")

    @property
    def payment_intent_id(self) -> str | None:
        intent = self.data.get("payment_intent")
        if isinstance(intent, dict):
            return intent.get("id")
        return intent


class PaymentGateway(ABC):
    """Abstract payment gateway interface."""

    @abstractmethod
    def create_checkout_session(
        self,
        order_id: str,
        line_items: list[LineItem],
        success_url: str,
        cancel_url: str,
    ) -> CheckoutSession:
        """Create a hosted payment page for ``order_id``.

        Raises ``PaymentGatewayError`` when the processor cannot be reached
        or refuses the request.
        """
        ...

    @abstractmethod
    def parse_webhook_event(self, payload: bytes, signature: str) -> WebhookEvent:
        """Verify ``payload`` against ``signature`` and decode it.

        Raises ``WebhookVerificationError`` when verification fails.
        """
        ...
