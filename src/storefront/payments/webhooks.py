"""Route verified payment processor callbacks to order commands."""

from protean.utils.globals import current_domain

from storefront.ordering.payment import CancelCheckout, ConfirmOrderPayment
from storefront.payments.gateway.port import WebhookEvent
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CHECKOUT_COMPLETED = "checkout.session.completed"
CHECKOUT_EXPIRED = "checkout.session.expired"


def handle_webhook_event(event: WebhookEvent) -> bool:
    """Apply ``event`` to its order. Returns whether anything changed."""
    if event.type not in (CHECKOUT_COMPLETED, CHECKOUT_EXPIRED):
        logger.debug("Ignoring payment event", event_type=event.type)
        return False

    order_id = event.order_id
    if not order_id:
        logger.warning("Payment event without order reference", event_type=event.type)
        return False

    if event.type == CHECKOUT_COMPLETED:
        command = ConfirmOrderPayment(order_id=order_id, payment_intent_id=event.payment_intent_id)
    else:
        command = CancelCheckout(order_id=order_id)
    return bool(current_domain.process(command, asynchronous=False))
