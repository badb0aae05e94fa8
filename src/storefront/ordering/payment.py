"""Order payment — commands driven by payment processor callbacks.

Both handlers accept unknown order ids silently: the processor only needs
an acknowledgement, and retrying would not make the order appear.
"""

from protean import handle
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class ConfirmOrderPayment:
    order_id = Identifier(required=True)
    payment_intent_id = String(max_length=255)


@storefront.command(part_of="Order")
class CancelCheckout:
    order_id = Identifier(required=True)


def _find_order(order_id) -> Order | None:
    try:
        return current_domain.repository_for(Order).get(order_id)
    except ObjectNotFoundError:
        logger.warning("Payment callback for unknown order", order_id=str(order_id))
        return None


@storefront.command_handler(part_of=Order)
class OrderPaymentHandler:
    @handle(ConfirmOrderPayment)
    def confirm_order_payment(self, command):
        order = _find_order(command.order_id)
        if order is None:
            return False

        if not order.mark_paid(command.payment_intent_id):
            logger.info("Duplicate payment confirmation ignored", order_id=str(order.id))
            return False

        current_domain.repository_for(Order).add(order)
        logger.info("Order paid", order_id=str(order.id))
        return True

    @handle(CancelCheckout)
    def cancel_checkout(self, command):
        order = _find_order(command.order_id)
        if order is None or not order.cancel_unpaid():
            return False

        current_domain.repository_for(Order).add(order)
        logger.info("Checkout expired, order cancelled", order_id=str(order.id))
        return True
