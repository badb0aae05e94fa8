"""Order administration — manual status overrides."""

from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order import Order
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Order")
class UpdateOrderStatus:
    order_id = Identifier(required=True)
    status = String(max_length=50)
    payment_status = String(max_length=50)


@storefront.command_handler(part_of=Order)
class UpdateOrderStatusHandler:
    @handle(UpdateOrderStatus)
    def update_order_status(self, command):
        if not command.status and not command.payment_status:
            raise ValidationError({"_entity": ["No fields to update"]})

        repo = current_domain.repository_for(Order)
        order = repo.get(command.order_id)
        order.update_status(status=command.status, payment_status=command.payment_status)
        repo.add(order)
        logger.info(
            "Order status updated",
            order_id=str(order.id),
            status=order.status,
            payment_status=order.payment_status,
        )
