"""Stale order sweep.

Checkout sessions that are abandoned without an ``expired`` callback would
leave their orders pending forever. The sweep cancels pending orders older
than the cutoff; paid orders are never touched.
"""

from datetime import UTC, datetime, timedelta

from protean import handle
from protean.fields import Integer
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.ordering.order import Order, PaymentStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Orders cancelled per repository round trip
SWEEP_BATCH_SIZE = 500


@storefront.command(part_of="Order")
class ExpireStalePendingOrders:
    older_than_hours = Integer(default=24, min_value=1)


@storefront.command_handler(part_of=Order)
class ExpireStalePendingOrdersHandler:
    @handle(ExpireStalePendingOrders)
    def expire_stale_pending_orders(self, command):
        """Walk pending orders oldest first in batches, keyed on ``created_at``."""
        cutoff = datetime.now(UTC) - timedelta(hours=command.older_than_hours or 24)
        repo = current_domain.repository_for(Order)

        seen: set[str] = set()
        since = None
        expired = 0
        while True:
            batch = [
                order
                for order in repo.pending_before(cutoff, since=since, limit=SWEEP_BATCH_SIZE)
                if str(order.id) not in seen
            ]
            if not batch:
                break

            for order in batch:
                seen.add(str(order.id))
                if order.cancel_unpaid(payment_status=PaymentStatus.EXPIRED):
                    repo.add(order)
                    expired += 1
            since = batch[-1].created_at

        logger.info("Stale pending orders expired", count=expired, cutoff=cutoff.isoformat())
        return expired
