"""Application tests for payment callbacks and the stale order sweep."""

from datetime import UTC, datetime, timedelta

from protean import current_domain

from storefront.ordering.order import Order, OrderStatus, PaymentStatus
from storefront.ordering.payment import CancelCheckout, ConfirmOrderPayment
from storefront.ordering.reconciliation import ExpireStalePendingOrders


def _stored_order(age_hours=0, paid=False):
    order = Order.place(lines=[("prod-a", 1, 500)], currency="GBP", address={}, vat_rate=0.2, user_id="user-001")
    if paid:
        order.mark_paid("pi_1")
    order.created_at = datetime.now(UTC) - timedelta(hours=age_hours)
    current_domain.repository_for(Order).add(order)
    return order


def _reload(order):
    return current_domain.repository_for(Order).get(order.id)


class TestConfirmOrderPayment:
    def test_marks_order_paid(self):
        order = _stored_order()
        assert current_domain.process(
            ConfirmOrderPayment(order_id=order.id, payment_intent_id="pi_42"), asynchronous=False
        )
        stored = _reload(order)
        assert stored.status == OrderStatus.PAID.value
        assert stored.payment_status == PaymentStatus.PAID.value
        assert stored.stripe_payment_intent_id == "pi_42"

    def test_duplicate_confirmation_is_a_no_op(self):
        order = _stored_order()
        current_domain.process(ConfirmOrderPayment(order_id=order.id, payment_intent_id="pi_42"), asynchronous=False)
        assert not current_domain.process(
            ConfirmOrderPayment(order_id=order.id, payment_intent_id="pi_99"), asynchronous=False
        )
        assert _reload(order).stripe_payment_intent_id == "pi_42"

    def test_unknown_order_is_ignored(self):
        assert not current_domain.process(ConfirmOrderPayment(order_id="ghost-order"), asynchronous=False)


class TestCancelCheckout:
    def test_cancels_pending_order(self):
        order = _stored_order()
        assert current_domain.process(CancelCheckout(order_id=order.id), asynchronous=False)
        stored = _reload(order)
        assert stored.status == OrderStatus.CANCELLED.value
        assert stored.payment_status == PaymentStatus.CANCELLED.value

    def test_paid_order_is_untouched(self):
        order = _stored_order(paid=True)
        assert not current_domain.process(CancelCheckout(order_id=order.id), asynchronous=False)
        assert _reload(order).is_paid

    def test_unknown_order_is_ignored(self):
        assert not current_domain.process(CancelCheckout(order_id="ghost-order"), asynchronous=False)


class TestExpireStalePendingOrders:
    def test_expires_only_old_pending_orders(self):
        stale = _stored_order(age_hours=48)
        fresh = _stored_order(age_hours=1)
        paid = _stored_order(age_hours=48, paid=True)

        expired = current_domain.process(ExpireStalePendingOrders(older_than_hours=24), asynchronous=False)

        assert expired == 1
        assert _reload(stale).status == OrderStatus.CANCELLED.value
        assert _reload(stale).payment_status == PaymentStatus.EXPIRED.value
        assert _reload(fresh).is_pending
        assert _reload(paid).is_paid

    def test_nothing_to_expire(self):
        _stored_order(age_hours=1)
        assert current_domain.process(ExpireStalePendingOrders(), asynchronous=False) == 0

    def test_sweeps_beyond_one_batch(self, monkeypatch):
        monkeypatch.setattr("storefront.ordering.reconciliation.SWEEP_BATCH_SIZE", 2)
        stale = [_stored_order(age_hours=72 - hour) for hour in range(5)]
        fresh = _stored_order(age_hours=1)

        assert current_domain.process(ExpireStalePendingOrders(older_than_hours=24), asynchronous=False) == 5
        assert all(_reload(order).payment_status == PaymentStatus.EXPIRED.value for order in stale)
        assert _reload(fresh).is_pending
