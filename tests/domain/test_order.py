"""Unit tests for the Order aggregate and its business rules."""

from datetime import timedelta

import pytest

from pos.domain.exceptions import InvalidStatusTransitionError, ValidationError
from pos.domain.model.order import Order, OrderLineItem, OrderStatus, PaymentMethod
from pos.domain.model.value_objects import Money, Quantity


def _make_item(product_id: int = 1, qty: int = 1, price: str = "19.99") -> OrderLineItem:
    """Helper to build a valid line item."""
    return OrderLineItem(
        product_id=product_id,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
    )


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(PaymentMethod.CARD, [_make_item(qty=2)])
        assert order.status == OrderStatus.PENDING
        assert order.payment_method == PaymentMethod.CARD
        assert len(order.items) == 1
        assert order.total_amount == Money.of("39.98")

    def test_id_is_none_for_new_orders(self):
        order = Order.create(PaymentMethod.CASH, [_make_item()])
        assert order.id is None  # assigned by repository

    def test_total_is_sum_of_line_subtotals(self):
        items = [
            _make_item(1, qty=2, price="19.99"),
            _make_item(2, qty=1, price="29.95"),
        ]
        order = Order.create(PaymentMethod.CARD, items)
        assert order.total_amount == Money.of("69.93")

    def test_timestamps_shared_by_header_and_items(self):
        order = Order.create(PaymentMethod.CASH, [_make_item(), _make_item(2)])
        assert order.created_at == order.updated_at
        assert all(item.created_at == order.created_at for item in order.items)

    def test_no_items_rejected(self):
        with pytest.raises(ValidationError, match="at least one item"):
            Order.create(PaymentMethod.CASH, [])

    def test_same_product_twice_kept_as_two_lines(self):
        order = Order.create(
            PaymentMethod.CASH, [_make_item(1, qty=1), _make_item(1, qty=2)]
        )
        assert [i.quantity.value for i in order.items] == [1, 2]
        assert order.total_amount == Money.of("59.97")


class TestOrderLineItem:

    def test_subtotal_calculation(self):
        item = _make_item(qty=3, price="29.95")
        assert item.subtotal == Money.of("89.85")


class TestStatusTransitions:

    def _order(self) -> Order:
        order = Order.create(PaymentMethod.CASH, [_make_item()])
        order.id = 7
        order.updated_at = order.created_at - timedelta(seconds=1)
        return order

    def test_update_changes_status_and_timestamp_only(self):
        order = self._order()
        before_total, before_created = order.total_amount, order.created_at
        order.update_status(OrderStatus.COMPLETED)
        assert order.status == OrderStatus.COMPLETED
        assert order.updated_at > before_created - timedelta(seconds=1)
        assert order.total_amount == before_total
        assert order.created_at == before_created

    def test_permissive_by_default(self):
        order = self._order()
        order.update_status(OrderStatus.COMPLETED)
        order.update_status(OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED

    def test_strict_blocks_leaving_terminal_status(self):
        order = self._order()
        order.update_status(OrderStatus.COMPLETED, strict=True)
        with pytest.raises(InvalidStatusTransitionError, match="from completed to cancelled"):
            order.update_status(OrderStatus.CANCELLED, strict=True)
        assert order.status == OrderStatus.COMPLETED

    def test_strict_allows_pending_to_cancelled(self):
        order = self._order()
        order.update_status(OrderStatus.CANCELLED, strict=True)
        assert order.status == OrderStatus.CANCELLED


class TestParsing:

    def test_parse_payment_method(self):
        assert PaymentMethod.parse("card") is PaymentMethod.CARD
        assert PaymentMethod.parse(PaymentMethod.CASH) is PaymentMethod.CASH

    def test_parse_unknown_payment_method(self):
        with pytest.raises(ValidationError, match="Invalid payment method 'cheque'"):
            PaymentMethod.parse("cheque")

    def test_parse_unknown_status(self):
        with pytest.raises(ValidationError, match="Invalid order status"):
            OrderStatus.parse("shipped")
