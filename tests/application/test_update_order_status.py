"""Integration tests for the UpdateOrderStatus use case."""

import pytest

from pos.application.create_order import CreateOrderHandler
from pos.application.dto import OrderItemSpec
from pos.application.update_order_status import UpdateOrderStatusHandler
from pos.domain.exceptions import InvalidStatusTransitionError, OrderNotFoundError
from pos.domain.model.order import OrderStatus
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from tests.fakes import FakeProductRepository, FakeUnitOfWork


def _setup() -> tuple[FakeUnitOfWork, int]:
    uow = FakeUnitOfWork(
        products=FakeProductRepository([
            Product.create("TEST001", "Test Product", Money.of("10.99")),
        ])
    )
    dto = CreateOrderHandler(uow).handle("cash", [OrderItemSpec(1, 1)])
    return uow, dto.id


class TestUpdateOrderStatus:

    def test_update_status(self):
        uow, order_id = _setup()
        dto = UpdateOrderStatusHandler(uow).handle(order_id, "completed")
        assert dto.id == order_id
        assert dto.status == "completed"
        assert uow.orders.get_by_id(order_id).status == OrderStatus.COMPLETED

    def test_preserves_everything_but_status_and_updated_at(self):
        uow, order_id = _setup()
        before = uow.orders.get_by_id(order_id)

        UpdateOrderStatusHandler(uow).handle(order_id, OrderStatus.COMPLETED)

        after = uow.orders.get_by_id(order_id)
        assert after.total_amount == before.total_amount
        assert after.payment_method == before.payment_method
        assert after.created_at == before.created_at
        assert after.items == before.items
        assert after.updated_at >= before.updated_at

    def test_missing_order_names_id(self):
        uow, _ = _setup()
        with pytest.raises(OrderNotFoundError, match="999"):
            UpdateOrderStatusHandler(uow).handle(999, "completed")

    def test_completed_to_cancelled_allowed_by_default(self):
        uow, order_id = _setup()
        handler = UpdateOrderStatusHandler(uow)
        handler.handle(order_id, "completed")
        dto = handler.handle(order_id, "cancelled")
        assert dto.status == "cancelled"

    def test_strict_mode_refuses_to_leave_terminal_status(self):
        uow, order_id = _setup()
        handler = UpdateOrderStatusHandler(uow, strict_transitions=True)
        handler.handle(order_id, "cancelled")
        with pytest.raises(InvalidStatusTransitionError):
            handler.handle(order_id, "completed")
        assert uow.orders.get_by_id(order_id).status == OrderStatus.CANCELLED
