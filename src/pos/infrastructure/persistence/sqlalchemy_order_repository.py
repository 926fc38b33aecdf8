"""SQLAlchemy implementation of OrderRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos.domain.exceptions import OrderNotFoundError
from pos.domain.model.order import Order, OrderLineItem
from pos.domain.model.value_objects import Quantity
from pos.domain.repository.order_repository import OrderRepository
from pos.infrastructure.persistence.orm import (
    OrderItemRow,
    OrderRow,
    translate_integrity_errors,
)


class SqlAlchemyOrderRepository(OrderRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        row = self._session.get(OrderRow, order_id)
        return self._to_domain(row) if row is not None else None

    def list_all(self) -> list[Order]:
        rows = self._session.scalars(
            select(OrderRow).order_by(OrderRow.created_at.desc(), OrderRow.id.desc())
        )
        return [self._to_domain(row) for row in rows]

    def add(self, order: Order) -> None:
        row = self._to_row(order)
        self._session.add(row)
        with translate_integrity_errors():
            self._session.flush()

        order.id = row.id
        for item, item_row in zip(order.items, row.items):
            item.id = item_row.id

    def save(self, order: Order) -> None:
        row = self._session.get(OrderRow, order.id)
        if row is None:
            raise OrderNotFoundError(order.id)  # type: ignore[arg-type]
        # Header only: total and line items are fixed at creation.
        row.status = order.status
        row.updated_at = order.updated_at
        with translate_integrity_errors():
            self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_row(order: Order) -> OrderRow:
        return OrderRow(
            total_amount=order.total_amount,
            payment_method=order.payment_method,
            status=order.status,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=[
                OrderItemRow(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price,
                    subtotal=item.subtotal,
                    created_at=item.created_at,
                )
                for item in order.items
            ],
        )

    @staticmethod
    def _to_domain(row: OrderRow) -> Order:
        items = [
            OrderLineItem(
                id=i.id,
                product_id=i.product_id,
                quantity=Quantity(i.quantity),
                unit_price=i.unit_price,
                created_at=i.created_at,
            )
            for i in row.items
        ]
        return Order(
            id=row.id,
            payment_method=row.payment_method,
            total_amount=row.total_amount,
            items=items,
            status=row.status,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
