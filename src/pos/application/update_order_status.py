"""Application service: Update Order Status use case.

Only the status and ``updated_at`` change; total, payment method,
creation time and line items stay exactly as they were.
"""

from __future__ import annotations

import structlog

from pos.application.dto import OrderDTO, order_to_dto
from pos.domain.exceptions import OrderNotFoundError
from pos.domain.model.order import OrderStatus
from pos.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, uow: UnitOfWork, strict_transitions: bool = False) -> None:
        self._uow = uow
        self._strict = strict_transitions

    def handle(self, order_id: int, new_status: OrderStatus | str) -> OrderDTO:
        status = OrderStatus.parse(new_status)

        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            previous = order.status
            order.update_status(status, strict=self._strict)
            self._uow.orders.save(order)
            self._uow.commit()

        logger.info(
            "order.status_updated",
            order_id=order_id,
            previous=previous.value,
            status=status.value,
        )
        return order_to_dto(order)
