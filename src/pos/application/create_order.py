"""Application service: Create Order use case.

Orchestrates the flow between repositories and the domain model.
This is the only place that coordinates multiple aggregates (Product
lookup + Order creation), and it does so inside a single unit of work.
"""

from __future__ import annotations

import structlog

from pos.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from pos.domain.exceptions import ProductsNotFoundError, ValidationError
from pos.domain.model.order import Order, OrderLineItem, PaymentMethod
from pos.domain.model.value_objects import Quantity
from pos.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class CreateOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(
        self,
        payment_method: PaymentMethod | str,
        item_specs: list[OrderItemSpec],
    ) -> OrderDTO:
        """Create a new pending order.

        Steps:
        1. Validate the input shape (non-empty, positive quantities).
        2. Fetch every referenced product in one bulk read; fail with
           every missing ID if any is absent.
        3. Build OrderLineItems with *current* prices (snapshot).
        4. Persist header and items in one commit and return a DTO.

        The same product may appear on several lines; each becomes its
        own line item.
        """
        if not item_specs:
            raise ValidationError("Order must contain at least one item")
        method = PaymentMethod.parse(payment_method)
        quantities = [Quantity(spec.quantity) for spec in item_specs]

        with self._uow:
            requested = list(dict.fromkeys(spec.product_id for spec in item_specs))
            products = self._uow.products.get_by_ids(requested)

            missing = [pid for pid in requested if pid not in products]
            if missing:
                raise ProductsNotFoundError(missing)

            line_items = [
                OrderLineItem(
                    product_id=spec.product_id,
                    quantity=qty,
                    unit_price=products[spec.product_id].price,  # <-- price snapshot
                )
                for spec, qty in zip(item_specs, quantities)
            ]

            order = Order.create(payment_method=method, items=line_items)
            self._uow.orders.add(order)
            self._uow.commit()

        logger.info(
            "order.created",
            order_id=order.id,
            total=str(order.total_amount.amount),
            payment_method=method.value,
            lines=len(line_items),
        )
        return order_to_dto(order)
