"""Application service: Show Order use case (query)."""

from __future__ import annotations

from pos.application.dto import (
    OrderDetailDTO,
    OrderLineItemDTO,
    ProductRefDTO,
)
from pos.domain.model.order import Order
from pos.domain.model.product import Product
from pos.domain.repository.unit_of_work import UnitOfWork


class ShowOrderHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, order_id: int) -> OrderDetailDTO | None:
        """Return the order with its line items, or None if it does not exist.

        Each item carries the product's id, name and scan code only; the
        price shown is the snapshot stored on the item.
        """
        with self._uow:
            order = self._uow.orders.get_by_id(order_id)
            if order is None:
                return None
            products = self._uow.products.get_by_ids(
                {item.product_id for item in order.items}
            )
        return self._to_dto(order, products)

    @staticmethod
    def _to_dto(order: Order, products: dict[int, Product]) -> OrderDetailDTO:
        items = []
        for item in order.items:
            product = products.get(item.product_id)
            if product is None:
                # Referential integrity keeps this from happening through
                # normal use; behave like an inner join.
                continue
            items.append(
                OrderLineItemDTO(
                    id=item.id,  # type: ignore[arg-type]
                    order_id=order.id,  # type: ignore[arg-type]
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price=item.unit_price.amount,
                    subtotal=item.subtotal.amount,
                    created_at=item.created_at,
                    product=ProductRefDTO(
                        id=product.id,  # type: ignore[arg-type]
                        name=product.name,
                        scan_code=product.scan_code,
                    ),
                )
            )

        return OrderDetailDTO(
            id=order.id,  # type: ignore[arg-type]
            total_amount=order.total_amount.amount,
            payment_method=order.payment_method.value,
            status=order.status.value,
            created_at=order.created_at,
            updated_at=order.updated_at,
            items=tuple(items),
        )
