"""Application service: List Orders use case (query)."""

from __future__ import annotations

from pos.application.dto import OrderDTO, order_to_dto
from pos.domain.repository.unit_of_work import UnitOfWork


class ListOrdersHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[OrderDTO]:
        """Every order header, most recently created first."""
        with self._uow:
            return [order_to_dto(order) for order in self._uow.orders.list_all()]
