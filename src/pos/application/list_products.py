"""Application service: List Products use case (query)."""

from __future__ import annotations

from pos.application.dto import ProductDTO, product_to_dto
from pos.domain.repository.unit_of_work import UnitOfWork


class ListProductsHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self) -> list[ProductDTO]:
        with self._uow:
            return [product_to_dto(p) for p in self._uow.products.list_all()]
