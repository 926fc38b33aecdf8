"""Application service: Product lookup use cases (queries).

Both lookups return None when nothing matches; a miss is an ordinary
answer for a scanner, not an error.
"""

from __future__ import annotations

from pos.application.dto import ProductDTO, product_to_dto
from pos.domain.repository.unit_of_work import UnitOfWork


class GetProductByScanCodeHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, scan_code: str) -> ProductDTO | None:
        """Exact, case-sensitive match on the scan code."""
        with self._uow:
            product = self._uow.products.get_by_scan_code(scan_code)
            return product_to_dto(product) if product is not None else None


class GetProductByIdHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int) -> ProductDTO | None:
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            return product_to_dto(product) if product is not None else None
