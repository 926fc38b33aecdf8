"""Application service: Update Product use case."""

from __future__ import annotations

import structlog

from pos.application.dto import ProductDTO, product_to_dto
from pos.domain.exceptions import DuplicateScanCodeError, ProductNotFoundError
from pos.domain.model.patch import is_set
from pos.domain.model.product import ProductPatch
from pos.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class UpdateProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, product_id: int, patch: ProductPatch) -> ProductDTO:
        """Apply a sparse update to a product.

        This does NOT affect any existing orders — they captured a
        price snapshot at creation time.
        """
        with self._uow:
            product = self._uow.products.get_by_id(product_id)
            if product is None:
                raise ProductNotFoundError(f"Product #{product_id} not found")

            if is_set(patch.scan_code) and patch.scan_code is not None:
                holder = self._uow.products.get_by_scan_code(patch.scan_code.strip())
                if holder is not None and holder.id != product.id:
                    raise DuplicateScanCodeError(patch.scan_code.strip())

            if product.apply(patch):
                self._uow.products.save(product)
                self._uow.commit()
                logger.info("product.updated", product_id=product.id)

        return product_to_dto(product)
