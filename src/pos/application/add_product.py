"""Application service: Add Product use case."""

from __future__ import annotations

from decimal import Decimal

import structlog

from pos.application.dto import ProductDTO, product_to_dto
from pos.domain.exceptions import DuplicateScanCodeError
from pos.domain.model.product import Product
from pos.domain.model.value_objects import Money
from pos.domain.repository.unit_of_work import UnitOfWork

logger = structlog.get_logger(__name__)


class AddProductHandler:

    def __init__(self, uow: UnitOfWork) -> None:
        self._uow = uow

    def handle(self, scan_code: str, name: str, price: str | Decimal) -> ProductDTO:
        """Add a new product to the catalog."""
        product = Product.create(scan_code=scan_code, name=name, price=Money.of(price))

        with self._uow:
            if self._uow.products.get_by_scan_code(product.scan_code) is not None:
                raise DuplicateScanCodeError(product.scan_code)

            self._uow.products.add(product)
            self._uow.commit()

        logger.info(
            "product.created",
            product_id=product.id,
            scan_code=product.scan_code,
            price=str(product.price.amount),
        )
        return product_to_dto(product)
