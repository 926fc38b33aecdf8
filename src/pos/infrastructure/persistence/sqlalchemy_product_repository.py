"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import select
from sqlalchemy.orm import Session

from pos.domain.exceptions import ProductNotFoundError
from pos.domain.model.product import Product
from pos.domain.repository.product_repository import ProductRepository
from pos.infrastructure.persistence.orm import ProductRow, translate_integrity_errors


class SqlAlchemyProductRepository(ProductRepository):

    def __init__(self, session: Session) -> None:
        self._session = session

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        row = self._session.get(ProductRow, product_id)
        return self._to_domain(row) if row is not None else None

    def get_by_ids(self, product_ids: Iterable[int]) -> dict[int, Product]:
        ids = set(product_ids)
        if not ids:
            return {}
        rows = self._session.scalars(select(ProductRow).where(ProductRow.id.in_(ids)))
        return {row.id: self._to_domain(row) for row in rows}

    def get_by_scan_code(self, scan_code: str) -> Product | None:
        rows = self._session.scalars(
            select(ProductRow).where(ProductRow.scan_code == scan_code)
        )
        # Some collations fold case; the lookup contract does not.
        for row in rows:
            if row.scan_code == scan_code:
                return self._to_domain(row)
        return None

    def list_all(self) -> list[Product]:
        rows = self._session.scalars(select(ProductRow).order_by(ProductRow.id))
        return [self._to_domain(row) for row in rows]

    def add(self, product: Product) -> None:
        row = ProductRow(
            scan_code=product.scan_code,
            name=product.name,
            price=product.price,
            created_at=product.created_at,
            updated_at=product.updated_at,
        )
        self._session.add(row)
        with translate_integrity_errors():
            self._session.flush()
        product.id = row.id

    def save(self, product: Product) -> None:
        row = self._session.get(ProductRow, product.id)
        if row is None:
            raise ProductNotFoundError(f"Product #{product.id} not found")
        row.scan_code = product.scan_code
        row.name = product.name
        row.price = product.price
        row.updated_at = product.updated_at
        with translate_integrity_errors():
            self._session.flush()

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_domain(row: ProductRow) -> Product:
        return Product(
            id=row.id,
            scan_code=row.scan_code,
            name=row.name,
            price=row.price,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
