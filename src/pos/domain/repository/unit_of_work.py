"""Abstract unit of work.

Groups the repositories behind a single storage transaction.  Nothing
staged through ``products`` or ``orders`` becomes visible to other
readers until ``commit()``; leaving the ``with`` block without
committing rolls everything back.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.repository.order_repository import OrderRepository
from pos.domain.repository.product_repository import ProductRepository


class UnitOfWork(ABC):
    products: ProductRepository
    orders: OrderRepository

    def __enter__(self) -> UnitOfWork:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.rollback()

    @abstractmethod
    def commit(self) -> None:
        """Make every staged change durable, atomically."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every change staged since the last commit."""
