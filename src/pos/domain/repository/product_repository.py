"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (SQLAlchemy, in-memory)
live in the infrastructure layer and the test suite.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from pos.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_ids(self, product_ids: Iterable[int]) -> dict[int, Product]:
        """Return the existing products among *product_ids*, keyed by ID.

        Missing IDs are simply absent from the result.
        """

    @abstractmethod
    def get_by_scan_code(self, scan_code: str) -> Product | None:
        """Return the product with exactly this scan code (case-sensitive)."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog."""

    @abstractmethod
    def add(self, product: Product) -> None:
        """Stage a new product; its ID is assigned on flush."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Stage changes to an existing product."""
