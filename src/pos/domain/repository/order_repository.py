"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from pos.domain.model.order import Order


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order with its line items, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, most recently created first."""

    @abstractmethod
    def add(self, order: Order) -> None:
        """Stage a new order together with all of its line items."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Stage header changes (status, ``updated_at``) to an existing order."""
