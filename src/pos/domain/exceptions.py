"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI and web layers can catch them uniformly and map them to
user-facing responses.
"""

from __future__ import annotations

from collections.abc import Iterable


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidStatusTransitionError(ValidationError):
    """An order was asked to leave a terminal status."""


class EmptyCartError(ValidationError):
    """Checkout was attempted with nothing in the cart."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ProductNotFoundError(EntityNotFoundError):
    pass


class OrderNotFoundError(EntityNotFoundError):

    def __init__(self, order_id: int) -> None:
        super().__init__(f"Order #{order_id} not found")
        self.order_id = order_id


class ProductsNotFoundError(EntityNotFoundError):
    """One or more referenced products are missing from the catalog.

    Every missing id is reported, not only the first one found.
    """

    def __init__(self, missing_ids: Iterable[int]) -> None:
        self.missing_ids = tuple(missing_ids)
        joined = ", ".join(str(i) for i in self.missing_ids)
        super().__init__(f"Products not found: {joined}")


class ConflictError(DomainException):
    """A uniqueness constraint would be violated."""


class DuplicateScanCodeError(ConflictError):

    def __init__(self, scan_code: str) -> None:
        super().__init__(f"Scan code '{scan_code}' is already assigned to a product")
        self.scan_code = scan_code
