"""Order aggregate — the core of the domain.

The Order is an aggregate root that owns its line items.  Line items
are written once, together with the header, and never change afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from pos.domain.exceptions import InvalidStatusTransitionError, ValidationError
from pos.domain.model.value_objects import Money, Quantity


def _now() -> datetime:
    return datetime.now(timezone.utc)


class OrderStatus(Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING

    @staticmethod
    def parse(raw: OrderStatus | str) -> OrderStatus:
        try:
            return OrderStatus(raw)
        except ValueError as exc:
            allowed = ", ".join(s.value for s in OrderStatus)
            raise ValidationError(
                f"Invalid order status {raw!r} (expected one of: {allowed})"
            ) from exc


class PaymentMethod(Enum):
    CASH = "cash"
    CARD = "card"

    @staticmethod
    def parse(raw: PaymentMethod | str) -> PaymentMethod:
        try:
            return PaymentMethod(raw)
        except ValueError as exc:
            allowed = ", ".join(m.value for m in PaymentMethod)
            raise ValidationError(
                f"Invalid payment method {raw!r} (expected one of: {allowed})"
            ) from exc


@dataclass
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: int
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    id: int | None = None
    created_at: datetime = field(default_factory=_now)

    @property
    def subtotal(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass
class Order:
    """Aggregate root for point-of-sale orders.

    Use the ``Order.create()`` factory for new orders — it computes the
    total.  The ``__init__`` is intentionally simple so the repository
    can reconstitute persisted orders without re-validating (an order
    loaded from storage may legitimately carry zero items).
    """

    id: int | None
    payment_method: PaymentMethod
    total_amount: Money
    items: list[OrderLineItem]
    status: OrderStatus = OrderStatus.PENDING
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(payment_method: PaymentMethod, items: list[OrderLineItem]) -> Order:
        """Create a new pending order; the total is fixed here, once."""
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero()
        for item in items:
            total = total + item.subtotal

        now = _now()
        for item in items:
            item.created_at = now

        return Order(
            id=None,
            payment_method=payment_method,
            total_amount=total,
            items=list(items),
            status=OrderStatus.PENDING,
            created_at=now,
            updated_at=now,
        )

    # --- State transitions ----------------------------------------------------

    def update_status(self, new_status: OrderStatus, strict: bool = False) -> None:
        """Move the order to ``new_status`` and refresh ``updated_at``.

        Without ``strict`` any transition is accepted, including
        completed -> cancelled, so a cashier can correct a mistake.
        With ``strict`` the terminal statuses cannot be left.
        """
        if strict and self.status.is_terminal and new_status is not self.status:
            raise InvalidStatusTransitionError(
                f"Cannot change order #{self.id} from {self.status.value} "
                f"to {new_status.value}"
            )
        self.status = new_status
        self.updated_at = _now()
