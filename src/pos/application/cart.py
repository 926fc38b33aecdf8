"""Checkout cart held by the cashier's session.

The cart is a plain value owned by whoever drives the till (the CLI, a
web session, a test).  It only talks to the rest of the system through
the handlers passed into ``scan()`` and ``checkout()``, so its state
changes can be exercised without any storage at all.

States::

    EMPTY --scan--> BUILDING --checkout--> SUBMITTING --> CONFIRMED
                       ^                        |
                       +------- ERROR <---------+
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any

from pos.application.create_order import CreateOrderHandler
from pos.application.dto import OrderDTO, OrderItemSpec, ProductDTO
from pos.application.lookup_product import GetProductByScanCodeHandler
from pos.domain.exceptions import (
    EmptyCartError,
    ProductNotFoundError,
    ValidationError,
)
from pos.domain.model.order import PaymentMethod
from pos.domain.model.value_objects import Money


class CartState(Enum):
    EMPTY = "empty"
    BUILDING = "building"
    SUBMITTING = "submitting"
    CONFIRMED = "confirmed"
    ERROR = "error"


@dataclass
class CartLine:
    """A product copied into the cart, with a quantity."""

    product: ProductDTO
    quantity: int

    @property
    def subtotal(self) -> Decimal:
        return (Money(self.product.price) * self.quantity).amount


@dataclass
class Cart:
    lines: list[CartLine] = field(default_factory=list)
    state: CartState = CartState.EMPTY
    last_order_id: int | None = None
    error: str | None = None

    # --- Derived values (never cached) ----------------------------------------

    @property
    def total(self) -> Decimal:
        total = Money.zero()
        for line in self.lines:
            total = total + Money(line.subtotal)
        return total.amount

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines)

    # --- Mutations ------------------------------------------------------------

    def add(self, product: ProductDTO) -> CartLine:
        """Add one unit of *product*, merging with an existing line."""
        self._assert_editable()
        line = self._find(product.id)
        if line is None:
            line = CartLine(product=product, quantity=1)
            self.lines.append(line)
        else:
            line.quantity += 1
        self._settle()
        return line

    def scan(self, scan_code: str, lookup: GetProductByScanCodeHandler) -> CartLine:
        """Look up *scan_code* and add the product; unknown codes leave the cart as is."""
        self._assert_editable()
        code = scan_code.strip()
        if not code:
            raise ValidationError("Scan code is required")
        product = lookup.handle(code)
        if product is None:
            raise ProductNotFoundError(f"Product with scan code '{code}' not found")
        return self.add(product)

    def set_quantity(self, product_id: int, quantity: int) -> None:
        """Set a line's quantity; zero or less removes the line."""
        self._assert_editable()
        if quantity <= 0:
            self.remove(product_id)
            return
        line = self._find(product_id)
        if line is None:
            raise ProductNotFoundError(f"Product #{product_id} is not in the cart")
        line.quantity = quantity
        self._settle()

    def remove(self, product_id: int) -> None:
        self._assert_editable()
        self.lines = [ln for ln in self.lines if ln.product.id != product_id]
        self._settle()

    def clear(self) -> None:
        self._assert_editable()
        self.lines = []
        self._settle()

    # --- Checkout -------------------------------------------------------------

    def checkout(
        self,
        payment_method: PaymentMethod | str,
        create_order: CreateOrderHandler,
    ) -> OrderDTO:
        """Submit the whole cart as one order.

        On success the cart is emptied and remembers the new order ID.
        On any failure, storage errors included, the lines are kept so the
        cashier can retry, and the error is re-raised to the caller.
        """
        self._assert_editable()
        if not self.lines:
            raise EmptyCartError("Cart is empty. Add items before processing order.")

        specs = [
            OrderItemSpec(product_id=line.product.id, quantity=line.quantity)
            for line in self.lines
        ]
        self.state = CartState.SUBMITTING
        self.error = None
        try:
            order = create_order.handle(payment_method=payment_method, item_specs=specs)
        except Exception as exc:
            self.state = CartState.ERROR
            self.error = str(exc) or type(exc).__name__
            raise

        self.lines = []
        self.last_order_id = order.id
        self.state = CartState.CONFIRMED
        return order

    # --- Serialization --------------------------------------------------------

    def to_dict(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "lines": [
                {
                    "product_id": line.product.id,
                    "scan_code": line.product.scan_code,
                    "name": line.product.name,
                    "unit_price": str(line.product.price),
                    "quantity": line.quantity,
                    "subtotal": str(line.subtotal),
                }
                for line in self.lines
            ],
            "total": str(self.total),
            "item_count": self.item_count,
            "last_order_id": self.last_order_id,
            "error": self.error,
        }

    # --- Internal helpers -----------------------------------------------------

    def _find(self, product_id: int) -> CartLine | None:
        for line in self.lines:
            if line.product.id == product_id:
                return line
        return None

    def _settle(self) -> None:
        self.state = CartState.BUILDING if self.lines else CartState.EMPTY
        self.error = None

    def _assert_editable(self) -> None:
        if self.state is CartState.SUBMITTING:
            raise ValidationError("Cart is being submitted")
