"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI/web adapters and the application layer
without exposing domain internals.  Money travels as ``Decimal`` so no
adapter ever has to parse a display string back into a number.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from pos.domain.model.order import Order
from pos.domain.model.product import Product


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: one cart line (product ID + quantity)."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class ProductDTO:
    id: int
    scan_code: str
    name: str
    price: Decimal
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class ProductRefDTO:
    """Minimal product projection shown next to a line item.

    Deliberately carries no price: the line item's own snapshot is the
    price that applies.
    """

    id: int
    name: str
    scan_code: str


@dataclass(frozen=True)
class OrderLineItemDTO:
    id: int
    order_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    subtotal: Decimal
    created_at: datetime
    product: ProductRefDTO


@dataclass(frozen=True)
class OrderDTO:
    """Output: an order header."""

    id: int
    total_amount: Decimal
    payment_method: str
    status: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True)
class OrderDetailDTO(OrderDTO):
    """Output: an order header with its line items."""

    items: tuple[OrderLineItemDTO, ...] = ()


# --- Mapping ------------------------------------------------------------------


def product_to_dto(product: Product) -> ProductDTO:
    return ProductDTO(
        id=product.id,  # type: ignore[arg-type]
        scan_code=product.scan_code,
        name=product.name,
        price=product.price.amount,
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        total_amount=order.total_amount.amount,
        payment_method=order.payment_method.value,
        status=order.status.value,
        created_at=order.created_at,
        updated_at=order.updated_at,
    )
