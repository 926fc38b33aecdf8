"""Product aggregate.

Products live independently of orders. They have their own lifecycle:
prices change and scan codes get reassigned, but line items keep the
price they were sold at.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from pos.domain.exceptions import ValidationError
from pos.domain.model.patch import UNSET, Maybe, is_set
from pos.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ProductPatch:
    """Sparse update for a product; ``UNSET`` fields are left alone."""

    name: Maybe[str | None] = UNSET
    price: Maybe[Money | None] = UNSET
    scan_code: Maybe[str | None] = UNSET

    @property
    def is_empty(self) -> bool:
        return not any(is_set(v) for v in (self.name, self.price, self.scan_code))


@dataclass
class Product:
    """A product in the catalog.

    ``id`` is ``None`` until the repository assigns one.  Kept as a
    mutable dataclass because edits are a legitimate mutation on the
    aggregate.
    """

    id: int | None
    scan_code: str
    name: str
    price: Money
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(scan_code: str, name: str, price: Money) -> Product:
        """Create a new catalog entry, enforcing all invariants."""
        now = _now()
        return Product(
            id=None,
            scan_code=_required(scan_code, "Scan code"),
            name=_required(name, "Product name"),
            price=price,
            created_at=now,
            updated_at=now,
        )

    def apply(self, patch: ProductPatch) -> bool:
        """Apply a sparse update.  Returns True if anything changed.

        This does NOT affect any existing orders because line items
        capture a price snapshot at creation time.
        """
        changed = False

        if is_set(patch.scan_code):
            scan_code = _required(patch.scan_code, "Scan code")
            changed |= scan_code != self.scan_code
            self.scan_code = scan_code

        if is_set(patch.name):
            name = _required(patch.name, "Product name")
            changed |= name != self.name
            self.name = name

        if is_set(patch.price):
            if patch.price is None:
                raise ValidationError("Product price cannot be cleared")
            changed |= patch.price != self.price
            self.price = patch.price

        if changed:
            self.updated_at = _now()
        return changed


def _required(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required")
    return value.strip()
