"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from pos.domain.exceptions import ValidationError

CENT = Decimal("0.01")
# Largest amount whose cent count still fits a signed 64-bit column.
MAX_AMOUNT = Decimal("9999999999999999.99")
MAX_QUANTITY = 1_000_000


@dataclass(frozen=True)
class Money:
    """Non-negative monetary amount with exactly two fractional digits.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable in financial calculations.  Amounts are stored in minor
    units (cents) by the persistence layer, see ``cents`` and
    ``from_cents``.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )
        if self.amount > MAX_AMOUNT:
            raise ValidationError(
                f"Money amount exceeds the maximum of {MAX_AMOUNT}, got {self.amount}"
            )
        quantized = self.amount.quantize(CENT)
        if quantized != self.amount:
            raise ValidationError(
                f"Money amount allows at most 2 decimal places, got {self.amount}"
            )
        object.__setattr__(self, "amount", quantized)

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, int):
            raise TypeError(f"Can only multiply Money by int, got {type(factor).__name__}")
        product = self.amount * factor
        if product > MAX_AMOUNT:
            raise ValidationError(
                f"Money amount exceeds the maximum of {MAX_AMOUNT}: {self} x {factor}"
            )
        return Money(product.quantize(CENT, rounding=ROUND_HALF_UP))

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def __le__(self, other: Money) -> bool:
        return self.amount <= other.amount

    def __gt__(self, other: Money) -> bool:
        return self.amount > other.amount

    def __ge__(self, other: Money) -> bool:
        return self.amount >= other.amount

    # --- Storage --------------------------------------------------------------

    @property
    def cents(self) -> int:
        return int(self.amount * 100)

    @staticmethod
    def from_cents(cents: int) -> Money:
        return Money(Decimal(cents).scaleb(-2))

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"${self.amount:.2f}"

    # --- Factories ------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def of(amount: str | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely.

        Floats are refused: by the time a float exists the value may
        already have drifted.
        """
        if isinstance(amount, float):
            raise ValidationError(f"Invalid money amount: {amount!r} (use a string)")
        try:
            return Money(Decimal(str(amount).strip()))
        except (InvalidOperation, ValueError) as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Quantity:
    """A positive integer quantity.

    Enforces the invariant that you cannot order zero or negative items.
    """

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value <= 0:
            raise ValidationError("Quantity must be positive")
        if self.value > MAX_QUANTITY:
            raise ValidationError(f"Quantity cannot exceed {MAX_QUANTITY}")

    def __str__(self) -> str:
        return str(self.value)
