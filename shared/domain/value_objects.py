"""
Common Value Objects

Value objects used across multiple domains:
- Money: Represents monetary amounts with currency, GST and minor units
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal

from shared.domain.base import ValueObject

SUPPORTED_CURRENCIES = ('INR', 'USD', 'EUR')


@dataclass(frozen=True)
class Money(ValueObject):
    """
    Money value object

    A non-negative amount in one currency. GST and gateway amounts are
    derived from it so rounding happens in one place.
    """
    amount: Decimal
    currency: str = 'INR'

    def __post_init__(self):
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, 'amount', Decimal(str(self.amount)))
        if self.amount < 0:
            raise ValueError("Amount cannot be negative")
        if not self.currency:
            raise ValueError("Currency is required")
        if self.currency not in SUPPORTED_CURRENCIES:
            raise ValueError(f"Unsupported currency: {self.currency}")

    def __mul__(self, factor) -> 'Money':
        """Multiply money by a factor"""
        if not isinstance(factor, (int, float, Decimal)):
            raise TypeError("Can only multiply Money by number")
        return Money(self.amount * Decimal(str(factor)), self.currency)

    def rounded(self) -> 'Money':
        """Round half-up to whole currency units."""
        return Money(self.amount.quantize(Decimal('1'), rounding=ROUND_HALF_UP), self.currency)

    def with_tax(self, rate) -> 'Money':
        """
        Gross amount including tax, rounded to whole units.

        ``Money(Decimal('50000')).with_tax('0.18')`` is ``Money(59000, 'INR')``.
        """
        return (self * (Decimal('1') + Decimal(str(rate)))).rounded()

    def to_minor_units(self) -> int:
        """Amount in the smallest currency unit (paise for INR)."""
        return int((self.amount * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP))

    def __str__(self):
        return f"{self.amount:,.2f} {self.currency}"
