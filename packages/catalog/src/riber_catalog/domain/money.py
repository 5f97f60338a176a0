"""Money value object."""

from __future__ import annotations

from decimal import Decimal

from pydantic import field_validator

from riber_core.domain.value_object import ValueObject

from ..exceptions import InvalidMoneyError

DEFAULT_CURRENCY = "BRL"


class Money(ValueObject):
    """A non-negative amount in a currency.

    Arithmetic keeps the currency and refuses to mix currencies.
    """

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value: object) -> Decimal:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
        if amount < 0:
            raise InvalidMoneyError("Amount cannot be negative")
        return amount

    @classmethod
    def create(cls, amount: Decimal | int | float | str, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(amount=amount, currency=currency)

    @classmethod
    def price(cls, amount: Decimal | int | float | str, currency: str = DEFAULT_CURRENCY) -> Money:
        """A price: strictly positive."""
        money = cls(amount=amount, currency=currency)
        if money.amount == 0:
            raise InvalidMoneyError("Price must be greater than zero")
        return money

    @classmethod
    def zero(cls, currency: str = DEFAULT_CURRENCY) -> Money:
        return cls(amount=Decimal(0), currency=currency)

    def _check_currency(self, other: Money, operation: str) -> None:
        if other.currency != self.currency:
            raise InvalidMoneyError(
                f"Cannot {operation} {self.currency} and {other.currency}"
            )

    def __add__(self, other: Money) -> Money:
        self._check_currency(other, "add")
        return Money(amount=self.amount + other.amount, currency=self.currency)

    def __sub__(self, other: Money) -> Money:
        self._check_currency(other, "subtract")
        return Money(amount=self.amount - other.amount, currency=self.currency)

    def __mul__(self, factor: int | Decimal) -> Money:
        return Money(amount=self.amount * Decimal(factor), currency=self.currency)

    def __str__(self) -> str:
        return f"{self.amount} {self.currency}"
