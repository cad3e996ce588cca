"""Exact money arithmetic for checkout totals.

Totals are accumulated over Python integers in the smallest currency subunit.
No float ever takes part in a computation, display formatting included.
"""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

from .exceptions import AmountOverflowError, CurrencyMismatchError, EmptyLineSetError
from .models.catalog import CatalogItem
from .models.checkout import MoneyAmount

# Largest total accepted; downstream payment systems store amounts as signed 64-bit.
MAX_AMOUNT_MINOR = 2**63 - 1

# Display symbol and number of minor-unit decimal places per currency
CURRENCY_DISPLAY: Dict[str, Tuple[str, int]] = {
    "USD": ("$", 2),
    "EUR": ("€", 2),
    "GBP": ("£", 2),
    "CAD": ("C$", 2),
    "AUD": ("A$", 2),
    "JPY": ("¥", 0),
}


def compute_total(
    lines: Sequence[Tuple[CatalogItem, int]],
    max_amount_minor: int = MAX_AMOUNT_MINOR,
) -> MoneyAmount:
    """Sum ``price * quantity`` over resolved lines.

    Args:
        lines: Non-empty (item, quantity) pairs sharing one currency
        max_amount_minor: Upper bound for the total

    Returns:
        The exact total as a MoneyAmount

    Raises:
        EmptyLineSetError: If no lines are given
        CurrencyMismatchError: If lines span more than one currency
        AmountOverflowError: If the total exceeds ``max_amount_minor``
    """
    if not lines:
        raise EmptyLineSetError()

    currency = lines[0][0].currency
    total = 0
    for item, quantity in lines:
        if item.currency != currency:
            raise CurrencyMismatchError(expected=currency, found=item.currency)
        total += item.price * quantity
        if total > max_amount_minor:
            raise AmountOverflowError(max_amount_minor)

    return MoneyAmount(amount=total, currency=currency)


def format_minor(amount: int, currency: str) -> str:
    """Render a minor-unit amount for humans, e.g. ``format_minor(550, "USD") == "$5.50"``."""
    symbol, places = CURRENCY_DISPLAY.get(currency.upper(), ("", 2))
    if places:
        whole, fraction = divmod(amount, 10**places)
        formatted = f"{whole:,}.{fraction:0{places}d}"
    else:
        formatted = f"{amount:,}"
    if symbol:
        return f"{symbol}{formatted}"
    return f"{formatted} {currency}"


def format_money(money: MoneyAmount) -> str:
    """Render a MoneyAmount for humans."""
    return format_minor(money.amount, money.currency)


__all__ = [
    "MAX_AMOUNT_MINOR",
    "CURRENCY_DISPLAY",
    "compute_total",
    "format_minor",
    "format_money",
]
