"""Cent/decimal conversions."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CENT = Decimal("0.01")


def cents_to_decimal(cents: int) -> Decimal:
    return (Decimal(cents) / 100).quantize(CENT)


def decimal_to_cents(value: Decimal) -> int:
    return int((value * 100).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def parse_dollars(text: str) -> Decimal | None:
    """Parse a user-entered dollar amount; ``None`` when it is not a finite number."""
    try:
        value = Decimal(text.strip().lstrip("$"))
    except (InvalidOperation, AttributeError):
        return None
    if not value.is_finite():
        return None
    return value


def format_price(value: Decimal | None) -> str:
    if value is None:
        return "-"
    return f"${value:.2f}"
