"""Helpers for amounts stored in minor currency units."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_CENT = Decimal("0.01")


def to_units(cents: int | None) -> float:
    """Convert minor units to a two-decimal major-unit number."""

    value = (Decimal(cents or 0) / 100).quantize(_CENT, rounding=ROUND_HALF_UP)
    return float(value)


def format_amount(cents: int | None, symbol: str = "") -> str:
    """Render ``cents`` as ``"1,234.50"`` with an optional currency symbol."""

    value = (Decimal(cents or 0) / 100).quantize(_CENT, rounding=ROUND_HALF_UP)
    text = f"{value:,.2f}"
    return f"{symbol}{text}" if symbol else text


__all__ = ["format_amount", "to_units"]
