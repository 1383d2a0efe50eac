"""Display formatting for estimates."""

from __future__ import annotations

from .models import MISSING_REQUIRED_INPUT, EstimationResult, RentRange


def format_currency(
    value: float,
    symbol: str = "R$",
    thousands_sep: str = ".",
    decimal_sep: str = ",",
) -> str:
    """Format *value* with two decimals, e.g. ``R$ 1.530,00``."""
    text = f"{value:,.2f}"
    text = text.replace(",", "\0").replace(".", decimal_sep).replace("\0", thousands_sep)
    return f"{symbol} {text}" if symbol else text


def format_range(result: RentRange, **options: str) -> str:
    """Format the min/max pair, e.g. ``R$ 1.530,00 - R$ 1.870,00``."""
    return f"{format_currency(result.min_rent, **options)} - {format_currency(result.max_rent, **options)}"


def render_result(result: EstimationResult | None, **options: str) -> str:
    """Text to show for a result.

    Missing input renders nothing (the estimate is simply not computable yet);
    other failures render their message so the user knows why.
    """
    if result is None:
        return ""
    if isinstance(result, RentRange):
        return format_range(result, **options)
    if result.reason == MISSING_REQUIRED_INPUT:
        return ""
    return result.message
