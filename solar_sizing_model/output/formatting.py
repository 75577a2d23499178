"""Number and currency formatting helpers for display, output CSVs and stdout.

Public API
----------
format_currency       – THB amount with thousands separators, no decimals.
format_capacity       – Capacity with one decimal and a ``kW`` suffix.
format_payback_period – Years with one decimal and the localised unit label.
fmt_float             – Plain float for CSV cells ("" for None).
"""

from __future__ import annotations

from solar_sizing_model.config.defaults import (
    CAPACITY_UNIT,
    CURRENCY_SYMBOL,
    FLOAT_PRECISION,
    NOT_APPLICABLE_LABEL,
    YEARS_LABEL,
)
from solar_sizing_model.sizing.calculator import round_half_up


def format_currency(amount: float) -> str:
    """Format a THB amount, e.g. ``157500`` → ``"฿157,500"``.

    Fractions are rounded half-up to whole baht before formatting.
    """
    rounded = round_half_up(abs(amount))
    sign = "-" if amount < 0 and rounded else ""
    return f"{sign}{CURRENCY_SYMBOL}{rounded:,.0f}"


def format_capacity(capacity_kw: float) -> str:
    """Format a capacity, e.g. ``3.5`` → ``"3.5 kW"``."""
    return f"{round_half_up(capacity_kw, 1):.1f} {CAPACITY_UNIT}"


def format_payback_period(years: float | None) -> str:
    """Format a payback period, e.g. ``7.3`` → ``"7.3 ปี"``.

    ``None`` (no savings, payback never reached) is shown as
    :data:`NOT_APPLICABLE_LABEL`.
    """
    if years is None:
        return NOT_APPLICABLE_LABEL
    return f"{round_half_up(years, 1):.1f} {YEARS_LABEL}"


def fmt_float(
    value: float | None,
    precision: int = FLOAT_PRECISION,
) -> str:
    """Format a float to a fixed number of decimal places.

    Parameters
    ----------
    value:
        The value to format. None is returned as an empty string.
    precision:
        Number of decimal places.

    Returns
    -------
    str
        Formatted string, e.g. ``"3.5"``.
    """
    if value is None:
        return ""
    return f"{value:.{precision}f}"
