"""General utilities for dailybudget

Contents
--------
- Coercion helpers (coerce_money, coerce_amount, normalize_day)
- Calendar helpers (days_in_month, first_weekday_offset, month_label)
- Formatting helpers (format_currency, currency_axis_formatter)

The coercion helpers implement the package's input policy: monetary values
that cannot be read as a finite number become 0.0, and days that are not a
positive whole number become ``None`` (unscheduled). None of them raise.
"""

from __future__ import annotations

import calendar
import math
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Optional

from .constants import (
    CURRENCY_DECIMALS,
    CURRENCY_SYMBOLS,
    DEFAULT_CURRENCY,
    DEFAULT_LOCALE,
    MONTH_NAMES_DE,
    SUPPORTED_LOCALES,
)
from .exceptions import ConfigurationError

__all__ = [
    # Coercion
    "coerce_money",
    "coerce_amount",
    "normalize_day",
    # Calendar
    "days_in_month",
    "first_weekday_offset",
    "month_label",
    # Formatting
    "format_currency",
    "currency_axis_formatter",
]

# ---------------------------------------------------------------------------
# Coercion helpers
# ---------------------------------------------------------------------------

def _to_float(value: Any) -> Optional[float]:
    """Read *value* as a finite float, or return None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if "," in text and "." not in text:
            text = text.replace(",", ".")
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    if not math.isfinite(number):
        return None
    return number


def coerce_money(value: Any) -> float:
    """Coerce a monetary input to float with a 0.0 fallback.

    Accepts numbers and numeric strings (``"1500"``, ``" 12.5 "``,
    ``"12,5"``). None, empty strings, booleans, non-numeric text, NaN and
    infinities all map to 0.0. Negative values are kept.
    """
    number = _to_float(value)
    return 0.0 if number is None else number


def coerce_amount(value: Any) -> float:
    """Coerce an entry amount; anything not strictly positive becomes 0.0.

    A 0.0 result means "reject this entry". The sign of an entry is carried
    by its kind, never by the amount.
    """
    number = coerce_money(value)
    return number if number > 0 else 0.0


def normalize_day(value: Any) -> Optional[int]:
    """Normalize an optional day-of-month to a positive int or None.

    Whole positive numbers (``15``, ``15.0``, ``"15"``) are kept as int,
    including values above the length of any month. Zero, negatives,
    fractions and non-numeric input mean "unscheduled" and return None.
    """
    number = _to_float(value)
    if number is None or number <= 0 or not number.is_integer():
        return None
    return int(number)


# ---------------------------------------------------------------------------
# Calendar helpers
# ---------------------------------------------------------------------------

def days_in_month(year: int, month: int) -> int:
    """Number of days in *month* of *year* (28..31)."""
    return calendar.monthrange(year, month)[1]


def first_weekday_offset(year: int, month: int) -> int:
    """Weekday of the 1st of the month, 0=Monday..6=Sunday."""
    return date(year, month, 1).weekday()


def month_label(year: int, month: int) -> str:
    """German month label, e.g. ``"Oktober 2026"``."""
    return f"{MONTH_NAMES_DE[month - 1]} {year}"


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _group_thousands(digits: str, separator: str) -> str:
    groups = []
    while len(digits) > 3:
        groups.insert(0, digits[-3:])
        digits = digits[:-3]
    groups.insert(0, digits)
    return separator.join(groups)


def format_currency(
    value: float,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
) -> str:
    """
    Format a monetary amount for display.

    Parameters
    ----------
    value : float
        Amount in currency units. Non-numeric input is coerced to 0.
    locale : {"de_DE", "en_US"}, default "de_DE"
        Separator and symbol placement convention.
    currency : str, default "EUR"
        ISO code; mapped to a symbol via ``CURRENCY_SYMBOLS``.

    Returns
    -------
    str
        Amount rounded half-up to two decimals.

    Examples
    --------
    >>> format_currency(1234.5)
    '1.234,50\xa0€'
    >>> format_currency(-83.333, locale="en_US", currency="USD")
    '-$83.33'

    Notes
    -----
    Display only. Comparisons in code and tests use the raw floats.
    """
    if locale not in SUPPORTED_LOCALES:
        raise ConfigurationError(
            f"Unsupported locale '{locale}'. Use one of: {', '.join(SUPPORTED_LOCALES)}."
        )
    quantum = Decimal(1).scaleb(-CURRENCY_DECIMALS)
    rounded = Decimal(repr(coerce_money(value))).quantize(quantum, rounding=ROUND_HALF_UP)
    negative = rounded < 0
    whole, _, cents = f"{abs(rounded):f}".partition(".")
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    sign = "-" if negative else ""

    if locale == "de_DE":
        number = f"{_group_thousands(whole, '.')},{cents}"
        return f"{sign}{number}\u00a0{symbol}"
    number = f"{_group_thousands(whole, ',')}.{cents}"
    if len(symbol) > 1:
        return f"{sign}{symbol} {number}"
    return f"{sign}{symbol}{number}"


def currency_axis_formatter(locale: str = DEFAULT_LOCALE, currency: str = DEFAULT_CURRENCY):
    """
    Build a tick formatter for matplotlib's FuncFormatter.

    Examples
    --------
    >>> from matplotlib.ticker import FuncFormatter
    >>> ax.yaxis.set_major_formatter(FuncFormatter(currency_axis_formatter()))
    """
    def _formatter(x, pos):
        return format_currency(x, locale=locale, currency=currency)

    return _formatter
