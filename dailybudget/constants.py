"""
Global constants for dailybudget.

Purpose
-------
Centralizes default values, display labels and magic numbers used across
the package.

Usage
-----
>>> from dailybudget.constants import DEFAULT_LOCALE, DEFAULT_CURRENCY
>>> print(format_currency(12.5, locale=DEFAULT_LOCALE, currency=DEFAULT_CURRENCY))
12,50 €

Categories
----------
- Formatting: locale, currency, symbols
- Calendar: month names, weekday headers, grid width
- Labels: fallbacks used when listing entries
- Serialization: budget file schema version
"""

from typing import Dict, Tuple

__all__ = [
    # Formatting
    "DEFAULT_LOCALE",
    "DEFAULT_CURRENCY",
    "SUPPORTED_LOCALES",
    "CURRENCY_SYMBOLS",
    "CURRENCY_DECIMALS",
    # Calendar
    "DAYS_PER_WEEK",
    "MAX_DAYS_IN_MONTH",
    "MONTH_NAMES_DE",
    "WEEKDAY_HEADERS_DE",
    # Labels
    "NO_DESCRIPTION_LABEL",
    "UNSCHEDULED_DAY_LABEL",
    "KIND_LABELS_DE",
    # Serialization
    "SCHEMA_VERSION",
]


# =============================================================================
# Formatting Defaults
# =============================================================================

DEFAULT_LOCALE: str = "de_DE"
"""Default number formatting convention (``1.234,56 €``)."""

DEFAULT_CURRENCY: str = "EUR"
"""Default ISO currency code."""

SUPPORTED_LOCALES: Tuple[str, ...] = ("de_DE", "en_US")
"""Locales understood by ``utils.format_currency``."""

CURRENCY_SYMBOLS: Dict[str, str] = {
    "EUR": "€",
    "USD": "$",
    "GBP": "£",
    "CHF": "CHF",
}
"""Display symbol per ISO currency code. Unknown codes print the code."""

CURRENCY_DECIMALS: int = 2
"""Decimal places used for every displayed amount."""


# =============================================================================
# Calendar
# =============================================================================

DAYS_PER_WEEK: int = 7
"""Width of the calendar grid (Monday..Sunday)."""

MAX_DAYS_IN_MONTH: int = 31
"""Upper bound accepted for ``MonthContext.days_in_month``."""

MONTH_NAMES_DE: Tuple[str, ...] = (
    "Januar", "Februar", "März", "April", "Mai", "Juni",
    "Juli", "August", "September", "Oktober", "November", "Dezember",
)
"""German month names, January first, for month labels."""

WEEKDAY_HEADERS_DE: Tuple[str, ...] = ("Mo", "Di", "Mi", "Do", "Fr", "Sa", "So")
"""Calendar grid column headers, Monday first."""


# =============================================================================
# Labels
# =============================================================================

NO_DESCRIPTION_LABEL: str = "Ohne Beschreibung"
"""Shown for entries without a description."""

UNSCHEDULED_DAY_LABEL: str = "-"
"""Shown in place of the day for unscheduled entries."""

KIND_LABELS_DE: Dict[str, str] = {
    "income": "Einkommen",
    "expense": "Ausgabe",
}
"""Display label per entry kind."""


# =============================================================================
# Serialization
# =============================================================================

SCHEMA_VERSION: str = "0.1.0"
"""Version written into budget files and ledger reports."""
