"""
Type definitions for dailybudget.

Purpose
-------
TypedDict definitions for the dictionaries written to budget files and
ledger reports (see ``serialization``).

Type Definitions
----------------
EntryDict
    One entry: {"kind", "amount", "day", "description"}

LedgerRowDict
    One day of a report: {"day", "date", "baseline", "carryover_in", ...}

MonthDict, TotalsDict
    Month facts and month-level sums of a report

LedgerReportDict
    Full report: {"schema_version", "month", "totals", "rows", ...}
"""

from typing import List, Optional

from typing_extensions import TypedDict

__all__ = [
    "EntryDict",
    "LedgerRowDict",
    "MonthDict",
    "TotalsDict",
    "LedgerReportDict",
]


class EntryDict(TypedDict):
    """
    Budget-file form of an Entry.

    Examples
    --------
    >>> entry: EntryDict = {
    ...     "kind": "expense", "amount": 300.0, "day": 15, "description": "Miete"
    ... }
    """

    kind: str
    amount: float
    day: Optional[int]
    description: str


class LedgerRowDict(TypedDict):
    """One DailyLedgerRow; ``date`` is an ISO string."""

    day: int
    date: str
    baseline: float
    carryover_in: float
    day_adjustment: float
    remaining: float
    remaining_monthly: float
    entries: List[EntryDict]


class MonthDict(TypedDict):
    year: int
    month: int
    label: str
    days_in_month: int
    first_weekday_offset: int


class TotalsDict(TypedDict):
    base_income: float
    savings_target: float
    additional_income: float
    expenses: float
    total_income: float
    distributable: float
    available: float


class LedgerReportDict(TypedDict):
    """
    JSON report of a MonthlyLedger.

    Attributes
    ----------
    predicted_carryover : float
        Carryover after the last day (predicted end-of-month savings).
    unscheduled, unplaced : list of EntryDict
        Entries counted in totals that appear on no day.
    """

    schema_version: str
    month: MonthDict
    totals: TotalsDict
    baseline: float
    predicted_carryover: float
    remaining_monthly: float
    rows: List[LedgerRowDict]
    unscheduled: List[EntryDict]
    unplaced: List[EntryDict]
