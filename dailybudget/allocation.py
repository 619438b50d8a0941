"""
Daily allocation engine for dailybudget.

Purpose
-------
Turns monthly figures (income, savings target) plus the sparse set of dated
entries into a full ledger for the current month:

- Totals: month-level sums (income, expenses, available)
- Baseline: flat per-day allowance, distributable / days_in_month
- DailyLedgerRow: per-day breakdown with carryover from the previous day
- MonthlyLedger: all rows plus month aggregates and the predicted
  end-of-month carryover

Mathematical Model
------------------
With N = days_in_month, b = (income - savings) / N and a_d the signed sum of
the entries pinned to day d:

    c_0 = 0
    c_d = b + c_{d-1} + a_d                      (carryover / remaining)
    m_d = available - d * b + sum_{k<=d} a_k     (remaining_monthly)

c_N is the predicted end-of-month savings (or shortfall). Both running
totals are threaded through one ordered fold over the days; they answer
different questions and are kept separate.

Design principles
-----------------
- Pure: same inputs give equal ledgers; nothing is cached or mutated
- Total: inputs are coerced (zero fallback), nothing raises on bad data
- Calendar-aware outputs with pandas DataFrame (``MonthlyLedger.to_frame``)

Example
-------
>>> from datetime import date
>>> from dailybudget.allocation import allocate
>>> ledger = allocate(3000, 500, [], today=date(2026, 9, 10))
>>> round(ledger.baseline, 2)
83.33
>>> round(ledger.predicted_carryover, 2)
2500.0
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Any, Callable, Iterable, List, Optional, Tuple, Union

import numpy as np
import pandas as pd

from .constants import DAYS_PER_WEEK, MAX_DAYS_IN_MONTH
from .entries import Entry, EntryKind, EntryStore
from .exceptions import ValidationError
from .utils import (
    coerce_money,
    days_in_month,
    first_weekday_offset,
    month_label,
)

__all__ = [
    "MonthContext",
    "Totals",
    "DailyLedgerRow",
    "MonthlyLedger",
    "month_context",
    "compute_totals",
    "daily_baseline",
    "day_adjustment",
    "allocate",
]

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Month context
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MonthContext:
    """
    Calendar facts about the month being budgeted.

    Parameters
    ----------
    year, month : int
        Calendar month.
    days_in_month : int
        Length of the month (28..31 for real months). 0 is accepted so the
        engine's zero-length guard can be exercised.
    first_weekday_offset : int
        Weekday of day 1, 0=Monday..6=Sunday. Only used to pad the calendar
        grid; it never enters the arithmetic.
    label : str
        Human readable month, e.g. "Oktober 2026".
    """
    year: int
    month: int
    days_in_month: int
    first_weekday_offset: int
    label: str

    def __post_init__(self) -> None:
        if not (1 <= self.month <= 12):
            raise ValidationError(f"month must be in 1..12, got {self.month}.")
        if not (0 <= self.days_in_month <= MAX_DAYS_IN_MONTH):
            raise ValidationError(
                f"days_in_month must be in 0..{MAX_DAYS_IN_MONTH}, got {self.days_in_month}."
            )
        if not (0 <= self.first_weekday_offset < DAYS_PER_WEEK):
            raise ValidationError(
                f"first_weekday_offset must be in 0..6, got {self.first_weekday_offset}."
            )

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def date_of(self, day: int) -> date:
        """Calendar date of ``day`` (1-indexed)."""
        return self.first_day + timedelta(days=day - 1)


def month_context(today: Optional[date] = None) -> MonthContext:
    """Build the MonthContext of the month containing *today* (default: now)."""
    if today is None:
        today = date.today()
    return MonthContext(
        year=today.year,
        month=today.month,
        days_in_month=days_in_month(today.year, today.month),
        first_weekday_offset=first_weekday_offset(today.year, today.month),
        label=month_label(today.year, today.month),
    )


# ---------------------------------------------------------------------------
# Totals
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Totals:
    """
    Month-level sums.

    ``additional_income`` and ``expenses`` include every entry in the store,
    whether scheduled, unscheduled or pinned to a day the month does not
    have.
    """
    base_income: float
    savings_target: float
    additional_income: float
    expenses: float

    @property
    def distributable(self) -> float:
        """Income minus savings target: the pool divided across days."""
        return self.base_income - self.savings_target

    @property
    def available(self) -> float:
        return self.base_income - self.savings_target + self.additional_income - self.expenses

    @property
    def total_income(self) -> float:
        return self.base_income + self.additional_income


def compute_totals(monthly_income: Any, monthly_savings: Any, entries: Iterable[Entry]) -> Totals:
    """Sum income and expense entries; income and savings are coerced to float."""
    entries = tuple(entries)
    additional = math.fsum(e.amount for e in entries if e.kind is EntryKind.INCOME)
    expenses = math.fsum(e.amount for e in entries if e.kind is EntryKind.EXPENSE)
    return Totals(
        base_income=coerce_money(monthly_income),
        savings_target=coerce_money(monthly_savings),
        additional_income=float(additional),
        expenses=float(expenses),
    )


def daily_baseline(distributable: float, n_days: int) -> float:
    """Flat per-day allowance; 0.0 when the month has no days."""
    return distributable / n_days if n_days > 0 else 0.0


def day_adjustment(entries: Iterable[Entry]) -> float:
    """Signed sum of *entries*: +amount for income, -amount for expense."""
    return math.fsum(e.signed_amount for e in entries)


# ---------------------------------------------------------------------------
# Ledger
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DailyLedgerRow:
    """
    Allocation breakdown for one calendar day.

    Attributes
    ----------
    day : int
        Day of month, 1-indexed.
    date : datetime.date
    baseline : float
        Per-day allowance, identical for every row of a month.
    carryover_in : float
        Previous day's ``remaining`` (0.0 on day 1).
    day_adjustment : float
        Signed sum of the entries pinned to this day.
    remaining : float
        ``baseline + carryover_in + day_adjustment``; next day's carryover.
    remaining_monthly : float
        Month pot left after this day:
        ``available - day * baseline + adjustments through this day``.
    entries : tuple of Entry
        Entries applied on this day, in store order.
    """
    day: int
    date: date
    baseline: float
    carryover_in: float
    day_adjustment: float
    remaining: float
    remaining_monthly: float
    entries: Tuple[Entry, ...] = field(default=())


@dataclass(frozen=True)
class MonthlyLedger:
    """
    Full output of one allocation pass.

    Attributes
    ----------
    context : MonthContext
    totals : Totals
    baseline : float
    rows : tuple of DailyLedgerRow
        One row per day, ``len(rows) == context.days_in_month``.
    unscheduled : tuple of Entry
        Entries without a day (in totals, on no row).
    unplaced : tuple of Entry
        Entries whose day is past the end of the month (in totals, on no
        row).
    """
    context: MonthContext
    totals: Totals
    baseline: float
    rows: Tuple[DailyLedgerRow, ...]
    unscheduled: Tuple[Entry, ...] = ()
    unplaced: Tuple[Entry, ...] = ()

    @property
    def predicted_carryover(self) -> float:
        """Carryover after the last day: predicted end-of-month savings."""
        return self.rows[-1].remaining if self.rows else 0.0

    @property
    def remaining_monthly(self) -> float:
        """Month pot left after the last day (``available`` for an empty month)."""
        return self.rows[-1].remaining_monthly if self.rows else self.totals.available

    @property
    def carryover_path(self) -> np.ndarray:
        """Carryover values ``[c_0, c_1, ..., c_N]`` with ``c_0 = 0``."""
        return np.array([0.0] + [r.remaining for r in self.rows], dtype=float)

    @property
    def adjustments(self) -> np.ndarray:
        """Per-day signed adjustments, shape ``(days_in_month,)``."""
        return np.array([r.day_adjustment for r in self.rows], dtype=float)

    def row(self, day: int) -> DailyLedgerRow:
        """Row for ``day`` (1-indexed)."""
        if not (1 <= day <= len(self.rows)):
            raise ValidationError(
                f"day must be in 1..{len(self.rows)}, got {day}."
            )
        return self.rows[day - 1]

    def to_frame(self) -> pd.DataFrame:
        """
        Daily ledger as a DataFrame indexed by calendar date.

        Columns: day, baseline, carryover_in, day_adjustment, remaining,
        remaining_monthly, n_entries.
        """
        columns = [
            "day", "baseline", "carryover_in", "day_adjustment",
            "remaining", "remaining_monthly", "n_entries",
        ]
        if not self.rows:
            return pd.DataFrame(columns=columns, index=pd.DatetimeIndex([], name="date"))
        idx = pd.date_range(
            start=pd.Timestamp(self.context.first_day),
            periods=len(self.rows),
            freq="D",
            name="date",
        )
        data = {
            "day": [r.day for r in self.rows],
            "baseline": [r.baseline for r in self.rows],
            "carryover_in": [r.carryover_in for r in self.rows],
            "day_adjustment": [r.day_adjustment for r in self.rows],
            "remaining": [r.remaining for r in self.rows],
            "remaining_monthly": [r.remaining_monthly for r in self.rows],
            "n_entries": [len(r.entries) for r in self.rows],
        }
        return pd.DataFrame(data, index=idx, columns=columns)

    def calendar_weeks(self) -> List[List[Optional[DailyLedgerRow]]]:
        """
        Rows laid out as calendar weeks (Monday first).

        The first week is padded with ``first_weekday_offset`` leading
        ``None`` slots, and the last week is padded with trailing ``None``
        slots to seven entries.
        """
        slots: List[Optional[DailyLedgerRow]] = [None] * self.context.first_weekday_offset
        slots.extend(self.rows)
        if len(slots) % DAYS_PER_WEEK:
            slots.extend([None] * (DAYS_PER_WEEK - len(slots) % DAYS_PER_WEEK))
        return [slots[i:i + DAYS_PER_WEEK] for i in range(0, len(slots), DAYS_PER_WEEK)]


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

def allocate(
    monthly_income: Any,
    monthly_savings: Any,
    entries: Union[EntryStore, Iterable[Entry]],
    *,
    today: Optional[Union[date, Callable[[], date]]] = None,
    context: Optional[MonthContext] = None,
) -> MonthlyLedger:
    """
    Compute the daily ledger for the current month.

    Parameters
    ----------
    monthly_income : Any
        Base monthly income; coerced with ``coerce_money`` (0.0 fallback).
    monthly_savings : Any
        Monthly savings target; coerced the same way.
    entries : EntryStore or iterable of Entry
        Ad-hoc income and expense entries.
    today : date or callable returning date, optional
        Date whose month is budgeted. Defaults to ``date.today()``.
    context : MonthContext, optional
        Explicit month facts; takes precedence over ``today``.

    Returns
    -------
    MonthlyLedger

    Notes
    -----
    Never raises on input values. A negative distributable amount (savings
    above income) gives a negative baseline and a compounding deficit, which
    is valid output.
    """
    if context is None:
        context = month_context(today() if callable(today) else today)
    entries = tuple(entries)
    n_days = context.days_in_month

    totals = compute_totals(monthly_income, monthly_savings, entries)
    baseline = daily_baseline(totals.distributable, n_days)

    by_day = {}
    unscheduled, unplaced = [], []
    for entry in entries:
        if entry.day is None:
            unscheduled.append(entry)
        elif entry.day > n_days:
            unplaced.append(entry)
        else:
            by_day.setdefault(entry.day, []).append(entry)

    rows = []
    carryover = 0.0
    remaining_monthly = totals.available
    for day in range(1, n_days + 1):
        day_entries = tuple(by_day.get(day, ()))
        adjustment = day_adjustment(day_entries)
        remaining = baseline + carryover + adjustment
        remaining_monthly = remaining_monthly - baseline + adjustment
        rows.append(DailyLedgerRow(
            day=day,
            date=context.date_of(day),
            baseline=baseline,
            carryover_in=carryover,
            day_adjustment=adjustment,
            remaining=remaining,
            remaining_monthly=remaining_monthly,
            entries=day_entries,
        ))
        carryover = remaining

    if unplaced:
        logger.debug(
            "%d entries pinned past day %d of %s count toward totals only",
            len(unplaced), n_days, context.label,
        )
    logger.debug(
        "Allocated %s: baseline=%.4f predicted_carryover=%.4f",
        context.label, baseline, carryover,
    )

    return MonthlyLedger(
        context=context,
        totals=totals,
        baseline=baseline,
        rows=tuple(rows),
        unscheduled=tuple(unscheduled),
        unplaced=tuple(unplaced),
    )
