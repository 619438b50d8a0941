"""
dailybudget - Daily spending allowance calculator

Splits a monthly income, minus a savings target, across the days of the
current month and tracks how each day's surplus or deficit carries over.

Modules
-------
- entries     : Entry, EntryKind and the in-memory EntryStore
- allocation  : Totals, daily baseline and the day-by-day ledger
- session     : BudgetSession, caller-owned state with change notification
- utils       : Input coercion, calendar and currency formatting helpers

"""

__version__ = "0.1.0"

from .entries import Entry, EntryKind, EntryStore
from .allocation import MonthContext, MonthlyLedger, Totals, allocate, month_context
from .session import BudgetSession
from . import utils
