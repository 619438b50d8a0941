"""
Pytest configuration and fixtures for the dailybudget test suite.

Dates are pinned so month lengths and weekday offsets are known:
- September 2026: 30 days, starts on a Tuesday (offset 1)
- October 2026: 31 days, starts on a Thursday (offset 3)
- February 2026: 28 days, starts on a Sunday (offset 6)
"""

from datetime import date

import pytest

from dailybudget.entries import EntryKind, EntryStore
from dailybudget.session import BudgetSession


# ---------------------------------------------------------------------------
# Date Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def september() -> date:
    """A day in a 30-day month."""
    return date(2026, 9, 10)


@pytest.fixture
def october() -> date:
    """A day in a 31-day month."""
    return date(2026, 10, 19)


@pytest.fixture
def february() -> date:
    """A day in a 28-day month."""
    return date(2026, 2, 3)


# ---------------------------------------------------------------------------
# Store / Session Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def store() -> EntryStore:
    """Empty entry store."""
    return EntryStore()


@pytest.fixture
def mixed_store() -> EntryStore:
    """
    Store with one entry of each placement.

    - income 100 on day 3
    - expense 40 on day 3
    - expense 300 on day 15
    - income 50 unscheduled
    - expense 30 on day 40 (never on a calendar day)
    """
    s = EntryStore()
    s.add(EntryKind.INCOME, 100, day=3, description="Flohmarkt")
    s.add(EntryKind.EXPENSE, 40, day=3, description="Tanken")
    s.add(EntryKind.EXPENSE, 300, day=15, description="Miete")
    s.add(EntryKind.INCOME, 50)
    s.add(EntryKind.EXPENSE, 30, day=40, description="Tippfehler")
    return s


@pytest.fixture
def session(september) -> BudgetSession:
    """Session pinned to September 2026 with income 2000 and no savings."""
    return BudgetSession(monthly_income=2000, monthly_savings=0, today=september)
