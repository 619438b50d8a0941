"""
Budget session: the caller-owned state of one budgeting run.

Purpose
-------
Holds the monthly income, the savings target and the entry store, and runs
a full allocation pass whenever a ledger is requested. Subscribers are
notified with a freshly computed ledger after every mutation, so a
presentation layer can redraw from scratch on each change.

Example
-------
>>> from datetime import date
>>> from dailybudget.session import BudgetSession
>>> session = BudgetSession(monthly_income=2000, today=date(2026, 9, 10))
>>> _ = session.add_entry("expense", 300, day=15, description="Miete")
>>> round(session.ledger().predicted_carryover, 2)
1700.0
"""

from __future__ import annotations

from datetime import date
from typing import Any, Callable, List, Optional, Union

from .allocation import MonthlyLedger, Totals, allocate, compute_totals
from .entries import Entry, EntryStore
from .utils import coerce_money

__all__ = ["BudgetSession"]

Listener = Callable[[MonthlyLedger], None]


class BudgetSession:
    """
    Explicit replacement for ambient UI state.

    Parameters
    ----------
    monthly_income : Any, default 0
        Coerced to float with a 0.0 fallback.
    monthly_savings : Any, default 0
        Coerced to float with a 0.0 fallback.
    store : EntryStore, optional
        Entry store to use; a new empty one by default.
    today : date or callable returning date, optional
        Source of the current month. Defaults to ``date.today``.

    Notes
    -----
    Nothing is cached: ``ledger()`` and ``totals()`` recompute from the
    current state every time they are called.
    """

    def __init__(
        self,
        monthly_income: Any = 0,
        monthly_savings: Any = 0,
        store: Optional[EntryStore] = None,
        today: Optional[Union[date, Callable[[], date]]] = None,
    ) -> None:
        self._monthly_income = coerce_money(monthly_income)
        self._monthly_savings = coerce_money(monthly_savings)
        self.store = store if store is not None else EntryStore()
        self._today = today
        self._listeners: List[Listener] = []

    def __repr__(self) -> str:
        return (
            f"BudgetSession(monthly_income={self._monthly_income}, "
            f"monthly_savings={self._monthly_savings}, n_entries={len(self.store)})"
        )

    # -----------------------------------------------------------------------
    # Inputs
    # -----------------------------------------------------------------------

    @property
    def monthly_income(self) -> float:
        return self._monthly_income

    @monthly_income.setter
    def monthly_income(self, value: Any) -> None:
        self.set_income(value)

    @property
    def monthly_savings(self) -> float:
        return self._monthly_savings

    @monthly_savings.setter
    def monthly_savings(self, value: Any) -> None:
        self.set_savings(value)

    @property
    def today(self) -> date:
        if self._today is None:
            return date.today()
        if callable(self._today):
            return self._today()
        return self._today

    def set_income(self, value: Any) -> None:
        self._monthly_income = coerce_money(value)
        self._notify()

    def set_savings(self, value: Any) -> None:
        self._monthly_savings = coerce_money(value)
        self._notify()

    def add_entry(
        self,
        kind: Any,
        amount: Any,
        day: Any = None,
        description: Optional[str] = None,
    ) -> Optional[Entry]:
        """Add an entry through the store; dropped inputs return None and notify nobody."""
        entry = self.store.add(kind, amount, day=day, description=description)
        if entry is not None:
            self._notify()
        return entry

    def remove_entry(self, index: int) -> Entry:
        """Remove the entry at ``index``; raises EntryIndexError when out of range."""
        entry = self.store.remove_at(index)
        self._notify()
        return entry

    # -----------------------------------------------------------------------
    # Views
    # -----------------------------------------------------------------------

    def totals(self) -> Totals:
        return compute_totals(self._monthly_income, self._monthly_savings, self.store)

    def ledger(self) -> MonthlyLedger:
        """Run a full allocation pass over the current state."""
        return allocate(
            self._monthly_income,
            self._monthly_savings,
            self.store,
            today=self.today,
        )

    # -----------------------------------------------------------------------
    # Change notification
    # -----------------------------------------------------------------------

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register ``listener`` to receive a new ledger after each mutation.

        Returns
        -------
        callable
            Calling it removes the listener again.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        if not self._listeners:
            return
        ledger = self.ledger()
        for listener in list(self._listeners):
            listener(ledger)
