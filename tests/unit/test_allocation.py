"""
Unit tests for allocation.py module.

Tests month context, totals, the daily fold (carryover and remaining
monthly) and the ledger views.
"""

from datetime import date

import numpy as np
import pandas as pd
import pytest

from dailybudget.allocation import (
    DailyLedgerRow,
    MonthContext,
    MonthlyLedger,
    allocate,
    compute_totals,
    daily_baseline,
    day_adjustment,
    month_context,
)
from dailybudget.entries import Entry, EntryKind, EntryStore
from dailybudget.exceptions import ValidationError


class TestMonthContext:
    """Tests for MonthContext and month_context()."""

    def test_from_date(self, october):
        ctx = month_context(october)
        assert ctx.year == 2026
        assert ctx.month == 10
        assert ctx.days_in_month == 31
        assert ctx.first_weekday_offset == 3
        assert ctx.label == "Oktober 2026"
        assert ctx.first_day == date(2026, 10, 1)
        assert ctx.date_of(31) == date(2026, 10, 31)

    def test_february(self, february):
        ctx = month_context(february)
        assert ctx.days_in_month == 28
        assert ctx.first_weekday_offset == 6

    def test_defaults_to_today(self):
        ctx = month_context()
        assert 28 <= ctx.days_in_month <= 31
        assert 0 <= ctx.first_weekday_offset <= 6

    @pytest.mark.parametrize("kwargs", [
        {"month": 13},
        {"days_in_month": 32},
        {"days_in_month": -1},
        {"first_weekday_offset": 7},
    ])
    def test_invalid_values(self, kwargs):
        values = dict(year=2026, month=9, days_in_month=30, first_weekday_offset=1, label="x")
        values.update(kwargs)
        with pytest.raises(ValidationError):
            MonthContext(**values)


class TestTotals:
    """Tests for compute_totals and derived figures."""

    def test_mixed_entries(self, mixed_store):
        totals = compute_totals(1000, 200, mixed_store)
        assert totals.base_income == 1000.0
        assert totals.savings_target == 200.0
        assert totals.additional_income == pytest.approx(150.0)
        assert totals.expenses == pytest.approx(370.0)
        assert totals.distributable == pytest.approx(800.0)
        assert totals.available == pytest.approx(1000 - 200 + 150 - 370)
        assert totals.total_income == pytest.approx(1150.0)

    def test_inputs_coerced(self):
        totals = compute_totals("abc", None, [])
        assert totals.base_income == 0.0
        assert totals.savings_target == 0.0
        assert totals.available == 0.0

    def test_string_income(self):
        assert compute_totals("2500", "500", []).distributable == pytest.approx(2000.0)


class TestHelpers:
    """Tests for daily_baseline and day_adjustment."""

    def test_baseline(self):
        assert daily_baseline(2500, 30) == pytest.approx(83.3333333)

    def test_baseline_zero_days(self):
        assert daily_baseline(2500, 0) == 0.0

    def test_day_adjustment_signed(self):
        entries = [
            Entry(EntryKind.INCOME, 100.0, day=3),
            Entry(EntryKind.EXPENSE, 40.0, day=3),
        ]
        assert day_adjustment(entries) == pytest.approx(60.0)
        assert day_adjustment([]) == 0.0


class TestScenarios:
    """Worked examples of a 30-day month."""

    def test_savings_target_no_entries(self, september):
        ledger = allocate(3000, 500, [], today=september)

        assert ledger.totals.distributable == pytest.approx(2500.0)
        assert ledger.totals.available == pytest.approx(2500.0)
        assert ledger.baseline == pytest.approx(83.3333, abs=1e-4)
        assert len(ledger.rows) == 30

        path = ledger.carryover_path
        assert np.all(np.diff(path) > 0)
        assert np.allclose(np.diff(path), 2500 / 30)
        assert path[30] == pytest.approx(2500.0)
        assert ledger.predicted_carryover == pytest.approx(2500.0)

    def test_single_expense_mid_month(self, september):
        store = EntryStore()
        store.add("expense", 300, day=15)
        ledger = allocate(2000, 0, store, today=september)

        b = 2000 / 30
        path = ledger.carryover_path
        assert ledger.baseline == pytest.approx(66.6667, abs=1e-4)
        assert path[14] == pytest.approx(14 * b)
        assert path[15] == pytest.approx(14 * b + b - 300)
        assert path[30] == pytest.approx(1700.0)
        assert ledger.totals.available == pytest.approx(1700.0)
        assert ledger.row(15).day_adjustment == pytest.approx(-300.0)
        assert ledger.row(15).carryover_in == pytest.approx(path[14])

    def test_negative_distributable_compounds(self, september):
        ledger = allocate(100, 400, [], today=september)
        assert ledger.baseline == pytest.approx(-10.0)
        assert np.all(np.diff(ledger.carryover_path) < 0)
        assert ledger.predicted_carryover == pytest.approx(-300.0)

    def test_day_without_entries_degenerates(self, september):
        ledger = allocate(3000, 0, [], today=september)
        for row in ledger.rows:
            assert row.day_adjustment == 0.0
            assert row.remaining == pytest.approx(row.baseline + row.carryover_in)
            assert row.entries == ()

    def test_bad_inputs_give_zero_ledger(self, september):
        ledger = allocate("abc", None, [], today=september)
        assert ledger.baseline == 0.0
        assert ledger.predicted_carryover == 0.0


class TestInvariants:
    """Properties that hold for any entry list."""

    @pytest.fixture
    def ledger(self, mixed_store, september) -> MonthlyLedger:
        return allocate(1800, 300, mixed_store, today=september)

    def test_carryover_recurrence(self, ledger):
        path = ledger.carryover_path
        adj = ledger.adjustments
        assert path[0] == 0.0
        for d in range(1, len(ledger.rows) + 1):
            assert path[d] == pytest.approx(ledger.baseline + path[d - 1] + adj[d - 1])
        assert ledger.predicted_carryover == path[-1]

    def test_baseline_times_days_is_distributable(self, ledger):
        assert ledger.baseline * ledger.context.days_in_month == pytest.approx(
            ledger.totals.distributable
        )

    def test_adjustments_sum_only_in_range_entries(self, ledger, mixed_store):
        in_range = [
            e for e in mixed_store
            if e.day is not None and e.day <= ledger.context.days_in_month
        ]
        expected = sum(e.signed_amount for e in in_range)
        assert ledger.adjustments.sum() == pytest.approx(expected)
        assert ledger.adjustments.sum() == pytest.approx(100 - 40 - 300)
        # month totals still include the unscheduled and day-40 entries
        assert ledger.totals.additional_income - ledger.totals.expenses == pytest.approx(
            100 + 50 - 40 - 300 - 30
        )

    def test_remaining_monthly_formula(self, ledger):
        cumulative = np.cumsum(ledger.adjustments)
        for row in ledger.rows:
            expected = (
                ledger.totals.available
                - row.day * ledger.baseline
                + cumulative[row.day - 1]
            )
            assert row.remaining_monthly == pytest.approx(expected)
        assert ledger.remaining_monthly == ledger.rows[-1].remaining_monthly

    def test_carryover_and_remaining_monthly_differ(self, ledger):
        assert ledger.predicted_carryover != pytest.approx(ledger.remaining_monthly)

    def test_unscheduled_and_unplaced(self, ledger):
        assert [e.amount for e in ledger.unscheduled] == [50.0]
        assert [e.day for e in ledger.unplaced] == [40]

    def test_idempotent(self, mixed_store, september):
        first = allocate(1800, 300, mixed_store, today=september)
        second = allocate(1800, 300, mixed_store, today=september)
        assert first == second
        assert len(mixed_store) == 5

    def test_remove_and_readd_restores_ledger(self, september):
        store = EntryStore()
        store.add("expense", 300, day=15, description="Miete")
        store.add("income", 80, day=20, description="Bonus")
        store.add("expense", 12, description="Abo")
        before = allocate(2000, 100, store, today=september)

        removed = store.remove_at(0)
        store.add(removed.kind, removed.amount, day=removed.day, description=removed.description)
        after = allocate(2000, 100, store, today=september)

        assert after.totals == before.totals
        assert after.rows == before.rows
        assert store.list()[-1] == removed

    def test_remove_and_readd_fractional_amounts(self, september):
        store = EntryStore()
        for amount in (0.1, 0.2, 0.3):
            store.add("income", amount, day=3)
        store.add("expense", 0.7, day=3)
        before = allocate(1000, 0, store, today=september)

        removed = store.remove_at(0)
        store.add(removed.kind, removed.amount, day=removed.day)
        after = allocate(1000, 0, store, today=september)

        assert after.totals == before.totals
        assert after.totals.additional_income == 0.6
        assert after.row(3).day_adjustment == before.row(3).day_adjustment
        assert [r.remaining for r in after.rows] == [r.remaining for r in before.rows]
        assert [r.remaining_monthly for r in after.rows] == [
            r.remaining_monthly for r in before.rows
        ]


class TestContextHandling:
    """Tests for explicit contexts and date sources."""

    def test_zero_day_month(self):
        ctx = MonthContext(year=2026, month=9, days_in_month=0, first_weekday_offset=1, label="leer")
        ledger = allocate(3000, 500, [Entry(EntryKind.EXPENSE, 10.0, day=1)], context=ctx)
        assert ledger.baseline == 0.0
        assert ledger.rows == ()
        assert ledger.predicted_carryover == 0.0
        assert ledger.remaining_monthly == pytest.approx(ledger.totals.available)
        assert len(ledger.unplaced) == 1
        assert ledger.to_frame().empty

    def test_context_overrides_today(self, september, october):
        ledger = allocate(3100, 0, [], today=september, context=month_context(october))
        assert ledger.context.days_in_month == 31
        assert ledger.baseline == pytest.approx(100.0)

    def test_today_callable(self, february):
        ledger = allocate(2800, 0, [], today=lambda: february)
        assert len(ledger.rows) == 28
        assert ledger.baseline == pytest.approx(100.0)

    def test_accepts_plain_list(self, september):
        entries = [Entry(EntryKind.INCOME, 30.0, day=2)]
        ledger = allocate(0, 0, entries, today=september)
        assert ledger.row(2).remaining == pytest.approx(30.0)


class TestLedgerViews:
    """Tests for row(), to_frame() and calendar_weeks()."""

    def test_row_lookup(self, september):
        ledger = allocate(3000, 0, [], today=september)
        row = ledger.row(1)
        assert isinstance(row, DailyLedgerRow)
        assert row.date == date(2026, 9, 1)
        assert row.carryover_in == 0.0
        with pytest.raises(ValidationError):
            ledger.row(0)
        with pytest.raises(ValidationError):
            ledger.row(31)

    def test_to_frame(self, mixed_store, september):
        df = allocate(3000, 0, mixed_store, today=september).to_frame()
        assert isinstance(df, pd.DataFrame)
        assert len(df) == 30
        assert df.index[0] == pd.Timestamp("2026-09-01")
        assert df.index[-1] == pd.Timestamp("2026-09-30")
        assert list(df.columns) == [
            "day", "baseline", "carryover_in", "day_adjustment",
            "remaining", "remaining_monthly", "n_entries",
        ]
        assert df.loc[pd.Timestamp("2026-09-03"), "n_entries"] == 2
        assert df.loc[pd.Timestamp("2026-09-03"), "day_adjustment"] == pytest.approx(60.0)

    def test_calendar_weeks_padding(self, september):
        weeks = allocate(3000, 0, [], today=september).calendar_weeks()
        assert len(weeks) == 5
        assert all(len(week) == 7 for week in weeks)
        assert weeks[0][0] is None
        assert weeks[0][1].day == 1
        assert weeks[-1][-4:] == [None, None, None, None]
        days = [row.day for week in weeks for row in week if row is not None]
        assert days == list(range(1, 31))

    def test_calendar_weeks_sunday_start(self, february):
        weeks = allocate(2800, 0, [], today=february).calendar_weeks()
        assert weeks[0][:6] == [None] * 6
        assert weeks[0][6].day == 1
