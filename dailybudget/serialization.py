"""
Serialization module for dailybudget.

Purpose
-------
Reads user-authored budget files (JSON) into a BudgetSession and writes
reports of a computed month. There is no save of the session itself: a
session lives in memory only.

Budget file format
------------------
{
  "schema_version": "0.1.0",
  "monthly_income": 2000,
  "monthly_savings": 0,
  "entries": [
    {"kind": "expense", "amount": 300, "day": 15, "description": "Miete"}
  ]
}

Example
-------
>>> from pathlib import Path
>>> from dailybudget.serialization import load_session, save_ledger_report
>>> session = load_session(Path("budget.json"))
>>> save_ledger_report(session.ledger(), Path("reports/oktober.json"))
"""

from __future__ import annotations

import json
import warnings
from pathlib import Path
from typing import Any, Dict, Optional, TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from .config import BudgetConfig, EntryConfig
from .constants import SCHEMA_VERSION
from .entries import Entry, EntryStore
from .exceptions import ConfigurationError
from .types import EntryDict, LedgerReportDict, LedgerRowDict

if TYPE_CHECKING:
    from .allocation import DailyLedgerRow, MonthlyLedger
    from .session import BudgetSession

__all__ = [
    "SCHEMA_VERSION",
    "entry_to_dict",
    "entry_from_dict",
    "session_to_dict",
    "session_from_dict",
    "load_session",
    "row_to_dict",
    "ledger_to_dict",
    "save_ledger_report",
]


# ---------------------------------------------------------------------------
# Entry Serialization
# ---------------------------------------------------------------------------

def entry_to_dict(entry: Entry) -> EntryDict:
    """Convert an Entry to its budget-file representation."""
    return {
        "kind": entry.kind.value,
        "amount": entry.amount,
        "day": entry.day,
        "description": entry.description,
    }


def entry_from_dict(data: Dict[str, Any], store: Optional[EntryStore] = None) -> Optional[Entry]:
    """
    Add the entry described by ``data`` to ``store`` (a new one if omitted).

    Returns
    -------
    Entry or None
        None when the store drops the entry (zero amount, unknown kind).
    """
    config = EntryConfig.model_validate(data)
    target = store if store is not None else EntryStore()
    return target.add(config.kind, config.amount, day=config.day, description=config.description)


# ---------------------------------------------------------------------------
# Session Serialization
# ---------------------------------------------------------------------------

def session_to_dict(session: BudgetSession) -> Dict[str, Any]:
    """Budget-file representation of a session's inputs."""
    return {
        "schema_version": SCHEMA_VERSION,
        "monthly_income": session.monthly_income,
        "monthly_savings": session.monthly_savings,
        "entries": [entry_to_dict(e) for e in session.store],
    }


def session_from_dict(data: Dict[str, Any], today: Any = None) -> BudgetSession:
    """
    Build a BudgetSession from a budget-file mapping.

    Entries the store rejects are skipped with a ``UserWarning`` naming how
    many were dropped.
    """
    from .session import BudgetSession

    try:
        config = BudgetConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigurationError(f"Invalid budget file: {e}") from e

    session = BudgetSession(
        monthly_income=config.monthly_income,
        monthly_savings=config.monthly_savings,
        today=today,
    )
    dropped = 0
    for entry_config in config.entries:
        entry = session.store.add(
            entry_config.kind,
            entry_config.amount,
            day=entry_config.day,
            description=entry_config.description,
        )
        if entry is None:
            dropped += 1
    if dropped:
        warnings.warn(
            f"Skipped {dropped} entries with a zero or invalid amount or kind.",
            UserWarning,
        )
    return session


def load_session(path: Path, today: Any = None) -> BudgetSession:
    """
    Load a BudgetSession from a JSON budget file.

    Parameters
    ----------
    path : Path
        Input file path.
    today : date or callable, optional
        Passed through to the session (defaults to the real current date).

    Raises
    ------
    ConfigurationError
        If the file is not UTF-8 encoded JSON or not a JSON object.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Budget file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"Budget file {path} must contain a JSON object.")

    # Check schema version
    schema_version = data.get("schema_version", "0.0.0")
    if schema_version != SCHEMA_VERSION:
        warnings.warn(
            f"Budget file schema version {schema_version} differs from current "
            f"version {SCHEMA_VERSION}. May encounter compatibility issues.",
            UserWarning,
        )

    return session_from_dict(data, today=today)


# ---------------------------------------------------------------------------
# Ledger Reports
# ---------------------------------------------------------------------------

def row_to_dict(row: DailyLedgerRow) -> LedgerRowDict:
    return {
        "day": row.day,
        "date": row.date.isoformat(),
        "baseline": row.baseline,
        "carryover_in": row.carryover_in,
        "day_adjustment": row.day_adjustment,
        "remaining": row.remaining,
        "remaining_monthly": row.remaining_monthly,
        "entries": [entry_to_dict(e) for e in row.entries],
    }


def ledger_to_dict(ledger: MonthlyLedger) -> LedgerReportDict:
    """
    Convert a MonthlyLedger to a JSON-ready report.

    Raw floats are written; formatting is left to the reader.
    """
    totals = ledger.totals
    return {
        "schema_version": SCHEMA_VERSION,
        "month": {
            "year": ledger.context.year,
            "month": ledger.context.month,
            "label": ledger.context.label,
            "days_in_month": ledger.context.days_in_month,
            "first_weekday_offset": ledger.context.first_weekday_offset,
        },
        "totals": {
            "base_income": totals.base_income,
            "savings_target": totals.savings_target,
            "additional_income": totals.additional_income,
            "expenses": totals.expenses,
            "total_income": totals.total_income,
            "distributable": totals.distributable,
            "available": totals.available,
        },
        "baseline": ledger.baseline,
        "predicted_carryover": ledger.predicted_carryover,
        "remaining_monthly": ledger.remaining_monthly,
        "rows": [row_to_dict(r) for r in ledger.rows],
        "unscheduled": [entry_to_dict(e) for e in ledger.unscheduled],
        "unplaced": [entry_to_dict(e) for e in ledger.unplaced],
    }


def save_ledger_report(ledger: MonthlyLedger, path: Path) -> None:
    """
    Write a MonthlyLedger report to a JSON file.

    Examples
    --------
    >>> save_ledger_report(session.ledger(), Path("report.json"))
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(ledger_to_dict(ledger), f, indent=2, ensure_ascii=False)
