"""
Ledger entries and the in-memory entry store.

Purpose
-------
Models the ad-hoc income and expense lines a user pins to days of the
current month, and the ordered collection that holds them.

- EntryKind: income or expense; the sign of an entry lives here
- Entry: one immutable ledger line (kind, positive amount, optional day)
- EntryStore: ordered, append/remove-by-position collection

Design principles
-----------------
- Frozen dataclasses: entries are never mutated, only appended or removed
- Strict construction, lenient store: ``Entry(...)`` raises on invalid
  amounts, ``EntryStore.add(...)`` coerces its inputs and silently drops
  entries that cannot be valid
- Out-of-range days (e.g. 35) are accepted by the store; such entries count
  toward monthly totals but never match ``entries_on_day``

Example
-------
>>> from dailybudget.entries import EntryStore, EntryKind
>>> store = EntryStore()
>>> store.add(EntryKind.EXPENSE, 300, day=15, description="Miete")
Entry(kind=<EntryKind.EXPENSE: 'expense'>, amount=300.0, day=15, description='Miete')
>>> store.add("income", "0")  # dropped, returns None
>>> len(store)
1
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Tuple, Union

from .constants import KIND_LABELS_DE, NO_DESCRIPTION_LABEL, UNSCHEDULED_DAY_LABEL
from .exceptions import EntryIndexError, ValidationError
from .utils import coerce_amount, normalize_day

__all__ = [
    "EntryKind",
    "Entry",
    "EntryStore",
]

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Direction of an entry: income adds to a day, expense subtracts."""

    INCOME = "income"
    EXPENSE = "expense"

    @classmethod
    def parse(cls, value: Union[str, "EntryKind", None]) -> Optional["EntryKind"]:
        """Map ``value`` to a kind, or return None when it is not recognisable.

        Accepts enum members and case-insensitive names/values, plus the
        German display labels (``"Einkommen"``, ``"Ausgabe"``).
        """
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            return None
        key = value.strip().lower()
        for kind in cls:
            if key in (kind.value, KIND_LABELS_DE[kind.value].lower()):
                return kind
        return None

    @property
    def sign(self) -> int:
        return 1 if self is EntryKind.INCOME else -1

    @property
    def label(self) -> str:
        return KIND_LABELS_DE[self.value]


@dataclass(frozen=True)
class Entry:
    """
    One ledger line.

    Parameters
    ----------
    kind : EntryKind
        Income or expense.
    amount : float
        Strictly positive, finite amount. The sign is carried by ``kind``.
    day : int, optional
        Day of month the entry is pinned to. None means unscheduled: the
        entry counts toward totals but belongs to no day.
    description : str, default ""
        Free-text label, informational only.

    Raises
    ------
    ValidationError
        If ``kind`` is not an EntryKind, ``amount`` is not a positive finite
        number, or ``day`` is given and not a positive int.

    Examples
    --------
    >>> Entry(EntryKind.INCOME, 50.0, day=3).signed_amount
    50.0
    >>> Entry(EntryKind.EXPENSE, 20.0).signed_amount
    -20.0
    """
    kind: EntryKind
    amount: float
    day: Optional[int] = None
    description: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.kind, EntryKind):
            raise ValidationError(f"kind must be an EntryKind, got {self.kind!r}.")
        if isinstance(self.amount, bool) or not isinstance(self.amount, (int, float)):
            raise ValidationError(f"amount must be a number, got {self.amount!r}.")
        if not math.isfinite(self.amount) or self.amount <= 0:
            raise ValidationError(f"amount must be positive, got {self.amount}.")
        if self.day is not None and (
            isinstance(self.day, bool) or not isinstance(self.day, int) or self.day <= 0
        ):
            raise ValidationError(f"day must be a positive int or None, got {self.day!r}.")

    @property
    def signed_amount(self) -> float:
        """``+amount`` for income, ``-amount`` for expense."""
        return self.kind.sign * float(self.amount)

    @property
    def is_scheduled(self) -> bool:
        return self.day is not None

    @property
    def label(self) -> str:
        return self.description or NO_DESCRIPTION_LABEL

    @property
    def day_label(self) -> str:
        return str(self.day) if self.day is not None else UNSCHEDULED_DAY_LABEL


class EntryStore:
    """
    Ordered, mutable collection of entries.

    Insertion order is preserved and is the order used for display and
    aggregation. The store is single-owner and not thread-safe; every
    mutation is expected to be followed by a full recomputation.

    Methods
    -------
    add(kind, amount, day=None, description=None)
        Coerce inputs and append; silently drops invalid entries.
    add_entry(entry)
        Append an already-constructed Entry.
    remove_at(index)
        Remove and return the entry at ``index``.
    list()
        Read-only snapshot of all entries.
    entries_on_day(day)
        Entries pinned to ``day``.

    Examples
    --------
    >>> store = EntryStore()
    >>> _ = store.add("expense", 12.5, day=4, description="Kaffee")
    >>> [e.label for e in store.entries_on_day(4)]
    ['Kaffee']
    """

    def __init__(self, entries: Optional[List[Entry]] = None) -> None:
        self._entries: List[Entry] = []
        for entry in entries or ():
            self.add_entry(entry)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Entry]:
        return iter(tuple(self._entries))

    def __repr__(self) -> str:
        return f"EntryStore(n_entries={len(self._entries)})"

    def add(
        self,
        kind: Any,
        amount: Any,
        day: Any = None,
        description: Optional[str] = None,
    ) -> Optional[Entry]:
        """
        Append a new entry built from raw inputs.

        Parameters
        ----------
        kind : EntryKind or str
            ``EntryKind`` member or its name/value/German label.
        amount : Any
            Coerced with ``coerce_amount``; zero, negative, non-numeric and
            non-finite values cause the entry to be dropped.
        day : Any, optional
            Normalized with ``normalize_day``; invalid values make the entry
            unscheduled instead of rejecting it.
        description : str, optional
            Stripped of surrounding whitespace.

        Returns
        -------
        Entry or None
            The stored entry, or None if the input was dropped.
        """
        parsed_kind = EntryKind.parse(kind)
        value = coerce_amount(amount)
        if parsed_kind is None or not value:
            logger.debug("Dropped entry kind=%r amount=%r", kind, amount)
            return None
        entry = Entry(
            kind=parsed_kind,
            amount=value,
            day=normalize_day(day),
            description="" if description is None else str(description).strip(),
        )
        self._entries.append(entry)
        return entry

    def add_entry(self, entry: Entry) -> Entry:
        """Append an existing Entry (already validated by construction)."""
        if not isinstance(entry, Entry):
            raise ValidationError(f"expected Entry, got {type(entry).__name__}.")
        self._entries.append(entry)
        return entry

    def remove_at(self, index: int) -> Entry:
        """
        Remove and return the entry at position ``index``.

        Raises
        ------
        EntryIndexError
            If ``index`` is not in ``0 .. len(store) - 1``. Negative indices
            are rejected rather than counted from the end. The store is left
            unchanged.
        """
        if isinstance(index, bool) or not isinstance(index, int) or not (
            0 <= index < len(self._entries)
        ):
            raise EntryIndexError(
                f"Entry index {index!r} out of range for store of "
                f"{len(self._entries)} entries."
            )
        return self._entries.pop(index)

    def list(self) -> Tuple[Entry, ...]:
        return tuple(self._entries)

    def entries_on_day(self, day: int) -> Tuple[Entry, ...]:
        return tuple(e for e in self._entries if e.day == day)

    def clear(self) -> None:
        self._entries.clear()
