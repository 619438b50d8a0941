"""
Custom exceptions for dailybudget.

Purpose
-------
Provides a small exception hierarchy for the strict code paths of the
package. The allocation engine and ``EntryStore.add`` never raise on bad
input (they coerce to zero or drop the entry); these exceptions are reserved
for direct construction of invalid objects, out-of-range removals and
configuration problems.

Exception Hierarchy
-------------------
DailyBudgetError (base)
├── ConfigurationError - Invalid settings or budget files
└── ValidationError - Invalid values on strict paths
    └── EntryIndexError - Entry position outside the store

Usage
-----
>>> from dailybudget.exceptions import EntryIndexError
>>> try:
...     store.remove_at(7)
... except EntryIndexError as e:
...     print(f"Nothing removed: {e}")
"""

__all__ = [
    "DailyBudgetError",
    "ConfigurationError",
    "ValidationError",
    "EntryIndexError",
]


class DailyBudgetError(Exception):
    """
    Base exception for all dailybudget errors.

    Examples
    --------
    >>> try:
    ...     session.remove_entry(3)
    ... except DailyBudgetError as e:
    ...     click.echo(f"Error: {e}", err=True)
    """
    pass


class ConfigurationError(DailyBudgetError):
    """
    Invalid configuration.

    Raised when:
    - A budget file cannot be parsed
    - An unsupported locale or currency is requested

    Examples
    --------
    >>> raise ConfigurationError(
    ...     "Unsupported locale 'fr_FR'. Use one of: de_DE, en_US."
    ... )
    """
    pass


class ValidationError(DailyBudgetError):
    """
    Value validation failures on strict paths.

    Raised when an ``Entry`` is constructed directly with a non-positive
    or non-finite amount, or with an unknown kind.

    Examples
    --------
    >>> raise ValidationError(f"amount must be positive, got {amount}.")
    """
    pass


class EntryIndexError(ValidationError, IndexError):
    """
    Entry position outside the store.

    Subclasses ``IndexError`` as well, so callers treating the store as a
    sequence can keep catching the builtin.

    Examples
    --------
    >>> raise EntryIndexError(
    ...     f"Entry index {index} out of range for store of {n} entries."
    ... )
    """
    pass
