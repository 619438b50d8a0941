"""
Plotting utilities for dailybudget.

Purpose
-------
Visualizes one MonthlyLedger with matplotlib:

- bars: signed day adjustments (green income, red expense)
- line: carryover after each day
- line: remaining monthly pot after each day
- dashed line: flat daily baseline

Example
-------
>>> from dailybudget.plotting import plot_daily_ledger
>>> fig, ax = plot_daily_ledger(session.ledger(), return_fig_ax=True)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Tuple

import numpy as np

from .constants import DEFAULT_CURRENCY, DEFAULT_LOCALE
from .utils import currency_axis_formatter, format_currency

if TYPE_CHECKING:
    from .allocation import MonthlyLedger

__all__ = ["plot_daily_ledger"]

DEFAULT_FIGSIZE: Tuple[int, int] = (12, 6)
INCOME_COLOR = "#2e7d32"
EXPENSE_COLOR = "#c62828"


def plot_daily_ledger(
    ledger: MonthlyLedger,
    *,
    ax=None,
    title: Optional[str] = None,
    figsize: Optional[tuple] = None,
    save_path: Optional[str] = None,
    return_fig_ax: bool = False,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
):
    """
    Plot the day-by-day allocation of a month.

    Parameters
    ----------
    ledger : MonthlyLedger
        Output of ``allocate`` / ``BudgetSession.ledger``.
    ax : matplotlib.axes.Axes, optional
        Axes to draw on; a new figure is created when omitted.
    title : str, optional
        Defaults to "Kalender für <month label>".
    figsize : tuple, optional
        Figure size when a new figure is created.
    save_path : str, optional
        If given, the figure is saved there (dpi=150, tight bbox).
    return_fig_ax : bool, default False
        Return ``(fig, ax)`` instead of None.
    locale, currency : str
        Tick label formatting.

    Returns
    -------
    tuple or None
        ``(fig, ax)`` when ``return_fig_ax`` is True.
    """
    import matplotlib.pyplot as plt
    from matplotlib.ticker import FuncFormatter

    if ax is None:
        fig, ax = plt.subplots(figsize=figsize or DEFAULT_FIGSIZE)
    else:
        fig = ax.figure

    days = np.arange(1, len(ledger.rows) + 1)
    adjustments = ledger.adjustments
    carryover = ledger.carryover_path[1:]
    remaining_monthly = np.array([r.remaining_monthly for r in ledger.rows], dtype=float)

    colors = [INCOME_COLOR if a >= 0 else EXPENSE_COLOR for a in adjustments]
    ax.bar(days, adjustments, color=colors, alpha=0.6, label="Einträge")
    ax.plot(days, carryover, marker="o", linewidth=2.0, label="Übertrag")
    ax.plot(days, remaining_monthly, linewidth=1.0, label="Monatsrest")
    ax.axhline(
        ledger.baseline,
        linestyle="--",
        color="gray",
        linewidth=1.0,
        label=f"Tagesgeld {format_currency(ledger.baseline, locale=locale, currency=currency)}",
    )
    ax.axhline(0.0, color="black", linewidth=0.5)

    ax.set_xlabel("Tag")
    ax.set_xlim(0.5, max(len(days), 1) + 0.5)
    ax.yaxis.set_major_formatter(FuncFormatter(currency_axis_formatter(locale, currency)))
    ax.set_title(title or f"Kalender für {ledger.context.label}")
    ax.grid(True, alpha=0.3)
    ax.legend(loc="best")

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches="tight")

    if return_fig_ax:
        return fig, ax
    return None
