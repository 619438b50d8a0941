"""
Command-Line Interface for dailybudget.

Purpose
-------
Computes and displays the daily allowance of the current month from a
budget file and/or command-line inputs.

Commands
--------
- show: Totals, daily baseline, predicted savings and the daily ledger
- calendar: Calendar grid of the month with remaining budget per day
- entries: Numbered list of entries
- export: Write the computed month to JSON or CSV
- plot: Save a chart of the month
- config: Create and validate budget files
- info: Version and dependency information

Example Usage
-------------
    # Income, savings target and one expense on day 15
    $ dailybudget show --income 2000 --savings 200 --entry expense:300:15:Miete

    # Same from a budget file, plain text output
    $ dailybudget --plain show -f budget.json

    # Export the month as CSV
    $ dailybudget export -f budget.json --format csv -o oktober.csv
"""

from __future__ import annotations

import json
import logging
import sys
import warnings
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .config import AppSettings
from .constants import WEEKDAY_HEADERS_DE
from .exceptions import DailyBudgetError
from .session import BudgetSession
from .utils import format_currency

logger = logging.getLogger(__name__)


def _get_console():
    """Rich console for styled output."""
    from rich.console import Console
    return Console()


@click.group()
@click.version_option(version=__version__, prog_name="dailybudget")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output")
@click.option("--plain", is_flag=True, help="Plain text output instead of tables")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, quiet: bool, plain: bool, verbose: bool) -> None:
    """
    dailybudget - Daily spending allowance calculator.

    Splits monthly income minus a savings target across the days of the
    current month and tracks how each day's surplus or deficit carries
    over to the next.

    Use 'dailybudget COMMAND --help' for command-specific help.
    """
    settings = AppSettings()
    level = "DEBUG" if verbose else settings.effective_log_level
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings
    ctx.obj["console"] = None if plain else _get_console()


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

_BUDGET_OPTIONS = [
    click.option(
        "--file", "-f", "budget_file",
        type=click.Path(exists=True, dir_okay=False, path_type=Path),
        default=None,
        help="Budget file (JSON) with income, savings and entries"
    ),
    click.option(
        "--income", "-i",
        type=str,
        default=None,
        help="Monthly income (overrides the budget file)"
    ),
    click.option(
        "--savings", "-s",
        type=str,
        default=None,
        help="Monthly savings target (overrides the budget file)"
    ),
    click.option(
        "--entry", "-e", "entry_specs",
        multiple=True,
        help="Entry as KIND:AMOUNT[:DAY[:DESCRIPTION]], e.g. expense:300:15:Miete"
    ),
]


def budget_options(func):
    """Attach the budget input options shared by all ledger commands."""
    for option in reversed(_BUDGET_OPTIONS):
        func = option(func)
    return func


def _build_session(
    budget_file: Optional[Path],
    income: Optional[str],
    savings: Optional[str],
    entry_specs: Tuple[str, ...],
) -> BudgetSession:
    """Assemble a session from a budget file plus command-line overrides."""
    from .serialization import load_session

    if budget_file is not None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            session = load_session(budget_file)
        for w in caught:
            click.echo(f"Warning: {w.message}", err=True)
    else:
        session = BudgetSession()

    if income is not None:
        session.set_income(income)
    if savings is not None:
        session.set_savings(savings)

    for spec in entry_specs:
        parts = spec.split(":", 3)
        if len(parts) < 2:
            raise click.BadParameter(
                f"'{spec}' is not KIND:AMOUNT[:DAY[:DESCRIPTION]]",
                param_hint="--entry",
            )
        kind, amount = parts[0], parts[1]
        day = parts[2] if len(parts) > 2 else None
        description = parts[3] if len(parts) > 3 else None
        if session.add_entry(kind, amount, day=day, description=description) is None:
            click.echo(f"Warning: skipped entry '{spec}' (zero or invalid amount or kind)", err=True)

    logger.debug("Built %r", session)
    return session


def _formatter(ctx: click.Context):
    settings: AppSettings = ctx.obj["settings"]

    def fmt(value: float) -> str:
        return format_currency(value, locale=settings.locale, currency=settings.currency)

    return fmt


def _fail(message: str) -> None:
    click.echo(f"Error: {message}", err=True)
    sys.exit(1)


# ---------------------------------------------------------------------------
# Ledger commands
# ---------------------------------------------------------------------------

@main.command()
@budget_options
@click.option("--summary", is_flag=True, help="Only show month totals, not the daily ledger")
@click.pass_context
def show(
    ctx: click.Context,
    budget_file: Optional[Path],
    income: Optional[str],
    savings: Optional[str],
    entry_specs: Tuple[str, ...],
    summary: bool,
) -> None:
    """
    Show totals and the daily ledger of the current month.

    Example:
        dailybudget show --income 3000 --savings 500
    """
    console = ctx.obj.get("console")
    fmt = _formatter(ctx)

    try:
        ledger = _build_session(budget_file, income, savings, entry_specs).ledger()
    except DailyBudgetError as e:
        _fail(str(e))

    totals = ledger.totals
    summary_rows = [
        ("Month", ledger.context.label),
        ("Total income", fmt(totals.total_income)),
        ("Savings target", fmt(totals.savings_target)),
        ("Expenses", fmt(totals.expenses)),
        ("Available", fmt(totals.available)),
        ("Daily baseline", fmt(ledger.baseline)),
        ("Predicted end-of-month", fmt(ledger.predicted_carryover)),
    ]

    if console:
        from rich.table import Table

        table = Table(title=f"Summary for {ledger.context.label}", show_header=True)
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="green", justify="right")
        for label, value in summary_rows[1:]:
            table.add_row(label, value)
        console.print(table)
    else:
        for label, value in summary_rows:
            click.echo(f"{label}: {value}")

    if ledger.unplaced and not ctx.obj.get("quiet"):
        click.echo(
            f"Note: {len(ledger.unplaced)} entries are pinned to a day this month "
            f"does not have; they count toward totals only.",
            err=True,
        )

    if summary:
        return

    if console:
        from rich.table import Table

        days = Table(title="Daily ledger", show_header=True)
        for column in ("Day", "Baseline", "Carryover", "Entries", "Remaining", "Month left"):
            days.add_column(column, justify="right")
        for row in ledger.rows:
            days.add_row(
                str(row.day),
                fmt(row.baseline),
                fmt(row.carryover_in),
                fmt(row.day_adjustment) if row.entries else "",
                fmt(row.remaining),
                fmt(row.remaining_monthly),
            )
        console.print(days)
    else:
        for row in ledger.rows:
            click.echo(
                f"Day {row.day:>2}: remaining {fmt(row.remaining)} "
                f"(carryover {fmt(row.carryover_in)}, entries {fmt(row.day_adjustment)}, "
                f"month left {fmt(row.remaining_monthly)})"
            )


@main.command()
@budget_options
@click.pass_context
def calendar(
    ctx: click.Context,
    budget_file: Optional[Path],
    income: Optional[str],
    savings: Optional[str],
    entry_specs: Tuple[str, ...],
) -> None:
    """
    Show the month as a calendar grid.

    Each day shows what is left after that day's entries and carryover.
    """
    console = ctx.obj.get("console")
    fmt = _formatter(ctx)

    try:
        ledger = _build_session(budget_file, income, savings, entry_specs).ledger()
    except DailyBudgetError as e:
        _fail(str(e))

    weeks = ledger.calendar_weeks()

    if console:
        from rich.table import Table

        grid = Table(title=f"Kalender für {ledger.context.label}", show_lines=True)
        for header in WEEKDAY_HEADERS_DE:
            grid.add_column(header, justify="right")
        for week in weeks:
            grid.add_row(*[
                "" if row is None else f"Tag {row.day}\n{fmt(row.remaining)}"
                for row in week
            ])
        console.print(grid)
    else:
        width = 14
        click.echo(f"Kalender für {ledger.context.label}")
        click.echo("".join(h.rjust(width) for h in WEEKDAY_HEADERS_DE))
        for week in weeks:
            click.echo("".join(
                "".rjust(width) if row is None else f"{row.day}: {fmt(row.remaining)}".rjust(width)
                for row in week
            ))


@main.command()
@budget_options
@click.pass_context
def entries(
    ctx: click.Context,
    budget_file: Optional[Path],
    income: Optional[str],
    savings: Optional[str],
    entry_specs: Tuple[str, ...],
) -> None:
    """List entries with their position, day, kind and amount."""
    console = ctx.obj.get("console")
    fmt = _formatter(ctx)

    try:
        session = _build_session(budget_file, income, savings, entry_specs)
    except DailyBudgetError as e:
        _fail(str(e))

    listed = session.store.list()
    if not listed:
        click.echo("No entries.")
        return

    if console:
        from rich.table import Table

        table = Table(title="Entries", show_header=True)
        for column in ("#", "Description", "Tag", "Art", "Amount"):
            table.add_column(column)
        for index, entry in enumerate(listed):
            style = "green" if entry.signed_amount > 0 else "red"
            table.add_row(
                str(index), entry.label, entry.day_label,
                f"[{style}]{entry.kind.label}[/{style}]", fmt(entry.amount),
            )
        console.print(table)
    else:
        for index, entry in enumerate(listed):
            click.echo(
                f"[{index}] {entry.label} | Tag {entry.day_label} | "
                f"{entry.kind.label} | {fmt(entry.amount)}"
            )


@main.command()
@budget_options
@click.option(
    "--format", "-F", "fmt",
    type=click.Choice(["json", "csv"]),
    default="json",
    help="Output format (default: json)"
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Output file"
)
@click.pass_context
def export(
    ctx: click.Context,
    budget_file: Optional[Path],
    income: Optional[str],
    savings: Optional[str],
    entry_specs: Tuple[str, ...],
    fmt: str,
    output: Path,
) -> None:
    """
    Export the computed month to JSON or CSV.

    Example:
        dailybudget export -f budget.json --format csv -o month.csv
    """
    from .serialization import save_ledger_report

    try:
        ledger = _build_session(budget_file, income, savings, entry_specs).ledger()
        if fmt == "json":
            save_ledger_report(ledger, output)
        else:
            output.parent.mkdir(parents=True, exist_ok=True)
            ledger.to_frame().to_csv(output)
    except (DailyBudgetError, OSError) as e:
        _fail(str(e))

    if not ctx.obj.get("quiet"):
        click.echo(f"Ledger saved to {output}")


@main.command()
@budget_options
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    required=True,
    help="Image file to write (e.g. month.png)"
)
@click.pass_context
def plot(
    ctx: click.Context,
    budget_file: Optional[Path],
    income: Optional[str],
    savings: Optional[str],
    entry_specs: Tuple[str, ...],
    output: Path,
) -> None:
    """Save a chart of carryover, remaining budget and entries per day."""
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    from .plotting import plot_daily_ledger

    settings: AppSettings = ctx.obj["settings"]

    try:
        ledger = _build_session(budget_file, income, savings, entry_specs).ledger()
        output.parent.mkdir(parents=True, exist_ok=True)
        fig, _ = plot_daily_ledger(
            ledger,
            save_path=str(output),
            return_fig_ax=True,
            locale=settings.locale,
            currency=settings.currency,
        )
        plt.close(fig)
    except (DailyBudgetError, OSError) as e:
        _fail(str(e))

    if not ctx.obj.get("quiet"):
        click.echo(f"Chart saved to {output}")


# ---------------------------------------------------------------------------
# Budget file commands
# ---------------------------------------------------------------------------

@main.group()
def config() -> None:
    """
    Budget file commands.

    Create and validate budget files.
    """
    pass


@config.command("create")
@click.argument("output_file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def config_create(ctx: click.Context, output_file: Path) -> None:
    """
    Create a starter budget file.

    Example:
        dailybudget config create budget.json
    """
    from .serialization import SCHEMA_VERSION

    config_data = {
        "schema_version": SCHEMA_VERSION,
        "monthly_income": 2000,
        "monthly_savings": 200,
        "entries": [
            {"kind": "expense", "amount": 300, "day": 1, "description": "Miete"},
            {"kind": "income", "amount": 50, "day": 15, "description": "Flohmarkt"},
            {"kind": "expense", "amount": 40, "day": None, "description": "Abo"},
        ],
    }

    output_file.parent.mkdir(parents=True, exist_ok=True)
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(config_data, f, indent=2, ensure_ascii=False)

    if not ctx.obj.get("quiet"):
        click.echo(f"Created budget file: {output_file}")


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--normalized", is_flag=True, help="Print the budget as it was read")
@click.pass_context
def config_validate(ctx: click.Context, config_file: Path, normalized: bool) -> None:
    """
    Validate a budget file.

    Reports the values that will be used after coercion; entries with a
    zero or invalid amount are reported as skipped.
    """
    from .serialization import session_to_dict

    fmt = _formatter(ctx)
    try:
        session = _build_session(config_file, None, None, ())
    except DailyBudgetError as e:
        _fail(f"Budget file validation failed: {e}")

    if normalized:
        click.echo(json.dumps(session_to_dict(session), indent=2, ensure_ascii=False))
        return

    click.echo("Budget file is valid")
    click.echo(f"Monthly income: {fmt(session.monthly_income)}")
    click.echo(f"Savings target: {fmt(session.monthly_savings)}")
    click.echo(f"Entries: {len(session.store)}")


@main.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """
    Display system and package information.

    Shows version numbers, installed dependencies and active settings.
    """
    console = ctx.obj.get("console")
    settings: AppSettings = ctx.obj["settings"]

    info_lines = [
        f"dailybudget Version: {__version__}",
        f"Python: {sys.version.split()[0]}",
        f"Locale: {settings.locale}",
        f"Currency: {settings.currency}",
    ]

    dependencies = ["numpy", "pandas", "pydantic", "matplotlib", "rich", "click"]
    for name in dependencies:
        try:
            mod = __import__(name)
            version = getattr(mod, "__version__", "installed")
            info_lines.append(f"{name}: {version}")
        except ImportError:
            info_lines.append(f"{name}: not installed")

    if console:
        from rich.panel import Panel
        console.print(Panel("\n".join(info_lines), title="System Information"))
    else:
        for line in info_lines:
            click.echo(line)


if __name__ == "__main__":
    main()
