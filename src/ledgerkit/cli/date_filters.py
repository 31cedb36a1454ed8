"""CLI helpers for date and period options."""

from datetime import date
from typing import Callable

import click

from ledgerkit.utils.date_parser import PERIODS, get_date_range, parse_date


def period_options(func: Callable) -> Callable:
    """Add one ``--<period>`` flag per reporting period to a command."""
    for period in reversed(PERIODS):
        func = click.option(
            f"--{period}",
            is_flag=True,
            help=f"Limit to {period.replace('-', ' ')}",
        )(func)
    return func


def parse_date_or_exit(ctx: click.Context, value: str, label: str = "date") -> date:
    """Parse a date option, or exit with a CLI error."""
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_range: tuple[date, date] | None = None,
) -> tuple[date | None, date | None]:
    """Resolve a date range from period flags or explicit dates.

    ``period_flags`` maps click parameter names (``this_month``) to whether
    the flag was given.
    """
    selected = [name.replace("_", "-") for name, is_set in period_flags.items() if is_set]

    if len(selected) > 1:
        click.echo(
            f"Error: Only one period option ({', '.join('--' + p for p in PERIODS)}) "
            "can be specified at a time.",
            err=True,
        )
        ctx.exit(1)

    if selected and (start_date or end_date):
        click.echo(
            "Error: Period options cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if selected:
        return get_date_range(selected[0])

    start = parse_date_or_exit(ctx, start_date, "start date") if start_date else None
    end = parse_date_or_exit(ctx, end_date, "end date") if end_date else None

    if start is None and end is None and default_range is not None:
        return default_range
    return start, end


def require_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period_flags: dict[str, bool],
    default_period: str = "this-month",
) -> tuple[date, date]:
    """Resolve a bounded, ordered date range; ``default_period`` applies when nothing is given."""
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_range=get_date_range(default_period),
    )
    if start is None or end is None:
        click.echo("Error: Both --start-date and --end-date are required.", err=True)
        ctx.exit(1)
    if start > end:
        click.echo("Error: Start date must not be after end date.", err=True)
        ctx.exit(1)
    return start, end
