"""Dashboard commands: headline figures, trends and ratios."""

from datetime import date

import click
from ledgerkit.cli.date_filters import parse_date_or_exit, period_options, require_cli_date_range
from ledgerkit.domain.dashboard import DashboardService


def _row(label: str, amount) -> None:
    click.echo(f"  {label:<28} {amount:>17,.2f}")


@click.group()
def dashboard_group():
    """Summary figures and analytics from the posted ledger."""
    pass


@dashboard_group.command("summary")
@click.option("--as-of", help="Cutoff date (inclusive); defaults to today")
@click.pass_context
def summary(ctx, as_of: str | None):
    """Show year-to-date income and balances as of a date."""
    service = DashboardService(ctx.obj["db"])
    cutoff = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else date.today()
    result = service.summary(ctx.obj["company_id"], cutoff)

    click.echo(f"\nSummary as of {result.as_of_date}")
    _row("Revenue (year to date)", result.total_revenue)
    _row("Expense (year to date)", result.total_expense)
    _row("Net income", result.net_income)
    _row("Total assets", result.total_assets)
    _row("Total liabilities", result.total_liabilities)
    _row("Total equity", result.total_equity)
    _row("Cash", result.cash_balance)
    _row("Bank", result.bank_balance)


@dashboard_group.command("monthly")
@click.option("--year", type=int, help="Calendar year; defaults to the current year")
@click.pass_context
def monthly(ctx, year: int | None):
    """Show revenue and expense per month of a year."""
    service = DashboardService(ctx.obj["db"])
    year = year or date.today().year
    company_id = ctx.obj["company_id"]

    revenue = {item.month: item.amount for item in service.monthly_revenue(company_id, year)}
    expense = {item.month: item.amount for item in service.monthly_expense(company_id, year)}
    months = sorted(set(revenue) | set(expense))
    if not months:
        click.echo(f"No revenue or expense posted in {year}.")
        return

    click.echo(f"\n{'Month':<8} {'Revenue':>15} {'Expense':>15}")
    click.echo("-" * 40)
    for month in months:
        click.echo(f"{month:<8} {revenue.get(month, 0):>15,.2f} {expense.get(month, 0):>15,.2f}")


@dashboard_group.command("categories")
@click.option("--start-date", help="Period start (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Period end (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def categories(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Show revenue and expense per account category (default: this year)."""
    service = DashboardService(ctx.obj["db"])
    start, end = require_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_period="this-year",
    )
    company_id = ctx.obj["company_id"]

    click.echo(f"\nBy category {start} to {end}")
    for title, items in (
        ("Revenue", service.revenue_by_category(company_id, start, end)),
        ("Expense", service.expense_by_category(company_id, start, end)),
    ):
        click.echo(f"\n{title}")
        if not items:
            click.echo("  (none)")
        for item in items:
            _row(item.category.value, item.amount)


@dashboard_group.command("ratios")
@click.option("--as-of", help="Balance cutoff date; defaults to the period end")
@click.option("--start-date", help="Income period start")
@click.option("--end-date", help="Income period end")
@period_options
@click.pass_context
def ratios(ctx, as_of: str | None, start_date: str | None, end_date: str | None, **period_flags):
    """Show liquidity, leverage and return ratios (default period: this year)."""
    service = DashboardService(ctx.obj["db"])
    start, end = require_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags=period_flags,
        default_period="this-year",
    )
    cutoff = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else end
    result = service.financial_ratios(ctx.obj["company_id"], cutoff, start, end)

    click.echo(f"\nRatios as of {result.as_of_date}, income {start} to {end}")
    click.echo(f"  {'Current ratio':<28} {result.current_ratio:>10}")
    click.echo(f"  {'Quick ratio':<28} {result.quick_ratio:>10}")
    click.echo(f"  {'Debt to equity':<28} {result.debt_to_equity_ratio:>10}")
    click.echo(f"  {'Debt to assets':<28} {result.debt_to_asset_ratio:>10}")
    click.echo(f"  {'Profit margin %':<28} {result.profit_margin:>10}")
    click.echo(f"  {'Return on assets %':<28} {result.return_on_assets:>10}")
    click.echo(f"  {'Return on equity %':<28} {result.return_on_equity:>10}")


def register_commands(cli):
    """Register dashboard commands with main CLI."""
    cli.add_command(dashboard_group, name="dashboard")
