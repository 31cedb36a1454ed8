"""Report commands: trial balance and financial statements."""

from datetime import date

import click
from ledgerkit.cli.date_filters import parse_date_or_exit, period_options, require_cli_date_range
from ledgerkit.domain.statements import FinancialStatementService
from ledgerkit.domain.trial_balance import TrialBalanceService

WIDTH = 62


def _line(label: str, amount, indent: int = 2) -> None:
    click.echo(f"{' ' * indent}{label:<{WIDTH - 18 - indent}} {amount:>17,.2f}")


def _section(title: str, lines, total_label: str, total) -> None:
    click.echo(f"\n{title}")
    for line in lines:
        _line(f"{line.account_code} {line.account_name}", line.amount, indent=4)
    _line(total_label, total)


@click.group()
def report_group():
    """Trial balance and financial statements."""
    pass


@report_group.command("trial-balance")
@click.option("--as-of", help="Cutoff date (inclusive); defaults to today")
@click.pass_context
def trial_balance(ctx, as_of: str | None):
    """Show the trial balance as of a date."""
    service = TrialBalanceService(ctx.obj["db"])
    cutoff = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else date.today()
    report = service.build(ctx.obj["company_id"], cutoff)

    click.echo(f"\nTrial balance as of {report.as_of_date}")
    click.echo(f"{'Code':<8} {'Name':<32} {'Debit':>15} {'Credit':>15}")
    click.echo("-" * 72)
    for line in report.lines:
        debit = f"{line.debit_balance:,.2f}" if line.debit_balance else ""
        credit = f"{line.credit_balance:,.2f}" if line.credit_balance else ""
        click.echo(f"{line.account_code:<8} {line.account_name:<32} {debit:>15} {credit:>15}")
    click.echo("-" * 72)
    click.echo(
        f"{'Total':<41} {report.total_debit_balance:>15,.2f} {report.total_credit_balance:>15,.2f}"
    )
    click.echo(f"\n{'Balanced' if report.is_balanced else 'NOT BALANCED'}")


@report_group.command("income-statement")
@click.option("--start-date", help="Period start (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Period end (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def income_statement(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Show the income statement for a period (default: this month)."""
    service = FinancialStatementService(ctx.obj["db"])
    start, end = require_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    statement = service.income_statement(ctx.obj["company_id"], start, end)

    click.echo(f"\nIncome statement {statement.start_date} to {statement.end_date}")
    _section("Revenue", statement.revenues, "Total revenue", statement.total_revenue)
    _section("Expenses", statement.expenses, "Total expenses", statement.total_expense)
    click.echo("")
    _line("Net profit" if statement.is_profit else "Net loss", statement.net_income, indent=0)


@report_group.command("balance-sheet")
@click.option("--as-of", help="Cutoff date (inclusive); defaults to today")
@click.pass_context
def balance_sheet(ctx, as_of: str | None):
    """Show the balance sheet as of a date."""
    service = FinancialStatementService(ctx.obj["db"])
    cutoff = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else date.today()
    sheet = service.balance_sheet(ctx.obj["company_id"], cutoff)

    click.echo(f"\nBalance sheet as of {sheet.as_of_date}")
    _section("Current assets", sheet.current_assets, "Total current assets", sheet.total_current_assets)
    _section("Fixed assets", sheet.fixed_assets, "Total fixed assets", sheet.total_fixed_assets)
    _line("Total assets", sheet.total_assets, indent=0)
    _section(
        "Current liabilities",
        sheet.current_liabilities,
        "Total current liabilities",
        sheet.total_current_liabilities,
    )
    _section(
        "Long-term liabilities",
        sheet.long_term_liabilities,
        "Total long-term liabilities",
        sheet.total_long_term_liabilities,
    )
    _line("Total liabilities", sheet.total_liabilities, indent=0)
    _section("Equity", sheet.equity, "Total equity", sheet.total_equity)
    _line("Total liabilities and equity", sheet.total_liabilities_and_equity, indent=0)
    click.echo(f"\n{'Balanced' if sheet.is_balanced else 'NOT BALANCED'}")


@report_group.command("cash-flow")
@click.option("--start-date", help="Period start (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="Period end (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def cash_flow(ctx, start_date: str | None, end_date: str | None, **period_flags):
    """Show the net movement of cash and bank accounts for a period."""
    service = FinancialStatementService(ctx.obj["db"])
    start, end = require_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    statement = service.cash_flow(ctx.obj["company_id"], start, end)

    if statement is None:
        click.echo("No cash accounts found. Run 'ledgerkit account seed' first.")
        return

    click.echo(f"\nCash flow {statement.start_date} to {statement.end_date}")
    click.echo("\nOperating activities")
    for line in statement.operating_activities:
        _line(line.description, line.amount, indent=4)
    _line("Net cash from operating activities", statement.net_cash_from_operating)
    click.echo("")
    _line("Cash at beginning of period", statement.cash_at_beginning, indent=0)
    _line("Net increase in cash", statement.net_increase_in_cash, indent=0)
    _line("Cash at end of period", statement.cash_at_end, indent=0)


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
