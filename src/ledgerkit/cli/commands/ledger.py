"""Ledger commands."""

from datetime import date

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import parse_date_or_exit, period_options, resolve_cli_date_range
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.ledger import LedgerService


@click.group()
def ledger_group():
    """Inspect posted ledger rows and balances."""
    pass


@ledger_group.command("show")
@click.argument("account", metavar="ACCOUNT", required=False)
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def show_ledger(ctx, account: str | None, start_date: str | None, end_date: str | None, **period_flags):
    """Show posted ledger rows.

    ACCOUNT (code or ID) limits the listing to one account; without it the
    whole company ledger is shown.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = LedgerService(db)
    company_id = ctx.obj["company_id"]

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    if account is not None:
        account_id = resolve_account_or_exit(ctx, account_service, account)
        rows = service.list_account_ledger(account_id, start_date=start, end_date=end)
    else:
        rows = service.list_company_ledger(company_id, start_date=start, end_date=end)

    if not rows:
        click.echo("No ledger rows found.")
        return

    account_codes = {acc.id: acc.code for acc in account_service.list_accounts(company_id)}
    click.echo(f"\n{'Date':<10} {'Journal':<16} {'Account':<8} {'Debit':>14} {'Credit':>14} {'Balance':>15}")
    click.echo("-" * 82)
    for row in rows:
        debit = f"{row.debit:,.2f}" if row.debit else ""
        credit = f"{row.credit:,.2f}" if row.credit else ""
        click.echo(
            f"{row.transaction_date!s:<10} {row.journal_number:<16} "
            f"{account_codes.get(row.account_id, ''):<8} {debit:>14} {credit:>14} {row.balance:>15,.2f}"
        )


@ledger_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.option("--as-of", help="Cutoff date (inclusive); defaults to today")
@click.pass_context
def account_balance(ctx, account: str, as_of: str | None):
    """Show an account's ledger balance and cached balance.

    The ledger balance is debit minus credit over posted rows dated on or
    before the cutoff. The cached balance is signed by the account's normal
    balance and reflects every posting so far.
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = LedgerService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    acc = account_service.require_account(account_id)
    cutoff = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else date.today()

    raw_balance = service.account_balance(account_id, cutoff)
    click.echo(f"Account {acc.code} '{acc.name}'")
    click.echo(f"  Ledger balance (debit - credit) as of {cutoff}: {raw_balance:,.2f}")
    click.echo(f"  Cached balance: {acc.balance:,.2f}")


def register_commands(cli):
    """Register ledger commands with main CLI."""
    cli.add_command(ledger_group, name="ledger")
