"""Cash and bank commands."""

from datetime import date

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import parse_date_or_exit, period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.cash_bank import CashBankService
from ledgerkit.domain.entities import CashTransactionCategory, CashTransactionInput, CashTransactionType
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.journal import JournalService
from ledgerkit.utils.amount_parser import parse_amount


def _record(
    ctx,
    transaction_type: CashTransactionType,
    account: str,
    amount_str: str,
    contra: str,
    description: str,
    date_str: str | None,
    category: str,
    reference: str | None,
    post: bool,
) -> None:
    db = ctx.obj["db"]
    account_service = AccountService(db)
    journal_service = JournalService(db)
    service = CashBankService(db, journal_service=journal_service)

    account_id = resolve_account_or_exit(ctx, account_service, account)
    contra_id = resolve_account_or_exit(ctx, account_service, contra)
    try:
        amount = parse_amount(amount_str)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)
    transaction_date = parse_date_or_exit(ctx, date_str) if date_str else date.today()

    data = CashTransactionInput(
        company_id=ctx.obj["company_id"],
        account_id=account_id,
        contra_account_id=contra_id,
        transaction_date=transaction_date,
        amount=amount,
        description=description,
        created_by=ctx.obj["user_id"],
        category=CashTransactionCategory(category),
        reference=reference,
    )
    try:
        if transaction_type is CashTransactionType.IN:
            transaction = service.cash_in(data)
        else:
            transaction = service.cash_out(data)
    except DomainError as e:
        handle_domain_error(ctx, e)

    journal = journal_service.require_journal(transaction.journal_id)
    click.echo(
        f"Recorded {transaction.transaction_number} (ID: {transaction.id}) "
        f"with journal {journal.journal_number}"
    )

    if post:
        try:
            journal_service.post_journal(journal.id, actor_id=ctx.obj["user_id"])
        except DomainError as e:
            handle_domain_error(ctx, e)
        click.echo(f"Posted journal {journal.journal_number}")


def cash_entry_options(func):
    """Options shared by ``cash in`` and ``cash out``."""
    decorators = [
        click.argument("account", metavar="ACCOUNT"),
        click.argument("amount", metavar="AMOUNT"),
        click.option("--contra", required=True, help="Contra account code or ID"),
        click.option("--description", required=True, help="Transaction description"),
        click.option("--date", "date_str", help="Transaction date; defaults to today"),
        click.option(
            "--category",
            type=click.Choice([c.value for c in CashTransactionCategory]),
            default=CashTransactionCategory.OTHER.value,
            show_default=True,
        ),
        click.option("--reference", help="External reference, such as a receipt number"),
        click.option("--post", is_flag=True, help="Post the journal right away"),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


@click.group()
def cash_group():
    """Cash and bank receipts, payments and position."""
    pass


@cash_group.command("in")
@cash_entry_options
@click.pass_context
def cash_in(ctx, account, amount, contra, description, date_str, category, reference, post):
    """Record money received into a cash or bank ACCOUNT.

    Examples:
        ledgerkit cash in 1-1100 250.00 --contra 4-1000 --description "Counter sales"
    """
    _record(
        ctx, CashTransactionType.IN, account, amount, contra, description,
        date_str, category, reference, post,
    )


@cash_group.command("out")
@cash_entry_options
@click.pass_context
def cash_out(ctx, account, amount, contra, description, date_str, category, reference, post):
    """Record money paid from a cash or bank ACCOUNT.

    Examples:
        ledgerkit cash out 1-1200 1200.00 --contra 5-1200 --description "Office rent" --post
    """
    _record(
        ctx, CashTransactionType.OUT, account, amount, contra, description,
        date_str, category, reference, post,
    )


@cash_group.command("list")
@click.option("--account", help="Only list transactions of this cash account")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def list_transactions(ctx, account: str | None, start_date: str | None, end_date: str | None, **period_flags):
    """List cash transactions, newest first."""
    db = ctx.obj["db"]
    service = CashBankService(db)
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None

    transactions = service.list_transactions(
        ctx.obj["company_id"], start_date=start, end_date=end, account_id=account_id
    )
    if not transactions:
        click.echo("No cash transactions found.")
        return

    click.echo(f"{'ID':>4} {'Number':<16} {'Date':<10} {'Type':<4} {'Category':<14} {'Amount':>15}  Description")
    click.echo("-" * 90)
    for transaction in transactions:
        click.echo(
            f"{transaction.id:>4} {transaction.transaction_number:<16} "
            f"{transaction.transaction_date!s:<10} {transaction.transaction_type.value:<4} "
            f"{transaction.category.value:<14} {transaction.amount:>15,.2f}  {transaction.description}"
        )


@cash_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int):
    """Show a cash transaction."""
    db = ctx.obj["db"]
    try:
        transaction = CashBankService(db).require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    account = AccountService(db).require_account(transaction.account_id)
    journal = JournalService(db).require_journal(transaction.journal_id)

    click.echo(f"Cash transaction {transaction.transaction_number} (ID: {transaction.id})")
    click.echo(f"  Date: {transaction.transaction_date}")
    click.echo(f"  Type: {transaction.transaction_type.value}")
    click.echo(f"  Category: {transaction.category.value}")
    click.echo(f"  Account: {account.code} '{account.name}'")
    click.echo(f"  Amount: {transaction.amount:,.2f}")
    click.echo(f"  Description: {transaction.description}")
    if transaction.reference:
        click.echo(f"  Reference: {transaction.reference}")
    click.echo(f"  Journal: {journal.journal_number} ({journal.status.value})")


@cash_group.command("position")
@click.option("--as-of", help="Cutoff date (inclusive); defaults to today")
@click.pass_context
def cash_position(ctx, as_of: str | None):
    """Show the ledger balance of each cash and bank account."""
    service = CashBankService(ctx.obj["db"])
    cutoff = parse_date_or_exit(ctx, as_of, "as-of date") if as_of else date.today()
    position = service.cash_position(ctx.obj["company_id"], cutoff)

    if not position.lines:
        click.echo("No cash accounts found. Run 'ledgerkit account seed' first.")
        return

    click.echo(f"\nCash position as of {position.as_of_date}")
    for line in position.lines:
        click.echo(f"  {line.account_code:<8} {line.account_name:<28} {line.balance:>17,.2f}")
    click.echo(f"  {'Total':<37} {position.total:>17,.2f}")


def register_commands(cli):
    """Register cash commands with main CLI."""
    cli.add_command(cash_group, name="cash")
