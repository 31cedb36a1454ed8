"""Journal commands."""

from datetime import date

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.date_filters import parse_date_or_exit, period_options, resolve_cli_date_range
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import (
    EntryInput,
    Journal,
    JournalDraft,
    JournalStatus,
    JournalUpdate,
)
from ledgerkit.domain.errors import DomainError
from ledgerkit.domain.journal import JournalService
from ledgerkit.utils.amount_parser import parse_amount

ENTRY_OPTION_HELP = "Account code or ID and amount; repeat for more lines"


def _build_entries(
    ctx, account_service: AccountService, debits: tuple, credits: tuple
) -> tuple[EntryInput, ...]:
    """Turn --debit/--credit pairs into entries, debits first."""
    entries = []
    sides = [(pair, True) for pair in debits] + [(pair, False) for pair in credits]
    for position, ((account, amount_str), is_debit) in enumerate(sides):
        account_id = resolve_account_or_exit(ctx, account_service, account)
        try:
            amount = parse_amount(amount_str)
        except ValueError as e:
            click.echo(f"Error: Invalid amount format: {e}", err=True)
            ctx.exit(1)
        if is_debit:
            entries.append(EntryInput(account_id=account_id, debit=amount, position=position))
        else:
            entries.append(EntryInput(account_id=account_id, credit=amount, position=position))
    return tuple(entries)


def _echo_journal(journal: Journal, account_codes: dict[int, str]) -> None:
    click.echo(f"Journal {journal.journal_number} (ID: {journal.id})")
    click.echo(f"  Date: {journal.transaction_date}")
    click.echo(f"  Description: {journal.description}")
    click.echo(f"  Status: {journal.status.value}")
    if journal.posted_at is not None:
        click.echo(f"  Posted: {journal.posted_at:%Y-%m-%d %H:%M} by user {journal.posted_by}")
    click.echo(f"\n  {'Account':<10} {'Debit':>15} {'Credit':>15}")
    click.echo("  " + "-" * 42)
    for entry in journal.entries:
        debit = f"{entry.debit:,.2f}" if entry.debit else ""
        credit = f"{entry.credit:,.2f}" if entry.credit else ""
        code = account_codes.get(entry.account_id, str(entry.account_id))
        click.echo(f"  {code:<10} {debit:>15} {credit:>15}")
    click.echo("  " + "-" * 42)
    click.echo(f"  {'Total':<10} {journal.total_debit:>15,.2f} {journal.total_credit:>15,.2f}")


@click.group()
def journal_group():
    """Create, post and void journals."""
    pass


@journal_group.command("create")
@click.option("--date", "date_str", help="Transaction date (YYYY-MM-DD or relative like 'today'); defaults to today")
@click.option("--description", required=True, help="Journal description")
@click.option("--debit", "debits", nargs=2, multiple=True, metavar="ACCOUNT AMOUNT", help=ENTRY_OPTION_HELP)
@click.option("--credit", "credits", nargs=2, multiple=True, metavar="ACCOUNT AMOUNT", help=ENTRY_OPTION_HELP)
@click.pass_context
def create_journal(ctx, date_str: str | None, description: str, debits: tuple, credits: tuple):
    """Create a draft journal.

    Examples:
        ledgerkit journal create --date 2024-01-15 --description "Cash sale" \\
            --debit 1-1100 100.00 --credit 4-1000 100.00
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = JournalService(db)

    transaction_date = parse_date_or_exit(ctx, date_str) if date_str else date.today()
    entries = _build_entries(ctx, account_service, debits, credits)

    try:
        journal = service.create_journal(
            JournalDraft(
                company_id=ctx.obj["company_id"],
                transaction_date=transaction_date,
                description=description,
                created_by=ctx.obj["user_id"],
                entries=entries,
            )
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created journal {journal.journal_number} (ID: {journal.id})")


@journal_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.option("--status", type=click.Choice([s.value for s in JournalStatus]), help="Only list journals in this state")
@click.pass_context
def list_journals(ctx, start_date: str | None, end_date: str | None, status: str | None, **period_flags):
    """List journals, newest first."""
    service = JournalService(ctx.obj["db"])
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period_flags=period_flags
    )

    journals = service.list_journals(
        ctx.obj["company_id"],
        start_date=start,
        end_date=end,
        status=JournalStatus(status) if status else None,
    )
    if not journals:
        click.echo("No journals found.")
        return

    click.echo(f"\nFound {len(journals)} journal(s):")
    click.echo(f"{'ID':>4} {'Number':<16} {'Date':<10} {'Status':<7} {'Amount':>15}  Description")
    click.echo("-" * 90)
    for journal in journals:
        click.echo(
            f"{journal.id:>4} {journal.journal_number:<16} {journal.transaction_date!s:<10} "
            f"{journal.status.value:<7} {journal.total_debit:>15,.2f}  {journal.description}"
        )


@journal_group.command("show")
@click.argument("journal_id", type=int)
@click.pass_context
def show_journal(ctx, journal_id: int):
    """Show a journal with its entries."""
    db = ctx.obj["db"]
    service = JournalService(db)
    account_service = AccountService(db)

    try:
        journal = service.require_journal(journal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    account_codes = {acc.id: acc.code for acc in account_service.list_accounts(journal.company_id)}
    _echo_journal(journal, account_codes)


@journal_group.command("update")
@click.argument("journal_id", type=int)
@click.option("--date", "date_str", help="New transaction date")
@click.option("--description", help="New description")
@click.option("--debit", "debits", nargs=2, multiple=True, metavar="ACCOUNT AMOUNT", help=ENTRY_OPTION_HELP)
@click.option("--credit", "credits", nargs=2, multiple=True, metavar="ACCOUNT AMOUNT", help=ENTRY_OPTION_HELP)
@click.pass_context
def update_journal(
    ctx,
    journal_id: int,
    date_str: str | None,
    description: str | None,
    debits: tuple,
    credits: tuple,
):
    """Update a draft journal.

    Date and description keep their current values unless given. When any
    --debit or --credit is given, the entries are replaced as a whole.

    Examples:
        ledgerkit journal update 3 --description "Cash sale, invoice 17"
        ledgerkit journal update 3 --debit 1-1200 250.00 --credit 4-1000 250.00
    """
    db = ctx.obj["db"]
    account_service = AccountService(db)
    service = JournalService(db)

    try:
        journal = service.require_journal(journal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    transaction_date = parse_date_or_exit(ctx, date_str) if date_str else journal.transaction_date
    if debits or credits:
        entries = _build_entries(ctx, account_service, debits, credits)
    else:
        entries = tuple(
            EntryInput(
                account_id=entry.account_id,
                debit=entry.debit,
                credit=entry.credit,
                position=entry.position,
                description=entry.description,
            )
            for entry in journal.entries
        )

    try:
        updated = service.update_journal(
            journal_id,
            JournalUpdate(
                transaction_date=transaction_date,
                description=description if description is not None else journal.description,
                entries=entries,
            ),
            actor_id=ctx.obj["user_id"],
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated journal {updated.journal_number}")


@journal_group.command("post")
@click.argument("journal_id", type=int)
@click.pass_context
def post_journal(ctx, journal_id: int):
    """Post a draft journal to the ledger."""
    service = JournalService(ctx.obj["db"])
    try:
        journal = service.post_journal(journal_id, actor_id=ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Posted journal {journal.journal_number} ({len(journal.entries)} ledger rows)")


@journal_group.command("void")
@click.argument("journal_id", type=int)
@click.pass_context
def void_journal(ctx, journal_id: int):
    """Void a posted journal.

    Ledger rows are kept but no longer count in reports.
    """
    service = JournalService(ctx.obj["db"])
    try:
        journal = service.void_journal(journal_id, actor_id=ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Voided journal {journal.journal_number}")


@journal_group.command("delete")
@click.argument("journal_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_journal(ctx, journal_id: int, yes: bool):
    """Delete a draft journal."""
    service = JournalService(ctx.obj["db"])
    try:
        journal = service.require_journal(journal_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete journal {journal.journal_number}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_journal(journal_id, actor_id=ctx.obj["user_id"])
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted journal {journal.journal_number}")


def register_commands(cli):
    """Register journal commands with main CLI."""
    cli.add_command(journal_group, name="journal")
