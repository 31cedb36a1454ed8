"""Chart of accounts commands."""

import click
from ledgerkit.cli.account_resolution import resolve_account_or_exit
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.entities import AccountCategory, AccountSpec, AccountType, AccountUpdate
from ledgerkit.domain.errors import DomainError


@click.group()
def account_group():
    """Manage the chart of accounts."""
    pass


@account_group.command("seed")
@click.pass_context
def seed_accounts(ctx):
    """Create the default chart of accounts for the company.

    Fails if the company already has accounts.
    """
    service = AccountService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]

    try:
        account_ids = service.seed_default_chart(company_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {len(account_ids)} accounts for company {company_id}")


@account_group.command("create")
@click.argument("code", metavar="CODE")
@click.argument("name", metavar="NAME")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType]),
    required=True,
    help="Account type",
)
@click.option(
    "--category",
    type=click.Choice([c.value for c in AccountCategory]),
    required=True,
    help="Account category (must belong to the type)",
)
@click.option("--parent", help="Parent account code or ID")
@click.option("--header", is_flag=True, help="Create a header (grouping) account")
@click.option("--description", help="Account description")
@click.pass_context
def create_account(
    ctx,
    code: str,
    name: str,
    account_type: str,
    category: str,
    parent: str | None,
    header: bool,
    description: str | None,
):
    """Create a new account.

    Examples:
        ledgerkit account create 1-1500 "Petty Cash" --type asset --category current_asset --parent 1-1000
        ledgerkit account create 6-0000 "Projects" --type expense --category operating_expense --header
    """
    service = AccountService(ctx.obj["db"])

    parent_id = None
    level = 1
    if parent is not None:
        parent_id = resolve_account_or_exit(ctx, service, parent)
        level = service.require_account(parent_id).level + 1

    try:
        account_id = service.create_account(
            AccountSpec(
                company_id=ctx.obj["company_id"],
                code=code,
                name=name,
                account_type=AccountType(account_type),
                category=AccountCategory(category),
                parent_id=parent_id,
                level=level,
                is_header=header,
                description=description,
            )
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created account {code} '{name}' (ID: {account_id})")


@account_group.command("list")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType]),
    help="Only list accounts of this type",
)
@click.option("--postable", is_flag=True, help="Only list active, non-header accounts")
@click.pass_context
def list_accounts(ctx, account_type: str | None, postable: bool):
    """List the company's accounts ordered by code."""
    service = AccountService(ctx.obj["db"])
    company_id = ctx.obj["company_id"]

    if postable:
        accounts = service.list_active_accounts(company_id)
        if account_type is not None:
            accounts = [a for a in accounts if a.account_type == AccountType(account_type)]
    elif account_type is not None:
        accounts = service.list_accounts_by_type(company_id, AccountType(account_type))
    else:
        accounts = service.list_accounts(company_id)

    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo(f"\n{'Code':<8} {'Name':<34} {'Type':<10} {'Balance':>15}")
    click.echo("-" * 70)
    for acc in accounts:
        indent = "  " * (acc.level - 1)
        name = f"{indent}{acc.name}"
        flags = ""
        if acc.is_header:
            flags = " [header]"
        elif not acc.is_active:
            flags = " [inactive]"
        balance = "" if acc.is_header else f"{acc.balance:,.2f}"
        click.echo(f"{acc.code:<8} {name:<34} {acc.account_type.value:<10} {balance:>15}{flags}")


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str):
    """Show one account.

    ACCOUNT can be an account code or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    parent_code = None
    if acc.parent_id is not None:
        parent_code = service.require_account(acc.parent_id).code

    click.echo(f"Account {acc.code} (ID: {acc.id})")
    click.echo(f"  Name: {acc.name}")
    click.echo(f"  Type: {acc.account_type.value}")
    click.echo(f"  Category: {acc.category.value}")
    click.echo(f"  Parent: {parent_code or '-'}")
    click.echo(f"  Level: {acc.level}")
    click.echo(f"  Header: {'yes' if acc.is_header else 'no'}")
    click.echo(f"  Active: {'yes' if acc.is_active else 'no'}")
    click.echo(f"  Balance: {acc.balance:,.2f}")
    if acc.description:
        click.echo(f"  Description: {acc.description}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option("--description", help="New description")
@click.option("--active/--inactive", default=None, help="Activate or deactivate the account")
@click.pass_context
def update_account(
    ctx, account: str, name: str | None, description: str | None, active: bool | None
) -> None:
    """Update an account's name, description or active flag.

    ACCOUNT can be an account code or ID. Code, type, category and parent
    cannot be changed.

    Examples:
        ledgerkit account update 1-1100 --name "Cash on Hand"
        ledgerkit account update 5-1400 --inactive
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    update = AccountUpdate(name=name, description=description, is_active=active)
    if update.is_empty:
        click.echo("Error: Nothing to update. Use --name, --description or --active/--inactive.", err=True)
        ctx.exit(1)

    try:
        acc = service.update_account(account_id, update)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated account {acc.code}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account code or ID.

    The account can only be deleted if no journal entries, ledger rows or
    child accounts reference it. Use 'account update --inactive' to retire
    an account that has history.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    acc = service.require_account(account_id)

    if not yes and not click.confirm(f"Are you sure you want to delete account {acc.code} '{acc.name}'?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account {acc.code}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
