"""Main CLI entry point."""

import click
from ledgerkit.database.factories import create_database
from ledgerkit.logging_config import configure_logging

# Import and register all commands at module level
from ledgerkit.cli.commands import (
    account,
    journal,
    ledger,
    report,
    audit,
    cash,
    dashboard,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to SQLite database file (overrides LEDGERKIT_DB_PATH environment variable)",
    envvar="LEDGERKIT_DB_PATH",
)
@click.option(
    "--database-url",
    help="SQLAlchemy database URL; takes precedence over --db-path",
    envvar="LEDGERKIT_DATABASE_URL",
)
@click.option(
    "--company",
    "company_id",
    type=int,
    default=1,
    show_default=True,
    help="Company ID to work on",
    envvar="LEDGERKIT_COMPANY_ID",
)
@click.option(
    "--user",
    "user_id",
    type=int,
    default=1,
    show_default=True,
    help="ID of the acting user, recorded on journals and audit events",
    envvar="LEDGERKIT_USER_ID",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for JSON logs written to stderr",
    envvar="LEDGERKIT_LOG_LEVEL",
)
@click.pass_context
def cli(
    ctx,
    db_path: str | None,
    database_url: str | None,
    company_id: int,
    user_id: int,
    log_level: str,
):
    """Ledgerkit - double-entry general ledger.

    Keep a chart of accounts, record balanced journals and cash
    transactions, post them to an immutable ledger, and produce the trial
    balance, financial statements and dashboard figures.
    """
    ctx.ensure_object(dict)
    configure_logging(level=log_level)
    ctx.obj["company_id"] = company_id
    ctx.obj["user_id"] = user_id

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_database(database_url=database_url, database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


# Register all commands
account.register_commands(cli)
journal.register_commands(cli)
ledger.register_commands(cli)
report.register_commands(cli)
audit.register_commands(cli)
cash.register_commands(cli)
dashboard.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
