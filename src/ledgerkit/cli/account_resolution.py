"""CLI helpers for account resolution."""

from __future__ import annotations

import click
from ledgerkit.cli.error_handling import handle_domain_error
from ledgerkit.domain.account import AccountService
from ledgerkit.domain.errors import DomainError
from ledgerkit.utils.account_resolver import resolve_account


def resolve_account_or_exit(
    ctx: click.Context, account_service: AccountService, account: str | int
) -> int:
    """Resolve an account code or ID within the current company, or exit with a CLI error."""
    try:
        return resolve_account(account_service, ctx.obj["company_id"], account)
    except DomainError as exc:
        handle_domain_error(ctx, exc)
