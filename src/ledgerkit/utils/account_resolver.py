"""Utility for resolving account codes to IDs."""

from ledgerkit.domain import errors
from ledgerkit.domain.account import AccountService


def resolve_account(account_service: AccountService, company_id: int, account: str | int) -> int:
    """Resolve an account code or ID to an account ID.

    Codes contain a dash (``1-1100``), so a purely numeric value is taken as
    an ID.

    Args:
        account_service: AccountService instance
        company_id: Company whose chart is searched for codes
        account: Account code, or ID (int or string representation of int)

    Returns:
        Account ID

    Raises:
        NotFoundError: If the account is not found
    """
    if isinstance(account, int) or account.strip().isdigit():
        account_id = int(account)
        account_obj = account_service.get_account(account_id)
        if account_obj is None or account_obj.company_id != company_id:
            raise errors.NotFoundError(errors.account_not_found(account_id))
        return account_id

    account_obj = account_service.get_account_by_code(company_id, account.strip())
    if account_obj is None:
        raise errors.NotFoundError(errors.account_code_not_found(company_id, account.strip()))
    return account_obj.id
