"""Cash and bank domain service.

A cash receipt debits the cash account and credits a contra account; a
payment does the opposite. Each one creates its draft journal and the cash
transaction record in the same database transaction.
"""

from datetime import date
from typing import Optional

from ledgerkit.database.base import Database
from ledgerkit.domain import errors
from ledgerkit.domain.chart import CASH_ACCOUNT_CODES
from ledgerkit.domain.entities import (
    AuditAction,
    CashPosition,
    CashPositionLine,
    CashTransaction,
    CashTransactionInput,
    CashTransactionType,
    EntryInput,
    JournalDraft,
    ZERO,
)
from ledgerkit.domain.journal import JournalService
from ledgerkit.domain.ledger import LedgerService
from ledgerkit.domain.numbering import CashTransactionNumberGenerator
from ledgerkit.logging_config import get_logger

logger = get_logger(__name__)

RECORD_TYPE = "cash_transaction"

NUMBER_PREFIXES = {
    CashTransactionType.IN: "CI",
    CashTransactionType.OUT: "CO",
}


class CashBankService:
    """Service for cash and bank receipts, payments and cash position."""

    def __init__(self, db: Database, journal_service: Optional[JournalService] = None):
        """Initialize cash and bank service.

        Args:
            db: Database instance
            journal_service: Creates the journal behind each transaction
        """
        self.db = db
        self.journals = journal_service or JournalService(db)
        self.ledger = LedgerService(db)
        self.number_generators = {
            transaction_type: CashTransactionNumberGenerator(db, prefix)
            for transaction_type, prefix in NUMBER_PREFIXES.items()
        }

    def _require_cash_account(self, account_id: int) -> None:
        account = self.db.get_account(account_id)
        if account is None:
            raise errors.NotFoundError(errors.account_not_found(account_id))
        if account.code not in CASH_ACCOUNT_CODES:
            raise errors.ValidationError(errors.not_a_cash_account(account.code))

    def _entries(
        self, transaction_type: CashTransactionType, data: CashTransactionInput
    ) -> tuple[EntryInput, EntryInput]:
        if transaction_type is CashTransactionType.IN:
            debit_account, credit_account = data.account_id, data.contra_account_id
        else:
            debit_account, credit_account = data.contra_account_id, data.account_id
        return (
            EntryInput(
                account_id=debit_account,
                debit=data.amount,
                position=0,
                description=data.description,
            ),
            EntryInput(
                account_id=credit_account,
                credit=data.amount,
                position=1,
                description=data.description,
            ),
        )

    def _record(
        self, transaction_type: CashTransactionType, data: CashTransactionInput
    ) -> CashTransaction:
        if data.amount <= 0:
            raise errors.ValidationError(errors.CASH_AMOUNT_NOT_POSITIVE)
        self._require_cash_account(data.account_id)

        with self.db.transaction():
            journal = self.journals.create_journal(
                JournalDraft(
                    company_id=data.company_id,
                    transaction_date=data.transaction_date,
                    description=data.description,
                    created_by=data.created_by,
                    entries=self._entries(transaction_type, data),
                )
            )
            transaction_number = self.number_generators[transaction_type].next_number(
                data.company_id, data.transaction_date
            )
            transaction_id = self.db.create_cash_transaction(
                company_id=data.company_id,
                account_id=data.account_id,
                transaction_number=transaction_number,
                transaction_date=data.transaction_date,
                transaction_type=transaction_type,
                category=data.category,
                amount=data.amount,
                description=data.description,
                reference=data.reference,
                journal_id=journal.id,
                created_by=data.created_by,
            )
            self.db.record_audit_event(
                company_id=data.company_id,
                actor_id=data.created_by,
                action=AuditAction.CREATE,
                record_type=RECORD_TYPE,
                record_id=transaction_id,
                description=f"Recorded cash transaction {transaction_number}",
            )

        logger.info(
            "Recorded cash transaction",
            extra={
                "transaction_id": transaction_id,
                "transaction_number": transaction_number,
                "journal_number": journal.journal_number,
                "company_id": data.company_id,
            },
        )
        return self.require_transaction(transaction_id)

    def cash_in(self, data: CashTransactionInput) -> CashTransaction:
        """Record money received into a cash or bank account.

        The journal debits the cash account and credits the contra account.
        It is left in draft for review and posting.

        Raises:
            ValidationError: If the amount is not positive, the account is not
                a cash account, or the journal fails validation
            NotFoundError: If an account does not exist
        """
        return self._record(CashTransactionType.IN, data)

    def cash_out(self, data: CashTransactionInput) -> CashTransaction:
        """Record money paid from a cash or bank account.

        The journal debits the contra account and credits the cash account.
        """
        return self._record(CashTransactionType.OUT, data)

    def get_transaction(self, transaction_id: int) -> Optional[CashTransaction]:
        return self.db.get_cash_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> CashTransaction:
        """Get cash transaction by ID or raise NotFoundError."""
        transaction = self.db.get_cash_transaction(transaction_id)
        if transaction is None:
            raise errors.NotFoundError(errors.cash_transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> list[CashTransaction]:
        """List a company's cash transactions, newest first."""
        return self.db.list_cash_transactions(
            company_id, start_date=start_date, end_date=end_date, account_id=account_id
        )

    def cash_position(self, company_id: int, as_of: date) -> CashPosition:
        """Raw ledger balance of each active cash account through ``as_of``."""
        accounts = [
            account
            for account in self.db.list_accounts(company_id, codes=CASH_ACCOUNT_CODES)
            if account.is_active
        ]
        totals = self.ledger.account_totals(
            company_id, end_date=as_of, account_ids=[account.id for account in accounts]
        )
        lines = tuple(
            CashPositionLine(
                account_code=account.code,
                account_name=account.name,
                balance=totals[account.id].net_debit if account.id in totals else ZERO,
            )
            for account in accounts
        )
        return CashPosition(
            company_id=company_id,
            as_of_date=as_of,
            lines=lines,
            total=sum((line.balance for line in lines), ZERO),
        )
