"""Journal domain service: the draft -> posted -> voided state machine."""

from datetime import date, datetime, UTC
from typing import Callable, Iterable, Optional

from ledgerkit.database.base import Database
from ledgerkit.domain import errors
from ledgerkit.domain.entities import (
    AuditAction,
    Journal as JournalEntity,
    JournalDraft,
    JournalStatus,
    JournalUpdate,
)
from ledgerkit.domain.normal_balance import signed_balance, signed_change
from ledgerkit.domain.numbering import JournalNumberGenerator
from ledgerkit.domain.validation import check_entries
from ledgerkit.logging_config import get_logger

logger = get_logger(__name__)

RECORD_TYPE = "journal"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JournalService:
    """Service for creating, posting and voiding journals.

    Every successful state change also writes an audit outbox event in the
    same database transaction.
    """

    def __init__(
        self,
        db: Database,
        clock: Optional[Callable[[], datetime]] = None,
        number_generator: Optional[JournalNumberGenerator] = None,
    ):
        """Initialize journal service.

        Args:
            db: Database instance
            clock: Returns the current time; posting reads balances as of its date
            number_generator: Journal number generator (default ``JRN`` prefix)
        """
        self.db = db
        self.clock = clock or _utc_now
        self.number_generator = number_generator or JournalNumberGenerator(db)

    def _check_entry_accounts(self, company_id: int, account_ids: Iterable[int]) -> None:
        """Verify every entry references a postable account of the company."""
        violations = []
        for account_id in account_ids:
            account = self.db.get_account(account_id)
            if account is None:
                raise errors.NotFoundError(errors.account_not_found(account_id))
            if account.company_id != company_id:
                violations.append(
                    errors.account_not_postable(account.code, "it belongs to another company")
                )
            elif account.is_header:
                violations.append(errors.account_not_postable(account.code, "it is a header account"))
            elif not account.is_active:
                violations.append(errors.account_not_postable(account.code, "it is inactive"))
        if violations:
            raise errors.ValidationError(violations)

    def _require_status(
        self, journal: JournalEntity, required: JournalStatus, action: str
    ) -> None:
        if journal.status != required:
            logger.warning(
                "Rejected journal transition",
                extra={
                    "journal_id": journal.id,
                    "action": action,
                    "status": journal.status,
                },
            )
            raise errors.StateConflictError(
                errors.journal_state_conflict(action, required),
                required_status=required,
                actual_status=journal.status,
            )

    def _transition(
        self,
        journal: JournalEntity,
        from_status: JournalStatus,
        to_status: JournalStatus,
        action: str,
        posted_at: Optional[datetime] = None,
        posted_by: Optional[int] = None,
    ) -> None:
        """Flip the stored status, failing if another writer already changed it."""
        changed = self.db.transition_journal_status(
            journal.id, from_status, to_status, posted_at=posted_at, posted_by=posted_by
        )
        if not changed:
            current = self.require_journal(journal.id)
            logger.warning(
                "Journal status changed concurrently",
                extra={"journal_id": journal.id, "action": action, "status": current.status},
            )
            raise errors.StateConflictError(
                errors.journal_state_conflict(action, from_status),
                required_status=from_status,
                actual_status=current.status,
            )

    def _record(
        self,
        action: AuditAction,
        journal: JournalEntity,
        actor_id: Optional[int],
        description: str,
    ) -> None:
        self.db.record_audit_event(
            company_id=journal.company_id,
            actor_id=actor_id,
            action=action,
            record_type=RECORD_TYPE,
            record_id=journal.id,
            description=description,
        )

    def create_journal(self, draft: JournalDraft) -> JournalEntity:
        """Create a draft journal.

        Args:
            draft: Journal content; may also come from another module, such as
                inventory costing, that builds journals

        Returns:
            The created journal with its generated number

        Raises:
            ValidationError: If the entries fail validation or reference
                accounts that cannot be posted to
            NotFoundError: If an entry references an unknown account
        """
        total_debit, total_credit = check_entries(draft.entries)
        self._check_entry_accounts(draft.company_id, [e.account_id for e in draft.entries])

        with self.db.transaction():
            journal_number = self.number_generator.next_number(
                draft.company_id, draft.transaction_date
            )
            journal_id = self.db.create_journal(
                company_id=draft.company_id,
                journal_number=journal_number,
                transaction_date=draft.transaction_date,
                description=draft.description,
                created_by=draft.created_by,
                total_debit=total_debit,
                total_credit=total_credit,
                entries=draft.entries,
            )
            journal = self.require_journal(journal_id)
            self._record(
                AuditAction.CREATE, journal, draft.created_by, f"Created journal {journal_number}"
            )

        logger.info(
            "Created journal",
            extra={
                "journal_id": journal_id,
                "journal_number": journal_number,
                "company_id": draft.company_id,
            },
        )
        return self.require_journal(journal_id)

    def get_journal(self, journal_id: int) -> Optional[JournalEntity]:
        """Get journal by ID.

        Args:
            journal_id: Journal ID

        Returns:
            Journal entity with entries, or None if not found
        """
        return self.db.get_journal(journal_id)

    def require_journal(self, journal_id: int) -> JournalEntity:
        """Get journal by ID or raise NotFoundError."""
        journal = self.db.get_journal(journal_id)
        if journal is None:
            raise errors.NotFoundError(errors.journal_not_found(journal_id))
        return journal

    def list_journals(
        self,
        company_id: int,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[JournalStatus] = None,
    ) -> list[JournalEntity]:
        """List a company's journals, newest first, with optional filters."""
        return self.db.list_journals(
            company_id, start_date=start_date, end_date=end_date, status=status
        )

    def update_journal(
        self, journal_id: int, update: JournalUpdate, actor_id: Optional[int] = None
    ) -> JournalEntity:
        """Replace a draft journal's date, description and entries.

        The journal number is kept even if the date moves to another month.

        Raises:
            NotFoundError: If the journal or an account does not exist
            StateConflictError: If the journal is not a draft
            ValidationError: If the new entries fail validation
        """
        journal = self.require_journal(journal_id)
        self._require_status(journal, JournalStatus.DRAFT, "updated")
        total_debit, total_credit = check_entries(update.entries)
        self._check_entry_accounts(journal.company_id, [e.account_id for e in update.entries])

        with self.db.transaction():
            self.db.replace_journal_content(
                journal_id,
                transaction_date=update.transaction_date,
                description=update.description,
                total_debit=total_debit,
                total_credit=total_credit,
                entries=update.entries,
            )
            self._record(
                AuditAction.UPDATE, journal, actor_id, f"Updated journal {journal.journal_number}"
            )

        logger.info(
            "Updated journal",
            extra={"journal_id": journal_id, "journal_number": journal.journal_number},
        )
        return self.require_journal(journal_id)

    def delete_journal(self, journal_id: int, actor_id: Optional[int] = None) -> None:
        """Delete a draft journal and its entries.

        Raises:
            NotFoundError: If the journal does not exist
            StateConflictError: If the journal is not a draft
            DependencyError: If a cash transaction was recorded through it
        """
        journal = self.require_journal(journal_id)
        self._require_status(journal, JournalStatus.DRAFT, "deleted")
        if self.db.count_cash_transactions_for_journal(journal_id) > 0:
            raise errors.DependencyError(errors.journal_delete_blocked(journal.journal_number))

        with self.db.transaction():
            self.db.delete_journal(journal_id)
            self._record(
                AuditAction.DELETE, journal, actor_id, f"Deleted journal {journal.journal_number}"
            )

        logger.info(
            "Deleted journal",
            extra={"journal_id": journal_id, "journal_number": journal.journal_number},
        )

    def post_journal(self, journal_id: int, actor_id: int) -> JournalEntity:
        """Post a draft journal to the ledger.

        Runs as one transaction holding row locks on the journal and its
        accounts. For each entry in position order the account's ledger
        balance as of the clock's current date is converted to the
        normal-balance sign, the entry is applied, a ledger row is written
        with the new balance, and the account's cached balance is updated.
        A failure part way through rolls back every row and balance.

        Args:
            journal_id: Journal ID
            actor_id: ID of the user posting the journal

        Returns:
            The posted journal

        Raises:
            NotFoundError: If the journal does not exist
            StateConflictError: If the journal is not a draft, including when
                another writer posts it first
            ValidationError: If an entry account was deactivated since the
                draft was created
        """
        with self.db.transaction():
            journal = self.db.get_journal(journal_id, for_update=True)
            if journal is None:
                raise errors.NotFoundError(errors.journal_not_found(journal_id))
            self._require_status(journal, JournalStatus.DRAFT, "posted")
            account_ids = [entry.account_id for entry in journal.entries]
            self.db.lock_accounts(account_ids)
            self._check_entry_accounts(journal.company_id, account_ids)

            now = self.clock()
            self._transition(
                journal,
                JournalStatus.DRAFT,
                JournalStatus.POSTED,
                "posted",
                posted_at=now,
                posted_by=actor_id,
            )

            for entry in journal.entries:
                account = self.db.get_account(entry.account_id)
                if account is None:
                    raise errors.NotFoundError(errors.account_not_found(entry.account_id))
                raw_balance = self.db.get_account_ledger_balance(account.id, now.date())
                new_balance = signed_balance(account.account_type, raw_balance) + signed_change(
                    account.account_type, entry.debit, entry.credit
                )
                self.db.append_ledger_row(
                    company_id=journal.company_id,
                    account_id=account.id,
                    journal_id=journal.id,
                    entry_id=entry.id,
                    debit=entry.debit,
                    credit=entry.credit,
                    balance=new_balance,
                    description=entry.description,
                )
                self.db.set_account_balance(account.id, new_balance)

            self._record(
                AuditAction.POST, journal, actor_id, f"Posted journal {journal.journal_number}"
            )

        logger.info(
            "Posted journal",
            extra={
                "journal_id": journal_id,
                "journal_number": journal.journal_number,
                "entry_count": len(journal.entries),
            },
        )
        return self.require_journal(journal_id)

    def void_journal(self, journal_id: int, actor_id: Optional[int] = None) -> JournalEntity:
        """Mark a posted journal as voided.

        Ledger rows and cached account balances are left untouched; reports
        skip the rows because they only read posted journals.

        Raises:
            NotFoundError: If the journal does not exist
            StateConflictError: If the journal is not posted
        """
        with self.db.transaction():
            journal = self.db.get_journal(journal_id, for_update=True)
            if journal is None:
                raise errors.NotFoundError(errors.journal_not_found(journal_id))
            self._require_status(journal, JournalStatus.POSTED, "voided")
            self._transition(journal, JournalStatus.POSTED, JournalStatus.VOIDED, "voided")
            self._record(
                AuditAction.VOID, journal, actor_id, f"Voided journal {journal.journal_number}"
            )

        logger.info(
            "Voided journal",
            extra={"journal_id": journal_id, "journal_number": journal.journal_number},
        )
        return self.require_journal(journal_id)
