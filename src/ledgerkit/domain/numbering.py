"""Sequential document numbers for journals and cash transactions."""

from datetime import date

from ledgerkit.database.base import Database

DEFAULT_PREFIX = "JRN"


class MonthlyNumberGenerator:
    """Generate sequential numbers per company and month.

    Numbers look like ``JRN/202401/0001``. The next sequence is one past the
    highest sequence already used for the company and month, so deleting an
    older record never causes a collision. Subclasses say where the existing
    numbers are stored.
    """

    def __init__(self, db: Database, prefix: str, width: int = 4):
        self.db = db
        self.prefix = prefix
        self.width = width

    def existing_numbers(self, company_id: int, month_prefix: str) -> list[str]:
        raise NotImplementedError

    def month_prefix(self, transaction_date: date) -> str:
        """Return the shared prefix of a month's numbers, e.g. ``JRN/202401/``."""
        return f"{self.prefix}/{transaction_date:%Y%m}/"

    def next_number(self, company_id: int, transaction_date: date) -> str:
        """Return the next unused number for the company and month."""
        month_prefix = self.month_prefix(transaction_date)
        highest = 0
        for number in self.existing_numbers(company_id, month_prefix):
            suffix = number[len(month_prefix):]
            if suffix.isdigit():
                highest = max(highest, int(suffix))
        return f"{month_prefix}{highest + 1:0{self.width}d}"


class JournalNumberGenerator(MonthlyNumberGenerator):
    """Journal numbers, ``JRN/YYYYMM/NNNN`` by default."""

    def __init__(self, db: Database, prefix: str = DEFAULT_PREFIX, width: int = 4):
        super().__init__(db, prefix, width)

    def existing_numbers(self, company_id: int, month_prefix: str) -> list[str]:
        return self.db.list_journal_numbers(company_id, month_prefix)


class CashTransactionNumberGenerator(MonthlyNumberGenerator):
    """Cash transaction numbers, e.g. ``CI/202401/0001`` for a receipt."""

    def existing_numbers(self, company_id: int, month_prefix: str) -> list[str]:
        return self.db.list_cash_transaction_numbers(company_id, month_prefix)
