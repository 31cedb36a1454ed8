"""SQLAlchemy models for ledgerkit database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    UniqueConstraint,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()

MONEY = Numeric(20, 2)


class Account(Base):
    """Chart-of-accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    code = Column(String(50), nullable=False)
    name = Column(String(255), nullable=False)
    account_type = Column(String(20), nullable=False)
    category = Column(String(50), nullable=False)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True, index=True)
    level = Column(Integer, default=1, nullable=False)
    is_header = Column(Boolean, default=False, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    balance = Column(MONEY, default=0, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (UniqueConstraint("company_id", "code", name="uq_company_account_code"),)

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")


class Journal(Base):
    """Journal header model."""

    __tablename__ = "journals"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    journal_number = Column(String(50), nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    description = Column(Text, nullable=False)
    status = Column(String(20), default="draft", nullable=False)
    total_debit = Column(MONEY, default=0, nullable=False)
    total_credit = Column(MONEY, default=0, nullable=False)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    posted_at = Column(DateTime, nullable=True)
    posted_by = Column(Integer, nullable=True)

    __table_args__ = (
        UniqueConstraint("company_id", "journal_number", name="uq_company_journal_number"),
    )

    # Relationships
    entries = relationship(
        "JournalEntry",
        back_populates="journal",
        cascade="all, delete-orphan",
        order_by=lambda: [JournalEntry.position, JournalEntry.id],
    )


class JournalEntry(Base):
    """Journal line model."""

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    journal_id = Column(Integer, ForeignKey("journals.id"), nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    description = Column(Text, nullable=True)
    debit = Column(MONEY, default=0, nullable=False)
    credit = Column(MONEY, default=0, nullable=False)
    position = Column(Integer, nullable=False)

    # Relationships
    journal = relationship("Journal", back_populates="entries")
    account = relationship("Account")


class LedgerRow(Base):
    """Posted ledger row model. Rows are inserted by posting and never updated."""

    __tablename__ = "ledger_rows"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    journal_id = Column(Integer, ForeignKey("journals.id"), nullable=False, index=True)
    entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False, index=True)
    debit = Column(MONEY, default=0, nullable=False)
    credit = Column(MONEY, default=0, nullable=False)
    balance = Column(MONEY, default=0, nullable=False)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    journal = relationship("Journal")


class AuditEvent(Base):
    """Audit outbox model."""

    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    actor_id = Column(Integer, nullable=True)
    action = Column(String(20), nullable=False)
    record_type = Column(String(50), nullable=False)
    record_id = Column(Integer, nullable=True)
    description = Column(Text, nullable=False)
    occurred_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)
    dispatched_at = Column(DateTime, nullable=True, index=True)


class CashTransaction(Base):
    """Cash or bank receipt/payment model, linked to the journal that records it."""

    __tablename__ = "cash_transactions"

    id = Column(Integer, primary_key=True)
    company_id = Column(Integer, nullable=False, index=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False, index=True)
    transaction_number = Column(String(50), nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    transaction_type = Column(String(20), nullable=False)
    category = Column(String(50), nullable=False)
    amount = Column(MONEY, nullable=False)
    description = Column(Text, nullable=False)
    reference = Column(String(100), nullable=True)
    journal_id = Column(Integer, ForeignKey("journals.id"), nullable=False, index=True)
    created_by = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "company_id", "transaction_number", name="uq_company_cash_transaction_number"
        ),
    )


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
