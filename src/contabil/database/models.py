"""SQLAlchemy models for the contabil ledger database."""

import sqlite3
from datetime import datetime, UTC
from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Chart of accounts model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    code = Column(String(20), unique=True, nullable=False)
    name = Column(String, nullable=False)
    account_type = Column(String(16), nullable=False)
    parent_id = Column(Integer, ForeignKey("accounts.id"), nullable=True)
    description = Column(String, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint(
            "account_type IN ('asset', 'liability', 'equity', 'revenue', 'expense')",
            name="ck_account_type",
        ),
    )

    # Relationships
    parent = relationship("Account", remote_side=[id], backref="children")
    lines = relationship("JournalEntryLine", back_populates="account")


class JournalEntry(Base):
    """Journal entry header model.

    ``fiscal_year`` and ``sequence`` make up the entry number; the pair is
    unique and allocated from ``entry_sequences`` in the posting transaction.
    """

    __tablename__ = "journal_entries"

    id = Column(Integer, primary_key=True)
    entry_number = Column(String(20), unique=True, nullable=False)
    fiscal_year = Column(Integer, nullable=False)
    sequence = Column(Integer, nullable=False)
    entry_date = Column(Date, nullable=False)
    description = Column(String, nullable=False)
    reference_document = Column(String, nullable=True)
    reverses = Column(String(20), ForeignKey("journal_entries.entry_number"), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        UniqueConstraint("fiscal_year", "sequence", name="uq_entry_year_sequence"),
        UniqueConstraint("reverses", name="uq_entry_reverses"),
        Index("ix_journal_entries_entry_date", "entry_date"),
    )

    # Relationships
    lines = relationship(
        "JournalEntryLine",
        back_populates="entry",
        cascade="all, delete-orphan",
        order_by="JournalEntryLine.line_order",
    )


class JournalEntryLine(Base):
    """Journal entry line model. Amounts are integer minor units."""

    __tablename__ = "journal_entry_lines"

    id = Column(Integer, primary_key=True)
    journal_entry_id = Column(Integer, ForeignKey("journal_entries.id"), nullable=False)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    description = Column(String, nullable=True)
    debit_amount = Column(BigInteger, default=0, nullable=False)
    credit_amount = Column(BigInteger, default=0, nullable=False)
    line_order = Column(Integer, nullable=False)

    __table_args__ = (
        CheckConstraint("debit_amount >= 0", name="ck_line_debit_non_negative"),
        CheckConstraint("credit_amount >= 0", name="ck_line_credit_non_negative"),
        CheckConstraint(
            "(debit_amount = 0) <> (credit_amount = 0)", name="ck_line_one_side"
        ),
        UniqueConstraint("journal_entry_id", "line_order", name="uq_line_order"),
        Index("ix_journal_entry_lines_account_id", "account_id"),
    )

    # Relationships
    entry = relationship("JournalEntry", back_populates="lines")
    account = relationship("Account", back_populates="lines")


class EntrySequence(Base):
    """Last allocated entry sequence per fiscal year."""

    __tablename__ = "entry_sequences"

    fiscal_year = Column(Integer, primary_key=True, autoincrement=False)
    last_value = Column(Integer, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory and make sure the schema exists."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Wait on the write lock instead of failing fast when postings race
        connect_args = {"timeout": 30, "check_same_thread": False}
    engine = create_engine(database_url, echo=False, connect_args=connect_args)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()
