"""SQLAlchemy models for checkbook database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    String,
    ForeignKey,
    DateTime,
    Date,
    Numeric,
    Boolean,
    Index,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

Base = declarative_base()


class Account(Base):
    """Checkbook account model."""

    __tablename__ = "accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class Transaction(Base):
    """Ledger transaction model.

    Transactions are not deleted with their account by the database; the
    account service removes them first.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    account_id = Column(Integer, ForeignKey("accounts.id"), nullable=False)
    date = Column(Date, nullable=False)
    code = Column(String, default="", nullable=False)
    description = Column(String, default="", nullable=False)
    deposit = Column(Numeric(12, 2), default=0, nullable=False)
    withdrawal = Column(Numeric(12, 2), default=0, nullable=False)
    reconciled = Column(Boolean, default=False, nullable=False)

    __table_args__ = (Index("ix_transactions_account_date", "account_id", "date"),)


class Setting(Base):
    """Key-value store for user preferences (filters, last account)."""

    __tablename__ = "settings"

    key = Column(String, primary_key=True)
    value = Column(String, nullable=False)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
