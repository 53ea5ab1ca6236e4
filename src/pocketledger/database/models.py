"""SQLAlchemy models for the pocketledger database."""

import uuid
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
    Uuid,
    create_engine,
    event,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class AccountGroup(Base):
    """Account group model."""

    __tablename__ = "account_groups"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    icon = Column(String, nullable=True)
    icon_color = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # No ORM cascade: deletion rules live in SQLAlchemyDatabase._on_delete_group
    accounts = relationship("Account", back_populates="group", passive_deletes="all")


class Account(Base):
    """Account model."""

    __tablename__ = "accounts"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, nullable=False)
    kind = Column(String, nullable=False, default="bank")
    include_in_balance = Column(Boolean, default=True, nullable=False)
    order = Column("display_order", Integer, default=0, nullable=False)
    group_id = Column(Uuid, ForeignKey("account_groups.id"), nullable=True, index=True)
    icon = Column(String, nullable=True)
    icon_color = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    group = relationship("AccountGroup", back_populates="accounts")
    transactions = relationship(
        "Transaction",
        back_populates="account",
        foreign_keys="Transaction.account_id",
        passive_deletes="all",
    )
    targeted_transactions = relationship(
        "Transaction",
        back_populates="target_account",
        foreign_keys="Transaction.target_account_id",
        passive_deletes="all",
    )


class Category(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="category", passive_deletes="all")


class Transaction(Base):
    """Transaction model."""

    __tablename__ = "transactions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    account_id = Column(Uuid, ForeignKey("accounts.id"), nullable=False)
    target_account_id = Column(Uuid, ForeignKey("accounts.id"), nullable=True)
    category_id = Column(Uuid, ForeignKey("categories.id"), nullable=True)
    type = Column(String, nullable=False)
    amount = Column(Numeric(14, 2), nullable=False)
    date = Column(Date, nullable=False)
    note = Column(String, nullable=True)
    usage = Column(String, nullable=True)
    exclude_from_balance = Column(Boolean, default=False, nullable=False)
    sequence = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Source and target lookups are indexed independently
    __table_args__ = (
        Index("ix_transactions_account_date", "account_id", "date", "sequence"),
        Index("ix_transactions_target_account", "target_account_id"),
        Index("ix_transactions_category", "category_id"),
    )

    # Relationships
    account = relationship("Account", back_populates="transactions", foreign_keys=[account_id])
    target_account = relationship(
        "Account", back_populates="targeted_transactions", foreign_keys=[target_account_id]
    )
    category = relationship("Category", back_populates="transactions")


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Turn on foreign key enforcement for SQLite connections."""
    module = type(dbapi_connection).__module__
    if module.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
