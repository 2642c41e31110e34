"""SQLAlchemy models for paytrack database."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from paytrack.domain.entities import AccountType

Base = declarative_base()


class DecimalText(TypeDecorator):
    """Decimal stored as its exact string representation."""

    impl = String
    cache_ok = True

    def process_bind_param(self, value: Optional[Decimal], dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value: Optional[str], dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


class Account(Base):
    """Funding account model."""

    __tablename__ = "accounts"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    type = Column(
        Enum(AccountType, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
    )


class CostCenter(Base):
    """Cost center model."""

    __tablename__ = "cost_centers"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    category = Column(String, nullable=False)
    subcategory = Column(String, nullable=False)


class Payment(Base):
    """Payment model.

    account_id and cost_center_id are plain integers: references are checked
    by the services on write and by the relation resolver on read.
    """

    __tablename__ = "payments"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True)
    date = Column(DateTime, nullable=False)
    amount = Column(DecimalText, nullable=False)
    description = Column(String, nullable=False)
    account_id = Column(Integer, nullable=False, index=True)
    cost_center_id = Column(Integer, nullable=False, index=True)
    receipt_path = Column(String, nullable=True)
    request_path = Column(String, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, expire_on_commit=False)
