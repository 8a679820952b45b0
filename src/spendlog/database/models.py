"""SQLAlchemy models for spendlog database."""

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    Integer,
    Numeric,
    String,
    create_engine,
)
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from spendlog.domain.entities import AMOUNT_PRECISION, AMOUNT_SCALE

Base = declarative_base()


class Expense(Base):
    """Expense or income record model.

    Columns added by later migrations (amount_text, currency, type) are
    nullable so rows written before them stay readable.
    """

    __tablename__ = "expenses"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True)
    amount = Column(Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False)
    amount_text = Column(String, nullable=True)
    category = Column(String, nullable=True)
    date = Column(Date, nullable=False, index=True)
    notes = Column(String, nullable=True)
    currency = Column(String(3), nullable=True)
    type = Column(String, nullable=True)
    created_at = Column(BigInteger, nullable=False)


class SchemaVersion(Base):
    """Single-row table holding the applied migration version."""

    __tablename__ = "schema_version"

    id = Column(Integer, primary_key=True)
    version = Column(Integer, nullable=False)


def create_db_engine(database_url: str) -> Engine:
    """Create an engine usable from request worker threads."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    return create_engine(database_url, echo=False, connect_args=connect_args)


def create_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory.

    Tables are not created here; ``spendlog.database.migrations`` owns the
    schema.
    """
    return sessionmaker(bind=engine, expire_on_commit=False)
