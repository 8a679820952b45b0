"""Versioned, additive schema migrations.

The applied version lives in the ``schema_version`` table. ``migrate`` reads
it, runs only the pending steps in order and records each new version as it
goes. Steps only ever add structure: a table, or a nullable column. Existing
rows are not backfilled; readers treat the new columns' NULL as the default.

Add-column steps inspect the table first, so a database created by an older
build that already carries a column (but never recorded a version) is
brought under version control without errors.
"""

import logging
from dataclasses import dataclass
from typing import Callable

from sqlalchemy import (
    BigInteger,
    Column,
    Date,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    inspect,
    select,
    text,
)
from sqlalchemy.engine import Connection, Engine

from spendlog.database.models import SchemaVersion
from spendlog.domain.entities import AMOUNT_PRECISION, AMOUNT_SCALE

logger = logging.getLogger(__name__)

EXPENSES_TABLE = "expenses"


@dataclass(frozen=True)
class Migration:
    """One schema step."""

    version: int
    description: str
    apply: Callable[[Connection], None]


def column_exists(conn: Connection, table_name: str, column_name: str) -> bool:
    """Check if a column exists in a table."""
    columns = [col["name"] for col in inspect(conn).get_columns(table_name)]
    return column_name in columns


def _create_expenses(conn: Connection) -> None:
    # Initial column set; later columns arrive through their own steps.
    table = Table(
        EXPENSES_TABLE,
        MetaData(),
        Column("id", Integer, primary_key=True, autoincrement=True),
        Column("amount", Numeric(AMOUNT_PRECISION, AMOUNT_SCALE), nullable=False),
        Column("category", String, nullable=True),
        Column("date", Date, nullable=False, index=True),
        Column("notes", String, nullable=True),
        Column("created_at", BigInteger, nullable=False),
        sqlite_autoincrement=True,
    )
    table.create(conn, checkfirst=True)


def _add_column(column_name: str, ddl_type: str) -> Callable[[Connection], None]:
    def apply(conn: Connection) -> None:
        if column_exists(conn, EXPENSES_TABLE, column_name):
            logger.info("Column %s.%s already present, recording only", EXPENSES_TABLE, column_name)
            return
        conn.execute(text(f"ALTER TABLE {EXPENSES_TABLE} ADD COLUMN {column_name} {ddl_type}"))

    return apply


MIGRATIONS: list[Migration] = [
    Migration(1, "create expenses table", _create_expenses),
    Migration(2, "add expenses.amount_text", _add_column("amount_text", "VARCHAR")),
    Migration(3, "add expenses.currency", _add_column("currency", "VARCHAR(3)")),
    Migration(4, "add expenses.type", _add_column("type", "VARCHAR")),
]

LATEST_VERSION = MIGRATIONS[-1].version


def current_version(conn: Connection) -> int:
    """Return the recorded schema version, 0 for an unversioned database."""
    if not inspect(conn).has_table(SchemaVersion.__tablename__):
        return 0
    version = conn.execute(select(SchemaVersion.version).where(SchemaVersion.id == 1)).scalar()
    return version or 0


def _record_version(conn: Connection, version: int) -> None:
    table = SchemaVersion.__table__
    table.create(conn, checkfirst=True)
    updated = conn.execute(table.update().where(table.c.id == 1).values(version=version))
    if updated.rowcount == 0:
        conn.execute(table.insert().values(id=1, version=version))


def pending_migrations(engine: Engine) -> list[Migration]:
    """List migrations that have not been applied yet."""
    with engine.connect() as conn:
        version = current_version(conn)
    return [m for m in MIGRATIONS if m.version > version]


def migrate(engine: Engine) -> int:
    """Apply pending migrations and return the resulting schema version.

    Each step runs in its own transaction together with its version record,
    so an interrupted run resumes from the last completed step.
    """
    with engine.connect() as conn:
        version = current_version(conn)
    pending = [m for m in MIGRATIONS if m.version > version]
    if not pending:
        logger.debug("Schema is up to date at version %d", version)
        return version

    for migration in pending:
        with engine.begin() as conn:
            logger.info("Applying migration %d: %s", migration.version, migration.description)
            migration.apply(conn)
            _record_version(conn, migration.version)

    return pending[-1].version
