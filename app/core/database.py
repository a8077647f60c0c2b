import logging
import sqlite3
from typing import Any, Dict, List, Sequence

from sqlalchemy import MetaData, create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from app.core.config import settings
from app.helpers.sql import PLACEHOLDER

logger = logging.getLogger(__name__)

# Create SQLAlchemy engine
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,  # Verify connections before using them
)

# Create SessionLocal class
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Table definitions (SQLAlchemy Core) register themselves here
metadata = MetaData()


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection."""
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def get_db():
    """
    Dependency function to get database session.
    Used in FastAPI endpoints with Depends(get_db)
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Create any missing tables.

    Imports the table modules so they are registered on `metadata` first.
    """
    from app.models import company, job, user  # noqa: F401
    metadata.create_all(bind=bind or engine)
    logger.info(f"Tables ready: {', '.join(sorted(metadata.tables))}")


def bind_positional(sql: str, values: Sequence[Any]) -> tuple:
    """
    Rewrite `$1, $2, ...` placeholders as SQLAlchemy named binds.

    Returns the rewritten statement text and the parameter mapping, where
    `$n` is bound to `values[n - 1]`.

    Raises:
        ValueError: If a placeholder has no corresponding value
    """
    params: Dict[str, Any] = {}

    def _named(match):
        if match.group(1) is None:
            # quoted identifier or string literal, left as written
            return match.group(0)
        idx = int(match.group(1))
        if idx < 1 or idx > len(values):
            raise ValueError(f"Placeholder ${idx} has no bound value ({len(values)} given)")
        params[f"p{idx}"] = values[idx - 1]
        return f":p{idx}"

    return PLACEHOLDER.sub(_named, sql), params


def run_query(db: Session, sql: str, values: Sequence[Any] = ()) -> List[Dict[str, Any]]:
    """
    Execute a positionally-parameterized statement and return rows as dicts.

    SQLite has no ILIKE; its LIKE is already case-insensitive for ASCII.
    """
    statement, params = bind_positional(sql, values)
    if db.get_bind().dialect.name == "sqlite":
        statement = statement.replace(" ILIKE ", " LIKE ")

    result = db.execute(text(statement), params)
    if not result.returns_rows:
        return []
    return [dict(row) for row in result.mappings().all()]
