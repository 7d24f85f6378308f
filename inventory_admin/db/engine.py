# inventory_admin/db/engine.py

from typing import Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool

from inventory_admin.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """
    Build an engine for ``url`` (defaults to settings.DATABASE_URL).

    SQLite gets foreign key enforcement switched on, and in-memory SQLite
    shares one connection so every session sees the same database.
    """
    url = url or settings.DATABASE_URL
    echo = settings.SQL_ECHO if echo is None else echo

    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(url, echo=echo, future=True, **kwargs)

    if url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine
