# inventory_admin/db/store.py
"""
Table-scoped access to the relational store.

``TableStore`` is the only place that builds SQL. It knows nothing about
soft deletes or entity kinds; it offers equality-filtered selects, inserts,
updates by id and counts over the tables in ``schema.metadata``, and turns
SQLAlchemy failures into ``ConstraintViolationError`` / ``PersistenceError``.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence
from uuid import UUID

from sqlalchemy import Table, Uuid, false, func, insert, select, text, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from inventory_admin.db.schema import metadata
from inventory_admin.errors import ConstraintViolationError, PersistenceError

logger = logging.getLogger(__name__)

_NO_MATCH = object()


def _coerce(column, value):
    """Parse id-like filter values; a malformed UUID can never match a row."""
    if isinstance(column.type, Uuid) and not isinstance(value, UUID):
        try:
            return UUID(str(value))
        except ValueError:
            return _NO_MATCH
    return value


class TableStore:
    def __init__(self, engine: Engine, connection: Optional[Connection] = None):
        self.engine = engine
        self._connection = connection

    # ---- Plumbing ----

    @contextmanager
    def _errors(self, action: str, table_name: str) -> Iterator[None]:
        try:
            yield
        except IntegrityError as exc:
            raise ConstraintViolationError(
                f"{action} on {table_name} rejected by a constraint",
                code="constraint_violation",
                details=str(exc.orig),
            ) from exc
        except SQLAlchemyError as exc:
            raise PersistenceError(
                f"{action} on {table_name} failed",
                code="persistence_error",
                details=str(exc),
            ) from exc

    @contextmanager
    def _connect(self) -> Iterator[Connection]:
        if self._connection is not None:
            yield self._connection
        else:
            with self.engine.begin() as conn:
                yield conn

    @contextmanager
    def transaction(self) -> Iterator["TableStore"]:
        """Yield a store whose operations share one connection and commit together."""
        if self._connection is not None:
            yield self
            return
        with self._errors("transaction", "store"):
            with self.engine.begin() as conn:
                yield TableStore(self.engine, conn)

    def table(self, name: str) -> Table:
        try:
            return metadata.tables[name]
        except KeyError:
            raise ValueError(f"Unknown table {name!r}") from None

    def _column(self, table: Table, name: str):
        try:
            return table.c[name]
        except KeyError:
            raise ValueError(f"Unknown column {name!r} on table {table.name!r}") from None

    def _conditions(self, table: Table, filters: Optional[Mapping[str, Any]]) -> list:
        clauses = []
        for key, value in (filters or {}).items():
            if value is None:
                continue
            column = self._column(table, key)
            value = _coerce(column, value)
            clauses.append(false() if value is _NO_MATCH else column == value)
        return clauses

    # ---- Operations ----

    def select(
        self,
        table_name: str,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = True,
    ) -> List[Dict[str, Any]]:
        table = self.table(table_name)
        stmt = select(table)

        clauses = self._conditions(table, filters)
        if clauses:
            stmt = stmt.where(*clauses)

        if order_by:
            column = self._column(table, order_by)
            stmt = stmt.order_by(column.asc() if ascending else column.desc())

        with self._errors("select", table_name), self._connect() as conn:
            rows = conn.execute(stmt).mappings().all()

        return [dict(row) for row in rows]

    def insert(self, table_name: str, rows: Sequence[Mapping[str, Any]]) -> List[Dict[str, Any]]:
        """Insert rows (each must carry its id) and return them as stored."""
        if not rows:
            return []

        table = self.table(table_name)
        for key in rows[0]:
            self._column(table, key)

        ids = [row["id"] for row in rows]

        with self._errors("insert", table_name), self._connect() as conn:
            conn.execute(insert(table), [dict(row) for row in rows])
            stored = conn.execute(select(table).where(table.c.id.in_(ids))).mappings().all()

        by_id = {row["id"]: dict(row) for row in stored}
        return [by_id[row_id] for row_id in ids]

    def update(
        self,
        table_name: str,
        record_id: Any,
        values: Mapping[str, Any],
        filters: Optional[Mapping[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        """
        Update the row with ``record_id`` (and matching ``filters``).

        Returns the stored row, or None when nothing matched.
        """
        table = self.table(table_name)
        id_value = _coerce(table.c.id, record_id)
        if id_value is _NO_MATCH:
            return None

        for key in values:
            self._column(table, key)

        clauses = [table.c.id == id_value, *self._conditions(table, filters)]

        with self._errors("update", table_name), self._connect() as conn:
            result = conn.execute(update(table).where(*clauses).values(**values))
            if result.rowcount == 0:
                return None
            row = conn.execute(select(table).where(table.c.id == id_value)).mappings().first()

        return dict(row) if row is not None else None

    def count(self, table_name: str, filters: Optional[Mapping[str, Any]] = None) -> int:
        table = self.table(table_name)
        stmt = select(func.count()).select_from(table)

        clauses = self._conditions(table, filters)
        if clauses:
            stmt = stmt.where(*clauses)

        with self._errors("count", table_name), self._connect() as conn:
            return conn.execute(stmt).scalar_one()

    def ping(self) -> bool:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True
