# inventory_admin/db/repository.py
"""
Soft-delete aware CRUD helpers for the master tables.

Every read defaults to active rows only, every write stamps ``updated_at``,
and deletes only flip ``is_active``. Operations that act on a single record
or a batch return an ``Outcome`` instead of raising, so callers can map
"not found", "conflict" and "store failure" to responses without try/except.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Generic, Mapping, Optional, Sequence, Tuple, TypeVar, Union
from uuid import UUID, uuid4

from pydantic import BaseModel

from inventory_admin.db.store import TableStore
from inventory_admin.entities import EntityKind, get_kind
from inventory_admin.errors import ConstraintViolationError, PersistenceError

logger = logging.getLogger(__name__)

T = TypeVar("T")

Kind = Union[str, EntityKind]


class OutcomeStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    ERROR = "error"


@dataclass(frozen=True)
class Outcome(Generic[T]):
    status: OutcomeStatus
    value: Optional[T] = None
    message: Optional[str] = None
    field: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is OutcomeStatus.OK

    @classmethod
    def success(cls, value: T) -> "Outcome[T]":
        return cls(OutcomeStatus.OK, value=value)

    @classmethod
    def not_found(cls, message: str) -> "Outcome[T]":
        return cls(OutcomeStatus.NOT_FOUND, message=message)

    @classmethod
    def conflict(cls, message: str, field: Optional[str] = None) -> "Outcome[T]":
        return cls(OutcomeStatus.CONFLICT, message=message, field=field)

    @classmethod
    def failed(cls, message: str = "Something went wrong") -> "Outcome[T]":
        return cls(OutcomeStatus.ERROR, message=message)


class _BatchAborted(Exception):
    def __init__(self, outcome: Outcome):
        super().__init__(outcome.message)
        self.outcome = outcome


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_uuid(value: Any) -> Optional[UUID]:
    """Any spelling of an id (case, hyphens) as a UUID; None if malformed."""
    if value is None or isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except ValueError:
        return None


def _typed(value: Any) -> BaseModel:
    if not isinstance(value, BaseModel):
        raise TypeError(f"Expected a validated model, got {type(value).__name__}")
    return value


class EntityRepository:
    def __init__(self, store: TableStore, clock: Callable[[], datetime] = utcnow):
        self.store = store
        self.clock = clock

    # ---- Helpers ----

    def _record(self, kind: EntityKind, row: Mapping[str, Any]):
        return kind.record_model.model_validate(dict(row))

    def _check_references(
        self, store: TableStore, kind: EntityKind, values: Mapping[str, Any]
    ) -> Optional[Outcome]:
        for column, target_table in kind.references:
            if values.get(column) is None:
                continue
            target = get_kind(target_table)
            if not store.select(target.table, {"id": values[column], "is_active": True}):
                return Outcome.conflict(
                    f"{target.label} does not exist or is inactive", field=column
                )
        return None

    def _explain_violation(
        self, kind: EntityKind, values: Mapping[str, Any], exclude_id: Any = None
    ) -> Outcome:
        """Work out which unique value the store rejected."""
        for rule in kind.unique:
            value = values.get(rule.column)
            if value is not None and not self.check_unique(
                kind, rule.column, value, exclude_id=exclude_id
            ):
                return Outcome.conflict(kind.duplicate_message(rule.column), field=rule.column)
        return Outcome.conflict(f"{kind.label} violates a data constraint")

    def _duplicates_within(self, kind: EntityKind, rows: Sequence[Mapping[str, Any]]) -> Optional[Outcome]:
        for rule in kind.unique:
            seen = set()
            for row in rows:
                value = row.get(rule.column)
                if value is None:
                    continue
                if value in seen:
                    return Outcome.conflict(kind.duplicate_message(rule.column), field=rule.column)
                seen.add(value)
        return None

    def _new_row(self, value: BaseModel, now: datetime) -> Dict[str, Any]:
        row = _typed(value).model_dump()
        row.update(id=uuid4(), is_active=True, created_at=now, updated_at=now)
        return row

    # ---- Reads ----

    def fetch_one(self, kind: Kind, record_id: Any) -> Outcome:
        """Return the active record with ``record_id``; inactive rows are not found."""
        kind = get_kind(kind)
        if record_id is None:
            return Outcome.not_found(f"{kind.label} not found")
        try:
            rows = self.store.select(kind.table, {"id": record_id, "is_active": True})
        except PersistenceError:
            logger.exception("Error fetching from %s", kind.table)
            return Outcome.failed()
        if not rows:
            return Outcome.not_found(f"{kind.label} not found")
        return Outcome.success(self._record(kind, rows[0]))

    def fetch_one_unfiltered(self, kind: Kind, record_id: Any) -> Outcome:
        """Like fetch_one, but also returns soft-deleted records (audit views)."""
        kind = get_kind(kind)
        if record_id is None:
            return Outcome.not_found(f"{kind.label} not found")
        try:
            rows = self.store.select(kind.table, {"id": record_id})
        except PersistenceError:
            logger.exception("Error fetching from %s", kind.table)
            return Outcome.failed()
        if not rows:
            return Outcome.not_found(f"{kind.label} not found")
        return Outcome.success(self._record(kind, rows[0]))

    def fetch_many(
        self,
        kind: Kind,
        filters: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        ascending: bool = True,
    ) -> list:
        """
        Active records matching the equality ``filters`` (None values are
        ignored), ordered by ``order_by`` or the kind's default column.

        Raises PersistenceError if the store fails.
        """
        kind = get_kind(kind)
        conditions = dict(filters or {})
        conditions["is_active"] = True
        rows = self.store.select(
            kind.table, conditions, order_by or kind.default_order, ascending
        )
        return [self._record(kind, row) for row in rows]

    def count_active(self, kind: Kind) -> int:
        kind = get_kind(kind)
        return self.store.count(kind.table, {"is_active": True})

    def count(self, kind: Kind, filters: Optional[Mapping[str, Any]] = None) -> int:
        kind = get_kind(kind)
        return self.store.count(kind.table, filters)

    def check_unique(self, kind: Kind, field: str, value: Any, exclude_id: Any = None) -> bool:
        """
        True when no row blocks ``value`` for ``field``.

        Under the default reuse policy only active rows block; a rule with
        ``reuse_deleted=False`` counts soft-deleted rows too. ``exclude_id``
        lets an update keep its own value.
        """
        kind = get_kind(kind)
        if value is None:
            return True

        filters = {field: value}
        rule = kind.unique_rule(field)
        if rule is None or rule.reuse_deleted:
            filters["is_active"] = True

        rows = self.store.select(kind.table, filters)
        excluded = _as_uuid(exclude_id)
        if excluded is not None:
            rows = [row for row in rows if row["id"] != excluded]
        return not rows

    # ---- Writes ----

    def create(self, kind: Kind, value: BaseModel) -> Outcome:
        kind = get_kind(kind)
        row = self._new_row(value, self.clock())

        try:
            conflict = self._check_references(self.store, kind, row)
            if conflict is not None:
                return conflict

            try:
                stored = self.store.insert(kind.table, [row])[0]
            except ConstraintViolationError as exc:
                logger.warning("Create in %s rejected: %s", kind.table, exc.details)
                return self._explain_violation(kind, row)
        except PersistenceError:
            logger.exception("Error creating in %s", kind.table)
            return Outcome.failed()

        logger.info("Created %s %s", kind.label.lower(), row["id"])
        return Outcome.success(self._record(kind, stored))

    def update(self, kind: Kind, record_id: Any, partial: BaseModel, replace: bool = False) -> Outcome:
        """
        Merge the fields set on ``partial`` onto the active record. With
        ``replace`` every field of ``partial`` is written, so optional fields
        left out are cleared and defaulted ones reset.

        Never creates or reactivates a record: an absent or soft-deleted id
        is NOT_FOUND and nothing is written.
        """
        kind = get_kind(kind)
        values = _typed(partial).model_dump(exclude_unset=not replace)
        values["updated_at"] = self.clock()
        not_found = Outcome.not_found(f"{kind.label} not found")

        if record_id is None:
            return not_found

        try:
            if not self.store.select(kind.table, {"id": record_id, "is_active": True}):
                return not_found

            conflict = self._check_references(self.store, kind, values)
            if conflict is not None:
                return conflict

            try:
                stored = self.store.update(kind.table, record_id, values, {"is_active": True})
            except ConstraintViolationError as exc:
                logger.warning("Update of %s %s rejected: %s", kind.table, record_id, exc.details)
                return self._explain_violation(kind, values, exclude_id=record_id)
        except PersistenceError:
            logger.exception("Error updating %s %s", kind.table, record_id)
            return Outcome.failed()

        if stored is None:
            return not_found

        logger.info("Updated %s %s", kind.label.lower(), record_id)
        return Outcome.success(self._record(kind, stored))

    def soft_delete(self, kind: Kind, record_id: Any) -> Outcome:
        """
        Mark the record inactive. Deleting an already inactive record is
        fine; only an id that never existed is NOT_FOUND.
        """
        kind = get_kind(kind)
        if record_id is None:
            return Outcome.not_found(f"{kind.label} not found")

        try:
            stored = self.store.update(
                kind.table, record_id, {"is_active": False, "updated_at": self.clock()}
            )
        except PersistenceError:
            logger.exception("Error deleting from %s %s", kind.table, record_id)
            return Outcome.failed()

        if stored is None:
            return Outcome.not_found(f"{kind.label} not found")

        logger.info("Deactivated %s %s", kind.label.lower(), record_id)
        return Outcome.success(self._record(kind, stored))

    def batch_create(self, kind: Kind, values: Sequence[BaseModel]) -> Outcome:
        """Insert all values in one transaction, or none of them."""
        kind = get_kind(kind)
        now = self.clock()
        rows = [self._new_row(value, now) for value in values]
        if not rows:
            return Outcome.success([])

        conflict = self._duplicates_within(kind, rows)
        if conflict is not None:
            return conflict

        try:
            for row in rows:
                conflict = self._check_references(self.store, kind, row)
                if conflict is not None:
                    return conflict

            try:
                with self.store.transaction() as tx:
                    stored = tx.insert(kind.table, rows)
            except ConstraintViolationError as exc:
                logger.warning("Batch create in %s rejected: %s", kind.table, exc.details)
                for row in rows:
                    outcome = self._explain_violation(kind, row)
                    if outcome.field is not None:
                        return outcome
                return Outcome.conflict(f"{kind.label} violates a data constraint")
        except PersistenceError:
            logger.exception("Error batch creating in %s", kind.table)
            return Outcome.failed()

        logger.info("Created %d %s", len(stored), kind.plural.lower())
        return Outcome.success([self._record(kind, row) for row in stored])

    def batch_update(self, kind: Kind, changes: Sequence[Tuple[Any, BaseModel]]) -> Outcome:
        """
        Apply ``(id, partial)`` pairs in one transaction. Any missing or
        inactive id rolls the whole batch back.
        """
        kind = get_kind(kind)
        now = self.clock()
        prepared = []
        for record_id, partial in changes:
            values = _typed(partial).model_dump(exclude_unset=True)
            values["updated_at"] = now
            prepared.append((record_id, values))

        results = []
        try:
            try:
                with self.store.transaction() as tx:
                    for record_id, values in prepared:
                        conflict = self._check_references(tx, kind, values)
                        if conflict is not None:
                            raise _BatchAborted(conflict)
                        stored = tx.update(kind.table, record_id, values, {"is_active": True})
                        if stored is None:
                            raise _BatchAborted(
                                Outcome.not_found(f"{kind.label} {record_id} not found")
                            )
                        results.append(stored)
            except ConstraintViolationError as exc:
                logger.warning("Batch update of %s rejected: %s", kind.table, exc.details)
                for record_id, values in prepared:
                    outcome = self._explain_violation(kind, values, exclude_id=record_id)
                    if outcome.field is not None:
                        return outcome
                return Outcome.conflict(f"{kind.label} violates a data constraint")
        except _BatchAborted as exc:
            return exc.outcome
        except PersistenceError:
            logger.exception("Error batch updating %s", kind.table)
            return Outcome.failed()

        logger.info("Updated %d %s", len(results), kind.plural.lower())
        return Outcome.success([self._record(kind, row) for row in results])

    def ping(self) -> bool:
        return self.store.ping()
