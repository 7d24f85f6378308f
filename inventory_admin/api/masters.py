# inventory_admin/api/masters.py
"""
CRUD routes for the master tables. One router per entity kind, all built
by ``build_router`` from the kind's descriptor.
"""

from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, Query, Request
from pydantic import BaseModel

from inventory_admin.api.deps import get_repository
from inventory_admin.api.responses import (
    bad_request_response,
    created_response,
    not_found_response,
    server_error_response,
    success_response,
    unprocessable_entity_response,
    validation_error_response,
)
from inventory_admin.db.repository import EntityRepository, Outcome, OutcomeStatus
from inventory_admin.entities import CATEGORIES, CUSTOMERS, EMPLOYEES, ITEMS, STORES, SUPPLIERS, EntityKind
from inventory_admin.validation import format_errors, validate


def _respond(kind: EntityKind, outcome: Outcome, message: Optional[str] = None, created: bool = False):
    if outcome.status is OutcomeStatus.OK:
        if created:
            return created_response(outcome.value, message)
        return success_response(outcome.value, message)
    if outcome.status is OutcomeStatus.NOT_FOUND:
        return not_found_response(kind.label)
    if outcome.status is OutcomeStatus.CONFLICT:
        return unprocessable_entity_response(outcome.message, outcome.field)
    # The repository has already logged the underlying failure.
    return server_error_response()


def _precheck_unique(
    repo: EntityRepository, kind: EntityKind, value: BaseModel, exclude_id: Any = None
):
    """
    Return a 422 response for the first unique value already taken, else None.

    The store's unique indexes still have the final say on a concurrent insert.
    """
    for rule in kind.unique:
        candidate = getattr(value, rule.column, None)
        if candidate is None:
            continue
        if not repo.check_unique(kind, rule.column, candidate, exclude_id=exclude_id):
            return unprocessable_entity_response(kind.duplicate_message(rule.column), rule.column)
    return None


def build_router(kind: EntityKind) -> APIRouter:
    router = APIRouter(prefix=f"/{kind.table}", tags=[kind.table])
    orderable = set(kind.record_model.model_fields)

    @router.get("/")
    def list_records(
        request: Request,
        order_by: Optional[str] = Query(None, description="Column to sort by"),
        descending: bool = Query(False),
        repo: EntityRepository = Depends(get_repository),
    ):
        """
        Return active records. Filterable columns can be passed as query
        parameters for equality matching.
        """
        if order_by is not None and order_by not in orderable:
            return bad_request_response(f"Cannot sort {kind.plural.lower()} by {order_by!r}")

        filters = {name: request.query_params.get(name) for name in kind.filterable}
        records = repo.fetch_many(kind, filters, order_by=order_by, ascending=not descending)
        return success_response(records)

    @router.get("/{record_id}")
    def get_record(record_id: str, repo: EntityRepository = Depends(get_repository)):
        return _respond(kind, repo.fetch_one(kind, record_id))

    @router.post("/", status_code=201)
    def create_record(
        payload: Any = Body(default=None),
        repo: EntityRepository = Depends(get_repository),
    ):
        result = validate(kind.create_model, payload)
        if not result.ok:
            return validation_error_response(format_errors(result))

        duplicate = _precheck_unique(repo, kind, result.value)
        if duplicate is not None:
            return duplicate

        return _respond(
            kind,
            repo.create(kind, result.value),
            f"{kind.label} created successfully",
            created=True,
        )

    def _update(record_id: str, payload: Any, schema, repo: EntityRepository, replace: bool = False):
        result = validate(schema, payload)
        if not result.ok:
            return validation_error_response(format_errors(result))

        existing = repo.fetch_one(kind, record_id)
        if not existing.ok:
            return _respond(kind, existing)

        duplicate = _precheck_unique(repo, kind, result.value, exclude_id=record_id)
        if duplicate is not None:
            return duplicate

        return _respond(
            kind,
            repo.update(kind, record_id, result.value, replace=replace),
            f"{kind.label} updated successfully",
        )

    @router.put("/{record_id}")
    def replace_record(
        record_id: str,
        payload: Any = Body(default=None),
        repo: EntityRepository = Depends(get_repository),
    ):
        """
        Full replacement: the body must pass the same checks as a create, and
        optional fields it leaves out or blank are cleared.
        """
        return _update(record_id, payload, kind.create_model, repo, replace=True)

    @router.patch("/{record_id}")
    def patch_record(
        record_id: str,
        payload: Any = Body(default=None),
        repo: EntityRepository = Depends(get_repository),
    ):
        return _update(record_id, payload, kind.update_model, repo)

    @router.delete("/{record_id}")
    def delete_record(record_id: str, repo: EntityRepository = Depends(get_repository)):
        """Soft delete. Repeating it is harmless."""
        return _respond(
            kind,
            repo.soft_delete(kind, record_id),
            f"{kind.label} deleted successfully",
        )

    return router


categories_router = build_router(CATEGORIES)
stores_router = build_router(STORES)
items_router = build_router(ITEMS)
customers_router = build_router(CUSTOMERS)
suppliers_router = build_router(SUPPLIERS)
employees_router = build_router(EMPLOYEES)
