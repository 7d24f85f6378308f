# inventory_admin/api/deps.py

from functools import lru_cache

from fastapi import Depends

from inventory_admin.db.engine import get_engine
from inventory_admin.db.repository import EntityRepository
from inventory_admin.db.store import TableStore


@lru_cache(maxsize=1)
def get_store() -> TableStore:
    """One store (and connection pool) per process, built on first use."""
    return TableStore(get_engine())


def get_repository(store: TableStore = Depends(get_store)) -> EntityRepository:
    return EntityRepository(store)
