import logging

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError

from inventory_admin.api.deps import get_repository
from inventory_admin.api.masters import (
    categories_router,
    customers_router,
    employees_router,
    items_router,
    stores_router,
    suppliers_router,
)
from inventory_admin.api.responses import (
    server_error_response,
    success_response,
    validation_error_response,
)
from inventory_admin.config import settings
from inventory_admin.db.repository import EntityRepository
from inventory_admin.errors import InventoryAdminError
from inventory_admin.logging_setup import configure_logging
from inventory_admin.validation import format_errors, issues_from_errors

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    debug=settings.DEBUG,
)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    issues = issues_from_errors(exc.errors(), strip_prefix=("body", "query", "path"))
    return validation_error_response(format_errors(issues))


@app.exception_handler(InventoryAdminError)
async def inventory_admin_error_handler(request: Request, exc: InventoryAdminError):
    return server_error_response(exc)


@app.get("/health")
def health_check(repo: EntityRepository = Depends(get_repository)):
    connected = repo.ping()
    return success_response(
        {
            "status": "ok" if connected else "degraded",
            "version": settings.APP_VERSION,
            "database": "connected" if connected else "disconnected",
            "environment": settings.ENVIRONMENT,
        }
    )


app.include_router(categories_router)
app.include_router(stores_router)
app.include_router(items_router)
app.include_router(customers_router)
app.include_router(suppliers_router)
app.include_router(employees_router)

logger.info("Starting %s", settings.summary())
