# inventory_admin/api/responses.py
"""
Standard response envelope for every endpoint:

    {"success": bool, "data": ..., "message": ..., "error": ...,
     "errors": {field: [messages]}, "details": ..., "timestamp": ISO-8601}
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

from inventory_admin.config import settings
from inventory_admin.errors import InventoryAdminError

logger = logging.getLogger(__name__)


def _envelope(status_code: int, success: bool, keep: Sequence[str] = (), **fields: Any) -> JSONResponse:
    body: Dict[str, Any] = {"success": success}
    body.update({key: value for key, value in fields.items() if value is not None or key in keep})
    body["timestamp"] = datetime.now(timezone.utc).isoformat()
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))


def success_response(data: Any, message: Optional[str] = None) -> JSONResponse:
    return _envelope(
        200, True, keep=("data",), data=data, message=message or "Operation successful"
    )


def created_response(data: Any, message: Optional[str] = None) -> JSONResponse:
    return _envelope(201, True, data=data, message=message or "Resource created successfully")


def bad_request_response(message: str, details: Any = None) -> JSONResponse:
    return _envelope(400, False, error=message, details=details)


def not_found_response(resource: str) -> JSONResponse:
    return _envelope(404, False, error=f"{resource} not found")


def validation_error_response(errors: Dict[str, List[str]]) -> JSONResponse:
    return _envelope(422, False, error="Validation failed", errors=errors)


def unprocessable_entity_response(message: str, field: Optional[str] = None) -> JSONResponse:
    errors = {field: [message]} if field else None
    return _envelope(422, False, error=message, errors=errors)


def server_error_response(error: Optional[BaseException] = None) -> JSONResponse:
    if error is not None:
        logger.error("Server error: %s", error, exc_info=error)

    details = None
    if error is not None and settings.is_development:
        if isinstance(error, InventoryAdminError):
            details = error.to_dict()
        else:
            details = {"message": str(error)}

    return _envelope(500, False, error="Internal server error", details=details)
