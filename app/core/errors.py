import logging
from enum import Enum
from typing import Optional

from fastapi import Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFIRMATION_REQUIRED = "confirmation_required"
    STORE_FAILURE = "store_failure"


ERROR_STATUS_MAP = {
    ErrorType.VALIDATION: 422,
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFIRMATION_REQUIRED: 400,
    ErrorType.STORE_FAILURE: 503,
}


class AppException(Exception):
    """Raised by services; the handler below turns it into an HTTP response."""

    def __init__(self, error_type: ErrorType, message: str, errors: Optional[dict] = None):
        self.error_type = error_type
        self.message = message
        self.errors = errors or {}
        super().__init__(message)


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    content = {"detail": exc.message, "error_type": exc.error_type.value}
    if exc.errors:
        content["errors"] = exc.errors
    return JSONResponse(status_code=status_code, content=content)


__all__ = ["AppException", "ERROR_STATUS_MAP", "ErrorType", "app_exception_handler"]
