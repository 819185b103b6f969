"""
Error taxonomy and FastAPI error handlers following FastAPI best practices
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from pydantic import BaseModel

from resource_service.core.logger import logger


class ErrorResponse(Exception):
    """Base exception for application errors"""

    error = "Bad Request"

    def __init__(self, message: str, status_code: int = 400, details: dict = None):
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class NotFoundError(ErrorResponse):
    """Lookup by id or code matched nothing"""

    error = "Resource Not Found"

    def __init__(self, resource: str, field: str, value: Any):
        super().__init__(
            f"{resource} not found with {field}: '{value}'",
            status_code=404,
            details={"resource": resource, "field": field, "value": value},
        )


class ConflictError(ErrorResponse):
    """Duplicate unique key, detected by pre-check or by the store"""

    error = "Conflict"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=409, details=details)


class StoreUnavailableError(ErrorResponse):
    error = "Service Unavailable"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=503, details=details)


class ChannelFailure(ErrorResponse):
    """Transport error while publishing or dispatching an event"""

    error = "Channel Failure"

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, status_code=502, details=details)


class HandlerFailure(ChannelFailure):
    """An inbound event could not be handled; the channel should redeliver"""

    error = "Handler Failure"


class ErrorResponseModel(BaseModel):
    """Pydantic model for error responses"""
    timestamp: datetime
    status: int
    error: str
    message: str
    path: str
    details: Optional[Dict[str, Any]] = None
    validation_errors: Optional[Dict[str, str]] = None


def _body(request: Request, status: int, error: str, message: str, **extra) -> dict:
    body = ErrorResponseModel(
        timestamp=datetime.now(timezone.utc),
        status=status,
        error=error,
        message=message,
        path=request.url.path,
        **extra,
    )
    return body.model_dump(mode="json", exclude_none=True)


async def error_response_handler(request: Request, exc: ErrorResponse):
    """Handler for ErrorResponse and its subclasses"""
    metadata = {
        "event": "error_response",
        "status_code": exc.status_code,
        "url": str(request.url),
        "method": request.method,
        **exc.details,
    }
    if exc.status_code >= 500:
        logger.error(f"Error: {exc.message}", metadata=metadata)
    else:
        logger.warning(f"Error: {exc.message}", metadata=metadata)

    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, exc.status_code, exc.error, exc.message, details=exc.details or None),
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Map request validation failures to 400 with a field -> message map"""
    errors = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        errors[field or "body"] = err.get("msg", "Invalid value")

    logger.warning("Validation error", metadata={"event": "validation_error", "errors": errors})
    return JSONResponse(
        status_code=400,
        content=_body(
            request, 400, "Validation Failed", "Invalid request parameters",
            validation_errors=errors,
        ),
    )


async def http_exception_handler(request: Request, exc: HTTPException):
    """Handler for FastAPI HTTPException"""
    logger.warning(
        f"HTTPException: {exc.detail}",
        metadata={
            "event": "http_exception",
            "status_code": exc.status_code,
            "url": str(request.url),
            "method": request.method,
        },
    )
    return JSONResponse(
        status_code=exc.status_code,
        content=_body(request, exc.status_code, "HTTP Error", str(exc.detail)),
    )


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unexpected error",
        error=exc,
        metadata={"event": "unhandled_exception", "url": str(request.url), "method": request.method},
        exc_info=True,
    )
    return JSONResponse(
        status_code=500,
        content=_body(request, 500, "Internal Server Error", "An unexpected error occurred"),
    )
