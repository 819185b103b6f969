"""
Correlation ID Middleware for request tracing
Ensures every request has a unique correlation ID for distributed tracing
"""

import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from resource_service.core.config import config
from resource_service.core.correlation import reset_correlation_id, set_correlation_id


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """
    Middleware to handle correlation IDs for request tracing

    - Extracts correlation ID from request headers (or generates a new one)
    - Stores it in context for logging and outbound events
    - Adds it to response headers
    """

    async def dispatch(self, request: Request, call_next):
        header = config.correlation_id_header
        correlation_id = request.headers.get(header) or str(uuid.uuid4())

        token = set_correlation_id(correlation_id)
        request.state.correlation_id = correlation_id
        try:
            response = await call_next(request)
        finally:
            reset_correlation_id(token)

        response.headers[header] = correlation_id
        return response
