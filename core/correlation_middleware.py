"""
Correlation ID Middleware

Injects correlation IDs into requests for distributed tracing.
The correlation ID is propagated through all log entries for the request.
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from core.logging import bind_correlation_id, get_logger


class CorrelationMiddleware(BaseHTTPMiddleware):
    """
    Middleware to inject and propagate correlation IDs.

    - Reads X-Correlation-ID from incoming request headers
    - Generates a new UUID if not present
    - Sets the correlation ID in context for logging
    - Adds X-Correlation-ID to response headers
    """

    HEADER_NAME = "X-Correlation-ID"

    def __init__(self, app):
        super().__init__(app)
        self.log = get_logger("http_access")

    async def dispatch(self, request: Request, call_next) -> Response:
        correlation_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        bind_correlation_id(correlation_id)

        response = await call_next(request)

        response.headers[self.HEADER_NAME] = correlation_id
        self.log.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status=response.status_code,
        )
        return response
