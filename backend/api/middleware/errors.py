"""
Graph API Backend — Error Handling Middleware
==============================================

What:  Turns exceptions no route handler dealt with into a 500 JSON response
       inside the middleware chain.
How:   Registered innermost, so the response still passes through CORS,
       security headers, the access log and the request ID middleware on
       its way out. Starlette's own catch-all sits outside every
       BaseHTTPMiddleware and would skip all of them.

Response body:
    {"message": "Internal Server Error"}
    {"message": "Internal Server Error", "error": "<str(exc)>"}   NODE_ENV=development
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from api.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


def server_error_response(request: Request, exc: Exception, label: str) -> JSONResponse:
    """Log `exc` with request details and build the 500 response."""
    logger.error(
        "[%s] %s: %s %s from %s",
        request_id_var.get(""),
        label,
        request.method,
        request.url,
        request.client.host if request.client else "unknown",
        exc_info=exc,
    )
    body = {"message": "Internal Server Error"}
    if request.app.state.settings.is_development:
        body["error"] = str(exc)
    return JSONResponse(status_code=500, content=body)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Catches any exception raised below it and answers with a 500."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            return server_error_response(request, exc, "Internal server error")
