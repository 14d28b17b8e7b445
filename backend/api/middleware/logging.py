"""
Graph API Backend — Request Logging Middleware
===============================================

What:  One access-log line per request on the `graph_api.access` logger,
       in the layout of morgan's `dev` format with the request ID appended:

           GET /api/users?limit=2 200 1.402 ms - 57 [a1b2c3d4]

       The content length is `-` when the response has none (streaming).

Level by status class: 5xx → ERROR, 4xx → WARNING, everything else → INFO.
`request_id`, `method`, `url`, `status`, `response_time_ms` and
`content_length` are attached as `extra` for structured handlers.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("graph_api.access")


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def _original_url(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Writes the access line once the response is ready."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        # Set by RequestIDMiddleware, which wraps this one.
        rid = getattr(request.state, "request_id", "")
        url = _original_url(request)
        length = response.headers.get("content-length", "-")

        logger.log(
            level_for_status(response.status_code),
            "%s %s %d %.3f ms - %s [%s]",
            request.method,
            url,
            response.status_code,
            elapsed_ms,
            length,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "url": url,
                "status": response.status_code,
                "response_time_ms": round(elapsed_ms, 3),
                "content_length": length,
            },
        )
        return response
