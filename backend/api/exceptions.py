"""
Graph API Backend — Custom Exception Hierarchy
===============================================

What:  Application-specific exceptions mapped to HTTP responses.
How:   Each exception carries a message and an optional context dict.
       Global exception handlers (registered in main.py) turn them into
       JSON error responses.
Who:   Raised by the graph layer and route handlers.

Exception Hierarchy:
    GraphApiError (base)
    ├── ValidationError   → 400 Bad Request
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class GraphApiError(Exception):
    """
    Base exception for all application errors.

    Attributes:
        message:  Error description, safe to return to a client.
        context:  Extra debug info (logged, never returned to the client).
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(GraphApiError):
    """
    Raised when client input fails validation.

    HTTP: 400 Bad Request, body `{"error": <message>}`.
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class DatabaseError(GraphApiError):
    """
    Raised when opening the embedded graph database or running a query fails.

    The engine's own exception is chained as ``__cause__``; the query text
    and database path go into ``context`` for the logs only.

    HTTP: 500 Internal Server Error.
    """

    def __init__(
        self,
        message: str = "Database connection error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
