"""
Graph API Backend — Pydantic Response Schemas
==============================================

What:  Pydantic models describing every JSON body the API returns.
How:   Route handlers declare them as `response_model`; FastAPI serializes
       responses through them and documents them in the OpenAPI schema.
"""

from typing import Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Returned by GET / ."""
    message: str = Field(description="Human-readable service banner")


class HealthResponse(BaseModel):
    """Returned by GET /health. Process liveness only; the database is not probed."""
    status: str = Field(default="ok", description="Always 'ok' while the process serves requests")


class DbStatusResponse(BaseModel):
    """
    Returned by GET /db/status.

    Examples:
        {"status": "connected"}
        {"status": "error", "message": "Database connection error"}
    """
    status: str = Field(description="'connected' or 'error'")
    message: Optional[str] = Field(default=None, description="Present only when status is 'error'")


class UserResponse(BaseModel):
    """Mock user record. Generated per request, never persisted."""
    id: int = Field(gt=0, description="Positive user identifier")
    name: str = Field(description="Display name, 'User <id>'")


class ErrorResponse(BaseModel):
    """Body of client errors such as 400 Invalid ID."""
    error: str = Field(description="Error description")

