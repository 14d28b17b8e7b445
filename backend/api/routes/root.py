"""
Graph API Backend — Service Routes
===================================

What:  Banner, liveness and database status endpoints.
Who:   Docker health checks, load balancers and developers poking the API.

    GET /            → 200 {"message": "API is running"}
    GET /health      → 200 {"status": "ok"}
    GET /db/status   → 200 {"status": "connected"}
                       500 {"status": "error", "message": "Database connection error"}
"""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_graph_db
from api.exceptions import DatabaseError
from api.graph import LIVENESS_QUERY, GraphDatabase
from api.schemas.responses import DbStatusResponse, HealthResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Service"])


@router.get("/", response_model=MessageResponse, summary="Service banner")
async def root() -> MessageResponse:
    return MessageResponse(message="API is running")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Process health check",
    description="Always returns 200 while the process is serving requests. Does not touch the database.",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")


@router.get(
    "/db/status",
    response_model=DbStatusResponse,
    response_model_exclude_none=True,
    responses={500: {"description": "Database unreachable", "model": DbStatusResponse}},
    summary="Embedded database status",
)
async def db_status(db: GraphDatabase = Depends(get_graph_db)):
    """
    Run a liveness query against the embedded graph database.

    Any `DatabaseError` (path not writable, engine failure, closed handle)
    becomes a 500 with a fixed message; details stay in the server log.
    """
    try:
        db.run_query(LIVENESS_QUERY)
    except DatabaseError as e:
        logger.error("Database connection error: %s | Context: %s", e.message, e.context)
        return JSONResponse(
            status_code=500,
            content={"status": "error", "message": "Database connection error"},
        )
    return DbStatusResponse(status="connected")
