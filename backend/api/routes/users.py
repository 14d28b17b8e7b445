"""
Graph API Backend — Mock User Routes
=====================================

What:  Placeholder user endpoints under /api. Nothing is read from or
       written to the database; records are generated per request.

    GET /api/users       → [{"id": 1, "name": "User 1"}, ... 3 items]
    GET /api/users/{id}  → {"id": id, "name": "User <id>"}
                           400 {"error": "Invalid ID"}
"""

import re
from typing import List, Optional

from fastapi import APIRouter

from api.exceptions import ValidationError
from api.schemas.responses import ErrorResponse, UserResponse

router = APIRouter(prefix="/api", tags=["Users"])

MOCK_USER_COUNT = 3

# Leading integer: optional whitespace and sign, then digits. Anything after
# the digits is ignored, so "7abc" reads as 7. ASCII digits only.
_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


def parse_user_id(raw: str) -> Optional[int]:
    """Returns the leading integer of `raw`, or None when it has none."""
    match = _LEADING_INT.match(raw)
    if match is None:
        return None
    return int(match.group(1))


def _mock_user(user_id: int) -> UserResponse:
    return UserResponse(id=user_id, name=f"User {user_id}")


@router.get("/users", response_model=List[UserResponse], summary="List mock users")
async def list_users() -> List[UserResponse]:
    return [_mock_user(i) for i in range(1, MOCK_USER_COUNT + 1)]


@router.get(
    "/users/{user_id}",
    response_model=UserResponse,
    responses={400: {"description": "Non-numeric or non-positive id", "model": ErrorResponse}},
    summary="Get a mock user by id",
)
async def get_user(user_id: str) -> UserResponse:
    parsed = parse_user_id(user_id)
    if parsed is None or parsed <= 0:
        raise ValidationError("Invalid ID", field="id", context={"value": user_id})
    return _mock_user(parsed)
