"""User API router with CRUD and search operations.

Every handler answers with an explicit status code and a JSON body of the
form ``{"error": ...}`` or ``{"errors": {...}}`` on failure. Handlers are plain
functions and can be called directly with a ``UserRepository``.
"""

import math
from typing import Any

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from src.app.api.http.deps import get_user_repository, read_body
from src.app.core.validation import format_errors
from src.app.entities.core.user import (
    UserNotFoundError,
    UserRepository,
    validate_user,
)

INTERNAL_ERROR = "Internal Server Error"
INVALID_ID = "Invalid user ID"
NOT_FOUND = "User not found"
QUERY_REQUIRED = "Query parameter is required"

router = APIRouter(tags=["users"])


def parse_user_id(raw: Any) -> int | None:
    """Return the integer id for a numeric path segment, or None.

    Any finite number is accepted and truncated toward zero ("7.9" -> 7,
    "1e3" -> 1000). Digit group separators such as "1_0" are rejected.
    """
    if raw is None:
        return None
    text = str(raw)
    if "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@router.post("/users", status_code=status.HTTP_201_CREATED)
def create_user(
    payload: Any = Depends(read_body),
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    """Create a new user."""
    result = validate_user(payload)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": format_errors(result.errors)},
        )

    try:
        user = repository.create(result.data)
        repository.commit()
    except SQLAlchemyError as exc:
        logger.exception("Error creating user")
        repository.rollback()
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, str(exc) or INTERNAL_ERROR)

    logger.info("Created user {}", user.id)
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=user.model_dump())


@router.get("/users")
def list_users(
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    """List all users."""
    try:
        users = repository.list_all()
    except SQLAlchemyError:
        logger.exception("Error listing users")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    return JSONResponse(content=[user.model_dump() for user in users])


# Registered before /users/{user_id} so "search" is never read as an id
@router.get("/users/search")
def search_users(
    query: str | None = Query(default=None),
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    """Search users by a case-insensitive substring of name or email."""
    if query is None or not query.strip():
        return _error(status.HTTP_400_BAD_REQUEST, QUERY_REQUIRED)

    try:
        users = repository.search(query)
    except SQLAlchemyError:
        logger.exception("Error searching users")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    return JSONResponse(content=[user.model_dump() for user in users])


@router.get("/users/{user_id}")
def get_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    """Get a user by ID."""
    parsed_id = parse_user_id(user_id)
    if parsed_id is None:
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_ID)

    try:
        user = repository.get(parsed_id)
    except SQLAlchemyError:
        logger.exception("Error fetching user")
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    if user is None:
        return _error(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    return JSONResponse(content=user.model_dump())


@router.put("/users/{user_id}")
def update_user(
    user_id: str,
    payload: Any = Depends(read_body),
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    """Replace the name and email of a user."""
    parsed_id = parse_user_id(user_id)
    if parsed_id is None:
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_ID)

    result = validate_user(payload)
    if not result.success:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": format_errors(result.errors)},
        )

    try:
        user = repository.update(parsed_id, result.data)
        repository.commit()
    except UserNotFoundError:
        repository.rollback()
        return _error(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except SQLAlchemyError:
        logger.exception("Error updating user")
        repository.rollback()
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR)

    return JSONResponse(content=user.model_dump())


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: str,
    repository: UserRepository = Depends(get_user_repository),
) -> Response:
    """Delete a user by ID."""
    parsed_id = parse_user_id(user_id)
    if parsed_id is None:
        return _error(status.HTTP_400_BAD_REQUEST, INVALID_ID)

    try:
        repository.delete(parsed_id)
        repository.commit()
    except UserNotFoundError:
        repository.rollback()
        return _error(status.HTTP_404_NOT_FOUND, NOT_FOUND)
    except SQLAlchemyError as exc:
        logger.exception("Error deleting user")
        repository.rollback()
        cause = getattr(exc, "orig", None)
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR, str(cause) if cause else INTERNAL_ERROR
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
