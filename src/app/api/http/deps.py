"""FastAPI dependency implementations."""

from __future__ import annotations

import json
from collections.abc import Iterator
from typing import Any

from fastapi import Depends, HTTPException, Request
from sqlmodel import Session

from src.app.api.http.app_data import ApplicationDependencies
from src.app.entities.core.user import UserRepository

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_db_session(request: Request) -> Iterator[Session]:
    """Yield a database session scoped to the current request."""
    app_deps: ApplicationDependencies = request.app.state.app_dependencies
    with app_deps.database_service.get_session() as session:
        yield session


def get_user_repository(session: Session = Depends(get_db_session)) -> UserRepository:
    """Get a user repository bound to the request session."""
    return UserRepository(session)


async def read_body(request: Request) -> Any:
    """Parse the request body as JSON or form data.

    An empty body reads as an empty mapping so that schema validation reports
    every missing field.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return dict(form)

    raw = await request.body()
    if not raw.strip():
        return {}

    try:
        return json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise HTTPException(status_code=400, detail="Malformed request body") from exc
