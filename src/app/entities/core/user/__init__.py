"""User entity module.

This module contains all User-related classes organized by responsibility:
- User: Domain entity returned to callers
- UserInput / validate_user: Validation schema for create and update payloads
- UserTable: Database persistence model
- UserRepository: Data access layer
"""

from .entity import User
from .repository import UserNotFoundError, UserRepository
from .schema import UserInput, validate_user
from .table import UserTable

__all__ = [
    "User",
    "UserInput",
    "UserNotFoundError",
    "UserRepository",
    "UserTable",
    "validate_user",
]
