"""Entities organized by business concept rather than technical layer.

Each entity has its own package containing:
- entity.py: Domain model returned to callers
- schema.py: Validation of incoming payloads
- table.py: Database persistence model
- repository.py: Data access layer
"""

from .core.user import User, UserInput, UserRepository, UserTable

__all__ = [
    "User",
    "UserInput",
    "UserTable",
    "UserRepository",
]
