"""User domain entity."""

from typing import Any

from pydantic import BaseModel, Field


class User(BaseModel):
    """User entity representing a person in the directory.

    This is the domain model returned by the repository and serialized in
    API responses. The identifier is assigned by the database on insert.
    """

    id: int = Field(description="Database-assigned identifier")
    name: str = Field(description="User's display name")
    email: str = Field(description="User's email address")

    def __eq__(self, other: Any) -> bool:
        """Compare users by their stored attributes."""
        if not isinstance(other, User):
            return False

        return (
            self.id == other.id
            and self.name == other.name
            and self.email == other.email
        )

    def __hash__(self) -> int:
        return hash((self.id, self.name, self.email))
