"""User database table model."""

from sqlmodel import Field, SQLModel


class UserTable(SQLModel, table=True):
    """Database persistence model for users.

    This represents how the User entity is stored in the database.
    It's separate from the domain entity so that the primary key stays
    optional until the row has been inserted.
    """

    __tablename__ = "user"

    id: int | None = Field(default=None, primary_key=True)
    name: str
    email: str
