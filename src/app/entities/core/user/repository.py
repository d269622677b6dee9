"""User repository for data access operations."""

from sqlmodel import Session, col, or_, select

from .entity import User
from .schema import UserInput
from .table import UserTable

# Signed 64-bit INTEGER primary key range
MIN_USER_ID = -(2**63)
MAX_USER_ID = 2**63 - 1


class UserNotFoundError(LookupError):
    """Raised when an update or delete targets a user id that does not exist."""

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


class UserRepository:
    """Data-access layer for users.

    Writes are flushed but not committed; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def _find_row(self, user_id: int) -> UserTable | None:
        # Ids the column cannot hold cannot match a stored row
        if not MIN_USER_ID <= user_id <= MAX_USER_ID:
            return None
        return self._session.get(UserTable, user_id)

    def create(self, data: UserInput) -> User:
        row = UserTable(name=data.name, email=data.email)
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def get(self, user_id: int) -> User | None:
        row = self._find_row(user_id)
        if row is None:
            return None
        return User.model_validate(row, from_attributes=True)

    def update(self, user_id: int, data: UserInput) -> User:
        row = self._find_row(user_id)
        if row is None:
            raise UserNotFoundError(user_id)

        row.name = data.name
        row.email = data.email
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return User.model_validate(row, from_attributes=True)

    def delete(self, user_id: int) -> None:
        row = self._find_row(user_id)
        if row is None:
            raise UserNotFoundError(user_id)

        self._session.delete(row)
        self._session.flush()

    def list_all(self) -> list[User]:
        statement = select(UserTable).order_by(col(UserTable.id))
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def search(self, query: str) -> list[User]:
        """Users whose name or email contains ``query``, ignoring case."""
        statement = (
            select(UserTable)
            .where(
                or_(
                    col(UserTable.name).icontains(query, autoescape=True),
                    col(UserTable.email).icontains(query, autoescape=True),
                )
            )
            .order_by(col(UserTable.id))
        )
        rows = self._session.exec(statement).all()
        return [User.model_validate(row, from_attributes=True) for row in rows]

    def commit(self) -> None:
        self._session.commit()

    def rollback(self) -> None:
        self._session.rollback()
