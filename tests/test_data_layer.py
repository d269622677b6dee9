"""Data layer tests.

This module covers:
- User entity construction and equality
- User table persistence (identifier assignment by the database)
- User repository operations against an in-memory SQLite database
"""

import pytest
from sqlmodel import Session, select

from src.app.entities.core.user import (
    User,
    UserInput,
    UserNotFoundError,
    UserRepository,
    UserTable,
)


class TestUserEntity:
    """Test User domain entity."""

    def test_user_creation(self):
        """Test user entity creation with required fields."""
        user = User(id=1, name="Alice", email="alice@example.com")

        assert user.id == 1
        assert user.name == "Alice"
        assert user.email == "alice@example.com"

    def test_user_equality(self):
        """Users with the same stored attributes compare equal."""
        user1 = User(id=1, name="Alice", email="alice@example.com")
        user2 = User(id=1, name="Alice", email="alice@example.com")
        user3 = User(id=2, name="Alice", email="alice@example.com")

        assert user1 == user2
        assert user1 != user3
        assert user1 != "Alice"
        assert hash(user1) == hash(user2)

    def test_user_serialization(self):
        """model_dump produces the JSON shape returned by the API."""
        user = User(id=3, name="Carol", email="carol@example.com")

        assert user.model_dump() == {
            "id": 3,
            "name": "Carol",
            "email": "carol@example.com",
        }


class TestUserTable:
    """Test User database table operations."""

    def test_user_table_assigns_identifier(self, session: Session):
        """The database assigns the primary key on insert."""
        row = UserTable(name="Database", email="db.user@example.com")
        assert row.id is None

        session.add(row)
        session.commit()
        session.refresh(row)

        assert isinstance(row.id, int)
        saved = session.get(UserTable, row.id)
        assert saved is not None
        assert saved.name == "Database"

    def test_user_table_identifiers_increase(self, session: Session):
        first = UserTable(name="First", email="first@example.com")
        second = UserTable(name="Second", email="second@example.com")
        session.add(first)
        session.add(second)
        session.commit()

        assert first.id is not None and second.id is not None
        assert second.id > first.id

    def test_user_table_name(self):
        assert UserTable.__tablename__ == "user"


class TestUserRepository:
    """Test User repository operations."""

    def test_create_user(self, user_repository: UserRepository, session: Session):
        created = user_repository.create(UserInput(name="Al", email="a@b.com"))
        user_repository.commit()

        assert isinstance(created, User)
        assert created.id is not None
        assert created.name == "Al"
        assert created.email == "a@b.com"

        rows = session.exec(select(UserTable)).all()
        assert len(rows) == 1

    def test_get_user(self, user_repository: UserRepository, make_user):
        created = make_user("Alice", "alice@example.com")

        retrieved = user_repository.get(created.id)

        assert retrieved == created

    def test_get_nonexistent_user(self, user_repository: UserRepository):
        assert user_repository.get(999) is None

    def test_update_user(self, user_repository: UserRepository, make_user):
        created = make_user("Alice", "alice@example.com")

        updated = user_repository.update(
            created.id, UserInput(name="Alicia", email="alicia@example.com")
        )
        user_repository.commit()

        assert updated.id == created.id
        assert updated.name == "Alicia"
        assert updated.email == "alicia@example.com"
        assert user_repository.get(created.id) == updated

    def test_update_nonexistent_user(self, user_repository: UserRepository):
        with pytest.raises(UserNotFoundError) as exc_info:
            user_repository.update(42, UserInput(name="Ghost", email="ghost@example.com"))

        assert exc_info.value.user_id == 42
        assert isinstance(exc_info.value, LookupError)

    def test_delete_user(self, user_repository: UserRepository, make_user):
        created = make_user("Bob", "bob@example.com")

        user_repository.delete(created.id)
        user_repository.commit()

        assert user_repository.get(created.id) is None

    def test_identifier_beyond_integer_range(self, user_repository: UserRepository):
        too_large = 2**63

        assert user_repository.get(too_large) is None
        with pytest.raises(UserNotFoundError):
            user_repository.update(
                too_large, UserInput(name="Ghost", email="ghost@example.com")
            )
        with pytest.raises(UserNotFoundError):
            user_repository.delete(-(2**63) - 1)

    def test_delete_nonexistent_user(self, user_repository: UserRepository):
        with pytest.raises(UserNotFoundError):
            user_repository.delete(7)

    def test_list_all_ordered_by_id(self, user_repository: UserRepository, make_user):
        bob = make_user("Bob", "bob@example.com")
        alice = make_user("Alice", "alice@example.com")

        users = user_repository.list_all()

        assert [user.id for user in users] == [bob.id, alice.id]

    def test_list_all_empty(self, user_repository: UserRepository):
        assert user_repository.list_all() == []

    def test_search_matches_name_or_email_ignoring_case(
        self, user_repository: UserRepository, make_user
    ):
        alice = make_user("Alice", "alice@example.com")
        make_user("Bob", "bob@example.com")
        carol = make_user("Carol", "carol@alpha.org")

        results = user_repository.search("AL")

        assert [user.id for user in results] == [alice.id, carol.id]

    def test_search_treats_wildcards_literally(
        self, user_repository: UserRepository, make_user
    ):
        make_user("Alice", "alice@example.com")
        percent = make_user("100% Bob", "bob@example.com")

        assert user_repository.search("%") == [percent]
        assert user_repository.search("_") == []

    def test_search_without_match(self, user_repository: UserRepository, make_user):
        make_user("Alice", "alice@example.com")

        assert user_repository.search("zed") == []

    def test_rollback_discards_pending_changes(
        self, user_repository: UserRepository
    ):
        user_repository.create(UserInput(name="Temp", email="temp@example.com"))
        user_repository.rollback()

        assert user_repository.list_all() == []
