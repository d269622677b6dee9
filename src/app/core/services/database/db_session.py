"""Database engine and session factory used across the application."""

from collections.abc import Iterator
from contextlib import contextmanager

from loguru import logger
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, create_engine

from src.app.runtime.config.config_data import DatabaseConfig
from src.app.runtime.context import get_config


class DbSessionService:
    def __init__(self, db_config: DatabaseConfig | None = None):
        """Initialize the shared database engine and session factory."""
        db_config = db_config or get_config().database

        logger.info("Setting up database engine and session factory")
        if db_config.is_sqlite and get_config().app.environment == "production":
            logger.warning(
                "SQLite is not recommended for production use. "
                "Consider PostgreSQL for better performance and reliability."
            )

        self._engine = create_engine(db_config.url, **db_config.engine_options())

    @property
    def engine(self):
        return self._engine

    def get_session(self) -> Session:
        """Return a new SQLModel session bound to the shared engine."""
        return Session(
            self._engine,
            expire_on_commit=False,  # Prevent lazy loading issues
            autoflush=True,
        )

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Context manager style helper for scripts and tests."""
        db = self.get_session()
        try:
            yield db
            db.commit()
        except Exception as e:
            db.rollback()
            logger.error(
                "Database transaction failed: {}: {}", type(e).__name__, e
            )
            raise
        finally:
            db.close()

    def health_check(self) -> bool:
        """Perform a health check on the database connection."""
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
                return True
        except SQLAlchemyError as e:
            logger.error("Database health check failed: {}: {}", type(e).__name__, e)
            return False

    def dispose(self) -> None:
        """Close every pooled connection."""
        self._engine.dispose()
