# app/db/connection.py
"""
ConnDB: connection management for the marketplace order database.

This class only owns the engine, the session factory and the connection
lifecycle. Repositories receive sessions from it and never create engines.
"""

import logging
from typing import Any, Optional

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import get_settings
from app.db.models import Base
from app.utils.error_handler import DatabaseException

logger = logging.getLogger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30


class ConnDB:
    """
    Database connection manager.

    Unlike a process-wide singleton, each instance is bound to one database
    URL so tests can run against isolated databases.
    """

    def __init__(self, database_url: Optional[str] = None, echo: Optional[bool] = None):
        settings = get_settings()
        self.database_url = database_url or settings.DATABASE_URL
        self.echo = settings.DB_ECHO if echo is None else echo
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker[AsyncSession]] = None
        self._connection_tested = False
        logger.info("ConnDB instance created")

    @property
    def is_sqlite(self) -> bool:
        return make_url(self.database_url).get_backend_name() == "sqlite"

    async def initialize(self, create_tables: bool = False) -> None:
        """
        Create the engine and session factory and verify the connection.

        Args:
            create_tables: Create missing tables after connecting

        Raises:
            DatabaseException: If initialization fails
        """
        if self.engine is not None:
            logger.info("Database connection already initialized")
            return

        logger.info("Initializing database connection...")

        try:
            self.engine = create_async_engine(self.database_url, **self._engine_options())

            if self.is_sqlite:
                self._configure_sqlite_transactions(self.engine)

            self.session_factory = async_sessionmaker(
                self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=True
            )

            await self._test_connection()

            if create_tables:
                await self.create_tables()

            logger.info("Database connection initialized successfully")

        except (SQLAlchemyError, OSError) as e:
            logger.error(f"Failed to initialize database connection: {e}")
            await self._cleanup_failed_initialization()
            raise DatabaseException(
                message=f"Failed to initialize database connection: {str(e)}",
                operation="initialize",
                connection_type="initialization",
            ) from e

    def _engine_options(self) -> dict[str, Any]:
        settings = get_settings()
        options: dict[str, Any] = {"echo": self.echo, "future": True}

        if self.is_sqlite:
            options["connect_args"] = {"timeout": SQLITE_BUSY_TIMEOUT_SECONDS}
        else:
            options.update(
                pool_size=settings.DB_POOL_SIZE,
                max_overflow=settings.DB_MAX_OVERFLOW,
                pool_recycle=settings.DB_POOL_RECYCLE,
                pool_pre_ping=True,
            )

        return options

    @staticmethod
    def _configure_sqlite_transactions(engine: AsyncEngine) -> None:
        """
        Let SQLAlchemy own transaction boundaries on SQLite.

        The driver's implicit transaction handling is disabled and every
        transaction starts with BEGIN IMMEDIATE, so the write lock is taken
        up front and concurrent writers queue on the busy timeout.
        """

        @event.listens_for(engine.sync_engine, "connect")
        def _disable_driver_transactions(dbapi_connection, connection_record):
            dbapi_connection.isolation_level = None
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        @event.listens_for(engine.sync_engine, "begin")
        def _begin_immediate(conn):
            conn.exec_driver_sql("BEGIN IMMEDIATE")

    async def _test_connection(self) -> None:
        logger.info("Testing database connection...")

        async with self.get_session() as session:
            result = await session.execute(text("SELECT 1"))
            if result.scalar() != 1:
                raise DatabaseException(
                    message="Connection test returned unexpected value",
                    operation="test_connection",
                    connection_type="test",
                )

        self._connection_tested = True

    async def _cleanup_failed_initialization(self) -> None:
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
        self._connection_tested = False

    async def create_tables(self) -> None:
        """Create all order and catalog tables that do not exist yet."""
        if self.engine is None:
            raise DatabaseException(
                message="Database connection not initialized. Call initialize() first.",
                operation="create_tables",
            )

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created")

    def get_session(self) -> AsyncSession:
        """
        Get a new database session.

        Returns:
            AsyncSession: SQLAlchemy async session

        Raises:
            DatabaseException: If the connection was not initialized
        """
        if self.session_factory is None:
            raise DatabaseException(
                message="Database connection not initialized. Call initialize() first.",
                operation="get_session",
                connection_type="session_creation",
            )

        return self.session_factory()

    def is_initialized(self) -> bool:
        return self.engine is not None and self.session_factory is not None and self._connection_tested

    async def test_connection(self) -> bool:
        """
        Non-destructive connection check.

        Returns:
            bool: True if the database answers
        """
        if not self.is_initialized():
            return False

        try:
            async with self.get_session() as session:
                result = await session.execute(text("SELECT 1"))
                return result.scalar() == 1
        except SQLAlchemyError as e:
            logger.error(f"Connection test failed: {e}")
            return False

    async def close(self) -> None:
        logger.info("Closing database connection...")

        if self.engine:
            await self.engine.dispose()
            logger.info("Database engine disposed")

        self.engine = None
        self.session_factory = None
        self._connection_tested = False

    def get_engine_info(self) -> dict:
        """
        Describe the engine and its pool.

        Returns:
            dict: Engine and pool details
        """
        if not self.engine:
            return {"status": "not_initialized"}

        return {
            "status": "initialized",
            "backend": make_url(self.database_url).get_backend_name(),
            "pool": self.engine.pool.status(),
            "is_tested": self._connection_tested,
        }

    def __repr__(self) -> str:
        return (
            f"ConnDB(initialized={self.is_initialized()}, "
            f"engine={self.engine is not None}, "
            f"session_factory={self.session_factory is not None})"
        )


_conn_db_instance: Optional[ConnDB] = None


def get_db_connection() -> ConnDB:
    """
    Get the application-wide ConnDB bound to ``settings.DATABASE_URL``.

    Returns:
        ConnDB: Shared connection manager
    """
    global _conn_db_instance

    if _conn_db_instance is None:
        _conn_db_instance = ConnDB()

    return _conn_db_instance
