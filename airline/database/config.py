"""
Store configuration and connection management for the airline records database.

This module owns the single embedded SQLite database:
- StoreConfig: database URL and engine options, loaded from the environment
- Store: async engine, one-time schema creation, session scope and DAOs

The store is constructed explicitly and handed to the repositories; there is
no process-wide instance.
"""

import asyncio
import logging
import os
from contextlib import asynccontextmanager, nullcontext
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Type

from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ..exceptions import RepositoryError, StoreError
from ..models import Airplane, Customer, EntityModel, Flight, Reservation
from .dao import EntityDao
from .models import ENTITY_TABLES, SCHEMA_VERSION, create_all_tables

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_DB_NAME = "airline.db"
ASYNC_SQLITE_SCHEME = "sqlite+aiosqlite"


def normalize_database_url(url: str) -> str:
    """
    Force the aiosqlite driver on SQLite URLs.

    ``sqlite:///file.db`` becomes ``sqlite+aiosqlite:///file.db``.

    Raises:
        ValueError: If the URL is not a SQLite URL
    """
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        raise ValueError(f"Unsupported database URL: {url}. Only SQLite is supported")
    if parsed.drivername != ASYNC_SQLITE_SCHEME:
        parsed = parsed.set(drivername=ASYNC_SQLITE_SCHEME)
    return parsed.render_as_string(hide_password=False)


@dataclass
class StoreConfig:
    """
    Configuration for the embedded database.

    Environment variables:
    - DATABASE_URL: complete SQLite URL (takes precedence)
    - DB_NAME: database file name (default: airline.db in the working directory)
    """

    database_url: str = f"{ASYNC_SQLITE_SCHEME}:///{DEFAULT_DB_NAME}"
    echo: bool = False
    timeout: float = 30.0
    extra_engine_kwargs: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        self.database_url = normalize_database_url(self.database_url)

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Create a StoreConfig from environment variables."""
        database_url = os.getenv("DATABASE_URL")
        if not database_url:
            db_name = os.getenv("DB_NAME", DEFAULT_DB_NAME)
            database_url = f"{ASYNC_SQLITE_SCHEME}:///{db_name}"
        return cls(
            database_url=database_url,
            echo=os.getenv("AIRLINE_ECHO_SQL", "false").lower() in ("true", "1", "yes", "on"),
        )

    @classmethod
    def in_memory(cls, echo: bool = False) -> "StoreConfig":
        """Configuration for a private in-memory database (tests, demos)."""
        return cls(database_url=f"{ASYNC_SQLITE_SCHEME}:///:memory:", echo=echo)

    @property
    def database_path(self) -> Optional[Path]:
        """Path of the database file, or None for in-memory databases."""
        database = make_url(self.database_url).database
        if not database or database == ":memory:":
            return None
        return Path(database)

    @property
    def is_memory(self) -> bool:
        return self.database_path is None

    def engine_kwargs(self) -> Dict[str, Any]:
        """
        Engine options for ``create_async_engine``.

        In-memory databases live inside a single connection, so they use a
        StaticPool to make every session see the same data. Sessions on that
        shared connection are serialized by the Store.
        """
        kwargs: Dict[str, Any] = {
            "echo": self.echo,
            "connect_args": {
                "check_same_thread": False,
                "timeout": self.timeout,
            },
        }
        if self.is_memory:
            kwargs["poolclass"] = StaticPool
        kwargs.update(self.extra_engine_kwargs)
        return kwargs


class StoreState(str, Enum):
    """Lifecycle of a Store."""
    UNINITIALIZED = "uninitialized"
    OPENING = "opening"
    READY = "ready"
    FAILED = "failed"


class Store:
    """
    Handle to the airline records database.

    Initialization opens (or creates) the database file, creates any missing
    tables and stamps the schema version. It runs at most once per Store,
    even when several tasks call ``initialize()`` concurrently. A failed
    initialization leaves the store in FAILED and the next call tries again.

    Usage:
        store = Store(StoreConfig.in_memory())
        await store.initialize()
        customers = await store.customers.find_all()
        await store.close()
    """

    def __init__(self, config: Optional[StoreConfig] = None):
        """
        Args:
            config: StoreConfig instance, defaults to environment-based config
        """
        self.config = config or StoreConfig.from_env()
        self.engine: Optional[AsyncEngine] = None
        self.session_factory: Optional[async_sessionmaker] = None
        self.state = StoreState.UNINITIALIZED
        self._init_lock = asyncio.Lock()
        # One shared connection means one transaction at a time
        self._session_lock = asyncio.Lock() if self.config.is_memory else None
        self._daos: Dict[Type[EntityModel], EntityDao] = {}

        logger.info(f"Store configured for {self._display_url()}")

    @property
    def is_ready(self) -> bool:
        return self.state is StoreState.READY

    async def initialize(self) -> "Store":
        """
        Open the database and create the schema if needed.

        Returns:
            The store itself, ready for use

        Raises:
            StoreError: If the database cannot be opened or the schema is unusable
        """
        if self.is_ready:
            return self

        async with self._init_lock:
            if self.is_ready:
                return self

            self.state = StoreState.OPENING
            engine: Optional[AsyncEngine] = None
            try:
                self._prepare_location()
                engine = create_async_engine(self.config.database_url, **self.config.engine_kwargs())
                self._setup_event_listeners(engine)

                async with engine.begin() as conn:
                    await conn.run_sync(self._create_schema)

            except Exception as e:
                self.state = StoreState.FAILED
                if engine is not None:
                    await engine.dispose()
                logger.error(f"Failed to initialize store: {e}")
                if isinstance(e, StoreError):
                    raise
                raise StoreError(f"Store initialization failed: {e}") from e

            self.engine = engine
            self.session_factory = async_sessionmaker(
                engine,
                class_=AsyncSession,
                autoflush=False,
                expire_on_commit=False,
            )
            self.state = StoreState.READY
            logger.info(f"Store ready ({self._display_url()}, schema v{SCHEMA_VERSION})")

        return self

    def _prepare_location(self) -> None:
        """Create the parent directory of the database file if missing."""
        path = self.config.database_path
        if path is not None and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)

    def _setup_event_listeners(self, engine: AsyncEngine) -> None:
        """Set up SQLAlchemy event listeners for connection management."""
        is_memory = self.config.is_memory

        @event.listens_for(engine.sync_engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            """Configure SQLite-specific settings."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            if not is_memory:
                # Readers do not block the writer
                cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

    @staticmethod
    def _create_schema(sync_conn) -> None:
        """Create missing tables and stamp the schema version (runs inside run_sync)."""
        version = sync_conn.exec_driver_sql("PRAGMA user_version").scalar() or 0
        if version > SCHEMA_VERSION:
            raise StoreError(
                f"Database schema version {version} is newer than supported version {SCHEMA_VERSION}"
            )

        create_all_tables(sync_conn)

        if version < SCHEMA_VERSION:
            sync_conn.exec_driver_sql(f"PRAGMA user_version = {SCHEMA_VERSION}")
            logger.info(f"Database schema created (version {SCHEMA_VERSION})")

    @asynccontextmanager
    async def session(self):
        """
        Get a database session with automatic cleanup.

        Usage:
            async with store.session() as session:
                # Use session here
                pass

        In-memory stores hand out one session at a time, held until the
        session is committed or rolled back. Sessions must not be nested.

        Yields:
            AsyncSession committed on success and rolled back on error
        """
        if self.session_factory is None:
            raise StoreError("Store is not initialized; call initialize() first")

        async with self._session_guard():
            session = self.session_factory()
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                if not isinstance(e, RepositoryError):
                    logger.error(f"Database session error: {e}")
                raise
            finally:
                await session.close()

    def _session_guard(self):
        return self._session_lock if self._session_lock is not None else nullcontext()

    def dao(self, entity_type: Type[EntityModel]) -> EntityDao:
        """
        Get the data-access object for a record type.

        Raises:
            StoreError: If the store is not ready
            KeyError: If the type has no table
        """
        if not self.is_ready:
            raise StoreError("Store is not initialized; call initialize() first")

        dao = self._daos.get(entity_type)
        if dao is None:
            dao = EntityDao(self.session, ENTITY_TABLES[entity_type], entity_type)
            self._daos[entity_type] = dao
        return dao

    @property
    def customers(self) -> EntityDao[Customer]:
        return self.dao(Customer)

    @property
    def airplanes(self) -> EntityDao[Airplane]:
        return self.dao(Airplane)

    @property
    def flights(self) -> EntityDao[Flight]:
        return self.dao(Flight)

    @property
    def reservations(self) -> EntityDao[Reservation]:
        return self.dao(Reservation)

    async def schema_version(self) -> int:
        """Read the stamped schema version from the database."""
        await self.initialize()
        async with self._session_guard():
            async with self.engine.connect() as conn:
                result = await conn.exec_driver_sql("PRAGMA user_version")
                return result.scalar() or 0

    def connection_info(self) -> Dict[str, Any]:
        """
        Get store information for display.

        Returns:
            Dictionary with connection details
        """
        path = self.config.database_path
        return {
            "database_url": self._display_url(),
            "database_path": str(path) if path else ":memory:",
            "state": self.state.value,
            "schema_version": SCHEMA_VERSION,
            "echo_enabled": self.config.echo,
        }

    def _display_url(self) -> str:
        return make_url(self.config.database_url).render_as_string(hide_password=True)

    async def close(self) -> None:
        """Dispose of the engine. The store can be initialized again afterwards."""
        if self.engine is not None:
            await self.engine.dispose()
            logger.info("Store closed")
        self.engine = None
        self.session_factory = None
        self._daos.clear()
        self.state = StoreState.UNINITIALIZED

    async def __aenter__(self) -> "Store":
        return await self.initialize()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()


async def open_store(config: Optional[StoreConfig] = None) -> Store:
    """Create a new store and initialize it."""
    store = Store(config)
    return await store.initialize()


# Export public interface
__all__ = [
    "StoreConfig",
    "StoreState",
    "Store",
    "open_store",
    "normalize_database_url",
]
