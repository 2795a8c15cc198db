"""
Storage backends - one implementation per supported relational engine.

The backend is chosen from the scheme of ``DATABASE_URL``; nothing else in the
application branches on the database type.
"""
import logging
from abc import ABC, abstractmethod
from typing import Dict, Type

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.pool import StaticPool

logger = logging.getLogger(__name__)


class StorageBackend(ABC):
    """
    Abstract base class for storage backends.
    All database implementations (SQLite, PostgreSQL) inherit from this.
    """

    def __init__(self, url: str):
        self.url = make_url(url)

    @abstractmethod
    def get_db_type(self) -> str:
        """
        Get the database type identifier.

        Returns:
            str: Database type (e.g., 'sqlite', 'postgresql')
        """

    @abstractmethod
    def create_engine(self, **options) -> Engine:
        """
        Build the SQLAlchemy engine for this backend.

        Returns:
            Engine: configured engine
        """

    @property
    def log_safe_url(self) -> str:
        """Connection URL with the password masked, for logging."""
        return self.url.render_as_string(hide_password=True)

    def is_sqlite(self) -> bool:
        """Check if using SQLite database"""
        return self.get_db_type() == 'sqlite'

    def is_postgresql(self) -> bool:
        """Check if using PostgreSQL database"""
        return self.get_db_type() == 'postgresql'


class SqliteBackend(StorageBackend):
    """
    SQLite backend.
    Enforces foreign keys on every connection and allows use across threads
    (the request thread pool and the refresher worker threads share the engine).
    """

    def get_db_type(self) -> str:
        return 'sqlite'

    @property
    def in_memory(self) -> bool:
        return self.url.database in (None, '', ':memory:')

    def create_engine(self, **options) -> Engine:
        kwargs = {"connect_args": {"check_same_thread": False}}
        if self.in_memory:
            # every session must see the same in-memory database
            kwargs["poolclass"] = StaticPool
        engine = create_engine(self.url, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine


class PostgreSQLBackend(StorageBackend):
    """
    PostgreSQL backend with a bounded connection pool.
    """

    def get_db_type(self) -> str:
        return 'postgresql'

    def create_engine(self, pool_size: int = 5, max_overflow: int = 10, **options) -> Engine:
        return create_engine(
            self.url,
            pool_pre_ping=True,
            pool_size=pool_size,
            max_overflow=max_overflow,
        )


BACKENDS: Dict[str, Type[StorageBackend]] = {
    'sqlite': SqliteBackend,
    'postgresql': PostgreSQLBackend,
}


def backend_for_url(url: str) -> StorageBackend:
    """
    Pick the storage backend matching the URL scheme.

    Raises:
        ValueError: If the scheme names an unsupported database
    """
    backend_name = make_url(url).get_backend_name()
    backend_cls = BACKENDS.get(backend_name)
    if backend_cls is None:
        raise ValueError(
            f"Unsupported database backend '{backend_name}'. "
            f"Supported backends: {', '.join(sorted(BACKENDS))}"
        )
    return backend_cls(url)
