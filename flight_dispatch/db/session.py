import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.orm import Session, sessionmaker

from flight_dispatch.core.config import Settings
from flight_dispatch.db.backends import StorageBackend, backend_for_url

logger = logging.getLogger(__name__)


class Storage:
    """
    Explicitly constructed storage handle.

    Owns the engine and the session factory for the lifetime of the process.
    Built once at start-up and passed to whatever needs database access.
    """

    def __init__(self, backend: StorageBackend, pool_size: int = 5, max_overflow: int = 10):
        self.backend = backend
        self.engine = backend.create_engine(pool_size=pool_size, max_overflow=max_overflow)
        self._session_factory = sessionmaker(
            autocommit=False, autoflush=False, expire_on_commit=False, bind=self.engine
        )
        logger.info(f"Storage ready ({backend.get_db_type()}): {backend.log_safe_url}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "Storage":
        return cls(
            backend_for_url(settings.DATABASE_URL),
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
        )

    def initialize_schema(self) -> None:
        """Create any missing tables."""
        # Importing base registers every model on the metadata
        from flight_dispatch.db.base import Base

        Base.metadata.create_all(bind=self.engine)

    def new_session(self) -> Session:
        return self._session_factory()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Scoped session: acquired on entry, always closed on exit."""
        db: Optional[Session] = None
        try:
            db = self.new_session()
            yield db
        finally:
            if db is not None:
                db.close()

    def dispose(self) -> None:
        self.engine.dispose()
        logger.info("Storage disposed")
