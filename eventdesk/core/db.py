"""
Database handle and session management
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from eventdesk.core.errors import DataStoreError

logger = logging.getLogger(__name__)

Base = declarative_base()


class Database:
    """Owns the engine and session factory for one application instance.

    Constructed explicitly at startup and handed to every service. ``session()``
    is the unit of work: it commits on success, rolls back on failure and turns
    any ``SQLAlchemyError`` into ``DataStoreError`` so callers only ever see the
    generic store error.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self.connect()
        return self._engine

    def connect(self) -> None:
        if self._engine is not None:
            return
        connect_args = {}
        if self.url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self._engine = create_engine(
            self.url,
            echo=self.echo,
            pool_pre_ping=True,
            connect_args=connect_args,
        )
        self._session_factory = sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info("Database engine created for %s", self._engine.url.render_as_string(hide_password=True))

    def create_all(self) -> None:
        # Import models so their tables are registered on Base.metadata
        import eventdesk.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_all(self) -> None:
        Base.metadata.drop_all(bind=self.engine)

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Database engine disposed")
        self._engine = None
        self._session_factory = None

    def is_connected(self) -> bool:
        """Connectivity probe used by the health check"""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error(f"Database connectivity check failed: {e}")
            return False

    @contextmanager
    def session(self) -> Iterator[Session]:
        if self._session_factory is None:
            self.connect()
        db = self._session_factory()
        try:
            yield db
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Database error: {e}")
            raise DataStoreError() from e
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
