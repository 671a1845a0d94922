"""Engine and session handling for the template database."""

import logging
import os
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from .models import Base


logger = logging.getLogger(__name__)

DATABASE_URL_ENV = "CLAUSE_EDITOR_DATABASE_URL"
DEFAULT_DATABASE_NAME = "clause_editor"


def get_database_url(database: Optional[str] = None) -> str:
    """
    Resolve the template database URL.

    ``CLAUSE_EDITOR_DATABASE_URL`` is used as is when set. Otherwise a
    PostgreSQL URL is assembled from the ``POSTGRES_*`` variables.

    Args:
        database: Database name, overriding ``POSTGRES_DB`` and the
                  environment URL.
    """
    explicit = os.environ.get(DATABASE_URL_ENV)
    if explicit and database is None:
        return explicit

    url = URL.create(
        "postgresql",
        username=os.environ.get("POSTGRES_USER", "postgres"),
        password=os.environ.get("POSTGRES_PASSWORD", "postgres"),
        host=os.environ.get("POSTGRES_HOST", "localhost"),
        port=int(os.environ.get("POSTGRES_PORT", "5432")),
        database=database or os.environ.get("POSTGRES_DB", DEFAULT_DATABASE_NAME),
    )
    return url.render_as_string(hide_password=False)


class DatabaseManager:
    """
    Owns the engine and session factory for the ``templates`` table.

    The engine is created lazily on first use.
    """

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        self._url = make_url(database_url or get_database_url())
        self._echo = echo
        self._engine: Optional[Engine] = None
        self._sessions: Optional[sessionmaker] = None

    @property
    def display_url(self) -> str:
        """Connection URL with the password masked, for log messages."""
        return self._url.render_as_string(hide_password=True)

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            options = {"echo": self._echo}
            if self._url.get_backend_name() != "sqlite":
                options["pool_pre_ping"] = True
            self._engine = create_engine(self._url, **options)
        return self._engine

    @contextmanager
    def get_session(self) -> Iterator[Session]:
        """
        Transactional session scope.

        Commits when the block exits normally and rolls back if it raises.
        """
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, autoflush=False)

        with self._sessions() as session:
            try:
                yield session
                session.commit()
            except Exception:
                session.rollback()
                raise

    def init_database(self) -> None:
        """Create the templates table and its indexes if missing."""
        Base.metadata.create_all(self.engine)
        logger.info(f"Template schema ready on {self.display_url}")

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None

    def health_check(self) -> bool:
        """True if the template database answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning(f"Template database unreachable at {self.display_url}: {e}")
            return False
        return True
