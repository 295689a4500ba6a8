"""SQLAlchemy-backed record store with an explicit connect/close lifecycle."""
from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import InterfaceError, OperationalError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from workhours.core.logger import get_logger
from workhours.exceptions import StorageUnavailableError
from workhours.models import Base

LOGGER = get_logger(__name__)


class RecordStore:
    """Own the engine and hand out transactional sessions.

    Nothing is opened until ``connect()``; ``close()`` releases the pool.
    """

    def __init__(self, url: str, *, echo: bool = False) -> None:
        self._url = url
        self._echo = echo
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    def _engine_options(self) -> dict[str, object]:
        options: dict[str, object] = {"echo": self._echo}
        url = make_url(self._url)
        if url.get_backend_name() == "sqlite":
            options["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # One shared connection, otherwise every session sees an empty database.
                options["poolclass"] = StaticPool
        return options

    def connect(self) -> None:
        """Create the engine, the tables, and verify the store answers."""

        if self._engine is not None:
            return
        url = make_url(self._url)
        LOGGER.debug(
            "Connecting record store",
            extra={"url": url.render_as_string(hide_password=True)},
        )
        try:
            engine = create_engine(self._url, future=True, **self._engine_options())
            Base.metadata.create_all(engine)
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            LOGGER.error("Record store unreachable: %s", exc.__class__.__name__)
            raise StorageUnavailableError() from exc

        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        LOGGER.info("Record store connected (%s)", url.get_backend_name())

    def close(self) -> None:
        """Dispose of the engine; safe to call more than once."""

        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        LOGGER.info("Record store closed")

    @contextmanager
    def session_scope(self) -> Iterator[Session]:
        """Provide a transactional scope around one engine operation."""

        if self._session_factory is None:
            raise StorageUnavailableError("Record store is not connected")
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except (OperationalError, InterfaceError) as exc:
            session.rollback()
            LOGGER.error("Storage failure: %s", exc.__class__.__name__)
            raise StorageUnavailableError() from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()


__all__ = ["RecordStore"]
