from __future__ import annotations

import logging
import os
import weakref
from contextlib import contextmanager
from collections.abc import Generator

from flask import Flask, g
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.cookenu.errors import StorageError

logger = logging.getLogger(__name__)

# Every engine created by init_db; children of a fork drop the parent's sockets.
_engines: "weakref.WeakSet[Engine]" = weakref.WeakSet()


def _dispose_engines_after_fork() -> None:
    for engine in list(_engines):
        engine.dispose(close=False)
    logger.info("Reset %s DB engine pool(s) after fork (pid=%s)", len(_engines), os.getpid())


if hasattr(os, "register_at_fork"):
    os.register_at_fork(after_in_child=_dispose_engines_after_fork)


def engine_options(db_url: str) -> dict[str, object]:
    """Pool settings per backend: sized pool for Postgres/MySQL, shared-thread SQLite for dev and tests."""
    options: dict[str, object] = {"future": True, "pool_pre_ping": True}
    if db_url.startswith(("postgres", "mysql")):
        options.update(pool_recycle=1800, pool_size=5, max_overflow=10, pool_timeout=30)
    elif db_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    return options


def init_db(app: Flask) -> None:
    """
    One pooled engine per process. Request handlers borrow a connection
    through a request-scoped session and hand it back on teardown.
    """
    engine = create_engine(app.config["DATABASE_URL"], **engine_options(app.config["DATABASE_URL"]))
    if app.config.get("ENV") != "production":
        @event.listens_for(engine, "checkout")
        def _receive_checkout(dbapi_connection, connection_record, connection_proxy):  # type: ignore[no-redef]
            app.logger.debug("DB connection checkout from pool")
    _engines.add(engine)
    app.extensions["sqlalchemy_engine"] = engine
    app.extensions["sqlalchemy_sessionmaker"] = sessionmaker(
        bind=engine,
        class_=Session,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        future=True,
    )


def db_session(app: Flask | None = None) -> Session:
    """
    Request-scoped session. Use inside request handlers.
    """
    if getattr(g, "db_session", None) is not None:
        return g.db_session
    if app is None:
        from flask import current_app

        app = current_app
    g.db_session = app.extensions["sqlalchemy_sessionmaker"]()  # type: ignore[assignment]
    return g.db_session


def commit(s: Session, operation: str) -> None:
    """Commit the request's writes; a failed commit surfaces as a StorageError."""
    try:
        s.commit()
    except SQLAlchemyError as e:
        s.rollback()
        logger.error("commit failed (operation=%s): %s", operation, e)
        raise StorageError(operation) from e


def teardown_db_session(exc: BaseException | None) -> None:
    s: Session | None = getattr(g, "db_session", None)
    if s is None:
        return
    if exc is not None:
        s.rollback()
    s.close()
    g.db_session = None


@contextmanager
def session_scope(app: Flask) -> Generator[Session, None, None]:
    """
    Non-request helper for scripts and tests: yields a session and commits/rolls back.
    """
    s: Session = app.extensions["sqlalchemy_sessionmaker"]()
    try:
        yield s
        s.commit()
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()
