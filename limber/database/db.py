"""SQLite engine and unit-of-work sessions for history and saved routines.

The engine is built on first use from ``database_url()``, which honours
``$LIMBER_DB_URL`` before falling back to ``limber.db`` in the app data
directory.  ``configure_engine()`` swaps it out (tests use in-memory
SQLite).
"""

from __future__ import annotations

import logging
import os
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from ..settings import APP_DATA_DIR
from .models import Base

log = logging.getLogger(__name__)


DB_PATH = APP_DATA_DIR / "limber.db"

_engine: Engine | None = None
_factory: sessionmaker[Session] | None = None


def database_url() -> str:
    url = os.environ.get("LIMBER_DB_URL")
    if url:
        return url
    DB_PATH.parent.mkdir(parents=True, exist_ok=True)
    return f"sqlite:///{DB_PATH}"


def _bind(url: str) -> Engine:
    global _engine, _factory
    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(url, echo=False)
    _factory = sessionmaker(bind=_engine, expire_on_commit=False)
    log.debug("database bound to %s", _engine.url)
    return _engine


def _current_factory() -> sessionmaker[Session]:
    if _factory is None:
        _bind(database_url())
    return _factory


def configure_engine(url: str) -> None:
    """Point every later session at *url*."""
    _bind(url)


def init_db() -> None:
    """Create missing tables.  Existing data is left alone."""
    _current_factory()
    Base.metadata.create_all(_engine)


@contextmanager
def get_session() -> Iterator[Session]:
    """One unit of work: committed on success, rolled back and re-raised on error."""
    session = _current_factory()()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
