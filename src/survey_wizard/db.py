from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, Session, create_engine

from .config import Settings


_engine: Optional[Engine] = None


def configure_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Replace the process-wide engine, e.g. to point at a test database."""
    global _engine
    connect_args = {"check_same_thread": False} if database_url.startswith("sqlite") else {}
    _engine = create_engine(database_url, echo=echo, connect_args=connect_args)
    return _engine


def get_engine() -> Engine:
    if _engine is None:
        return configure_engine(Settings().database_url)
    return _engine


def init_db() -> None:
    """Create tables if they do not exist."""
    # registers the table metadata
    from . import models  # noqa: F401

    SQLModel.metadata.create_all(get_engine())


@contextmanager
def get_session() -> Iterator[Session]:
    with Session(get_engine()) as session:
        yield session
