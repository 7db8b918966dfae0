"""
store.py
========
Database gateway for the service.

1) Creates the engine. The default URL is an in-memory SQLite database, so
   everything (cached articles, bookmarks, users) lives only as long as the
   process. Point DB_URL at a file or a server to keep data around.
2) Creates tables from the SQLModel classes in models.py and seeds demo data.
3) Hands out Sessions (units of work).
"""

from sqlmodel import SQLModel, Session, create_engine
from sqlalchemy.pool import StaticPool

from .config import DB_URL
from .logging_setup import get_logger

logger = get_logger("concentribe.store")


def _make_engine(url: str):
    if url.startswith("sqlite"):
        # FastAPI runs sync routes in a threadpool; SQLite connections must be shareable.
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One connection for the whole process, otherwise each checkout sees an empty db
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=False, **kwargs)
    return create_engine(url, echo=False, pool_pre_ping=True)


engine = _make_engine(DB_URL)


def init_db() -> None:
    """
    Create all tables and seed the demo data.

    Safe to call on every startup: create_all only creates missing tables and
    seeding is skipped once the badge catalog is present.
    """
    # Import here so the models are registered before create_all() runs
    from . import models  # noqa: F401
    from .seed import seed_demo_data

    SQLModel.metadata.create_all(engine)
    with get_session() as s:
        seed_demo_data(s)


def get_session() -> Session:
    """
    Open a database Session bound to our engine.

    Usage pattern:
      with get_session() as session:
          session.add(obj)
          session.commit()
    """
    return Session(engine)
