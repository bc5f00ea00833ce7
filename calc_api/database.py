# calc_api/database.py
from typing import Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.engine import make_url
from sqlalchemy.event import listen
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from .config import settings


class Base(DeclarativeBase):
    pass


def _fk_pragma_on_connect(dbapi_con, con_record):
    """Ensures that the foreign key pragma is enabled for SQLite connections."""
    dbapi_con.execute('PRAGMA foreign_keys=ON')


def build_engine(database_url: Optional[str] = None) -> Engine:
    """
    Creates the engine every request session is drawn from.

    Args:
        database_url: SQLAlchemy URL; defaults to the configured store.
    """
    url = make_url(database_url or settings.get_database_url())

    if url.get_backend_name() == "sqlite":
        # FastAPI runs sync endpoints in a thread pool
        engine = create_engine(url, connect_args={"check_same_thread": False})
        listen(engine, 'connect', _fk_pragma_on_connect)
        return engine

    return create_engine(url, pool_pre_ping=True)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
