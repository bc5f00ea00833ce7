# calc_api/bootstrap.py
import logging

from sqlalchemy import inspect
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from .errors import StoreError
from .models import Transaction, User

logger = logging.getLogger(__name__)


def init_schema(engine: Engine):
    """
    Creates the 'users' and 'transactions' tables when they are missing.

    Each table is checked on its own, users first since transactions
    reference it. Failures are logged and not raised, so a store that is
    down at startup leaves the process running.

    Args:
        engine: SQLAlchemy engine for database connection
    """
    try:
        for table in (User.__table__, Transaction.__table__):
            if inspect(engine).has_table(table.name):
                continue
            logger.info("Creating table '%s'", table.name)
            # checkfirst covers a concurrent initializer winning the race
            table.create(bind=engine, checkfirst=True)
    except SQLAlchemyError:
        logger.exception("Error setting up database")


def reset_transactions(engine: Engine):
    """
    Drops the 'transactions' table and recreates it empty. Users are kept.

    Raises:
        StoreError: if the table could not be dropped
    """
    try:
        Transaction.__table__.drop(bind=engine, checkfirst=True)
    except SQLAlchemyError as e:
        logger.exception("Dropping the transactions table failed")
        raise StoreError() from e

    logger.warning("Transactions table dropped, recreating schema")
    init_schema(engine)
