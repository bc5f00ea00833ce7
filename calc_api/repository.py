# calc_api/repository.py
# Lookups return None when nothing matches. Store failures are logged, the
# session rolled back, and re-raised as StoreError.
import functools
import logging
import uuid
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from .errors import StoreError
from .models import Transaction, User

logger = logging.getLogger(__name__)


def store_operation(func):
    """Wraps a data-access function taking the session as first argument."""
    @functools.wraps(func)
    def wrapper(db: Session, *args, **kwargs):
        try:
            return func(db, *args, **kwargs)
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception("Store operation '%s' failed", func.__name__)
            raise StoreError() from e
    return wrapper


def parse_uuid(value: str) -> Optional[uuid.UUID]:
    """Returns None for strings that can never match a stored uuid."""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


@store_operation
def create_user(db: Session, os: str) -> User:
    # uuid4 collisions are not checked; the unique constraint is the backstop
    user = User(uuid=uuid.uuid4(), os=os)
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (%s)", user.uuid, user.os)
    return user


@store_operation
def get_user_by_uuid(db: Session, user_uuid: str) -> Optional[User]:
    parsed = parse_uuid(user_uuid)
    if parsed is None:
        return None
    return db.execute(select(User).where(User.uuid == parsed)).scalar_one_or_none()


@store_operation
def resolve_user_id(db: Session, user_uuid: str) -> Optional[int]:
    parsed = parse_uuid(user_uuid)
    if parsed is None:
        return None
    return db.execute(select(User.id).where(User.uuid == parsed)).scalar_one_or_none()


@store_operation
def add_transaction(db: Session, user_id: int, calculation: str) -> Transaction:
    transaction = Transaction(user_id=user_id, calculation=calculation)
    db.add(transaction)
    db.commit()
    return transaction


@store_operation
def list_transactions(db: Session, user_id: int) -> List[Transaction]:
    query = (
        select(Transaction)
        .where(Transaction.user_id == user_id)
        .order_by(Transaction.id)
    )
    return list(db.execute(query).scalars())


@store_operation
def delete_transactions(db: Session, user_id: int) -> int:
    """Deletes every transaction of the user and returns how many went."""
    result = db.execute(delete(Transaction).where(Transaction.user_id == user_id))
    db.commit()
    return result.rowcount
