# tests/test_bootstrap.py
import pytest
from sqlalchemy import inspect, text

from calc_api import repository
from calc_api.bootstrap import init_schema, reset_transactions
from calc_api.database import build_engine
from calc_api.errors import StoreError


def test_init_schema_creates_both_tables(test_engine):
    init_schema(test_engine)

    inspector = inspect(test_engine)
    assert inspector.has_table("users")
    assert inspector.has_table("transactions")

def test_init_schema_is_idempotent(db_session, test_engine):
    user = repository.create_user(db_session, "ios")
    repository.add_transaction(db_session, user.id, "7*6")

    init_schema(test_engine)
    init_schema(test_engine)

    assert [t.calculation for t in repository.list_transactions(db_session, user.id)] == ["7*6"]

def test_init_schema_creates_only_missing_table(db_session, test_engine):
    repository.create_user(db_session, "android")
    db_session.close()

    with test_engine.begin() as connection:
        connection.execute(text("DROP TABLE transactions"))

    init_schema(test_engine)

    assert inspect(test_engine).has_table("transactions")
    with test_engine.connect() as connection:
        assert connection.execute(text("SELECT COUNT(*) FROM users")).scalar() == 1

def test_init_schema_swallows_store_errors(tmp_path):
    # The parent directory does not exist, so SQLite cannot open the file
    engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'test.db'}")

    init_schema(engine)

def test_reset_transactions(db_session, test_engine):
    user = repository.create_user(db_session, "ios")
    user_id, user_uuid = user.id, str(user.uuid)
    repository.add_transaction(db_session, user_id, "1-1")
    # The drop needs every other connection idle
    db_session.close()

    reset_transactions(test_engine)

    assert repository.list_transactions(db_session, user_id) == []
    assert repository.get_user_by_uuid(db_session, user_uuid) is not None

def test_reset_transactions_raises_when_store_unreachable(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'missing' / 'test.db'}")

    with pytest.raises(StoreError):
        reset_transactions(engine)
