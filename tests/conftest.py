# tests/conftest.py
import os

import pytest
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from calc_api.bootstrap import init_schema
from calc_api.config import Settings
from calc_api.database import Base, build_engine
from calc_api.main import create_app

# Point TEST_DATABASE_URL at a dedicated database (e.g. PostgreSQL) to run
# against it; otherwise every test gets its own SQLite file.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL")

# Bare postgres URLs get the same driver the service uses
if TEST_DATABASE_URL:
    TEST_DATABASE_URL = Settings(DATABASE_URL=TEST_DATABASE_URL).get_database_url()


@pytest.fixture(scope="function")
def test_engine(tmp_path):
    engine = build_engine(TEST_DATABASE_URL or f"sqlite:///{tmp_path / 'test.db'}")
    yield engine
    # Drop tables to clean up
    Base.metadata.drop_all(bind=engine)
    engine.dispose()

@pytest.fixture(scope="function")
def db_session(test_engine):
    """
    Creates a database session on freshly initialised tables.
    """
    init_schema(test_engine)

    db = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)()
    try:
        yield db
    finally:
        db.close()

@pytest.fixture(scope="function")
def client(test_engine):
    """
    Serves the API from the test engine. Entering the client runs the
    startup hook, which creates the tables.
    """
    with TestClient(create_app(test_engine)) as c:
        yield c

@pytest.fixture(scope="function")
def user_uuid(client):
    response = client.post("/app/user", json={"os": "ios"})
    assert response.status_code == 200
    return response.json()["user"]["uuid"]
