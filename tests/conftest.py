# tests/conftest.py

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy_utils import create_database, database_exists, drop_database

from gym_classes.main import app
from gym_classes.api import deps
from gym_classes.db.base_class import Base
from gym_classes.db.session import make_engine
from gym_classes.core.config import settings
from gym_classes.core.limiter import limiter
import gym_classes.models  # noqa: F401  registers every table on Base.metadata


# --- Test Database Setup ---
# File-backed so threads in the concurrency tests share one database
engine = make_engine(settings.TEST_DATABASE_URL)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    if database_exists(engine.url):
        drop_database(engine.url)
    create_database(engine.url)
    Base.metadata.create_all(bind=engine)
    yield
    engine.dispose()
    drop_database(engine.url)


def _clear_tables():
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture(scope="function")
def db_session():
    """
    A session on the test database. Tables are emptied after each test;
    services commit, so per-test transaction rollback is not an option.
    """
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        _clear_tables()


@pytest.fixture(scope="function")
def session_factory():
    """For tests that need one session per thread."""
    return TestingSessionLocal


@pytest.fixture(scope="function")
def client(db_session):
    """
    TestClient sharing the test's database session, so requests see the
    rows the test arranged and the test sees what requests wrote.
    """

    def override_get_db():
        yield db_session

    app.dependency_overrides[deps.get_db] = override_get_db
    limiter.reset()

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
