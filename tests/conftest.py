"""
Shared test fixtures: throwaway SQLite database, defaults store, test client.
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Point the app at the test database before importing app modules
os.environ["DATABASE_URL"] = "sqlite:///./test.db"

from buildcalc.database import Base
from buildcalc.defaults import DefaultsStore, get_defaults_store
from buildcalc.main import app
from buildcalc.routers import calculator as calculator_router
from buildcalc.basic_calculator import BasicCalculator


TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def setup_database():
    """Create all tables before each test, drop after."""
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory():
    return TestingSessionLocal


@pytest.fixture
def store(session_factory):
    """Defaults store bound to the test database, also used by the app."""
    defaults_store = DefaultsStore(session_factory)
    app.dependency_overrides[get_defaults_store] = lambda: defaults_store
    yield defaults_store
    app.dependency_overrides.pop(get_defaults_store, None)


@pytest.fixture
def client(store, monkeypatch):
    """FastAPI test client with a fresh basic calculator."""
    monkeypatch.setattr(calculator_router, "calculator", BasicCalculator())
    return TestClient(app)


@pytest.fixture
def db():
    """Direct database session for test setup/assertions."""
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
