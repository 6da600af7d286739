"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Generator
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from nova_verte.api.dependencies import get_clock
from nova_verte.api.main import create_app
from nova_verte.domain.models import Title
from nova_verte.infrastructure.database.models import Base
from nova_verte.infrastructure.database.session import get_db
from nova_verte.infrastructure.storage.bridge import PersistenceBridge
from nova_verte.infrastructure.storage.key_value import InMemoryKeyValueStore


# Every test runs on this calendar day
TODAY = date(2025, 1, 10)

# Test database
TEST_DATABASE_URL = "sqlite:///./test.db"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False})
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Create test database and session"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db: Session) -> TestClient:
    """Create FastAPI test client with test database and a pinned clock"""
    app = create_app()

    def override_get_db():
        try:
            yield db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: TODAY)
    return TestClient(app)


@pytest.fixture
def memory_store() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture
def bridge(memory_store: InMemoryKeyValueStore) -> PersistenceBridge:
    """Persistence bridge over an in-memory store"""
    return PersistenceBridge(memory_store, key="calculatorData")


@pytest.fixture
def make_title():
    """Build a title due `days` after TODAY"""
    counter = {"n": 0}

    def _make(face_value: str = "R$ 1.000,00", days: int = 0) -> Title:
        counter["n"] += 1
        due = TODAY + timedelta(days=days)
        return Title(id=f"t{counter['n']}", face_value=face_value, due_date=due.isoformat())

    return _make
