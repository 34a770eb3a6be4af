import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker

# CRITICAL: Set test database URL BEFORE importing any app modules
# This prevents app.database from creating a file-backed database
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
os.environ["TESTING"] = "true"

from app.main import app
from app.database import Base
from app.models.category import Category
from app.websocket.announcements import ANNOUNCEMENT_CREATED, get_broadcaster
import app.database as db_module
import app.dependencies as dependencies_module


class RecordingBroadcaster:
    """In-memory stand-in for the websocket broadcaster."""

    def __init__(self):
        self.events = []

    async def notify_created(self, announcement):
        self.events.append(
            (ANNOUNCEMENT_CREATED, announcement.model_dump(mode="json", by_alias=True))
        )


@pytest.fixture(scope="session")
def test_engine():
    return create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,  # share same in-memory DB across connections
    )


@pytest.fixture()
def db_session(test_engine):
    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    # Fresh schema per test to avoid cross-test data
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def patch_sessionlocal(monkeypatch, test_engine, db_session):
    monkeypatch.setattr(db_module, "engine", test_engine, raising=False)

    TestingSessionLocal = sessionmaker(
        autocommit=False, autoflush=False, bind=test_engine
    )
    monkeypatch.setattr(db_module, "SessionLocal", TestingSessionLocal, raising=True)
    # get_db looks SessionLocal up in its own module at call time
    monkeypatch.setattr(
        dependencies_module, "SessionLocal", TestingSessionLocal, raising=True
    )

    # Disable rate limiter globally for tests
    if hasattr(app.state, "limiter"):
        setattr(app.state.limiter, "enabled", False)
    yield


@pytest.fixture()
def broadcaster():
    fake = RecordingBroadcaster()
    app.dependency_overrides[get_broadcaster] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_broadcaster, None)


@pytest.fixture()
def client(broadcaster):
    return TestClient(app)


@pytest.fixture()
def categories(db_session):
    """Seed City(1), Health(2), Culture(3) and return them by name."""
    seeded = [Category(id=1, name="City"), Category(id=2, name="Health"), Category(id=3, name="Culture")]
    db_session.add_all(seeded)
    db_session.commit()
    return {c.name: c.id for c in seeded}
