"""
Shared test fixtures for the Timeclock test suite.

In-memory SQLite for the durable medium, a fixed clock, and the default
six-person roster.
"""

import os
import sys
from collections.abc import AsyncGenerator, Generator
from datetime import datetime

import pytest

# Ensure project root is importable
ROOT_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

# Override environment BEFORE importing application modules
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["PERSISTENCE_SCOPE"] = "session"
os.environ["CORS_ORIGINS"] = '["*"]'
os.environ.pop("ROSTER_FILE", None)

from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from timeclock.api.v1.deps import get_clock, get_db, get_roster
from timeclock.core.clock import FixedClock
from timeclock.db.base import Base
from timeclock.main import app
from timeclock.models.storage_entry import StorageEntry  # noqa: F401
from timeclock.services.kiosk import registry
from timeclock.services.roster import RosterDirectory

# Wednesday 2025-05-28, 09:00:12 local time
FIXED_NOW = datetime(2025, 5, 28, 9, 0, 12)
TODAY = "2025-05-28"

test_engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(
    test_engine,
    class_=Session,
    expire_on_commit=False,
)

test_clock = FixedClock(FIXED_NOW)
test_roster = {"directory": RosterDirectory()}


@pytest.fixture(autouse=True)
def setup_db() -> Generator[None, None, None]:
    """Create all tables before usage and drop after."""
    Base.metadata.create_all(test_engine)
    yield
    Base.metadata.drop_all(test_engine)


@pytest.fixture(autouse=True)
def reset_kiosk_state() -> Generator[None, None, None]:
    """Fresh sessions, default roster and the fixed clock for every test."""
    registry.clear()
    test_clock.moment = FIXED_NOW
    test_roster["directory"] = RosterDirectory()
    yield
    registry.clear()


def _override_get_db() -> Generator[Session, None, None]:
    with TestingSessionLocal() as session:
        yield session


def _override_get_clock() -> FixedClock:
    return test_clock


def _override_get_roster() -> RosterDirectory:
    return test_roster["directory"]


app.dependency_overrides[get_db] = _override_get_db
app.dependency_overrides[get_clock] = _override_get_clock
app.dependency_overrides[get_roster] = _override_get_roster


@pytest.fixture
def clock() -> FixedClock:
    return test_clock


@pytest.fixture
def use_roster():
    """Swap the roster served to the API: ``use_roster({...})``."""

    def _use(entries):
        test_roster["directory"] = RosterDirectory(entries)
        return test_roster["directory"]

    return _use


@pytest.fixture
async def async_client() -> AsyncGenerator[AsyncClient, None]:
    """Return a httpx AsyncClient wired to the app (keeps its session cookie)."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
async def other_client() -> AsyncGenerator[AsyncClient, None]:
    """A second kiosk client with its own cookie jar."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Return a raw database session for direct storage access in tests."""
    with TestingSessionLocal() as session:
        yield session


@pytest.fixture
def durable_scope(monkeypatch):
    """Run the API against the shared database medium."""
    from timeclock.core.config import settings

    monkeypatch.setattr(settings, "PERSISTENCE_SCOPE", "durable")
