"""
Pytest configuration and shared fixtures for testing.

Provides reusable test fixtures:
- test_db: In-memory SQLite database for isolated testing
- test_client: FastAPI TestClient for API integration tests
- store: ShiftStore bound to the test database
- office / cafe: Sample workplaces
- make_shift: Factory for Shift objects on a given day
"""

import datetime
import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Add project root to path for imports
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

# Keep the app's own engine and log files away from the working directory
os.environ.setdefault("SHIFTBOOK_DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="shiftbook-logs-"))

# ruff: noqa: E402
from app.core.models import Shift, Workplace
from app.core.storage import ShiftStore
from app.database.database import Base, get_db
from app.main import app
from app.routes.shared import get_now


@pytest.fixture(scope="function")
def test_db():
    """
    Create an in-memory SQLite database for testing.

    StaticPool keeps a single connection so the TestClient's worker
    thread sees the same database as the test.

    Yields:
        SQLAlchemy Session: Database session for test use
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    Base.metadata.create_all(bind=engine)

    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def store(test_db):
    """ShiftStore on the test database."""
    return ShiftStore(test_db)


@pytest.fixture(scope="function")
def fixed_now():
    """Frozen 'now' used by routes that depend on the current time."""
    return datetime.datetime(2025, 3, 10, 12, 0)


@pytest.fixture(scope="function")
def test_client(test_db, fixed_now):
    """
    Create FastAPI TestClient with test database dependency override.

    Args:
        test_db: Test database session fixture
        fixed_now: Time returned by the get_now dependency

    Yields:
        TestClient: FastAPI test client for API testing
    """

    def override_get_db():
        try:
            yield test_db
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = lambda: fixed_now

    with TestClient(app) as client:
        yield client

    # Clean up
    app.dependency_overrides.clear()


@pytest.fixture
def office():
    """Hourly wage 1000, travel time 30 min, default rates (1.25 / 1.35)."""
    return Workplace(
        id="wp-office",
        name="Office",
        color="#007AFF",
        hourly_wage=1000.0,
        travel_time_minutes=30,
    )


@pytest.fixture
def cafe():
    """Hourly wage 1200, travel time 15 min, transport allowance 500."""
    return Workplace(
        id="wp-cafe",
        name="Cafe",
        color="#34C759",
        hourly_wage=1200.0,
        transportation_allowance=500.0,
        travel_time_minutes=15,
    )


@pytest.fixture
def make_shift():
    """
    Factory for shifts given as a day plus "HH:MM" clock times.

    An end at or before the start rolls over to the next day.
    """

    def _make(
        day: datetime.date,
        start: str,
        end: str,
        workplace_id: str = "wp-office",
        break_minutes: int = 0,
        shift_id: str | None = None,
        **kwargs,
    ) -> Shift:
        start_h, start_m = map(int, start.split(":"))
        end_h, end_m = map(int, end.split(":"))
        start_dt = datetime.datetime.combine(day, datetime.time(start_h, start_m))
        end_dt = datetime.datetime.combine(day, datetime.time(end_h, end_m))
        if end_dt <= start_dt:
            end_dt += datetime.timedelta(days=1)

        fields = dict(
            workplace_id=workplace_id,
            date=day,
            start_time=start_dt,
            end_time=end_dt,
            break_minutes=break_minutes,
            **kwargs,
        )
        if shift_id is not None:
            fields["id"] = shift_id
        return Shift(**fields)

    return _make
