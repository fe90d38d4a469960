import os

# Must be set before config/database are imported so the in-memory engine is used
os.environ["APP_ENV"] = "test"
os.environ.setdefault("TEST_DATABASE_URL", "sqlite://")

import pytest
from fastapi.testclient import TestClient

from database import SessionLocal, init_db, drop_db
from main import app
from models.habit import Habit
from models.activity_log import ActivityLog


@pytest.fixture(autouse=True)
def fresh_schema():
    drop_db()
    init_db()
    yield


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_habit():
    """Insert a habit (and optionally its log dates) in its own session, return its id."""
    def _make(name="Drawing", color="#d6b4fc", log_dates=()):
        session = SessionLocal()
        try:
            habit = Habit(name=name, color=color)
            session.add(habit)
            session.flush()
            for d in log_dates:
                session.add(ActivityLog(habit_id=habit.id, log_date=d))
            session.commit()
            return habit.id
        finally:
            session.close()
    return _make


@pytest.fixture
def log_dates_for():
    def _dates(habit_id):
        session = SessionLocal()
        try:
            rows = session.query(ActivityLog).filter_by(habit_id=habit_id).order_by(ActivityLog.log_date).all()
            return [r.log_date.isoformat() for r in rows]
        finally:
            session.close()
    return _dates
