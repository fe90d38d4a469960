from datetime import date

import pytest
from sqlalchemy import select, insert, text

from exceptions import StoreError
from models.habit import Habit
from models.activity_log import ActivityLog
from services.habit_store import HabitStore


def test_execute_returns_rows(db, make_habit):
    make_habit(name="Reading")
    store = HabitStore(db)
    rows = store.fetch_all(select(Habit.__table__.c.name))
    assert [r.name for r in rows] == ["Reading"]


def test_bad_sql_raises_store_error(db):
    store = HabitStore(db)
    with pytest.raises(StoreError):
        store.execute(text("SELECT * FROM no_such_table"))


def test_activity_log_requires_existing_habit(db):
    store = HabitStore(db)
    with pytest.raises(StoreError):
        with store.transaction():
            store.execute(insert(ActivityLog.__table__).values(habit_id=42, log_date=date(2024, 1, 1)))


def test_transaction_commits(db):
    store = HabitStore(db)
    with store.transaction():
        store.execute(insert(Habit.__table__).values(name="Running", color=None))
    assert store.fetch_one(select(Habit.__table__.c.name)).name == "Running"


def test_transaction_rolls_back_everything(db):
    store = HabitStore(db)
    with pytest.raises(RuntimeError):
        with store.transaction():
            store.execute(insert(Habit.__table__).values(name="Running", color=None))
            raise RuntimeError("boom")
    assert store.fetch_all(select(Habit.__table__.c.id)) == []
