"""
habit_service.py — Habits & activity logs
Lists habits with their aggregated log dates, creates/updates/deletes habits
and replaces a habit's whole activity log in one transaction.
"""

import re
import logging
from datetime import date, datetime
from itertools import groupby

from sqlalchemy.orm import Session
from sqlalchemy import select, insert, update, delete

from exceptions import ValidationError, NotFoundError
from models.habit import Habit
from models.activity_log import ActivityLog
from services.habit_store import HabitStore

logger = logging.getLogger(__name__)

habits = Habit.__table__
activity_logs = ActivityLog.__table__

UPDATABLE_FIELDS = ("name", "color")
# Upper bound of a 32-bit INTEGER primary key (PostgreSQL INTEGER)
MAX_HABIT_ID = 2**31 - 1
_ID_RE = re.compile(r"\d+", re.ASCII)
_DATE_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})(?:[T ].*)?$", re.ASCII)


def parse_habit_id(raw) -> int:
    """Accept 7 or "7"; reject anything that is not a positive integer the id column can hold."""
    if isinstance(raw, bool):
        raise ValidationError("Invalid habit id format")
    if isinstance(raw, int):
        habit_id = raw
    elif isinstance(raw, str) and _ID_RE.fullmatch(raw.strip()):
        habit_id = int(raw.strip())
    else:
        raise ValidationError("Invalid habit id format")
    if habit_id <= 0 or habit_id > MAX_HABIT_ID:
        raise ValidationError("Invalid habit id format")
    return habit_id


def parse_log_date(value) -> date:
    # datetime is a date subclass, so check it first
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        m = _DATE_RE.match(value.strip())
        if m:
            try:
                return date.fromisoformat(m.group(1))
            except ValueError:
                pass
    raise ValidationError(f"Invalid activity date: {value!r}")


def _habits_with_logs_query(habit_id: int | None = None):
    query = (
        select(habits.c.id, habits.c.name, habits.c.color, activity_logs.c.log_date)
        .select_from(habits.outerjoin(activity_logs, activity_logs.c.habit_id == habits.c.id))
        .order_by(habits.c.id, activity_logs.c.log_date)
    )
    if habit_id is not None:
        query = query.where(habits.c.id == habit_id)
    return query


def _group_rows(rows) -> list[dict]:
    """Fold joined (habit, log_date) rows into one dict per habit.

    A habit without logs comes back from the outer join as a single row with
    a NULL log_date; that placeholder is dropped so its log is [] not [None].
    """
    result = []
    for habit_id, group in groupby(rows, key=lambda r: r.id):
        group = list(group)
        first = group[0]
        log_dates = sorted(r.log_date for r in group if r.log_date is not None)
        result.append({
            "id": habit_id,
            "name": first.name,
            "color": first.color,
            "activityLog": [d.isoformat() for d in log_dates],
        })
    return result


class HabitService:
    @staticmethod
    def get_all(db: Session) -> list[dict]:
        """All habits by id, each with its ascending activity log."""
        store = HabitStore(db)
        return _group_rows(store.fetch_all(_habits_with_logs_query()))

    @staticmethod
    def get_by_id(db: Session, habit_id: int) -> dict | None:
        store = HabitStore(db)
        grouped = _group_rows(store.fetch_all(_habits_with_logs_query(habit_id)))
        return grouped[0] if grouped else None

    @staticmethod
    def create(db: Session, data: dict) -> dict:
        name = data.get("name")
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Habit name is required")
        color = data.get("color")

        store = HabitStore(db)
        with store.transaction():
            result = store.execute(insert(habits).values(name=name, color=color))
            habit_id = result.inserted_primary_key[0]

        logger.info(f"Created habit {habit_id} ({name})")
        # A new habit has no logs yet, no need to read them back
        return {"id": habit_id, "name": name, "color": color, "activityLog": []}

    @staticmethod
    def update(db: Session, raw_id, data: dict) -> dict:
        """Update only the supplied name/color, then return the full habit."""
        habit_id = parse_habit_id(raw_id)
        fields = {k: data[k] for k in UPDATABLE_FIELDS if k in data}
        if not fields:
            raise ValidationError("No fields provided for update")
        if "name" in fields and (not isinstance(fields["name"], str) or not fields["name"].strip()):
            raise ValidationError("Habit name cannot be empty")

        store = HabitStore(db)
        with store.transaction():
            result = store.execute(
                update(habits).where(habits.c.id == habit_id).values(**fields)
            )
            if result.rowcount == 0:
                raise NotFoundError("Habit not found")

        logger.info(f"Updated habit {habit_id}: {', '.join(fields)}")
        habit = HabitService.get_by_id(db, habit_id)
        if habit is None:
            # Deleted between commit and re-read
            raise NotFoundError("Habit not found")
        return habit

    @staticmethod
    def replace_activity_log(db: Session, raw_id, activity_data) -> dict:
        """Swap a habit's whole log set for `activity_data`, all or nothing."""
        habit_id = parse_habit_id(raw_id)
        if not isinstance(activity_data, (list, tuple)):
            raise ValidationError("activityData must be a list of dates")
        log_dates = sorted({parse_log_date(v) for v in activity_data})

        store = HabitStore(db)
        with store.transaction():
            exists = store.fetch_one(select(habits.c.id).where(habits.c.id == habit_id))
            if exists is None:
                raise NotFoundError("Habit not found")

            store.execute(delete(activity_logs).where(activity_logs.c.habit_id == habit_id))
            if log_dates:
                store.execute(
                    insert(activity_logs),
                    [{"habit_id": habit_id, "log_date": d} for d in log_dates],
                )

        logger.info(f"Replaced activity log for habit {habit_id} ({len(log_dates)} dates)")
        habit = HabitService.get_by_id(db, habit_id)
        if habit is None:
            raise NotFoundError("Habit not found")
        return habit

    @staticmethod
    def delete(db: Session, raw_id) -> dict:
        habit_id = parse_habit_id(raw_id)

        store = HabitStore(db)
        with store.transaction():
            store.execute(delete(activity_logs).where(activity_logs.c.habit_id == habit_id))
            result = store.execute(delete(habits).where(habits.c.id == habit_id))
            if result.rowcount == 0:
                raise NotFoundError("Habit not found")

        logger.info(f"Deleted habit {habit_id}")
        return {"message": "Habit deleted successfully"}
