"""
habit_store.py — Transactional SQL surface over the habits / activity_logs tables
Runs parameterized SQLAlchemy statements and scopes them in transactions.
Every driver failure leaves this module as a StoreError.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError

from exceptions import StoreError

logger = logging.getLogger(__name__)


class HabitStore:
    def __init__(self, db: Session):
        self.db = db

    def execute(self, statement, params=None):
        """Run one statement. A list of dicts as params runs it once per dict."""
        try:
            if params is None:
                return self.db.execute(statement)
            return self.db.execute(statement, params)
        except SQLAlchemyError as e:
            logger.error(f"Database error executing statement: {e}")
            raise StoreError(str(e)) from e

    def fetch_all(self, statement, params=None) -> list:
        return list(self.execute(statement, params).all())

    def fetch_one(self, statement, params=None):
        return self.execute(statement, params).first()

    def begin(self):
        # Sessions autobegin on first use; only open one explicitly if idle
        if not self.db.in_transaction():
            self.db.begin()

    def commit(self):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            logger.error(f"Database error on commit: {e}")
            self.db.rollback()
            raise StoreError(str(e)) from e

    def rollback(self):
        self.db.rollback()

    @contextmanager
    def transaction(self):
        """Commit everything inside the block, or undo all of it on any exception."""
        self.begin()
        try:
            yield self
        except Exception:
            self.rollback()
            raise
        self.commit()
