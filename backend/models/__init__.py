# Import all models so they register with SQLAlchemy Base.metadata
# This ensures Base.metadata.create_all() creates all tables

from models.habit import Habit
from models.activity_log import ActivityLog

__all__ = [
    "Habit",
    "ActivityLog",
]
