import os
import logging

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from config import get_database_uri

logger = logging.getLogger(__name__)

DATABASE_URI = get_database_uri()

# Only use connect_args if we are using SQLite
engine_args = {}
if DATABASE_URI.startswith("sqlite"):
    engine_args["connect_args"] = {"check_same_thread": False}
    # In-memory databases live as long as their connection, so share one
    if DATABASE_URI in ("sqlite://", "sqlite:///:memory:"):
        engine_args["poolclass"] = StaticPool
else:
    # Production settings for PostgreSQL
    engine_args.update({
        "pool_size": 5,
        "max_overflow": 10,
        "pool_timeout": 30,
        "pool_recycle": 1800,
    })

try:
    engine = create_engine(
        DATABASE_URI,
        **engine_args,
        echo=False,
    )
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
except Exception as e:
    logger.error(f"Failed to create engine: {e}")
    raise e

Base = declarative_base()


if DATABASE_URI.startswith("sqlite"):
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
        # SQLite ignores REFERENCES clauses unless this is set per connection
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()


def get_db():
    """FastAPI dependency — yields a database session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """Create the data/ directory for file-backed SQLite, then create all tables."""
    if DATABASE_URI.startswith("sqlite:///./data"):
        os.makedirs("data", exist_ok=True)

    # Import all models so they register with Base.metadata
    from models.habit import Habit
    from models.activity_log import ActivityLog

    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized successfully.")


def drop_db():
    """Drop every table. Used by the test suite between cases."""
    from models.habit import Habit
    from models.activity_log import ActivityLog

    Base.metadata.drop_all(bind=engine)
