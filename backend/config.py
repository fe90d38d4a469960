import os
from dotenv import load_dotenv

load_dotenv()

# --- Environment ---
APP_ENV = os.getenv("APP_ENV", "development")  # development/test/production

# --- Database ---
# Default to local SQLite, but prefer environment variable (Postgres in production)
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./data/cadence.db")
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite://")

# Fix for common SQLAlchemy issues with postgres:// vs postgresql://
if DATABASE_URL.startswith("postgres://"):
    DATABASE_URL = DATABASE_URL.replace("postgres://", "postgresql://", 1)
if TEST_DATABASE_URL.startswith("postgres://"):
    TEST_DATABASE_URL = TEST_DATABASE_URL.replace("postgres://", "postgresql://", 1)


def get_database_uri() -> str:
    """Test runs get their own database so they never touch real data."""
    return TEST_DATABASE_URL if APP_ENV == "test" else DATABASE_URL


# --- HTTP ---
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))

# --- Logging ---
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
