"""Database and process configuration for the TaskBri API."""
import logging
import os

from dotenv import load_dotenv
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlmodel import create_engine

logger = logging.getLogger(__name__)

# Load environment variables but prioritize local development
load_dotenv()

# Use the DATABASE_URL from environment variable, with fallback to SQLite for local dev
DATABASE_URL = os.environ.get("DATABASE_URL", "sqlite:///./taskbri.db")
JWT_SECRET = os.environ.get("JWT_SECRET", "dev_secret_change_me")
JWT_ALGORITHM = os.environ.get("JWT_ALGORITHM", "HS256")
ENVIRONMENT = os.environ.get("ENVIRONMENT", "development")
FRONTEND_URL = os.environ.get("FRONTEND_URL", "http://localhost:3000")
DEBUG = os.environ.get("DEBUG", "false").lower() in ("1", "true", "yes")


def create_db_engine(database_url: str = DATABASE_URL, echo: bool = False) -> Engine:
    """Create the long-lived engine shared by every request."""
    if database_url.startswith("sqlite"):
        logger.info(f"[DB CONFIG] Using SQLite database: {database_url}")
        engine = create_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            # Enable foreign keys and WAL mode for better concurrency
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()

        return engine

    logger.info("[DB CONFIG] Using PostgreSQL database")
    return create_engine(database_url, echo=echo, pool_pre_ping=True)
