"""Initialize database tables."""
import logging

from sqlalchemy.engine import Engine
from sqlmodel import SQLModel

from taskbri.models.project import Project  # noqa: F401
from taskbri.models.task_list import TaskList  # noqa: F401
from taskbri.models.user import User  # noqa: F401

logger = logging.getLogger(__name__)


def init_db(engine: Engine) -> None:
    """Create all tables in the database."""
    logger.info("[DB INIT] Creating all tables...")
    SQLModel.metadata.create_all(engine)
    logger.info("[DB INIT] Tables created successfully.")


if __name__ == "__main__":
    from taskbri.db.config import create_db_engine

    init_db(create_db_engine())
    print("Database tables created successfully.")
