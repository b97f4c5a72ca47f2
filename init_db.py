"""Initialize the database by creating all tables defined in the models"""
from database import Base, engine
from logging_config import get_logger
import models  # noqa: F401  registers the tables on Base.metadata

logger = get_logger("init_db")


def init_db():
    """Create every table that does not exist yet."""
    logger.info("Creating tables on the database...")
    Base.metadata.create_all(bind=engine)
    logger.info("Tables created successfully!")


if __name__ == "__main__":
    init_db()
