from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

import config
from logging_config import get_logger

logger = get_logger("database")

URL_DATABASE = config.DATABASE_URL

if not URL_DATABASE:
    raise ValueError("DATABASE_URL environment variable not set!")

logger.info("Connecting to: %s", URL_DATABASE.split("@")[-1])

engine_options = {"echo": config.DB_ECHO}
if URL_DATABASE.startswith("sqlite"):
    engine_options["connect_args"] = {"check_same_thread": False}
    if URL_DATABASE in ("sqlite://", "sqlite:///:memory:"):
        # in-memory databases live per connection, so share one
        engine_options["poolclass"] = StaticPool

engine = create_engine(URL_DATABASE, **engine_options)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """Dependency function that provides a database session"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
