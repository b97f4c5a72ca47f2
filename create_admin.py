"""Seed an ADMIN user, e.g. `python create_admin.py "Jane Doe" jane@example.com`"""
import sys
from database import SessionLocal
from init_db import init_db
from logging_config import get_logger
from models import RoleEnum, User

logger = get_logger("create_admin")

DEFAULT_NAME = "Admin"
DEFAULT_EMAIL = "admin@example.com"


def create_admin(name: str = DEFAULT_NAME, email: str = DEFAULT_EMAIL):
    """Create an admin user unless one already owns the email"""
    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            logger.info("User with email '%s' already exists (%s)", email, existing.uuid)
            return existing

        admin = User(name=name, email=email, role=RoleEnum.ADMIN)
        db.add(admin)
        db.commit()
        db.refresh(admin)
        logger.info("Admin created successfully: %s / %s / %s", admin.name, admin.email, admin.uuid)
        return admin
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
    create_admin(*sys.argv[1:3])
