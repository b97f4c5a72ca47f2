"""SQLAlchemy models defining User, Post, and RoleEnum for the application."""
import enum
import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Enum
from sqlalchemy.orm import relationship
from database import Base


def generate_uuid() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class RoleEnum(str, enum.Enum):
    """Enumeration for user roles in the system."""
    USER = "USER"
    ADMIN = "ADMIN"
    SUPERUSER = "SUPERUSER"


class User(Base):
    """User model representing application users."""
    __tablename__ = "users"

    uuid = Column(String(36), primary_key=True, default=generate_uuid)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(Enum(RoleEnum), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    posts = relationship("Post", back_populates="user", cascade="all, delete-orphan")


class Post(Base):
    """Post model representing blog posts written by users."""
    __tablename__ = "posts"

    uuid = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    user_uuid = Column(String(36), ForeignKey("users.uuid"), nullable=False)

    user = relationship("User", back_populates="posts")
