"""User model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, String

from app.database import Base
from app.utils.dates import utcnow


def new_id() -> str:
    """Opaque random identifier shared by every table."""
    return uuid.uuid4().hex


class User(Base):
    """Application user."""

    __tablename__ = "user"

    id = Column(String(32), primary_key=True, default=new_id)
    email = Column(String(256), unique=True, nullable=False, index=True)
    password_hash = Column(String(256), nullable=False)
    verified = Column(Boolean, nullable=False, default=False)
    user_agent = Column(String(512), nullable=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)
