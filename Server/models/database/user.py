"""
CampusShare Server - User Database Model

User model for registration and authentication.
Stores identity, profile fields and the bcrypt password hash.
"""

from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship

from models.database.base import Base


class User(Base):
    """
    Users table - stores credentials and student profile info
    username, student_id and email are each globally unique
    """
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    username = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    name = Column(String, nullable=False)
    student_id = Column(String, unique=True, nullable=False)
    email = Column(String, unique=True, nullable=False)
    course = Column(String, nullable=False)
    year = Column(String, nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    last_login = Column(DateTime, nullable=True)

    # Materials uploaded by this user (weak reference, no cascade)
    materials = relationship("Material", back_populates="uploader", passive_deletes=True)
