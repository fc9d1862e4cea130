"""
modules/users/models.py: ORM models for the users domain.

Owns tables: users
"""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func

from core.base import Base


class User(Base):
    """A household member. Owns devices; never deleted by the application."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), unique=True, nullable=False)  # case-sensitive
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<User {self.username}>"
