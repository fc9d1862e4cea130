"""
modules/maintenance/models.py: ORM models for the maintenance domain.

Owns tables: maintenance_tasks
"""

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class MaintenanceTask(Base):
    """
    A recurring maintenance obligation on one device.

    last_completed / is_completed / completed_by / completed_by_username are
    written only by TaskLifecycle.complete(). completed_by_username is a copy
    of the completer's name at completion time, not a join.
    """
    __tablename__ = "maintenance_tasks"

    id = Column(Integer, primary_key=True)
    device_id = Column(Integer, ForeignKey("devices.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    interval_days = Column(Integer, nullable=False)  # >= 1

    last_completed = Column(DateTime(timezone=True), nullable=True)
    is_completed = Column(Boolean, nullable=False, default=False)
    completed_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    completed_by_username = Column(String(100), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<MaintenanceTask {self.name} every {self.interval_days}d>"
