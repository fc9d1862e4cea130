"""
modules/devices/models.py: ORM models for the devices domain.

Owns tables: devices
"""

from sqlalchemy import Column, Integer, String, Date, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class Device(Base):
    """
    A household appliance.

    owner_user_id is set once at creation and never reassigned; it is the
    root of the ownership chain for the device's consumables and tasks.
    """
    __tablename__ = "devices"

    id = Column(Integer, primary_key=True)
    owner_user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    model = Column(String(200), nullable=True)
    location = Column(String(200), nullable=True)

    # Links to uploaded or external documents
    image_url = Column(Text, nullable=True)
    manual_url = Column(Text, nullable=True)
    consumables_url = Column(Text, nullable=True)
    receipt_url = Column(Text, nullable=True)

    purchase_date = Column(Date, nullable=True)
    warranty_expiration_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Device {self.name}>"
