"""
modules/consumables/models.py: ORM models for the consumables domain.

Owns tables: consumables
"""

from sqlalchemy import Column, Integer, String, Float, DateTime, ForeignKey, Text
from sqlalchemy.sql import func

from core.base import Base


class Consumable(Base):
    """A supply item (filter, bulb, cartridge) scoped to one device."""
    __tablename__ = "consumables"

    id = Column(Integer, primary_key=True)
    device_id = Column(Integer, ForeignKey("devices.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)
    storage_location = Column(String(200), nullable=True)
    url = Column(Text, nullable=True)
    cost = Column(Float, nullable=True)  # non-negative

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<Consumable {self.name}>"
