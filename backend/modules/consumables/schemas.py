"""
modules/consumables/schemas.py: Pydantic schemas for the consumables domain.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class ConsumableFields(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    storage_location: Optional[str] = None
    url: Optional[str] = None
    cost: Optional[float] = Field(default=None, allow_inf_nan=False)


class ConsumableCreate(ConsumableFields):
    pass


class ConsumableUpdate(ConsumableFields):
    model_config = ConfigDict(extra="forbid")


class ConsumableResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: int
    name: str
    description: Optional[str] = None
    storage_location: Optional[str] = None
    url: Optional[str] = None
    cost: Optional[float] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ConsumableWithDevice(ConsumableResponse):
    """Row of the cross-device consumables list."""
    device_name: str
