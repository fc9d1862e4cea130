"""
modules/devices/schemas.py: Pydantic schemas for the devices domain.
"""

from datetime import date, datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, field_validator


class DeviceFields(BaseModel):
    name: Optional[str] = None
    model: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    manual_url: Optional[str] = None
    consumables_url: Optional[str] = None
    receipt_url: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_expiration_date: Optional[date] = None

    @field_validator("purchase_date", "warranty_expiration_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v):
        # HTML date inputs submit "" when cleared
        if isinstance(v, str) and not v.strip():
            return None
        if isinstance(v, str) and "T" in v:
            return v.split("T", 1)[0]
        return v


class DeviceCreate(DeviceFields):
    pass


class DeviceUpdate(DeviceFields):
    model_config = ConfigDict(extra="forbid")


class DeviceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_user_id: int
    name: str
    model: Optional[str] = None
    location: Optional[str] = None
    image_url: Optional[str] = None
    manual_url: Optional[str] = None
    consumables_url: Optional[str] = None
    receipt_url: Optional[str] = None
    purchase_date: Optional[date] = None
    warranty_expiration_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
