"""
modules/users/schemas.py: Pydantic schemas for the users domain.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str


class UsernameUpdate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    created_at: Optional[datetime] = None
