"""
modules/maintenance/schemas.py: Pydantic schemas for the maintenance domain.

Completion columns are read-only here: neither TaskCreate nor TaskUpdate
accepts them, and TaskUpdate rejects unknown keys outright.
"""

from datetime import datetime, timezone
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, field_validator

from core.base import TaskStatus
from modules.maintenance import due_dates


class TaskCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    interval_days: Optional[int] = None


class TaskUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    description: Optional[str] = None
    interval_days: Optional[int] = None


class TaskResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    device_id: int
    name: str
    description: Optional[str] = None
    interval_days: int
    last_completed: Optional[datetime] = None
    is_completed: bool = False
    completed_by: Optional[int] = None
    completed_by_username: Optional[str] = None
    created_at: Optional[datetime] = None

    # Derived on read, never stored
    next_due: Optional[datetime] = None
    status: Optional[TaskStatus] = None
    is_overdue: bool = False
    is_due_soon: bool = False

    @field_validator("last_completed", "created_at", "next_due")
    @classmethod
    def assume_utc(cls, v):
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v

    @classmethod
    def from_task(cls, task, now: datetime,
                  horizon_days: int = due_dates.DEFAULT_HORIZON_DAYS) -> "TaskResponse":
        resp = cls.model_validate(task)
        resp.next_due = due_dates.next_due(task.last_completed, task.interval_days, now)
        resp.status = due_dates.classify(task, now, horizon_days)
        resp.is_overdue = resp.status == TaskStatus.OVERDUE
        resp.is_due_soon = resp.status == TaskStatus.DUE_SOON
        return resp


class TaskSummary(BaseModel):
    """Dashboard view: the user's tasks grouped by derived status."""
    overdue: List[TaskResponse] = []
    due_soon: List[TaskResponse] = []
    scheduled: List[TaskResponse] = []
    total: int = 0
