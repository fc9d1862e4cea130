"""
Due-date engine for maintenance tasks.

Pure functions over (last_completed, interval_days, now). Nothing here touches
the database and nothing computed here is persisted; the status is derived on
every read so it always agrees with the current clock.

Rules:
  * never completed  -> next due is "now", the task is overdue, never due-soon
  * otherwise        -> next due is last_completed + interval_days calendar days
  * overdue          -> next_due < now
  * due soon         -> now <= next_due < now + horizon_days
A task is never both overdue and due-soon.
"""

from datetime import datetime, timezone
from typing import Optional

from dateutil.relativedelta import relativedelta

from core.base import TaskStatus

DEFAULT_HORIZON_DAYS = 7


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; treat them as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_due(last_completed: Optional[datetime], interval_days: int,
             now: Optional[datetime] = None) -> datetime:
    """When the task is next due. A never-completed task is due immediately."""
    if last_completed is None:
        return _as_utc(now or utcnow())
    return _as_utc(last_completed) + relativedelta(days=interval_days)


def is_overdue(task, now: Optional[datetime] = None) -> bool:
    if task.last_completed is None:
        return True
    now = _as_utc(now or utcnow())
    return next_due(task.last_completed, task.interval_days, now) < now


def is_due_soon(task, now: Optional[datetime] = None,
                horizon_days: int = DEFAULT_HORIZON_DAYS) -> bool:
    if task.last_completed is None:
        return False
    now = _as_utc(now or utcnow())
    due = next_due(task.last_completed, task.interval_days, now)
    return now <= due < now + relativedelta(days=horizon_days)


def classify(task, now: Optional[datetime] = None,
             horizon_days: int = DEFAULT_HORIZON_DAYS) -> TaskStatus:
    now = _as_utc(now or utcnow())
    if is_overdue(task, now):
        return TaskStatus.OVERDUE
    if is_due_soon(task, now, horizon_days):
        return TaskStatus.DUE_SOON
    return TaskStatus.SCHEDULED
