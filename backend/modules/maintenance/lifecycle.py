"""
Maintenance task lifecycle.

A task is either never completed or completed one or more times; there is no
terminal state. complete() is the only operation that writes the completion
columns, and it snapshots the acting user's name so later renames do not
rewrite history. Repeated completions simply move last_completed forward;
concurrent completions are last-write-wins.

Every operation checks the ownership chain first and validates input before
touching the store.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from core.base import TaskStatus
from core.errors import ValidationError
from core.interfaces.entity_store import EntityStore
from core.ownership import OwnershipResolver
from modules.maintenance import due_dates

log = logging.getLogger("homekeep.tasks")

# Columns owned by complete(); a generic update may never set them.
COMPLETION_FIELDS = frozenset({
    "last_completed", "is_completed", "completed_by", "completed_by_username",
})
IMMUTABLE_FIELDS = frozenset({"id", "device_id", "created_at"})
UPDATABLE_FIELDS = frozenset({"name", "description", "interval_days"})

# Keeps last_completed + interval inside the datetime range.
MAX_INTERVAL_DAYS = 36500


def validate_name(name) -> str:
    if name is None or not str(name).strip():
        raise ValidationError("name", "Name is required")
    return str(name).strip()


def validate_interval(interval_days) -> int:
    if interval_days is None:
        raise ValidationError("interval_days", "Interval is required")
    if isinstance(interval_days, bool) or not isinstance(interval_days, int):
        raise ValidationError("interval_days", "Interval must be a whole number of days")
    if interval_days < 1:
        raise ValidationError("interval_days", "Interval must be at least 1 day")
    if interval_days > MAX_INTERVAL_DAYS:
        raise ValidationError(
            "interval_days", f"Interval must be at most {MAX_INTERVAL_DAYS} days"
        )
    return interval_days


class TaskLifecycle:
    """Create, update, complete, delete and list maintenance tasks."""

    def __init__(self, store: EntityStore, resolver: Optional[OwnershipResolver] = None,
                 clock: Callable[[], datetime] = due_dates.utcnow):
        self.store = store
        self.resolver = resolver or OwnershipResolver(store)
        self.clock = clock

    def create(self, principal_user_id, device_id: int, name, description=None,
               interval_days=None):
        device = self.resolver.require_device(principal_user_id, device_id)
        fields = {
            "device_id": device.id,
            "name": validate_name(name),
            "description": description,
            "interval_days": validate_interval(interval_days),
            "last_completed": None,
            "is_completed": False,
        }
        task = self.store.insert_task(fields)
        log.info(f"Task {task.id} created on device {device.id} (every {task.interval_days}d)")
        return task

    def get(self, principal_user_id, task_id: int):
        return self.resolver.require_task(principal_user_id, task_id)

    def update(self, principal_user_id, task_id: int, fields: dict):
        task = self.resolver.require_task(principal_user_id, task_id)

        blocked = sorted((COMPLETION_FIELDS | IMMUTABLE_FIELDS) & set(fields))
        if blocked:
            raise ValidationError(blocked[0], "Field cannot be changed by an update")
        unknown = sorted(set(fields) - UPDATABLE_FIELDS)
        if unknown:
            raise ValidationError(unknown[0], "Unknown field")

        changes = dict(fields)
        if "name" in changes:
            changes["name"] = validate_name(changes["name"])
        if "interval_days" in changes:
            changes["interval_days"] = validate_interval(changes["interval_days"])

        if not changes:
            return task
        updated = self.store.update_task(task.id, changes)
        log.info(f"Task {task.id} updated: {sorted(changes)}")
        return updated

    def complete(self, task_id: int, acting_user_id, acting_username: str):
        task = self.resolver.require_task(acting_user_id, task_id)
        updated = self.store.update_task(task.id, {
            "last_completed": self.clock(),
            "is_completed": True,
            "completed_by": acting_user_id,
            "completed_by_username": acting_username,
        })
        log.info(f"Task {task.id} completed by {acting_username}")
        return updated

    def delete(self, principal_user_id, task_id: int) -> None:
        task = self.resolver.require_task(principal_user_id, task_id)
        self.store.delete_task(task.id)
        log.info(f"Task {task.id} deleted")

    def list_by_device(self, principal_user_id, device_id: int) -> list:
        device = self.resolver.require_device(principal_user_id, device_id)
        return self.store.get_tasks_by_device(device.id)

    def list_for_user(self, user_id) -> list:
        """Every task on every device the user owns, in device order."""
        tasks = []
        for device in self.store.get_devices_by_owner(user_id):
            tasks.extend(self.store.get_tasks_by_device(device.id))
        return tasks

    def summary(self, user_id, now: Optional[datetime] = None,
                horizon_days: int = due_dates.DEFAULT_HORIZON_DAYS) -> dict:
        """Group the user's tasks by derived status for the dashboard."""
        now = now or self.clock()
        groups = {status: [] for status in TaskStatus}
        for task in self.list_for_user(user_id):
            groups[due_dates.classify(task, now, horizon_days)].append(task)
        return groups
