"""
HomeKeep: Ownership resolver.

The only authorization boundary in the application is the ownership chain

    MaintenanceTask / Consumable  ->  Device  ->  User

A device belongs to exactly one user (Device.owner_user_id, immutable). A task
or consumable belongs to whoever owns its parent device. Nothing carries its
own ACL.

authorize() answers the yes/no question. The require_* helpers load an entity
by id and raise the error each route family surfaces:

  * devices and tasks hide existence: missing and foreign both raise
    NotFoundOrForbidden (404).
  * consumable mutations distinguish NotFound (404, the consumable itself is
    missing) from Forbidden (403, it exists under someone else's device).
"""

import logging
from typing import Any

from core.errors import Forbidden, NotFound, NotFoundOrForbidden
from core.interfaces.entity_store import EntityStore

log = logging.getLogger("homekeep.api")


class OwnershipResolver:
    """Read-only; issues at most one device lookup per check."""

    def __init__(self, store: EntityStore):
        self.store = store

    def owner_of(self, entity: Any):
        """Return the owning user id of a device, task or consumable (None if orphaned)."""
        if entity is None:
            return None
        if hasattr(entity, "owner_user_id"):
            return entity.owner_user_id
        device = self.store.get_device(entity.device_id)
        return device.owner_user_id if device is not None else None

    def authorize(self, principal_user_id, entity: Any) -> bool:
        """True iff the principal owns the entity. Fails closed on a missing parent."""
        if principal_user_id is None or entity is None:
            return False
        owner = self.owner_of(entity)
        return owner is not None and owner == principal_user_id

    # ── Loaders used by routes and services ──────────────────────────────────

    def require_device(self, principal_user_id, device_id: int):
        device = self.store.get_device(device_id)
        if not self.authorize(principal_user_id, device):
            log.debug(f"Denied device {device_id} to user {principal_user_id}")
            raise NotFoundOrForbidden("Device")
        return device

    def require_task(self, principal_user_id, task_id: int):
        task = self.store.get_task(task_id)
        if not self.authorize(principal_user_id, task):
            log.debug(f"Denied task {task_id} to user {principal_user_id}")
            raise NotFoundOrForbidden("Task")
        return task

    def require_consumable(self, principal_user_id, consumable_id: int, action: str = "access"):
        """Loader for consumable mutations: 404 when missing, 403 when foreign."""
        consumable = self.store.get_consumable(consumable_id)
        if consumable is None:
            raise NotFound("Consumable not found")
        if not self.authorize(principal_user_id, consumable):
            log.debug(f"Forbidden consumable {consumable_id} for user {principal_user_id}")
            raise Forbidden(f"Not authorized to {action} this consumable")
        return consumable

    def require_visible_consumable(self, principal_user_id, consumable_id: int):
        """Loader for consumable reads: existence-hiding like devices and tasks."""
        consumable = self.store.get_consumable(consumable_id)
        if not self.authorize(principal_user_id, consumable):
            raise NotFoundOrForbidden("Consumable")
        return consumable
