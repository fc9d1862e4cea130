"""
Consumable CRUD, scoped through the parent device's owner.

Creating and listing go through the device (existence-hiding 404). Updating
and deleting an individual consumable report 404 when it does not exist and
403 when it exists under another user's device.
"""

import logging
import math

from core.errors import ValidationError
from core.interfaces.entity_store import EntityStore
from core.ownership import OwnershipResolver

log = logging.getLogger("homekeep.api")

UPDATABLE_FIELDS = frozenset({"name", "description", "storage_location", "url", "cost"})


def _check_fields(fields: dict) -> dict:
    if "device_id" in fields:
        raise ValidationError("device_id", "Consumable cannot be moved to another device")
    unknown = sorted(set(fields) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(unknown[0], "Unknown field")
    if "name" in fields:
        name = fields["name"]
        if name is None or not str(name).strip():
            raise ValidationError("name", "Name is required")
        fields = {**fields, "name": str(name).strip()}
    cost = fields.get("cost")
    if cost is not None and not math.isfinite(cost):
        raise ValidationError("cost", "Cost must be a finite number")
    if cost is not None and cost < 0:
        raise ValidationError("cost", "Cost cannot be negative")
    return fields


def list_for_device(store: EntityStore, principal_user_id, device_id: int) -> list:
    device = OwnershipResolver(store).require_device(principal_user_id, device_id)
    return store.get_consumables_by_device(device.id)


def list_for_user(store: EntityStore, user_id) -> list:
    """Every consumable the user owns, paired with its device name."""
    rows = []
    for device in store.get_devices_by_owner(user_id):
        for consumable in store.get_consumables_by_device(device.id):
            rows.append((consumable, device.name))
    return rows


def get_consumable(store: EntityStore, principal_user_id, consumable_id: int):
    return OwnershipResolver(store).require_visible_consumable(principal_user_id, consumable_id)


def create_consumable(store: EntityStore, principal_user_id, device_id: int, fields: dict):
    device = OwnershipResolver(store).require_device(principal_user_id, device_id)
    if "name" not in fields:
        raise ValidationError("name", "Name is required")
    fields = _check_fields(fields)
    consumable = store.insert_consumable({**fields, "device_id": device.id})
    log.info(f"Consumable {consumable.id} created on device {device.id}")
    return consumable


def update_consumable(store: EntityStore, principal_user_id, consumable_id: int, fields: dict):
    consumable = OwnershipResolver(store).require_consumable(
        principal_user_id, consumable_id, action="update"
    )
    fields = _check_fields(fields)
    if not fields:
        return consumable
    return store.update_consumable(consumable.id, fields)


def delete_consumable(store: EntityStore, principal_user_id, consumable_id: int) -> None:
    consumable = OwnershipResolver(store).require_consumable(
        principal_user_id, consumable_id, action="delete"
    )
    store.delete_consumable(consumable.id)
    log.info(f"Consumable {consumable.id} deleted")
