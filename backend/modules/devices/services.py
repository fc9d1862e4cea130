"""Device create/update/list, scoped to the owning user."""

import logging

from core.errors import ValidationError
from core.interfaces.entity_store import EntityStore
from core.ownership import OwnershipResolver

log = logging.getLogger("homekeep.api")

UPDATABLE_FIELDS = frozenset({
    "name", "model", "location", "image_url", "manual_url",
    "consumables_url", "receipt_url", "purchase_date", "warranty_expiration_date",
})


def _check_fields(fields: dict) -> dict:
    if "owner_user_id" in fields:
        raise ValidationError("owner_user_id", "Device owner cannot be changed")
    unknown = sorted(set(fields) - UPDATABLE_FIELDS)
    if unknown:
        raise ValidationError(unknown[0], "Unknown field")
    if "name" in fields:
        name = fields["name"]
        if name is None or not str(name).strip():
            raise ValidationError("name", "Name is required")
        fields = {**fields, "name": str(name).strip()}
    return fields


def list_devices(store: EntityStore, owner_user_id) -> list:
    return store.get_devices_by_owner(owner_user_id)


def create_device(store: EntityStore, owner_user_id, fields: dict):
    if "name" not in fields:
        raise ValidationError("name", "Name is required")
    fields = _check_fields(fields)
    device = store.insert_device({**fields, "owner_user_id": owner_user_id})
    log.info(f"Device {device.id} created for user {owner_user_id}")
    return device


def update_device(store: EntityStore, principal_user_id, device_id: int, fields: dict):
    device = OwnershipResolver(store).require_device(principal_user_id, device_id)
    fields = _check_fields(fields)
    if not fields:
        return device
    return store.update_device(device.id, fields)
