"""
Device deletion cascade.

A device's consumables go first, then its maintenance tasks, then the device
row itself. All three steps share one store transaction: a reader sees either
the whole device tree or none of it, and a failure part-way rolls everything
back and surfaces as PersistenceError.
"""

import logging

from core.interfaces.entity_store import EntityStore
from core.ownership import OwnershipResolver

log = logging.getLogger("homekeep.api")


def delete_device(store: EntityStore, device_id: int) -> None:
    """Remove a device and everything scoped to it. No ownership check."""
    with store.transaction():
        consumables = store.get_consumables_by_device(device_id)
        for consumable in consumables:
            store.delete_consumable(consumable.id)
        tasks = store.get_tasks_by_device(device_id)
        for task in tasks:
            store.delete_task(task.id)
        store.delete_device(device_id)
    log.info(
        f"Device {device_id} deleted with {len(consumables)} consumable(s) "
        f"and {len(tasks)} task(s)"
    )


def delete_owned_device(store: EntityStore, principal_user_id, device_id: int) -> None:
    device = OwnershipResolver(store).require_device(principal_user_id, device_id)
    delete_device(store, device.id)
