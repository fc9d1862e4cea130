# core/interfaces/entity_store.py
from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Any, Optional


class EntityStore(ABC):
    """What the ownership resolver, services and task lifecycle need from storage.

    Every getter returns the entity or None; nothing raises for "not found".
    Writes outside transaction() are committed individually. Writes inside a
    transaction() block become visible together or not at all; a failed write
    surfaces as core.errors.PersistenceError.
    """

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Scope several writes into one atomic unit."""
        ...

    # ── Users ────────────────────────────────────────────────────────────────

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[Any]:
        ...

    @abstractmethod
    def insert_user(self, fields: dict) -> Any:
        ...

    @abstractmethod
    def update_user(self, user_id: int, fields: dict) -> Optional[Any]:
        ...

    # ── Devices ──────────────────────────────────────────────────────────────

    @abstractmethod
    def get_device(self, device_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def get_devices_by_owner(self, user_id: int) -> list:
        """Returns the user's devices ordered by id."""
        ...

    @abstractmethod
    def insert_device(self, fields: dict) -> Any:
        ...

    @abstractmethod
    def update_device(self, device_id: int, fields: dict) -> Optional[Any]:
        ...

    @abstractmethod
    def delete_device(self, device_id: int) -> bool:
        ...

    # ── Consumables ──────────────────────────────────────────────────────────

    @abstractmethod
    def get_consumable(self, consumable_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def get_consumables_by_device(self, device_id: int) -> list:
        ...

    @abstractmethod
    def insert_consumable(self, fields: dict) -> Any:
        ...

    @abstractmethod
    def update_consumable(self, consumable_id: int, fields: dict) -> Optional[Any]:
        ...

    @abstractmethod
    def delete_consumable(self, consumable_id: int) -> bool:
        ...

    # ── Maintenance tasks ────────────────────────────────────────────────────

    @abstractmethod
    def get_task(self, task_id: int) -> Optional[Any]:
        ...

    @abstractmethod
    def get_tasks_by_device(self, device_id: int) -> list:
        ...

    @abstractmethod
    def insert_task(self, fields: dict) -> Any:
        ...

    @abstractmethod
    def update_task(self, task_id: int, fields: dict) -> Optional[Any]:
        ...

    @abstractmethod
    def delete_task(self, task_id: int) -> bool:
        ...
