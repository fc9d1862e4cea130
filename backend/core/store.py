"""
HomeKeep: SQLAlchemy implementation of the EntityStore interface.

One instance wraps one request-scoped Session. Single-row writes commit on
their own; writes issued inside ``with store.transaction():`` are only
flushed, and the outermost block commits or rolls back all of them.

Any SQLAlchemyError raised while writing is rolled back and re-raised as
PersistenceError so callers never see a half-applied change.
"""

import logging
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.errors import PersistenceError
from core.interfaces.entity_store import EntityStore
from modules.users.models import User
from modules.devices.models import Device
from modules.consumables.models import Consumable
from modules.maintenance.models import MaintenanceTask

log = logging.getLogger("homekeep.store")


class SqlAlchemyEntityStore(EntityStore):

    def __init__(self, db: Session):
        self.db = db
        self._depth = 0

    # ── Transaction plumbing ─────────────────────────────────────────────────

    @contextmanager
    def transaction(self):
        self._depth += 1
        try:
            yield self
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.error("Transaction rolled back after store failure", exc_info=True)
            raise PersistenceError() from exc
        except Exception:
            self.db.rollback()
            raise
        else:
            if self._depth == 1:
                self._commit_now()
        finally:
            self._depth -= 1

    def _commit_now(self) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self.db.rollback()
            log.error("Commit failed", exc_info=True)
            raise PersistenceError() from exc

    def _write_done(self) -> None:
        """Flush inside a transaction, commit otherwise."""
        if self._depth:
            self.db.flush()
        else:
            self._commit_now()

    # ── Generic row helpers ──────────────────────────────────────────────────

    def _get(self, model, row_id):
        if row_id is None:
            return None
        return self.db.get(model, row_id)

    def _insert(self, model, fields: dict):
        row = model(**fields)
        self.db.add(row)
        self._write_done()
        if not self._depth:
            self.db.refresh(row)
        return row

    def _update(self, model, row_id, fields: dict):
        row = self._get(model, row_id)
        if row is None:
            return None
        for key, value in fields.items():
            setattr(row, key, value)
        self._write_done()
        if not self._depth:
            self.db.refresh(row)
        return row

    def _delete(self, model, row_id) -> bool:
        row = self._get(model, row_id)
        if row is None:
            return False
        self.db.delete(row)
        self._write_done()
        return True

    # ── Users ────────────────────────────────────────────────────────────────

    def get_user(self, user_id):
        return self._get(User, user_id)

    def get_user_by_username(self, username):
        return self.db.query(User).filter(User.username == username).first()

    def insert_user(self, fields):
        return self._insert(User, fields)

    def update_user(self, user_id, fields):
        return self._update(User, user_id, fields)

    # ── Devices ──────────────────────────────────────────────────────────────

    def get_device(self, device_id):
        return self._get(Device, device_id)

    def get_devices_by_owner(self, user_id):
        return (
            self.db.query(Device)
            .filter(Device.owner_user_id == user_id)
            .order_by(Device.id)
            .all()
        )

    def insert_device(self, fields):
        return self._insert(Device, fields)

    def update_device(self, device_id, fields):
        return self._update(Device, device_id, fields)

    def delete_device(self, device_id):
        return self._delete(Device, device_id)

    # ── Consumables ──────────────────────────────────────────────────────────

    def get_consumable(self, consumable_id):
        return self._get(Consumable, consumable_id)

    def get_consumables_by_device(self, device_id):
        return (
            self.db.query(Consumable)
            .filter(Consumable.device_id == device_id)
            .order_by(Consumable.id)
            .all()
        )

    def insert_consumable(self, fields):
        return self._insert(Consumable, fields)

    def update_consumable(self, consumable_id, fields):
        return self._update(Consumable, consumable_id, fields)

    def delete_consumable(self, consumable_id):
        return self._delete(Consumable, consumable_id)

    # ── Maintenance tasks ────────────────────────────────────────────────────

    def get_task(self, task_id):
        return self._get(MaintenanceTask, task_id)

    def get_tasks_by_device(self, device_id):
        return (
            self.db.query(MaintenanceTask)
            .filter(MaintenanceTask.device_id == device_id)
            .order_by(MaintenanceTask.id)
            .all()
        )

    def insert_task(self, fields):
        return self._insert(MaintenanceTask, fields)

    def update_task(self, task_id, fields):
        return self._update(MaintenanceTask, task_id, fields)

    def delete_task(self, task_id):
        return self._delete(MaintenanceTask, task_id)
