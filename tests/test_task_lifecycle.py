"""
Task lifecycle: create / update / complete / delete / list against the store.

    pytest tests/test_task_lifecycle.py -v
"""

from datetime import datetime, timedelta, timezone

import pytest

from core.base import TaskStatus
from core.errors import NotFoundOrForbidden, ValidationError
from modules.maintenance.lifecycle import TaskLifecycle


FIXED_NOW = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


def _aware(value):
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


@pytest.fixture()
def alice(make_user):
    return make_user("alice")


@pytest.fixture()
def bob(make_user):
    return make_user("bob")


@pytest.fixture()
def device(alice, make_device):
    return make_device(alice, "Water heater")


@pytest.fixture()
def lifecycle(store):
    return TaskLifecycle(store, clock=lambda: FIXED_NOW)


# ---------------------------------------------------------------------------
# create
# ---------------------------------------------------------------------------

class TestCreate:
    def test_new_task_is_never_completed(self, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        assert task.id is not None
        assert task.last_completed is None
        assert task.is_completed is False
        assert task.completed_by is None
        assert task.completed_by_username is None

    def test_interval_of_one_is_accepted(self, lifecycle, alice, device):
        assert lifecycle.create(alice.id, device.id, "Daily", interval_days=1).interval_days == 1

    def test_longest_interval_can_be_completed(self, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Century", interval_days=36500)
        done = lifecycle.complete(task.id, alice.id, "alice")
        assert lifecycle.summary(alice.id, FIXED_NOW)[TaskStatus.SCHEDULED] == [done]

    @pytest.mark.parametrize("interval", [0, -3, None, 36501, 10_000_000])
    def test_bad_interval_is_rejected(self, store, lifecycle, alice, device, interval):
        with pytest.raises(ValidationError) as exc:
            lifecycle.create(alice.id, device.id, "Nope", interval_days=interval)
        assert exc.value.field == "interval_days"
        assert store.get_tasks_by_device(device.id) == []

    def test_blank_name_is_rejected(self, lifecycle, alice, device):
        with pytest.raises(ValidationError) as exc:
            lifecycle.create(alice.id, device.id, "   ", interval_days=30)
        assert exc.value.field == "name"

    def test_cannot_create_on_someone_elses_device(self, lifecycle, bob, device):
        with pytest.raises(NotFoundOrForbidden):
            lifecycle.create(bob.id, device.id, "Sneaky", interval_days=30)


# ---------------------------------------------------------------------------
# update
# ---------------------------------------------------------------------------

class TestUpdate:
    def test_updates_plain_fields(self, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        updated = lifecycle.update(alice.id, task.id, {"name": "Drain tank", "interval_days": 180})
        assert updated.name == "Drain tank"
        assert updated.interval_days == 180

    @pytest.mark.parametrize("field,value", [
        ("last_completed", FIXED_NOW),
        ("is_completed", True),
        ("completed_by", 1),
        ("completed_by_username", "mallory"),
        ("device_id", 2),
    ])
    def test_completion_and_parent_fields_are_off_limits(self, lifecycle, alice, device, field, value):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        with pytest.raises(ValidationError) as exc:
            lifecycle.update(alice.id, task.id, {field: value})
        assert exc.value.field == field

    def test_interval_still_validated(self, store, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        with pytest.raises(ValidationError):
            lifecycle.update(alice.id, task.id, {"interval_days": 0})
        with pytest.raises(ValidationError):
            lifecycle.update(alice.id, task.id, {"interval_days": 36501})
        assert store.get_task(task.id).interval_days == 365

    def test_foreign_update_is_hidden(self, lifecycle, alice, bob, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        with pytest.raises(NotFoundOrForbidden):
            lifecycle.update(bob.id, task.id, {"name": "Mine now"})


# ---------------------------------------------------------------------------
# complete
# ---------------------------------------------------------------------------

class TestComplete:
    def test_records_provenance(self, store, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        lifecycle.complete(task.id, alice.id, "alice")

        fresh = store.get_task(task.id)
        assert _aware(fresh.last_completed) == FIXED_NOW
        assert fresh.is_completed is True
        assert fresh.completed_by == alice.id
        assert fresh.completed_by_username == "alice"

    def test_username_is_a_snapshot(self, store, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        lifecycle.complete(task.id, alice.id, alice.username)
        store.update_user(alice.id, {"username": "alice_renamed"})

        assert store.get_task(task.id).completed_by_username == "alice"

    def test_repeat_completion_advances_last_completed(self, store, alice, device):
        clock = [FIXED_NOW]
        lifecycle = TaskLifecycle(store, clock=lambda: clock[0])
        task = lifecycle.create(alice.id, device.id, "Descale", interval_days=30)

        lifecycle.complete(task.id, alice.id, "alice")
        clock[0] = FIXED_NOW + timedelta(days=31)
        lifecycle.complete(task.id, alice.id, "alice")

        assert _aware(store.get_task(task.id).last_completed) == FIXED_NOW + timedelta(days=31)

    def test_completion_clears_overdue(self, store, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        assert lifecycle.summary(alice.id, FIXED_NOW)[TaskStatus.OVERDUE] == [task]

        lifecycle.complete(task.id, alice.id, "alice")
        groups = lifecycle.summary(alice.id, FIXED_NOW)
        assert groups[TaskStatus.OVERDUE] == []
        assert [t.id for t in groups[TaskStatus.SCHEDULED]] == [task.id]

    def test_foreign_completion_is_hidden(self, lifecycle, alice, bob, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        with pytest.raises(NotFoundOrForbidden):
            lifecycle.complete(task.id, bob.id, "bob")

    def test_is_completed_tracks_last_completed(self, store, lifecycle, alice, device):
        tasks = [lifecycle.create(alice.id, device.id, f"T{i}", interval_days=7) for i in range(3)]
        lifecycle.complete(tasks[1].id, alice.id, "alice")
        for t in store.get_tasks_by_device(device.id):
            assert t.is_completed == (t.last_completed is not None)


# ---------------------------------------------------------------------------
# delete / list
# ---------------------------------------------------------------------------

class TestDeleteAndList:
    def test_delete_is_permanent(self, store, lifecycle, alice, device):
        task = lifecycle.create(alice.id, device.id, "Flush tank", interval_days=365)
        lifecycle.delete(alice.id, task.id)
        assert store.get_task(task.id) is None
        with pytest.raises(NotFoundOrForbidden):
            lifecycle.get(alice.id, task.id)

    def test_list_for_user_is_concatenation_of_device_lists(self, store, lifecycle, alice, bob,
                                                            make_device):
        first = make_device(alice, "Fridge")
        second = make_device(alice, "Dryer")
        other = make_device(bob, "Bob's car")
        lifecycle.create(alice.id, second.id, "Clean lint trap", interval_days=1)
        lifecycle.create(alice.id, first.id, "Replace water filter", interval_days=180)
        lifecycle.create(alice.id, first.id, "Vacuum coils", interval_days=365)
        lifecycle.create(bob.id, other.id, "Oil change", interval_days=120)

        expected = []
        for d in store.get_devices_by_owner(alice.id):
            expected.extend(lifecycle.list_by_device(alice.id, d.id))
        assert [t.id for t in lifecycle.list_for_user(alice.id)] == [t.id for t in expected]
        assert {t.name for t in lifecycle.list_for_user(alice.id)} == {
            "Clean lint trap", "Replace water filter", "Vacuum coils",
        }

    def test_list_by_foreign_device_is_hidden(self, lifecycle, bob, device):
        with pytest.raises(NotFoundOrForbidden):
            lifecycle.list_by_device(bob.id, device.id)
