"""Maintenance task routes: CRUD, completion, and the due-date dashboard."""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from core.base import TaskStatus
from core.config import settings
from core.dependencies import get_store, require_user
from core.store import SqlAlchemyEntityStore
from modules.maintenance.lifecycle import TaskLifecycle
from modules.maintenance.schemas import TaskCreate, TaskUpdate, TaskResponse, TaskSummary

log = logging.getLogger("homekeep.api")
router = APIRouter(tags=["Maintenance"])


def get_lifecycle(store: SqlAlchemyEntityStore = Depends(get_store)) -> TaskLifecycle:
    return TaskLifecycle(store)


def _respond(lifecycle: TaskLifecycle, task) -> TaskResponse:
    return TaskResponse.from_task(task, lifecycle.clock(), settings.due_soon_horizon_days)


def _respond_all(lifecycle: TaskLifecycle, tasks) -> List[TaskResponse]:
    now = lifecycle.clock()
    return [TaskResponse.from_task(t, now, settings.due_soon_horizon_days) for t in tasks]


# ============== Per-device ==============

@router.get("/devices/{device_id}/tasks", response_model=List[TaskResponse])
def list_device_tasks(device_id: int, current_user: dict = Depends(require_user),
                      lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    return _respond_all(lifecycle, lifecycle.list_by_device(current_user["id"], device_id))


@router.post("/devices/{device_id}/tasks", response_model=TaskResponse,
             status_code=status.HTTP_201_CREATED)
def create_task(device_id: int, data: TaskCreate, current_user: dict = Depends(require_user),
                lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    """Create a recurring task on one of the caller's devices."""
    task = lifecycle.create(
        current_user["id"], device_id,
        name=data.name, description=data.description, interval_days=data.interval_days,
    )
    return _respond(lifecycle, task)


# ============== Cross-device ==============

@router.get("/tasks", response_model=List[TaskResponse])
def list_tasks(current_user: dict = Depends(require_user),
               lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    """All tasks on all of the caller's devices."""
    return _respond_all(lifecycle, lifecycle.list_for_user(current_user["id"]))


@router.get("/tasks/summary", response_model=TaskSummary)
def task_summary(current_user: dict = Depends(require_user),
                 lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    """Overdue, due-soon and scheduled tasks for the dashboard."""
    now = lifecycle.clock()
    groups = lifecycle.summary(current_user["id"], now, settings.due_soon_horizon_days)
    horizon = settings.due_soon_horizon_days
    return TaskSummary(
        overdue=[TaskResponse.from_task(t, now, horizon) for t in groups[TaskStatus.OVERDUE]],
        due_soon=[TaskResponse.from_task(t, now, horizon) for t in groups[TaskStatus.DUE_SOON]],
        scheduled=[TaskResponse.from_task(t, now, horizon) for t in groups[TaskStatus.SCHEDULED]],
        total=sum(len(v) for v in groups.values()),
    )


# ============== Single task ==============

@router.get("/tasks/{task_id}", response_model=TaskResponse)
def get_task(task_id: int, current_user: dict = Depends(require_user),
             lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    return _respond(lifecycle, lifecycle.get(current_user["id"], task_id))


@router.api_route("/tasks/{task_id}", methods=["PUT", "PATCH"], response_model=TaskResponse)
def update_task(task_id: int, data: TaskUpdate, current_user: dict = Depends(require_user),
                lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    """Update name, description or interval. Completion fields are rejected."""
    task = lifecycle.update(current_user["id"], task_id, data.model_dump(exclude_unset=True))
    return _respond(lifecycle, task)


@router.post("/tasks/{task_id}/complete", response_model=TaskResponse)
def complete_task(task_id: int, current_user: dict = Depends(require_user),
                  lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    """Mark the task done now, as the calling user."""
    task = lifecycle.complete(task_id, current_user["id"], current_user["username"])
    return _respond(lifecycle, task)


@router.delete("/tasks/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, current_user: dict = Depends(require_user),
                lifecycle: TaskLifecycle = Depends(get_lifecycle)):
    lifecycle.delete(current_user["id"], task_id)
