"""Device routes: list, create, read, update, and cascading delete."""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from core.dependencies import get_store, require_user
from core.ownership import OwnershipResolver
from core.store import SqlAlchemyEntityStore
from modules.devices import cascade, services
from modules.devices.schemas import DeviceCreate, DeviceUpdate, DeviceResponse

log = logging.getLogger("homekeep.api")
router = APIRouter(tags=["Devices"])


@router.get("/devices", response_model=List[DeviceResponse])
def list_devices(current_user: dict = Depends(require_user),
                 store: SqlAlchemyEntityStore = Depends(get_store)):
    """List the caller's devices."""
    return services.list_devices(store, current_user["id"])


@router.post("/devices", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
def create_device(data: DeviceCreate, current_user: dict = Depends(require_user),
                  store: SqlAlchemyEntityStore = Depends(get_store)):
    """Create a device owned by the caller."""
    return services.create_device(store, current_user["id"], data.model_dump(exclude_unset=True))


@router.get("/devices/{device_id}", response_model=DeviceResponse)
def get_device(device_id: int, current_user: dict = Depends(require_user),
               store: SqlAlchemyEntityStore = Depends(get_store)):
    return OwnershipResolver(store).require_device(current_user["id"], device_id)


@router.api_route("/devices/{device_id}", methods=["PUT", "PATCH"], response_model=DeviceResponse)
def update_device(device_id: int, data: DeviceUpdate, current_user: dict = Depends(require_user),
                  store: SqlAlchemyEntityStore = Depends(get_store)):
    """Update a device. Only fields present in the body are changed."""
    return services.update_device(
        store, current_user["id"], device_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/devices/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_device(device_id: int, current_user: dict = Depends(require_user),
                  store: SqlAlchemyEntityStore = Depends(get_store)):
    """Delete a device together with its consumables and maintenance tasks."""
    cascade.delete_owned_device(store, current_user["id"], device_id)
