"""Consumable routes: per-device and cross-device listing plus CRUD."""

import logging
from typing import List

from fastapi import APIRouter, Depends, status

from core.dependencies import get_store, require_user
from core.store import SqlAlchemyEntityStore
from modules.consumables import services
from modules.consumables.schemas import (
    ConsumableCreate, ConsumableUpdate, ConsumableResponse, ConsumableWithDevice,
)

log = logging.getLogger("homekeep.api")
router = APIRouter(tags=["Consumables"])


@router.get("/devices/{device_id}/consumables", response_model=List[ConsumableResponse])
def list_device_consumables(device_id: int, current_user: dict = Depends(require_user),
                            store: SqlAlchemyEntityStore = Depends(get_store)):
    return services.list_for_device(store, current_user["id"], device_id)


@router.post("/devices/{device_id}/consumables", response_model=ConsumableResponse,
             status_code=status.HTTP_201_CREATED)
def create_consumable(device_id: int, data: ConsumableCreate,
                      current_user: dict = Depends(require_user),
                      store: SqlAlchemyEntityStore = Depends(get_store)):
    return services.create_consumable(
        store, current_user["id"], device_id, data.model_dump(exclude_unset=True)
    )


@router.get("/consumables", response_model=List[ConsumableWithDevice])
def list_all_consumables(current_user: dict = Depends(require_user),
                         store: SqlAlchemyEntityStore = Depends(get_store)):
    """All of the caller's consumables across devices, with the device name."""
    result = []
    for consumable, device_name in services.list_for_user(store, current_user["id"]):
        resp = ConsumableResponse.model_validate(consumable)
        result.append(ConsumableWithDevice(**resp.model_dump(), device_name=device_name))
    return result


@router.get("/consumables/{consumable_id}", response_model=ConsumableResponse)
def get_consumable(consumable_id: int, current_user: dict = Depends(require_user),
                   store: SqlAlchemyEntityStore = Depends(get_store)):
    return services.get_consumable(store, current_user["id"], consumable_id)


@router.api_route("/consumables/{consumable_id}", methods=["PUT", "PATCH"],
                  response_model=ConsumableResponse)
def update_consumable(consumable_id: int, data: ConsumableUpdate,
                      current_user: dict = Depends(require_user),
                      store: SqlAlchemyEntityStore = Depends(get_store)):
    """Update a consumable. 404 if it does not exist, 403 if it is not yours."""
    return services.update_consumable(
        store, current_user["id"], consumable_id, data.model_dump(exclude_unset=True)
    )


@router.delete("/consumables/{consumable_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_consumable(consumable_id: int, current_user: dict = Depends(require_user),
                      store: SqlAlchemyEntityStore = Depends(get_store)):
    """Delete a consumable. 404 if it does not exist, 403 if it is not yours."""
    services.delete_consumable(store, current_user["id"], consumable_id)
