# anthropometric/routes/measurements.py

from dataclasses import dataclass
from typing import Type

from fastapi import APIRouter, Body, Depends, status

from anthropometric.auth import get_current_user
from anthropometric.authz import ensure_owner
from anthropometric.db import ANTHROPOMETRIC, HEALTH, PERFORMANCE
from anthropometric.db.measurements import MeasurementStore, measurement_store
from anthropometric.db.users import to_object_id
from anthropometric.errors import NotFound, ValidationError
from anthropometric.schemas.measurements import (
    AnthropometricIn,
    AnthropometricUpdate,
    HealthIn,
    MeasurementIn,
    PerformanceIn,
)
from anthropometric.utils.logger import log_activity
from anthropometric.utils.serialize import to_public


@dataclass(frozen=True)
class MeasurementKind:
    name: str
    collection: str
    create_model: Type[MeasurementIn]
    update_model: Type[MeasurementIn]


KINDS = (
    MeasurementKind("anthropometric", ANTHROPOMETRIC, AnthropometricIn, AnthropometricUpdate),
    MeasurementKind("performance", PERFORMANCE, PerformanceIn, PerformanceIn),
    MeasurementKind("health", HEALTH, HealthIn, HealthIn),
)


def _path_id(measurement_id: str):
    oid = to_object_id(measurement_id)
    if oid is None:
        raise ValidationError("Invalid measurement id")
    return oid


def _prepare(body: MeasurementIn) -> dict:
    """Request body -> fields to store; athleteId becomes an ObjectId reference."""
    doc = body.to_document()
    if doc.get("athleteId") is not None:
        athlete_oid = to_object_id(doc["athleteId"])
        if athlete_oid is None:
            raise ValidationError("Invalid athleteId")
        doc["athleteId"] = athlete_oid
    return doc


def _owned(store: MeasurementStore, measurement_id: str, user: dict, action: str) -> dict:
    measurement = store.find_by_id(_path_id(measurement_id))
    if not measurement:
        raise NotFound("Measurement not found")
    ensure_owner(measurement, user, action)
    return measurement


def build_router(kind: MeasurementKind) -> APIRouter:
    """CRUD router for one measurement kind; every operation is owner-scoped."""
    router = APIRouter(prefix=f"/{kind.name}", tags=[kind.name])
    get_store = measurement_store(kind.collection)
    CreateModel, UpdateModel = kind.create_model, kind.update_model

    @router.get("")
    async def list_measurements(
        current_user: dict = Depends(get_current_user),
        store: MeasurementStore = Depends(get_store),
    ):
        return [to_public(m) for m in store.find_by_owner(current_user["_id"])]

    @router.get("/{measurement_id}")
    async def get_measurement(
        measurement_id: str,
        current_user: dict = Depends(get_current_user),
        store: MeasurementStore = Depends(get_store),
    ):
        measurement = _owned(store, measurement_id, current_user, "view")
        return to_public(store.populate(measurement))

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_measurement(
        body: CreateModel = Body(...),
        current_user: dict = Depends(get_current_user),
        store: MeasurementStore = Depends(get_store),
    ):
        doc = _prepare(body)
        doc["ownerId"] = current_user["_id"]
        created = store.create(doc)

        log_activity(
            user_id=str(current_user["_id"]),
            action="create_measurement",
            metadata={"kind": kind.name, "measurement_id": str(created["_id"])},
        )
        return to_public(created)

    @router.put("/{measurement_id}")
    async def update_measurement(
        measurement_id: str,
        body: UpdateModel = Body(...),
        current_user: dict = Depends(get_current_user),
        store: MeasurementStore = Depends(get_store),
    ):
        measurement = _owned(store, measurement_id, current_user, "update")
        fields = _prepare(body)
        updated = store.update_by_id(measurement["_id"], fields) if fields else store.populate(measurement)
        if updated is None:
            raise NotFound("Measurement not found")

        log_activity(
            user_id=str(current_user["_id"]),
            action="update_measurement",
            metadata={"kind": kind.name, "measurement_id": measurement_id, "fields": sorted(fields)},
        )
        return to_public(updated)

    @router.delete("/{measurement_id}")
    async def delete_measurement(
        measurement_id: str,
        current_user: dict = Depends(get_current_user),
        store: MeasurementStore = Depends(get_store),
    ):
        measurement = _owned(store, measurement_id, current_user, "delete")
        if not store.delete_by_id(measurement["_id"]):
            raise NotFound("Measurement not found")

        log_activity(
            user_id=str(current_user["_id"]),
            action="delete_measurement",
            metadata={"kind": kind.name, "measurement_id": measurement_id},
        )
        return {"message": "Measurement deleted successfully"}

    return router


routers = [build_router(kind) for kind in KINDS]


# ---------- Aggregated read (older clients) ----------
aggregate_router = APIRouter(tags=["measurements"])

_stores = {kind.name: measurement_store(kind.collection) for kind in KINDS}


@aggregate_router.get("/measurements")
async def all_measurements(
    current_user: dict = Depends(get_current_user),
    anthropometric: MeasurementStore = Depends(_stores["anthropometric"]),
    performance: MeasurementStore = Depends(_stores["performance"]),
    health: MeasurementStore = Depends(_stores["health"]),
):
    owner = current_user["_id"]
    # Any store failure propagates and the whole response becomes a 500.
    return {
        "anthropometric": [to_public(m) for m in anthropometric.find_by_owner(owner)],
        "performance": [to_public(m) for m in performance.find_by_owner(owner)],
        "health": [to_public(m) for m in health.find_by_owner(owner)],
    }
