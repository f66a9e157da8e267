from __future__ import annotations

import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable

from parts_finder.domain.errors import ConflictError, NotFoundError, RepositoryConnectionError
from parts_finder.domain.vehicle import Vehicle, VehicleDraft
from parts_finder.ports.vehicle_repository import VehicleRepository


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryVehicleRepository(VehicleRepository):
    """
    Canonical contract implementation for tests and local development.

    - Assigns uuid4 ids and created_at/updated_at timestamps
    - Lists newest-created first (ties broken by insertion order)
    - Enforces VIN uniqueness like the store's unique constraint
    - Supports failure injection to simulate an unreachable store
    """

    def __init__(
        self,
        vehicles: list[Vehicle] | None = None,
        clock: Callable[[], datetime] = _utcnow,
        user_id: str | None = None,
    ) -> None:
        self._clock = clock
        self._user_id = user_id
        # Stored oldest first; listing reverses
        self._records: list[Vehicle] = list(reversed(vehicles or []))
        self._pending_failures: list[Exception] = []
        self.calls: list[str] = []

    def fail_next(self, error: Exception | None = None) -> None:
        """Make the next store call raise ``error`` (connection failure by default)."""
        self._pending_failures.append(
            error or RepositoryConnectionError("Vehicle store unreachable")
        )

    async def list_vehicles(self) -> list[Vehicle]:
        self._enter("list")
        return sorted(
            reversed(self._records),
            key=lambda v: v.created_at or datetime.min.replace(tzinfo=timezone.utc),
            reverse=True,
        )

    async def insert(self, draft: VehicleDraft) -> Vehicle:
        self._enter("insert")
        self._ensure_unique_vin(draft.vin, exclude_id=None)

        now = self._clock()
        vehicle = Vehicle(
            id=str(uuid.uuid4()),
            user_id=self._user_id,
            make=draft.make,
            model=draft.model,
            year=draft.year,
            mileage=draft.mileage,
            vin=draft.vin,
            created_at=now,
            updated_at=now,
        )
        self._records.append(vehicle)
        return vehicle

    async def update(self, vehicle_id: str, draft: VehicleDraft) -> None:
        self._enter("update")
        index = self._index_of(vehicle_id)
        self._ensure_unique_vin(draft.vin, exclude_id=vehicle_id)

        self._records[index] = replace(
            self._records[index],
            make=draft.make,
            model=draft.model,
            year=draft.year,
            mileage=draft.mileage,
            vin=draft.vin,
            updated_at=self._clock(),
        )

    async def delete(self, vehicle_id: str) -> None:
        self._enter("delete")
        index = self._index_of(vehicle_id)
        del self._records[index]

    def _enter(self, operation: str) -> None:
        self.calls.append(operation)
        if self._pending_failures:
            raise self._pending_failures.pop(0)

    def _index_of(self, vehicle_id: str) -> int:
        for index, vehicle in enumerate(self._records):
            if vehicle.id == vehicle_id:
                return index
        raise NotFoundError("Vehicle", vehicle_id)

    def _ensure_unique_vin(self, vin: str | None, exclude_id: str | None) -> None:
        if vin is None:
            return
        for vehicle in self._records:
            if vehicle.vin == vin and vehicle.id != exclude_id:
                raise ConflictError(f"VIN '{vin}' is already registered", field="vin")
