"""Vehicle collection manager.

Keeps the locally held vehicle collection consistent with the remote store and
owns the selected-vehicle pointer. Every successful mutation reloads the whole
collection from the store instead of patching local state, so server-assigned
fields (ids, timestamps, ordering) are always authoritative.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import date
from typing import AsyncIterator, Callable

from parts_finder.domain.errors import BusyError, NotFoundError, RepositoryConnectionError, SyncError
from parts_finder.domain.vehicle import CollectionSnapshot, Vehicle, VehicleDraft
from parts_finder.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)


class VehicleCollectionManager:
    """
    Single writer of the vehicle collection and the selection pointer.

    Selection invariant (holds after every completed operation):
    - selection is None iff the collection is empty
    - otherwise the selection is a member of the current collection

    Concurrency policy:
    - add/update/remove are mutually exclusive; a mutation requested while
      another is in flight is rejected with BusyError (never queued)
    - every load is tagged with a sequence number and only the response of
      the latest issued load is applied; older responses are discarded
    - starting a mutation invalidates loads already in flight, since the
      mutation reloads on its own once the store call succeeds
    """

    def __init__(
        self,
        vehicle_repository: VehicleRepository,
        today: Callable[[], date] = date.today,
    ) -> None:
        """
        Initialize manager with dependencies.

        Args:
            vehicle_repository: Remote store for vehicle records
            today: Clock used for the draft year upper bound
        """
        self._repository = vehicle_repository
        self._today = today
        self._vehicles: tuple[Vehicle, ...] = ()
        self._selected_id: str | None = None
        self._pending_selection_id: str | None = None
        self._mutation_lock = asyncio.Lock()
        self._load_sequence = 0

    # ==========================================================================
    # Read accessors
    # ==========================================================================

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return self._vehicles

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected(self) -> Vehicle | None:
        if self._selected_id is None:
            return None
        return self._find(self._selected_id)

    @property
    def is_busy(self) -> bool:
        return self._mutation_lock.locked()

    def snapshot(self) -> CollectionSnapshot:
        return CollectionSnapshot(vehicles=self._vehicles, selected=self.selected)

    # ==========================================================================
    # Operations
    # ==========================================================================

    async def load(self) -> CollectionSnapshot:
        """
        Replace the collection with the store's current listing.

        Returns:
            Snapshot after the load (unchanged if the response was stale)

        Raises:
            SyncError: If the store call fails; previous state is retained
        """
        self._load_sequence += 1
        sequence = self._load_sequence

        try:
            listing = await self._repository.list_vehicles()
        except RepositoryConnectionError as exc:
            logger.warning(
                "Vehicle load failed",
                extra={"sequence": sequence, "error": exc.message},
            )
            raise SyncError("Could not load vehicles from the store", sequence=sequence) from exc

        if sequence != self._load_sequence:
            logger.info(
                "Discarding stale vehicle listing",
                extra={"sequence": sequence, "latest": self._load_sequence},
            )
            return self.snapshot()

        self._apply_listing(listing)
        logger.debug(
            "Vehicle listing applied",
            extra={"sequence": sequence, "count": len(self._vehicles)},
        )
        return self.snapshot()

    async def add(self, draft: VehicleDraft) -> Vehicle:
        """
        Create a vehicle in the store and reload the collection.

        If nothing is selected, the created vehicle becomes the selection.

        Returns:
            The created vehicle as returned by the store

        Raises:
            ValidationError: If draft fields violate vehicle constraints (no store call)
            BusyError: If another mutation is in flight
            SyncError: If the store call or the follow-up reload fails
            ConflictError: If the store rejects the record
        """
        draft = draft.normalized()
        draft.validate(current_year=self._today().year)

        async with self._exclusive("add"):
            try:
                created = await self._repository.insert(draft)
            except RepositoryConnectionError as exc:
                raise SyncError("Could not save the vehicle", operation="add") from exc

            logger.info("Vehicle created", extra={"vehicle_id": created.id})
            if self._selected_id is None:
                self._pending_selection_id = created.id

            await self.load()
            return created

    async def update(self, vehicle_id: str, draft: VehicleDraft) -> None:
        """
        Update a vehicle in the store and reload the collection.

        The selection keeps pointing at the same id.

        Raises:
            NotFoundError: If vehicle_id is not in the current collection,
                or the store no longer has it
            ValidationError: If draft fields violate vehicle constraints (no store call)
            BusyError: If another mutation is in flight
            SyncError: If the store call or the follow-up reload fails
        """
        self._require(vehicle_id)
        draft = draft.normalized()
        draft.validate(current_year=self._today().year)

        async with self._exclusive("update"):
            try:
                await self._repository.update(vehicle_id, draft)
            except RepositoryConnectionError as exc:
                raise SyncError(
                    "Could not update the vehicle", operation="update", vehicle_id=vehicle_id
                ) from exc

            logger.info("Vehicle updated", extra={"vehicle_id": vehicle_id})
            await self.load()

    async def remove(self, vehicle_id: str) -> None:
        """
        Delete a vehicle from the store and reload the collection.

        If the deleted vehicle was selected, the first remaining vehicle in
        canonical order is selected (or nothing, if none remain).

        Raises:
            NotFoundError: If vehicle_id is not in the current collection,
                or the store no longer has it
            BusyError: If another mutation is in flight
            SyncError: If the store call or the follow-up reload fails
        """
        self._require(vehicle_id)

        async with self._exclusive("remove"):
            try:
                await self._repository.delete(vehicle_id)
            except RepositoryConnectionError as exc:
                raise SyncError(
                    "Could not delete the vehicle", operation="remove", vehicle_id=vehicle_id
                ) from exc

            logger.info("Vehicle deleted", extra={"vehicle_id": vehicle_id})
            self._drop(vehicle_id)
            await self.load()

    def select(self, vehicle_id: str) -> Vehicle:
        """
        Point the selection at a vehicle of the current collection.

        Raises:
            NotFoundError: If vehicle_id is not in the current collection
        """
        vehicle = self._require(vehicle_id)
        self._selected_id = vehicle.id
        return vehicle

    # ==========================================================================
    # Internals
    # ==========================================================================

    @asynccontextmanager
    async def _exclusive(self, operation: str) -> AsyncIterator[None]:
        if self._mutation_lock.locked():
            logger.info("Rejecting vehicle operation while busy", extra={"operation": operation})
            raise BusyError(operation=operation)

        async with self._mutation_lock:
            self._load_sequence += 1
            yield

    def _apply_listing(self, listing: list[Vehicle]) -> None:
        vehicles = tuple(listing)
        ids = {vehicle.id for vehicle in vehicles}

        for candidate in (self._selected_id, self._pending_selection_id):
            if candidate is not None and candidate in ids:
                selected_id: str | None = candidate
                break
        else:
            selected_id = vehicles[0].id if vehicles else None

        self._vehicles = vehicles
        self._selected_id = selected_id
        self._pending_selection_id = None

    def _drop(self, vehicle_id: str) -> None:
        remaining = tuple(v for v in self._vehicles if v.id != vehicle_id)
        if self._selected_id == vehicle_id:
            self._selected_id = remaining[0].id if remaining else None
        if self._pending_selection_id == vehicle_id:
            self._pending_selection_id = None
        self._vehicles = remaining

    def _find(self, vehicle_id: str) -> Vehicle | None:
        for vehicle in self._vehicles:
            if vehicle.id == vehicle_id:
                return vehicle
        return None

    def _require(self, vehicle_id: str) -> Vehicle:
        vehicle = self._find(vehicle_id)
        if vehicle is None:
            raise NotFoundError("Vehicle", vehicle_id)
        return vehicle
