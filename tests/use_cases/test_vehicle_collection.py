"""
Test suite for VehicleCollectionManager.

Test sections:
- Load: canonical order, selection re-pointing, failure retention, stale responses
- Add / Update / Remove: store delegation, selection rules, failure retention
- Select: pointer updates without store calls
- Concurrency: BusyError while a mutation is in flight
- Selection invariant across operation sequences
"""

from __future__ import annotations

import asyncio
import itertools
from datetime import date, datetime, timedelta, timezone

import pytest

from parts_finder.adapters.in_memory_vehicle_repository import InMemoryVehicleRepository
from parts_finder.domain.errors import (
    BusyError,
    ConflictError,
    NotFoundError,
    RepositoryConnectionError,
    SyncError,
    ValidationError,
)
from parts_finder.domain.vehicle import Vehicle, VehicleDraft
from parts_finder.use_cases.vehicle_collection import VehicleCollectionManager


TODAY = date(2025, 10, 16)


def ticking_clock():
    """Clock that advances one second per call so created_at is strictly increasing."""
    start = datetime(2025, 1, 1, tzinfo=timezone.utc)
    counter = itertools.count()
    return lambda: start + timedelta(seconds=next(counter))


def draft(make: str = "Toyota", model: str = "Corolla", **overrides) -> VehicleDraft:
    fields = {"make": make, "model": model, "year": 2020, "mileage": 45000, "vin": None}
    fields.update(overrides)
    return VehicleDraft(**fields)


def assert_selection_invariant(manager: VehicleCollectionManager) -> None:
    if not manager.vehicles:
        assert manager.selected is None
    else:
        assert manager.selected is not None
        assert manager.selected in manager.vehicles


class GatedListRepository(InMemoryVehicleRepository):
    """Holds every listing response until its gate is released."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.gates: list[asyncio.Event] = []

    async def list_vehicles(self) -> list[Vehicle]:
        listing = await super().list_vehicles()
        gate = asyncio.Event()
        self.gates.append(gate)
        await gate.wait()
        return listing


class SlowInsertRepository(InMemoryVehicleRepository):
    """Holds insert calls until ``release`` is set."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.release = asyncio.Event()

    async def insert(self, draft: VehicleDraft) -> Vehicle:
        await self.release.wait()
        return await super().insert(draft)


@pytest.fixture()
def repository() -> InMemoryVehicleRepository:
    return InMemoryVehicleRepository(clock=ticking_clock())


@pytest.fixture()
def manager(repository: InMemoryVehicleRepository) -> VehicleCollectionManager:
    return VehicleCollectionManager(vehicle_repository=repository, today=lambda: TODAY)


async def seed(repository: InMemoryVehicleRepository, *makes: str) -> list[Vehicle]:
    """Insert vehicles directly into the store (oldest first)."""
    return [await repository.insert(draft(make=make)) for make in makes]


# ==============================================================================
# Load
# ==============================================================================


@pytest.mark.asyncio
async def test_load_replaces_collection_newest_first(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda, mazda, kia = await seed(repository, "Honda", "Mazda", "Kia")

    snapshot = await manager.load()

    assert [v.id for v in snapshot.vehicles] == [kia.id, mazda.id, honda.id]
    assert snapshot.vehicles == manager.vehicles


@pytest.mark.asyncio
async def test_load_selects_first_when_nothing_selected(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    _, newest = await seed(repository, "Honda", "Mazda")

    await manager.load()

    assert manager.selected_id == newest.id


@pytest.mark.asyncio
async def test_load_empty_store_leaves_nothing_selected(
    manager: VehicleCollectionManager,
) -> None:
    snapshot = await manager.load()

    assert snapshot.vehicles == ()
    assert snapshot.selected is None


@pytest.mark.asyncio
async def test_load_keeps_selection_and_refreshes_record(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda, _ = await seed(repository, "Honda", "Mazda")
    await manager.load()
    manager.select(honda.id)

    # Changed behind our back (another device)
    await repository.update(honda.id, draft(make="Honda", mileage=99000))
    await manager.load()

    assert manager.selected_id == honda.id
    assert manager.selected is not None
    assert manager.selected.mileage == 99000


@pytest.mark.asyncio
async def test_load_falls_back_to_first_when_selected_vanished(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda, mazda, kia = await seed(repository, "Honda", "Mazda", "Kia")
    await manager.load()
    manager.select(mazda.id)

    await repository.delete(mazda.id)
    await manager.load()

    assert manager.selected_id == kia.id


@pytest.mark.asyncio
async def test_load_failure_raises_sync_error_and_retains_state(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    await seed(repository, "Honda", "Mazda")
    before = await manager.load()
    await seed(repository, "Kia")
    repository.fail_next()

    with pytest.raises(SyncError) as exc_info:
        await manager.load()

    assert isinstance(exc_info.value.__cause__, RepositoryConnectionError)
    assert manager.snapshot() == before


@pytest.mark.asyncio
async def test_stale_load_response_is_discarded() -> None:
    repository = GatedListRepository(clock=ticking_clock())
    manager = VehicleCollectionManager(vehicle_repository=repository, today=lambda: TODAY)
    honda = await repository.insert(draft(make="Honda"))

    first = asyncio.create_task(manager.load())
    await asyncio.sleep(0)
    mazda = await repository.insert(draft(make="Mazda"))
    second = asyncio.create_task(manager.load())
    await asyncio.sleep(0)

    # Newer load answers first
    repository.gates[1].set()
    await second
    repository.gates[0].set()
    await first

    assert [v.id for v in manager.vehicles] == [mazda.id, honda.id]
    assert manager.selected_id == mazda.id


# ==============================================================================
# Add
# ==============================================================================


@pytest.mark.asyncio
async def test_add_first_vehicle_becomes_selected(manager: VehicleCollectionManager) -> None:
    created = await manager.add(draft())

    assert created.id
    assert created.created_at is not None
    assert [v.id for v in manager.vehicles] == [created.id]
    assert manager.selected_id == created.id


@pytest.mark.asyncio
async def test_add_keeps_existing_selection(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    first = await manager.add(draft(make="Honda"))

    second = await manager.add(draft(make="Mazda"))

    assert [v.id for v in manager.vehicles] == [second.id, first.id]
    assert manager.selected_id == first.id


@pytest.mark.asyncio
async def test_add_reloads_from_store(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    await manager.add(draft())

    assert repository.calls == ["insert", "list"]


@pytest.mark.asyncio
async def test_add_normalizes_empty_vin(manager: VehicleCollectionManager) -> None:
    created = await manager.add(draft(make="  Toyota ", vin=""))

    assert created.make == "Toyota"
    assert created.vin is None


@pytest.mark.asyncio
async def test_add_invalid_draft_raises_validation_error_without_store_call(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    with pytest.raises(ValidationError) as exc_info:
        await manager.add(draft(year=1850, mileage=-1, vin="SHORT"))

    fields = [error["field"] for error in exc_info.value.errors or []]
    assert fields == ["year", "mileage", "vin"]
    assert repository.calls == []


@pytest.mark.asyncio
async def test_add_connection_failure_leaves_state_unchanged(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    await manager.add(draft(make="Honda"))
    before = manager.snapshot()
    repository.fail_next()

    with pytest.raises(SyncError):
        await manager.add(draft(make="Mazda"))

    assert manager.snapshot() == before
    assert not manager.is_busy


@pytest.mark.asyncio
async def test_add_duplicate_vin_propagates_conflict(
    manager: VehicleCollectionManager,
) -> None:
    await manager.add(draft(make="Honda", vin="1HGBH41JXMN109186"))
    before = manager.snapshot()

    with pytest.raises(ConflictError):
        await manager.add(draft(make="Mazda", vin="1HGBH41JXMN109186"))

    assert manager.snapshot() == before


# ==============================================================================
# Update
# ==============================================================================


@pytest.mark.asyncio
async def test_update_refreshes_record_and_keeps_selection(
    manager: VehicleCollectionManager,
) -> None:
    honda = await manager.add(draft(make="Honda"))
    await manager.add(draft(make="Mazda"))

    await manager.update(honda.id, draft(make="Honda", model="Civic", mileage=60000))

    assert manager.selected_id == honda.id
    assert manager.selected is not None
    assert manager.selected.model == "Civic"
    assert manager.selected.mileage == 60000


@pytest.mark.asyncio
async def test_update_unknown_id_raises_not_found_without_store_call(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    with pytest.raises(NotFoundError):
        await manager.update("missing", draft())

    assert repository.calls == []


@pytest.mark.asyncio
async def test_update_invalid_draft_raises_validation_error(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda = await manager.add(draft(make="Honda"))
    calls_before = list(repository.calls)

    with pytest.raises(ValidationError):
        await manager.update(honda.id, draft(make="H"))

    assert repository.calls == calls_before


@pytest.mark.asyncio
async def test_update_connection_failure_raises_sync_error(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda = await manager.add(draft(make="Honda"))
    before = manager.snapshot()
    repository.fail_next()

    with pytest.raises(SyncError):
        await manager.update(honda.id, draft(make="Honda", mileage=1))

    assert manager.snapshot() == before


@pytest.mark.asyncio
async def test_update_of_vehicle_deleted_in_store_propagates_not_found(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda = await manager.add(draft(make="Honda"))
    await repository.delete(honda.id)

    with pytest.raises(NotFoundError):
        await manager.update(honda.id, draft(make="Honda"))


# ==============================================================================
# Remove
# ==============================================================================


@pytest.mark.asyncio
async def test_remove_selected_promotes_first_remaining(
    manager: VehicleCollectionManager,
) -> None:
    honda = await manager.add(draft(make="Honda"))
    mazda = await manager.add(draft(make="Mazda"))
    kia = await manager.add(draft(make="Kia"))
    assert manager.selected_id == honda.id

    await manager.remove(honda.id)

    assert [v.id for v in manager.vehicles] == [kia.id, mazda.id]
    assert manager.selected_id == kia.id


@pytest.mark.asyncio
async def test_remove_only_vehicle_clears_selection(manager: VehicleCollectionManager) -> None:
    honda = await manager.add(draft(make="Honda"))

    await manager.remove(honda.id)

    assert manager.vehicles == ()
    assert manager.selected is None


@pytest.mark.asyncio
async def test_remove_unselected_keeps_selection(manager: VehicleCollectionManager) -> None:
    honda = await manager.add(draft(make="Honda"))
    mazda = await manager.add(draft(make="Mazda"))

    await manager.remove(mazda.id)

    assert manager.selected_id == honda.id


@pytest.mark.asyncio
async def test_remove_unknown_id_raises_not_found(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    with pytest.raises(NotFoundError):
        await manager.remove("missing")

    assert repository.calls == []


@pytest.mark.asyncio
async def test_remove_connection_failure_keeps_vehicle(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda = await manager.add(draft(make="Honda"))
    before = manager.snapshot()
    repository.fail_next()

    with pytest.raises(SyncError):
        await manager.remove(honda.id)

    assert manager.snapshot() == before
    assert manager.selected_id == honda.id


@pytest.mark.asyncio
async def test_remove_applies_selection_rule_even_if_reload_fails(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda = await manager.add(draft(make="Honda"))
    mazda = await manager.add(draft(make="Mazda"))
    # delete succeeds, the follow-up listing fails
    original_list = repository.list_vehicles

    async def failing_list() -> list[Vehicle]:
        raise RepositoryConnectionError("Vehicle store unreachable")

    repository.list_vehicles = failing_list  # type: ignore[method-assign]

    with pytest.raises(SyncError):
        await manager.remove(honda.id)

    repository.list_vehicles = original_list  # type: ignore[method-assign]
    assert [v.id for v in manager.vehicles] == [mazda.id]
    assert manager.selected_id == mazda.id


# ==============================================================================
# Select
# ==============================================================================


@pytest.mark.asyncio
async def test_select_points_selection_without_store_call(
    manager: VehicleCollectionManager, repository: InMemoryVehicleRepository
) -> None:
    honda = await manager.add(draft(make="Honda"))
    mazda = await manager.add(draft(make="Mazda"))
    calls_before = list(repository.calls)

    selected = manager.select(mazda.id)

    assert selected.id == mazda.id
    assert manager.selected_id == mazda.id
    assert manager.selected_id != honda.id
    assert repository.calls == calls_before


def test_select_unknown_id_raises_not_found(manager: VehicleCollectionManager) -> None:
    with pytest.raises(NotFoundError):
        manager.select("missing")


# ==============================================================================
# Concurrency
# ==============================================================================


@pytest.mark.asyncio
async def test_mutation_rejected_while_another_is_in_flight() -> None:
    repository = SlowInsertRepository(clock=ticking_clock())
    manager = VehicleCollectionManager(vehicle_repository=repository, today=lambda: TODAY)

    in_flight = asyncio.create_task(manager.add(draft(make="Honda")))
    await asyncio.sleep(0)
    assert manager.is_busy

    with pytest.raises(BusyError):
        await manager.add(draft(make="Mazda"))

    repository.release.set()
    created = await in_flight

    assert not manager.is_busy
    assert [v.id for v in manager.vehicles] == [created.id]
    assert repository.calls == ["insert", "list"]


@pytest.mark.asyncio
async def test_load_in_flight_before_mutation_is_discarded() -> None:
    repository = GatedListRepository(clock=ticking_clock())
    manager = VehicleCollectionManager(vehicle_repository=repository, today=lambda: TODAY)

    stale = asyncio.create_task(manager.load())
    await asyncio.sleep(0)
    adding = asyncio.create_task(manager.add(draft(make="Honda")))
    await asyncio.sleep(0)

    # The add's own reload (second gate) lands first, then the older listing
    repository.gates[1].set()
    created = await adding
    repository.gates[0].set()
    await stale

    assert [v.id for v in manager.vehicles] == [created.id]
    assert manager.selected_id == created.id


# ==============================================================================
# Selection invariant
# ==============================================================================


@pytest.mark.asyncio
async def test_selection_invariant_holds_across_operation_sequence(
    manager: VehicleCollectionManager,
) -> None:
    await manager.load()
    assert_selection_invariant(manager)

    ids = []
    for make in ("Honda", "Mazda", "Kia", "Nissan"):
        ids.append((await manager.add(draft(make=make))).id)
        assert_selection_invariant(manager)

    manager.select(ids[2])
    await manager.update(ids[2], draft(make="Kia", mileage=1000))
    assert_selection_invariant(manager)

    for vehicle_id in (ids[2], ids[0], ids[3], ids[1]):
        await manager.remove(vehicle_id)
        assert_selection_invariant(manager)

    assert manager.vehicles == ()
    assert manager.selected is None
