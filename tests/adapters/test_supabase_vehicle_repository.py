"""
Unit test suite for SupabaseVehicleRepository.

The PostgREST endpoint is replaced with httpx.MockTransport, so these tests
verify the wire contract (methods, filters, headers, payloads) and the
translation of HTTP failures to domain errors.
"""

from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Callable

import httpx
import pytest
from fastapi.testclient import TestClient

from parts_finder.adapters.supabase_vehicle_repository import SupabaseVehicleRepository
from parts_finder.domain.errors import (
    ConflictError,
    NotFoundError,
    RepositoryConnectionError,
    SyncError,
)
from parts_finder.domain.vehicle import VehicleDraft
from parts_finder.entrypoints.http.app import build_app
from parts_finder.infra.rest.config import SupabaseSettings
from parts_finder.use_cases.vehicle_collection import VehicleCollectionManager

SETTINGS = SupabaseSettings(url="https://project.supabase.co/", key="anon-key")
TABLE_URL = "https://project.supabase.co/rest/v1/vehicles"

RECORD = {
    "id": "0b7f8a3e-3d6c-4c53-9d4c-2a7d5f3c9e10",
    "user_id": None,
    "make": "Toyota",
    "model": "Camry",
    "year": 2020,
    "mileage": 45000,
    "vin": "1HGBH41JXMN109186",
    "created_at": "2025-10-16T12:00:00+00:00",
    "updated_at": "2025-10-16T12:00:00+00:00",
}


def build_repository(
    handler: Callable[[httpx.Request], httpx.Response],
) -> tuple[SupabaseVehicleRepository, list[httpx.Request]]:
    """Repository wired to a mock transport that records every request."""
    requests: list[httpx.Request] = []

    def recording_handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(recording_handler))
    return SupabaseVehicleRepository(settings=SETTINGS, client=client), requests


@pytest.fixture()
def draft() -> VehicleDraft:
    return VehicleDraft(make="Toyota", model="Camry", year=2020, mileage=45000, vin=None)


# ==============================================================================
# Happy path
# ==============================================================================


@pytest.mark.asyncio
async def test_list_requests_newest_first_and_converts_records() -> None:
    """GET with select=* and order=created_at.desc; records become Vehicles."""
    repository, requests = build_repository(lambda request: httpx.Response(200, json=[RECORD]))

    vehicles = await repository.list_vehicles()

    request = requests[0]
    assert request.method == "GET"
    assert str(request.url).startswith(TABLE_URL)
    assert request.url.params["select"] == "*"
    assert request.url.params["order"] == "created_at.desc"
    assert request.headers["apikey"] == "anon-key"
    assert request.headers["Authorization"] == "Bearer anon-key"

    assert len(vehicles) == 1
    assert vehicles[0].id == RECORD["id"]
    assert vehicles[0].created_at == datetime(2025, 10, 16, 12, 0, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_insert_posts_payload_and_returns_representation(draft: VehicleDraft) -> None:
    """POST sends only editable fields and asks for the created row back."""
    repository, requests = build_repository(lambda request: httpx.Response(201, json=[RECORD]))

    created = await repository.insert(draft)

    request = requests[0]
    assert request.method == "POST"
    assert request.headers["Prefer"] == "return=representation"
    assert json.loads(request.content) == {
        "make": "Toyota",
        "model": "Camry",
        "year": 2020,
        "mileage": 45000,
        "vin": None,
    }
    assert created.id == RECORD["id"]


@pytest.mark.asyncio
async def test_update_filters_by_id(draft: VehicleDraft) -> None:
    """PATCH targets a single row via the id=eq.<id> filter."""
    repository, requests = build_repository(lambda request: httpx.Response(200, json=[RECORD]))

    await repository.update(RECORD["id"], draft)

    request = requests[0]
    assert request.method == "PATCH"
    assert request.url.params["id"] == f"eq.{RECORD['id']}"


@pytest.mark.asyncio
async def test_delete_filters_by_id() -> None:
    repository, requests = build_repository(lambda request: httpx.Response(200, json=[RECORD]))

    await repository.delete(RECORD["id"])

    assert requests[0].method == "DELETE"
    assert requests[0].url.params["id"] == f"eq.{RECORD['id']}"


# ==============================================================================
# Failures
# ==============================================================================


@pytest.mark.asyncio
async def test_update_empty_representation_raises_not_found(draft: VehicleDraft) -> None:
    """PostgREST answers a PATCH on a missing row with an empty list."""
    repository, _ = build_repository(lambda request: httpx.Response(200, json=[]))

    with pytest.raises(NotFoundError):
        await repository.update("missing", draft)


@pytest.mark.asyncio
async def test_delete_empty_representation_raises_not_found() -> None:
    repository, _ = build_repository(lambda request: httpx.Response(200, json=[]))

    with pytest.raises(NotFoundError):
        await repository.delete("missing")


@pytest.mark.asyncio
async def test_transport_error_raises_connection_error() -> None:
    """Network failures become RepositoryConnectionError."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    repository, _ = build_repository(handler)

    with pytest.raises(RepositoryConnectionError) as exc_info:
        await repository.list_vehicles()

    assert isinstance(exc_info.value.__cause__, httpx.ConnectError)


@pytest.mark.asyncio
async def test_server_error_raises_connection_error() -> None:
    repository, _ = build_repository(
        lambda request: httpx.Response(500, json={"message": "internal error"})
    )

    with pytest.raises(RepositoryConnectionError) as exc_info:
        await repository.list_vehicles()

    assert exc_info.value.context["status_code"] == 500


@pytest.mark.asyncio
async def test_unique_violation_raises_conflict(draft: VehicleDraft) -> None:
    """SQLSTATE class 23 in the error body maps to ConflictError."""
    repository, _ = build_repository(
        lambda request: httpx.Response(
            409,
            json={"code": "23505", "message": "duplicate key value violates unique constraint"},
        )
    )

    with pytest.raises(ConflictError):
        await repository.insert(draft)


@pytest.mark.asyncio
async def test_check_violation_with_400_raises_conflict(draft: VehicleDraft) -> None:
    repository, _ = build_repository(
        lambda request: httpx.Response(
            400, json={"code": "23514", "message": "violates check constraint"}
        )
    )

    with pytest.raises(ConflictError):
        await repository.insert(draft)


@pytest.mark.asyncio
async def test_non_json_error_body_raises_connection_error() -> None:
    repository, _ = build_repository(lambda request: httpx.Response(502, text="Bad Gateway"))

    with pytest.raises(RepositoryConnectionError):
        await repository.list_vehicles()


@pytest.mark.asyncio
async def test_non_json_success_body_raises_connection_error() -> None:
    """A gateway page served with 200 is a store failure, not a decoding crash."""
    repository, _ = build_repository(
        lambda request: httpx.Response(200, text="<html>gateway</html>")
    )

    with pytest.raises(RepositoryConnectionError, match="unreadable"):
        await repository.list_vehicles()


@pytest.mark.asyncio
async def test_success_body_that_is_not_a_list_raises_connection_error() -> None:
    repository, _ = build_repository(lambda request: httpx.Response(200, json={"ok": True}))

    with pytest.raises(RepositoryConnectionError):
        await repository.list_vehicles()


@pytest.mark.asyncio
async def test_record_missing_fields_raises_connection_error() -> None:
    repository, _ = build_repository(
        lambda request: httpx.Response(200, json=[{"id": "1", "make": "Kia"}])
    )

    with pytest.raises(RepositoryConnectionError):
        await repository.list_vehicles()


@pytest.mark.asyncio
async def test_insert_with_malformed_timestamp_raises_connection_error(draft: VehicleDraft) -> None:
    record = {**RECORD, "created_at": "yesterday"}
    repository, _ = build_repository(lambda request: httpx.Response(201, json=[record]))

    with pytest.raises(RepositoryConnectionError):
        await repository.insert(draft)

@pytest.mark.asyncio
async def test_aclose_closes_client() -> None:
    repository, _ = build_repository(lambda request: httpx.Response(200, json=[]))

    await repository.aclose()

    assert repository._client.is_closed


# ==============================================================================
# Unreadable responses seen from the collection and the app
# ==============================================================================


@pytest.mark.asyncio
async def test_collection_load_reports_unreadable_response_as_sync_error() -> None:
    repository, _ = build_repository(
        lambda request: httpx.Response(200, text="<html>gateway</html>")
    )
    manager = VehicleCollectionManager(vehicle_repository=repository)

    with pytest.raises(SyncError):
        await manager.load()

    assert manager.vehicles == []
    await repository.aclose()


def test_app_starts_when_store_returns_unreadable_response() -> None:
    repository, _ = build_repository(
        lambda request: httpx.Response(200, json=[{"id": "1", "make": "Kia"}])
    )

    with TestClient(build_app(vehicle_repository=repository), raise_server_exceptions=False) as client:
        response = client.get("/v1/vehicles")
        sync = client.post("/v1/vehicles/sync")

    assert response.status_code == 200
    assert response.json() == {"vehicles": [], "selected_id": None}
    assert sync.status_code == 503
    assert sync.json()["code"] == "SYNC_ERROR"
