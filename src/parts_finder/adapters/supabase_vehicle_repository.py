"""Hosted (Supabase/PostgREST) implementation of VehicleRepository."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

import httpx

from parts_finder.domain.errors import ConflictError, NotFoundError, RepositoryConnectionError
from parts_finder.domain.vehicle import Vehicle, VehicleDraft
from parts_finder.infra.rest.config import SupabaseSettings
from parts_finder.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)

# Postgres SQLSTATE class 23 = integrity constraint violation
_CONSTRAINT_SQLSTATE_PREFIX = "23"


class SupabaseVehicleRepository(VehicleRepository):
    """
    Vehicle store backed by a Supabase project's PostgREST endpoint.

    - list:   GET    /rest/v1/vehicles?select=*&order=created_at.desc
    - insert: POST   /rest/v1/vehicles            (Prefer: return=representation)
    - update: PATCH  /rest/v1/vehicles?id=eq.<id> (Prefer: return=representation)
    - delete: DELETE /rest/v1/vehicles?id=eq.<id> (Prefer: return=representation)

    PostgREST answers update/delete of a missing row with an empty
    representation, which is reported as NotFoundError.
    """

    def __init__(self, settings: SupabaseSettings, client: httpx.AsyncClient | None = None) -> None:
        self._settings = settings
        self._table_url = f"{settings.rest_url}/{settings.table}"
        self._client = client or httpx.AsyncClient(timeout=httpx.Timeout(settings.timeout))

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_vehicles(self) -> list[Vehicle]:
        records = await self._request(
            "GET",
            params={"select": "*", "order": "created_at.desc"},
        )
        return [self._to_domain(record) for record in records]

    async def insert(self, draft: VehicleDraft) -> Vehicle:
        records = await self._request("POST", json=self._to_payload(draft))
        if not records:
            raise RepositoryConnectionError("Vehicle store returned no record for insert")
        return self._to_domain(records[0])

    async def update(self, vehicle_id: str, draft: VehicleDraft) -> None:
        records = await self._request(
            "PATCH",
            params={"id": f"eq.{vehicle_id}"},
            json=self._to_payload(draft),
        )
        if not records:
            raise NotFoundError("Vehicle", vehicle_id)

    async def delete(self, vehicle_id: str) -> None:
        records = await self._request("DELETE", params={"id": f"eq.{vehicle_id}"})
        if not records:
            raise NotFoundError("Vehicle", vehicle_id)

    async def _request(
        self,
        method: str,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        headers = {
            "apikey": self._settings.key,
            "Authorization": f"Bearer {self._settings.key}",
            "Prefer": "return=representation",
        }
        try:
            response = await self._client.request(
                method, self._table_url, params=params, json=json, headers=headers
            )
        except httpx.HTTPError as exc:
            logger.error(
                "Vehicle store unreachable",
                extra={"method": method, "error": str(exc)},
            )
            raise RepositoryConnectionError("Vehicle store unreachable") from exc

        if response.status_code >= 400:
            self._raise_for_status(method, response)

        try:
            records = response.json()
        except ValueError as exc:
            raise _unreadable_response(method, exc) from exc
        if not isinstance(records, list):
            raise _unreadable_response(
                method, TypeError(f"expected a JSON array, got {type(records).__name__}")
            )
        return records

    @staticmethod
    def _raise_for_status(method: str, response: httpx.Response) -> None:
        try:
            body = response.json()
        except ValueError:
            body = {}
        sqlstate = str(body.get("code", "")) if isinstance(body, dict) else ""
        message = body.get("message", response.text) if isinstance(body, dict) else response.text

        if response.status_code == 409 or sqlstate.startswith(_CONSTRAINT_SQLSTATE_PREFIX):
            raise ConflictError("Vehicle violates a store constraint", detail=message)

        logger.error(
            "Vehicle store call failed",
            extra={"method": method, "status_code": response.status_code, "error": message},
        )
        raise RepositoryConnectionError(
            f"Vehicle store call failed with HTTP {response.status_code}",
            status_code=response.status_code,
        )

    @staticmethod
    def _to_payload(draft: VehicleDraft) -> dict[str, Any]:
        return {
            "make": draft.make,
            "model": draft.model,
            "year": draft.year,
            "mileage": draft.mileage,
            "vin": draft.vin,
        }

    @staticmethod
    def _to_domain(record: dict[str, Any]) -> Vehicle:
        try:
            return Vehicle(
                id=str(record["id"]),
                user_id=record.get("user_id"),
                make=record["make"],
                model=record["model"],
                year=int(record["year"]),
                mileage=int(record["mileage"]),
                vin=record.get("vin") or None,
                created_at=_parse_timestamp(record.get("created_at")),
                updated_at=_parse_timestamp(record.get("updated_at")),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise _unreadable_response("decode", exc) from exc


def _parse_timestamp(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _unreadable_response(method: str, exc: Exception) -> RepositoryConnectionError:
    """A 2xx body that is not a list of vehicle records is a store failure."""
    logger.error(
        "Vehicle store returned an unreadable response",
        extra={"method": method, "error": repr(exc)},
    )
    return RepositoryConnectionError("Vehicle store returned an unreadable response")
