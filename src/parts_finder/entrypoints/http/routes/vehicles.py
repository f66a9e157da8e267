from fastapi import APIRouter, Depends, Response, status

from parts_finder.entrypoints.http.dependencies import get_garage_session
from parts_finder.entrypoints.http.dtos.vehicles import (
    VehicleCollectionResponseDTO,
    VehicleDraftDTO,
    VehicleResponseDTO,
)
from parts_finder.entrypoints.http.error_responses import ErrorResponse
from parts_finder.entrypoints.http.mappers.vehicle_mapper import VehicleMapper
from parts_finder.use_cases.garage_session import GarageSession


router = APIRouter(prefix="/vehicles", tags=["Vehicles"])

STORE_ERRORS = {
    409: {"model": ErrorResponse, "description": "Another vehicle operation is in progress"},
    503: {"model": ErrorResponse, "description": "Vehicle store unavailable"},
}


@router.get(
    "",
    response_model=VehicleCollectionResponseDTO,
    summary="List vehicles",
    description="""
    Current in-memory vehicle collection, newest first, with the selected vehicle id.

    Does not contact the store; use `POST /v1/vehicles/sync` to reload.
    """,
)
async def list_vehicles(
    session: GarageSession = Depends(get_garage_session),
) -> VehicleCollectionResponseDTO:
    return VehicleMapper.to_collection_response(session.collection.snapshot())


@router.post(
    "/sync",
    response_model=VehicleCollectionResponseDTO,
    summary="Reload vehicles from the store",
    responses={503: STORE_ERRORS[503]},
)
async def sync_vehicles(
    session: GarageSession = Depends(get_garage_session),
) -> VehicleCollectionResponseDTO:
    snapshot = await session.refresh()
    return VehicleMapper.to_collection_response(snapshot)


@router.post(
    "",
    response_model=VehicleResponseDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Add a vehicle",
    description="""
    Create a vehicle in the store, then reload the collection.

    The first vehicle added to an empty collection becomes the selected vehicle.

    ## Validation
    - make/model: 2 to 50 characters
    - year: 1900 to next year
    - mileage: 0 to 9,999,999 km
    - vin: exactly 17 characters, or omitted
    """,
    responses={422: {"model": ErrorResponse}, **STORE_ERRORS},
)
async def add_vehicle(
    payload: VehicleDraftDTO,
    session: GarageSession = Depends(get_garage_session),
) -> VehicleResponseDTO:
    """Parse → execute → map → return."""
    draft = VehicleMapper.to_domain_draft(payload)
    created = await session.add_vehicle(draft)
    return VehicleMapper.to_vehicle_response(created)


@router.put(
    "/{vehicle_id}",
    response_model=VehicleCollectionResponseDTO,
    summary="Edit a vehicle",
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}, **STORE_ERRORS},
)
async def edit_vehicle(
    vehicle_id: str,
    payload: VehicleDraftDTO,
    session: GarageSession = Depends(get_garage_session),
) -> VehicleCollectionResponseDTO:
    await session.edit_vehicle(vehicle_id, VehicleMapper.to_domain_draft(payload))
    return VehicleMapper.to_collection_response(session.collection.snapshot())


@router.delete(
    "/{vehicle_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a vehicle",
    description="""
    Delete a vehicle from the store, then reload the collection.

    Deleting the selected vehicle selects the newest remaining vehicle,
    or clears the selection when none remain.
    """,
    responses={404: {"model": ErrorResponse}, **STORE_ERRORS},
)
async def delete_vehicle(
    vehicle_id: str,
    session: GarageSession = Depends(get_garage_session),
) -> Response:
    await session.delete_vehicle(vehicle_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/{vehicle_id}/select",
    response_model=VehicleCollectionResponseDTO,
    summary="Select a vehicle",
    description="Scope recommendations to a vehicle of the current collection. No store call.",
    responses={404: {"model": ErrorResponse}},
)
async def select_vehicle(
    vehicle_id: str,
    session: GarageSession = Depends(get_garage_session),
) -> VehicleCollectionResponseDTO:
    session.select_vehicle(vehicle_id)
    return VehicleMapper.to_collection_response(session.collection.snapshot())
