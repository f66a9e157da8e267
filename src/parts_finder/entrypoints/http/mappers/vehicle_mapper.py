from __future__ import annotations

from parts_finder.domain.vehicle import CollectionSnapshot, Vehicle, VehicleDraft
from parts_finder.entrypoints.http.dtos.vehicles import (
    VehicleCollectionResponseDTO,
    VehicleDraftDTO,
    VehicleResponseDTO,
)


class VehicleMapper:
    """Maps between REST DTOs and domain models for vehicles."""

    @staticmethod
    def to_domain_draft(dto: VehicleDraftDTO) -> VehicleDraft:
        """
        Converts the request payload to a domain draft.

        Args:
            dto: Vehicle payload from the request body

        Returns:
            VehicleDraft: Draft without id or timestamps (not yet validated)
        """
        return VehicleDraft(
            make=dto.make,
            model=dto.model,
            year=dto.year,
            mileage=dto.mileage,
            vin=dto.vin,
        )

    @staticmethod
    def to_vehicle_response(vehicle: Vehicle) -> VehicleResponseDTO:
        return VehicleResponseDTO(
            id=vehicle.id,
            user_id=vehicle.user_id,
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year,
            mileage=vehicle.mileage,
            vin=vehicle.vin,
            created_at=vehicle.created_at,
            updated_at=vehicle.updated_at,
        )

    @staticmethod
    def to_collection_response(snapshot: CollectionSnapshot) -> VehicleCollectionResponseDTO:
        return VehicleCollectionResponseDTO(
            vehicles=[VehicleMapper.to_vehicle_response(v) for v in snapshot.vehicles],
            selected_id=snapshot.selected_id,
        )
