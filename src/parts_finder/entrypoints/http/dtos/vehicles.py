from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class VehicleResponseDTO(BaseModel):
    id: str
    user_id: str | None = None
    make: str
    model: str
    year: int
    mileage: int
    vin: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class VehicleCollectionResponseDTO(BaseModel):
    """The vehicle collection in canonical order plus the current selection."""

    vehicles: list[VehicleResponseDTO]
    selected_id: str | None = Field(
        default=None,
        description="Selected vehicle id; null only when the collection is empty",
    )


class VehicleDraftDTO(BaseModel):
    """Request payload for creating or editing a vehicle.

    Range and length rules (year, mileage, VIN) are enforced by the domain
    so every constraint violation is reported in one VALIDATION_ERROR response.
    """

    make: str = Field(description="Vehicle make", examples=["Toyota"])
    model: str = Field(description="Vehicle model", examples=["Corolla"])
    year: int = Field(description="Model year (1900 to next year)", examples=[2020])
    mileage: int = Field(description="Odometer reading in kilometers", examples=[45000])
    vin: str | None = Field(
        default=None,
        description="Vehicle identification number, exactly 17 characters when present",
        examples=["1HGBH41JXMN109186"],
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "make": "Toyota",
                "model": "Corolla",
                "year": 2020,
                "mileage": 45000,
                "vin": "1HGBH41JXMN109186",
            }
        }
    )
