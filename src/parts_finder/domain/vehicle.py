from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime

from parts_finder.domain.errors import ValidationError


MIN_YEAR = 1900
MAX_MILEAGE_KM = 9_999_999
VIN_LENGTH = 17
NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 50


@dataclass(frozen=True, slots=True)
class Vehicle:
    """A vehicle record as held by the persistence layer.

    ``id`` and the timestamps are assigned by the store, never by the client.
    """

    id: str
    make: str
    model: str
    year: int
    mileage: int
    vin: str | None = None
    user_id: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def display_name(self) -> str:
        return f"{self.year} {self.make} {self.model}"


@dataclass(frozen=True, slots=True)
class VehicleDraft:
    """Vehicle payload without server-assigned identity or timestamps."""

    make: str
    model: str
    year: int
    mileage: int
    vin: str | None = None

    def normalized(self) -> VehicleDraft:
        """Strip text fields and treat an empty VIN as absent."""
        vin = self.vin.strip() if self.vin else None
        return replace(
            self,
            make=self.make.strip(),
            model=self.model.strip(),
            vin=vin or None,
        )

    def validate(self, current_year: int | None = None) -> None:
        """
        Validate draft fields against the vehicle constraints.

        All violations are collected so the caller can report them together.

        Args:
            current_year: Reference year for the upper year bound (defaults to today)

        Raises:
            ValidationError: If any field violates its constraint
        """
        max_year = (current_year or date.today().year) + 1
        errors: list[dict[str, str]] = []

        for field_name, value in (("make", self.make), ("model", self.model)):
            length = len(value.strip())
            if length < NAME_MIN_LENGTH or length > NAME_MAX_LENGTH:
                errors.append(
                    {
                        "field": field_name,
                        "message": (
                            f"Must be between {NAME_MIN_LENGTH} and "
                            f"{NAME_MAX_LENGTH} characters"
                        ),
                        "code": "INVALID_LENGTH",
                    }
                )

        if not MIN_YEAR <= self.year <= max_year:
            errors.append(
                {
                    "field": "year",
                    "message": f"Must be between {MIN_YEAR} and {max_year}",
                    "code": "OUT_OF_RANGE",
                }
            )

        if not 0 <= self.mileage <= MAX_MILEAGE_KM:
            errors.append(
                {
                    "field": "mileage",
                    "message": f"Must be between 0 and {MAX_MILEAGE_KM}",
                    "code": "OUT_OF_RANGE",
                }
            )

        if self.vin is not None and len(self.vin) != VIN_LENGTH:
            errors.append(
                {
                    "field": "vin",
                    "message": f"Must be exactly {VIN_LENGTH} characters",
                    "code": "INVALID_LENGTH",
                }
            )

        if errors:
            raise ValidationError(errors=errors)

    @classmethod
    def from_vehicle(cls, vehicle: Vehicle) -> VehicleDraft:
        return cls(
            make=vehicle.make,
            model=vehicle.model,
            year=vehicle.year,
            mileage=vehicle.mileage,
            vin=vehicle.vin,
        )


@dataclass(frozen=True, slots=True)
class CollectionSnapshot:
    """Immutable view of the vehicle collection and its selection."""

    vehicles: tuple[Vehicle, ...] = ()
    selected: Vehicle | None = None

    @property
    def selected_id(self) -> str | None:
        return self.selected.id if self.selected else None
