"""Maintenance recommendations and the declarative rules that produce them.

A rule pairs a recommendation template with a predicate over vehicle
attributes. Predicates are plain frozen dataclasses so new maintenance
intervals are added as data, without touching the matcher.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Protocol

from parts_finder.domain.vehicle import Vehicle


class Priority(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Sort key: high first."""
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {Priority.HIGH: 0, Priority.MEDIUM: 1, Priority.LOW: 2}


class RecommendationCategory(str, Enum):
    MAINTENANCE = "maintenance"
    REPAIR = "repair"
    UPGRADE = "upgrade"


@dataclass(frozen=True, slots=True)
class Recommendation:
    id: str
    title: str
    description: str
    priority: Priority
    category: RecommendationCategory
    estimated_cost: str
    due_date: str


class VehiclePredicate(Protocol):
    def evaluate(self, vehicle: Vehicle, today: date) -> bool: ...


# ==============================================================================
# Predicates
# ==============================================================================


@dataclass(frozen=True, slots=True)
class Always:
    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class MileageAtLeast:
    """Mileage threshold crossed (inclusive)."""

    km: int

    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return vehicle.mileage >= self.km


@dataclass(frozen=True, slots=True)
class MileageBetween:
    """Mileage within ``[min_km, max_km)``."""

    min_km: int
    max_km: int

    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return self.min_km <= vehicle.mileage < self.max_km


@dataclass(frozen=True, slots=True)
class VehicleAgeAtLeast:
    """Elapsed model years since the vehicle's year (inclusive)."""

    years: int

    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return today.year - vehicle.year >= self.years


@dataclass(frozen=True, slots=True)
class HasVin:
    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return vehicle.vin is not None


@dataclass(frozen=True, slots=True)
class MakeIs:
    """Case-insensitive make match."""

    make: str

    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return vehicle.make.lower() == self.make.lower()


@dataclass(frozen=True, slots=True)
class AllOf:
    predicates: tuple[VehiclePredicate, ...]

    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return all(p.evaluate(vehicle, today) for p in self.predicates)


@dataclass(frozen=True, slots=True)
class AnyOf:
    predicates: tuple[VehiclePredicate, ...]

    def evaluate(self, vehicle: Vehicle, today: date) -> bool:
        return any(p.evaluate(vehicle, today) for p in self.predicates)


# ==============================================================================
# Rules
# ==============================================================================


@dataclass(frozen=True, slots=True)
class RecommendationRule:
    recommendation: Recommendation
    predicate: VehiclePredicate = Always()

    @property
    def priority(self) -> Priority:
        return self.recommendation.priority

    def applies_to(self, vehicle: Vehicle, today: date) -> bool:
        return self.predicate.evaluate(vehicle, today)


RuleSet = tuple[RecommendationRule, ...]
