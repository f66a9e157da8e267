from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from parts_finder.domain.errors import ValidationError


# Sentinel category that disables category filtering
ALL_CATEGORIES = "all"


@dataclass(frozen=True, slots=True)
class Part:
    """Read-only catalog entry."""

    id: str
    name: str
    category: str
    price: Decimal
    rating: float
    reviews: int
    image_url: str
    in_stock: bool = True
    compatibility: tuple[str, ...] = ()

    def validate(self) -> None:
        """
        Validate catalog invariants.

        Raises:
            ValidationError: If price, rating or review count is out of range
        """
        # Guardrails: prevent float leakage past boundary
        if not isinstance(self.price, Decimal):
            raise ValidationError("price must be Decimal (no floats past the boundary)")
        if self.price < 0:
            raise ValidationError("price must be >= 0", part_id=self.id)
        if not 0 <= self.rating <= 5:
            raise ValidationError("rating must be between 0 and 5", part_id=self.id)
        if self.reviews < 0:
            raise ValidationError("reviews must be >= 0", part_id=self.id)


@dataclass(frozen=True, slots=True)
class CatalogQuery:
    """Free-text query plus category selector for the parts catalog."""

    text: str = ""
    category: str = ALL_CATEGORIES

    def matches(self, part: Part) -> bool:
        if self.text and self.text.lower() not in part.name.lower():
            return False
        if self.category != ALL_CATEGORIES and part.category != self.category:
            return False
        return True
