from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ServiceProvider:
    """Nearby service provider, consumed from a static read-only feed."""

    id: str
    name: str
    type: str
    rating: float
    reviews: int
    distance: str
    address: str
    phone: str
    image_url: str
    open_now: bool
    services: tuple[str, ...] = ()
