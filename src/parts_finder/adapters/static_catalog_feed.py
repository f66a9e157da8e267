"""Static read-only feeds: parts catalog, nearby services and maintenance rules.

The feeds are consumed, never mutated, by the rest of the application.
"""

from __future__ import annotations

from decimal import Decimal

from parts_finder.domain.part import Part
from parts_finder.domain.recommendation import (
    Always,
    Priority,
    Recommendation,
    RecommendationCategory,
    RecommendationRule,
    RuleSet,
)
from parts_finder.domain.service_provider import ServiceProvider
from parts_finder.ports.catalog_feed import CatalogFeed


PART_IMAGE_URL = (
    "https://images.unsplash.com/photo-1758381358962-efc41be53986"
    "?crop=entropy&cs=tinysrgb&fit=max&fm=jpg&q=80&w=1080"
)
SERVICE_IMAGE_URL = (
    "https://images.unsplash.com/photo-1642399299924-c9c97617bf86"
    "?crop=entropy&cs=tinysrgb&fit=max&fm=jpg&q=80&w=1080"
)


PARTS: tuple[Part, ...] = (
    Part(
        id="1",
        name="Filtro de Aceite",
        category="Mantenimiento",
        price=Decimal("12.99"),
        rating=4.5,
        reviews=234,
        image_url=PART_IMAGE_URL,
    ),
    Part(
        id="2",
        name="Pastillas de Freno",
        category="Frenos",
        price=Decimal("89.99"),
        rating=4.8,
        reviews=567,
        image_url=PART_IMAGE_URL,
    ),
    Part(
        id="3",
        name="Filtro de Aire",
        category="Mantenimiento",
        price=Decimal("24.99"),
        rating=4.6,
        reviews=189,
        image_url=PART_IMAGE_URL,
    ),
    Part(
        id="4",
        name="Bujías (Juego de 4)",
        category="Motor",
        price=Decimal("34.99"),
        rating=4.7,
        reviews=423,
        image_url=PART_IMAGE_URL,
        in_stock=False,
    ),
    Part(
        id="5",
        name="Batería",
        category="Eléctrico",
        price=Decimal("129.99"),
        rating=4.9,
        reviews=891,
        image_url=PART_IMAGE_URL,
    ),
    Part(
        id="6",
        name="Escobillas Limpiaparabrisas",
        category="Mantenimiento",
        price=Decimal("19.99"),
        rating=4.3,
        reviews=145,
        image_url=PART_IMAGE_URL,
    ),
)


SERVICE_PROVIDERS: tuple[ServiceProvider, ...] = (
    ServiceProvider(
        id="1",
        name="Reparación Rápida Auto",
        type="Servicio Completo",
        rating=4.8,
        reviews=342,
        distance="3.7 km",
        address="Calle Principal 123, Ciudad, ST 12345",
        phone="(555) 123-4567",
        image_url=SERVICE_IMAGE_URL,
        open_now=True,
        services=("Cambio de Aceite", "Servicio de Frenos", "Rotación de Llantas"),
    ),
    ServiceProvider(
        id="2",
        name="Elite Auto Care",
        type="Taller Especializado",
        rating=4.9,
        reviews=567,
        distance="6.6 km",
        address="Avenida Roble 456, Ciudad, ST 12345",
        phone="(555) 987-6543",
        image_url=SERVICE_IMAGE_URL,
        open_now=True,
        services=("Diagnósticos", "Reparación de Motor", "Transmisión"),
    ),
    ServiceProvider(
        id="3",
        name="Frenos y Llantas Económicas",
        type="Servicio Rápido",
        rating=4.5,
        reviews=189,
        distance="2.9 km",
        address="Calle Olmo 789, Ciudad, ST 12345",
        phone="(555) 456-7890",
        image_url=SERVICE_IMAGE_URL,
        open_now=False,
        services=("Reparación de Frenos", "Servicio de Llantas", "Alineación"),
    ),
)


DEFAULT_RULE_SET: RuleSet = (
    RecommendationRule(
        recommendation=Recommendation(
            id="1",
            title="Cambio de Aceite Pendiente",
            description=(
                "Su vehículo necesita un cambio de aceite según el kilometraje. "
                "Los cambios regulares de aceite ayudan a mantener la salud del motor."
            ),
            priority=Priority.HIGH,
            category=RecommendationCategory.MAINTENANCE,
            estimated_cost="$40-60",
            due_date="30 Oct 2025",
        ),
        predicate=Always(),
    ),
    RecommendationRule(
        recommendation=Recommendation(
            id="2",
            title="Rotación de Llantas Recomendada",
            description=(
                "Rote sus llantas cada 8,000-12,000 km para asegurar un desgaste "
                "uniforme y extender su vida útil."
            ),
            priority=Priority.MEDIUM,
            category=RecommendationCategory.MAINTENANCE,
            estimated_cost="$25-50",
            due_date="15 Nov 2025",
        ),
        predicate=Always(),
    ),
    RecommendationRule(
        recommendation=Recommendation(
            id="3",
            title="Reemplazo de Filtro de Aire",
            description=(
                "Un filtro de aire limpio mejora la eficiencia del combustible "
                "y el rendimiento del motor."
            ),
            priority=Priority.LOW,
            category=RecommendationCategory.MAINTENANCE,
            estimated_cost="$20-40",
            due_date="1 Dic 2025",
        ),
        predicate=Always(),
    ),
)


class StaticCatalogFeed(CatalogFeed):
    """Read-only feed over the bundled parts, services and rule data."""

    def __init__(
        self,
        parts: tuple[Part, ...] = PARTS,
        services: tuple[ServiceProvider, ...] = SERVICE_PROVIDERS,
        rules: RuleSet = DEFAULT_RULE_SET,
    ) -> None:
        for part in parts:
            part.validate()
        self._parts = parts
        self._services = services
        self._rules = rules

    def parts(self) -> tuple[Part, ...]:
        return self._parts

    def service_providers(self) -> tuple[ServiceProvider, ...]:
        return self._services

    def recommendation_rules(self) -> RuleSet:
        return self._rules
