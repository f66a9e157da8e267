"""Per-user session composing the collection manager, catalog, matcher and cart.

Each UI event maps 1:1 to a method here. The session holds no state logic of
its own beyond the presentation state (active tab, search text, category).
"""

from __future__ import annotations

from enum import Enum

from parts_finder.domain.part import ALL_CATEGORIES
from parts_finder.domain.recommendation import Recommendation
from parts_finder.domain.service_provider import ServiceProvider
from parts_finder.domain.vehicle import CollectionSnapshot, Vehicle, VehicleDraft
from parts_finder.ports.catalog_feed import CatalogFeed
from parts_finder.ports.vehicle_repository import VehicleRepository
from parts_finder.use_cases.cart import CartCounter
from parts_finder.use_cases.filter_parts_catalog import (
    FilterPartsCatalog,
    FilterPartsCatalogRequest,
    FilterPartsCatalogResponse,
)
from parts_finder.use_cases.recommendations import RecommendationMatcher
from parts_finder.use_cases.vehicle_collection import VehicleCollectionManager


class Tab(str, Enum):
    HOME = "home"
    SEARCH = "search"
    SERVICES = "services"
    GARAGE = "garage"


class GarageSession:
    """One user's vehicles, catalog view and cart."""

    def __init__(
        self,
        vehicle_repository: VehicleRepository,
        feed: CatalogFeed,
        matcher: RecommendationMatcher | None = None,
    ) -> None:
        self._feed = feed
        self.collection = VehicleCollectionManager(vehicle_repository=vehicle_repository)
        self.cart = CartCounter()
        self._matcher = matcher or RecommendationMatcher()
        self.catalog = FilterPartsCatalog(self._feed.parts())

        self.active_tab = Tab.HOME
        self.search_query = ""
        self.category = ALL_CATEGORIES

    # Vehicle events

    async def refresh(self) -> CollectionSnapshot:
        return await self.collection.load()

    def select_vehicle(self, vehicle_id: str) -> Vehicle:
        return self.collection.select(vehicle_id)

    async def add_vehicle(self, draft: VehicleDraft) -> Vehicle:
        return await self.collection.add(draft)

    async def edit_vehicle(self, vehicle_id: str, draft: VehicleDraft) -> None:
        await self.collection.update(vehicle_id, draft)

    async def delete_vehicle(self, vehicle_id: str) -> None:
        await self.collection.remove(vehicle_id)

    # Catalog events

    def search_query_changed(self, text: str) -> None:
        self.search_query = text

    def category_changed(self, value: str) -> None:
        self.category = value

    def add_to_cart(self) -> int:
        return self.cart.increment()

    def switch_tab(self, tab: Tab) -> None:
        self.active_tab = tab

    # Derived views

    def visible_parts(self) -> FilterPartsCatalogResponse:
        return self.catalog.execute(
            FilterPartsCatalogRequest(query=self.search_query, category=self.category)
        )

    def recommendations(self) -> list[Recommendation]:
        return self._matcher.recommendations_for(
            self.collection.selected,
            self._feed.recommendation_rules(),
        )

    def services(self) -> tuple[ServiceProvider, ...]:
        return self._feed.service_providers()
