from __future__ import annotations

from parts_finder.domain.part import Part
from parts_finder.domain.recommendation import Recommendation
from parts_finder.domain.service_provider import ServiceProvider
from parts_finder.entrypoints.http.dtos.catalog import (
    PartResponseDTO,
    PartsSearchResponseDTO,
    RecommendationResponseDTO,
    ServiceProviderResponseDTO,
)
from parts_finder.use_cases.filter_parts_catalog import FilterPartsCatalogResponse


class CatalogMapper:
    """Maps catalog, recommendation and service domain models to REST DTOs."""

    @staticmethod
    def to_part_response(part: Part) -> PartResponseDTO:
        """
        Converts a domain Part to its REST response DTO.

        Handles Decimal → str conversion at the boundary.
        """
        return PartResponseDTO(
            id=part.id,
            name=part.name,
            category=part.category,
            price=str(part.price),
            rating=part.rating,
            reviews=part.reviews,
            image_url=part.image_url,
            in_stock=part.in_stock,
            compatibility=list(part.compatibility),
        )

    @staticmethod
    def to_parts_response(result: FilterPartsCatalogResponse) -> PartsSearchResponseDTO:
        return PartsSearchResponseDTO(
            parts=[CatalogMapper.to_part_response(part) for part in result.parts],
            categories=result.categories,
            total=result.total_count,
        )

    @staticmethod
    def to_recommendation_response(recommendation: Recommendation) -> RecommendationResponseDTO:
        return RecommendationResponseDTO(
            id=recommendation.id,
            title=recommendation.title,
            description=recommendation.description,
            priority=recommendation.priority.value,
            category=recommendation.category.value,
            estimated_cost=recommendation.estimated_cost,
            due_date=recommendation.due_date,
        )

    @staticmethod
    def to_service_response(provider: ServiceProvider) -> ServiceProviderResponseDTO:
        return ServiceProviderResponseDTO(
            id=provider.id,
            name=provider.name,
            type=provider.type,
            rating=provider.rating,
            reviews=provider.reviews,
            distance=provider.distance,
            address=provider.address,
            phone=provider.phone,
            image_url=provider.image_url,
            open_now=provider.open_now,
            services=list(provider.services),
        )
