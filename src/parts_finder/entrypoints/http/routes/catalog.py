from fastapi import APIRouter, Depends

from parts_finder.entrypoints.http.dependencies import get_garage_session
from parts_finder.entrypoints.http.dtos.catalog import (
    CartResponseDTO,
    PartsSearchQueryDTO,
    PartsSearchResponseDTO,
    RecommendationsResponseDTO,
    ServiceProviderResponseDTO,
)
from parts_finder.entrypoints.http.mappers.catalog_mapper import CatalogMapper
from parts_finder.use_cases.filter_parts_catalog import FilterPartsCatalogRequest
from parts_finder.use_cases.garage_session import GarageSession


router = APIRouter(tags=["Catalog"])


@router.get(
    "/parts",
    response_model=PartsSearchResponseDTO,
    summary="Search parts catalog",
    description="""
    Filter the parts catalog by name and category.

    ## Filters
    - `q`: case-insensitive substring of the part name (empty = no text filter)
    - `category`: exact, case-sensitive category; `all` disables the filter
    - Catalog order is preserved

    ## Example
    ```
    GET /v1/parts?q=filtro&category=Mantenimiento
    ```
    """,
)
async def search_parts(
    query: PartsSearchQueryDTO = Depends(),
    session: GarageSession = Depends(get_garage_session),
) -> PartsSearchResponseDTO:
    result = session.catalog.execute(
        FilterPartsCatalogRequest(query=query.q, category=query.category)
    )
    return CatalogMapper.to_parts_response(result)


@router.get(
    "/recommendations",
    response_model=RecommendationsResponseDTO,
    summary="Maintenance recommendations for the selected vehicle",
    description="Ordered high → medium → low priority. Empty when no vehicle is selected.",
)
async def get_recommendations(
    session: GarageSession = Depends(get_garage_session),
) -> RecommendationsResponseDTO:
    return RecommendationsResponseDTO(
        vehicle_id=session.collection.selected_id,
        recommendations=[
            CatalogMapper.to_recommendation_response(r) for r in session.recommendations()
        ],
    )


@router.get(
    "/services",
    response_model=list[ServiceProviderResponseDTO],
    summary="Nearby service providers",
)
async def list_services(
    session: GarageSession = Depends(get_garage_session),
) -> list[ServiceProviderResponseDTO]:
    return [CatalogMapper.to_service_response(s) for s in session.services()]


@router.get("/cart", response_model=CartResponseDTO, summary="Cart item count")
async def get_cart(session: GarageSession = Depends(get_garage_session)) -> CartResponseDTO:
    return CartResponseDTO(count=session.cart.count)


@router.post("/cart/items", response_model=CartResponseDTO, summary="Add a part to the cart")
async def add_to_cart(session: GarageSession = Depends(get_garage_session)) -> CartResponseDTO:
    return CartResponseDTO(count=session.add_to_cart())
