from pydantic import BaseModel, Field


class PartResponseDTO(BaseModel):
    id: str
    name: str
    category: str
    price: str
    rating: float
    reviews: int
    image_url: str
    in_stock: bool
    compatibility: list[str]


class PartsSearchQueryDTO(BaseModel):
    """Query parameters for filtering the parts catalog."""

    q: str = Field(
        default="",
        description="Case-insensitive substring of the part name",
        examples=["filtro"],
    )
    category: str = Field(
        default="all",
        description='Exact (case-sensitive) category, or "all"',
        examples=["Frenos"],
    )


class PartsSearchResponseDTO(BaseModel):
    parts: list[PartResponseDTO]
    categories: list[str]
    total: int = Field(description="Catalog size before filtering")


class RecommendationResponseDTO(BaseModel):
    id: str
    title: str
    description: str
    priority: str
    category: str
    estimated_cost: str
    due_date: str


class RecommendationsResponseDTO(BaseModel):
    vehicle_id: str | None
    recommendations: list[RecommendationResponseDTO]


class ServiceProviderResponseDTO(BaseModel):
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
    services: list[str]


class CartResponseDTO(BaseModel):
    count: int
