from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from parts_finder.domain.part import ALL_CATEGORIES, CatalogQuery, Part


def filter_catalog(catalog: Sequence[Part], query: str, category: str) -> list[Part]:
    """
    Visible subset of the catalog, in catalog order.

    A part is kept iff (query is empty OR its name contains query,
    case-insensitive) AND (category is "all" OR equals the part's category,
    case-sensitive). Pure: identical inputs always give identical output.
    """
    catalog_query = CatalogQuery(text=query, category=category)
    return [part for part in catalog if catalog_query.matches(part)]


def catalog_categories(catalog: Sequence[Part]) -> list[str]:
    """Category selector values: the "all" sentinel, then categories in first-seen order."""
    categories = [ALL_CATEGORIES]
    for part in catalog:
        if part.category not in categories:
            categories.append(part.category)
    return categories


@dataclass(frozen=True, slots=True)
class FilterPartsCatalogRequest:
    query: str = ""
    category: str = ALL_CATEGORIES


@dataclass(frozen=True, slots=True)
class FilterPartsCatalogResponse:
    parts: list[Part]
    categories: list[str]
    total_count: int  # Catalog size before filtering


class FilterPartsCatalog:
    """
    Parts catalog search by free text and category.

    Empty results are valid, not an error.
    """

    def __init__(self, catalog: Sequence[Part]) -> None:
        self._catalog = tuple(catalog)

    def execute(self, request: FilterPartsCatalogRequest) -> FilterPartsCatalogResponse:
        return FilterPartsCatalogResponse(
            parts=filter_catalog(self._catalog, request.query, request.category),
            categories=catalog_categories(self._catalog),
            total_count=len(self._catalog),
        )
