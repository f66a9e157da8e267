from __future__ import annotations

from abc import ABC, abstractmethod

from parts_finder.domain.part import Part
from parts_finder.domain.recommendation import RuleSet
from parts_finder.domain.service_provider import ServiceProvider


class CatalogFeed(ABC):
    """
    Port for the read-only data behind the catalog views.

    Implementations hand out immutable sequences; callers never mutate them.
    Order is significant: parts and services are shown in feed order, and
    rules with the same priority keep their declaration order.
    """

    @abstractmethod
    def parts(self) -> tuple[Part, ...]:
        """Catalog parts in display order."""
        ...

    @abstractmethod
    def service_providers(self) -> tuple[ServiceProvider, ...]:
        ...

    @abstractmethod
    def recommendation_rules(self) -> RuleSet:
        """Maintenance rules evaluated against the selected vehicle."""
        ...
