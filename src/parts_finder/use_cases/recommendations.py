from __future__ import annotations

from datetime import date
from typing import Callable, Iterable

from parts_finder.domain.recommendation import Recommendation, RecommendationRule
from parts_finder.domain.vehicle import Vehicle


class RecommendationMatcher:
    """
    Select and order the maintenance recommendations that apply to a vehicle.

    The matcher only evaluates rule predicates; it never creates or stores
    recommendations. Output order is priority (high, medium, low) and, within
    a priority, the rule set's declaration order.
    """

    def __init__(self, today: Callable[[], date] = date.today) -> None:
        self._today = today

    def recommendations_for(
        self,
        vehicle: Vehicle | None,
        rule_set: Iterable[RecommendationRule],
        today: date | None = None,
    ) -> list[Recommendation]:
        """
        Args:
            vehicle: Selected vehicle, or None when nothing is selected
            rule_set: Rules in declaration order
            today: Reference date for age-based predicates (defaults to the clock)

        Returns:
            Matching recommendations; empty when vehicle is None
        """
        if vehicle is None:
            return []

        reference = today or self._today()
        matched = [rule for rule in rule_set if rule.applies_to(vehicle, reference)]

        # list.sort is stable, so declaration order survives within a priority
        matched.sort(key=lambda rule: rule.priority.rank)
        return [rule.recommendation for rule in matched]
