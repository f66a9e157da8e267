from __future__ import annotations


class CartCounter:
    """Session-local add-to-cart counter. Starts at 0; count only, no line items."""

    def __init__(self) -> None:
        self._count = 0

    @property
    def count(self) -> int:
        return self._count

    def increment(self) -> int:
        """Raise the count by exactly one and return the new value."""
        self._count += 1
        return self._count
