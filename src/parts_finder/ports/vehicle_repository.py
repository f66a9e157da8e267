from __future__ import annotations

from abc import ABC, abstractmethod

from parts_finder.domain.vehicle import Vehicle, VehicleDraft


class VehicleRepository(ABC):
    """
    Port for remote vehicle persistence.

    Thin boundary over the store: no business logic and no retries.
    Retry policy, if any, belongs to the caller.

    Contract (Preconditions):
        - drafts must be pre-validated by caller (collection manager)
        - Implementations trust inputs are valid and do not re-validate

    Failure contract:
        - RepositoryConnectionError: store unreachable or call failed
        - ConflictError: insert rejected by a store constraint
        - NotFoundError: update/delete referenced a missing id
    """

    @abstractmethod
    async def list_vehicles(self) -> list[Vehicle]:
        """
        List all vehicle records.

        Returns:
            Vehicles ordered by created_at descending (newest first)

        Raises:
            RepositoryConnectionError: If the store call fails
        """
        ...

    @abstractmethod
    async def insert(self, draft: VehicleDraft) -> Vehicle:
        """
        Create a vehicle record.

        Args:
            draft: Vehicle payload without id or timestamps - pre-validated

        Returns:
            The created vehicle with store-assigned id and timestamps

        Raises:
            RepositoryConnectionError: If the store call fails
            ConflictError: If a store constraint rejects the record
        """
        ...

    @abstractmethod
    async def update(self, vehicle_id: str, draft: VehicleDraft) -> None:
        """
        Update the record keyed by ``vehicle_id``.

        Raises:
            RepositoryConnectionError: If the store call fails
            NotFoundError: If no record has the given id
        """
        ...

    @abstractmethod
    async def delete(self, vehicle_id: str) -> None:
        """
        Delete the record keyed by ``vehicle_id``.

        Raises:
            RepositoryConnectionError: If the store call fails
            NotFoundError: If no record has the given id
        """
        ...
