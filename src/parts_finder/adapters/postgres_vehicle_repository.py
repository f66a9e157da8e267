"""PostgreSQL implementation of VehicleRepository."""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, TypeVar
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from parts_finder.domain.errors import ConflictError, NotFoundError, RepositoryConnectionError
from parts_finder.domain.vehicle import Vehicle, VehicleDraft
from parts_finder.infra.db.models.vehicle import VehicleRow
from parts_finder.infra.db.session import session_scope
from parts_finder.ports.vehicle_repository import VehicleRepository

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PostgresVehicleRepository(VehicleRepository):
    """
    PostgreSQL implementation of VehicleRepository.

    - Uses SQLAlchemy ORM for database access
    - Opens one session per store call (commit on success, rollback on error)
    - Runs blocking database work in a worker thread so callers can await it
    - Converts VehicleRow (infrastructure) to Vehicle (domain)
    - Translates IntegrityError to ConflictError and other
      SQLAlchemy failures to RepositoryConnectionError
    """

    def __init__(
        self,
        session_factory: sessionmaker[Session],
        on_close: Callable[[], None] | None = None,
    ) -> None:
        """
        Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker used for each store call
            on_close: Releases the connection pool behind the factory, if any
        """
        self._session_factory = session_factory
        self._on_close = on_close

    async def list_vehicles(self) -> list[Vehicle]:
        return await self._run(self._list)

    async def insert(self, draft: VehicleDraft) -> Vehicle:
        return await self._run(lambda session: self._insert(session, draft))

    async def update(self, vehicle_id: str, draft: VehicleDraft) -> None:
        await self._run(lambda session: self._update(session, vehicle_id, draft))

    async def delete(self, vehicle_id: str) -> None:
        await self._run(lambda session: self._delete(session, vehicle_id))

    async def aclose(self) -> None:
        if self._on_close is not None:
            await asyncio.to_thread(self._on_close)

    async def _run(self, work: Callable[[Session], T]) -> T:
        return await asyncio.to_thread(self._in_session, work)

    def _in_session(self, work: Callable[[Session], T]) -> T:
        try:
            with session_scope(self._session_factory) as session:
                return work(session)
        except IntegrityError as exc:
            logger.info("Vehicle store constraint violation", extra={"error": str(exc.orig)})
            raise ConflictError("Vehicle violates a store constraint") from exc
        except SQLAlchemyError as exc:
            logger.error("Vehicle store call failed", extra={"error": str(exc)})
            raise RepositoryConnectionError("Vehicle store call failed") from exc

    def _list(self, session: Session) -> list[Vehicle]:
        query = select(VehicleRow).order_by(VehicleRow.created_at.desc())
        rows = session.execute(query).scalars().all()
        return [self._to_domain(row) for row in rows]

    def _insert(self, session: Session, draft: VehicleDraft) -> Vehicle:
        row = VehicleRow(
            make=draft.make,
            model=draft.model,
            year=draft.year,
            mileage=draft.mileage,
            vin=draft.vin,
        )
        session.add(row)
        # Flush + refresh to pick up the generated id and server timestamps
        session.flush()
        session.refresh(row)
        return self._to_domain(row)

    def _update(self, session: Session, vehicle_id: str, draft: VehicleDraft) -> None:
        statement = (
            update(VehicleRow)
            .where(VehicleRow.id == self._parse_id(vehicle_id))
            .values(
                make=draft.make,
                model=draft.model,
                year=draft.year,
                mileage=draft.mileage,
                vin=draft.vin,
            )
        )
        if session.execute(statement).rowcount == 0:
            raise NotFoundError("Vehicle", vehicle_id)

    def _delete(self, session: Session, vehicle_id: str) -> None:
        statement = delete(VehicleRow).where(VehicleRow.id == self._parse_id(vehicle_id))
        if session.execute(statement).rowcount == 0:
            raise NotFoundError("Vehicle", vehicle_id)

    @staticmethod
    def _parse_id(vehicle_id: str) -> UUID:
        try:
            return UUID(vehicle_id)
        except ValueError:  # Invalid UUID format can never match a row
            raise NotFoundError("Vehicle", vehicle_id)

    @staticmethod
    def _to_domain(row: VehicleRow) -> Vehicle:
        """
        Convert database model (VehicleRow) to domain entity (Vehicle).

        Args:
            row: SQLAlchemy VehicleRow model

        Returns:
            Vehicle domain entity
        """
        return Vehicle(
            id=str(row.id),  # Convert UUID to string
            user_id=str(row.user_id) if row.user_id else None,
            make=row.make,
            model=row.model,
            year=row.year,
            mileage=row.mileage,
            vin=row.vin,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )
