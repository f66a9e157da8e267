"""
Dependency injection for FastAPI routes.

Key principle: one GarageSession per application instance. The session owns
the vehicle collection and the cart, so it must live on ``app.state`` and
never be rebuilt per request.
"""

from __future__ import annotations

import logging

from fastapi import Request

from parts_finder.adapters.in_memory_vehicle_repository import InMemoryVehicleRepository
from parts_finder.adapters.postgres_vehicle_repository import PostgresVehicleRepository
from parts_finder.adapters.supabase_vehicle_repository import SupabaseVehicleRepository
from parts_finder.infra.db.config import database_configured
from parts_finder.infra.db.session import dispose_engine, get_session_local
from parts_finder.infra.rest.config import supabase_settings
from parts_finder.ports.vehicle_repository import VehicleRepository
from parts_finder.use_cases.garage_session import GarageSession

logger = logging.getLogger(__name__)


def build_vehicle_repository() -> VehicleRepository:
    """
    Pick the vehicle store from the environment.

    Precedence:
    1. SUPABASE_URL + SUPABASE_KEY → hosted PostgREST store
    2. DATABASE_URL → PostgreSQL via SQLAlchemy
    3. Nothing configured → in-memory store (development only)

    Returns:
        VehicleRepository: Configured store adapter
    """
    settings = supabase_settings()
    if settings is not None:
        logger.info("Using hosted vehicle store", extra={"store_url": settings.url})
        return SupabaseVehicleRepository(settings=settings)

    if database_configured():
        logger.info("Using PostgreSQL vehicle store")
        return PostgresVehicleRepository(
            session_factory=get_session_local(), on_close=dispose_engine
        )

    logger.warning("No vehicle store configured, falling back to in-memory store")
    return InMemoryVehicleRepository()


def get_garage_session(request: Request) -> GarageSession:
    """
    Provides the application's GarageSession.

    Args:
        request: Current request (carries the app and its state)

    Returns:
        GarageSession: The session created by build_app()
    """
    return request.app.state.garage_session
