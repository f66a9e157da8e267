import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from parts_finder.adapters.static_catalog_feed import StaticCatalogFeed
from parts_finder.domain.errors import SyncError
from parts_finder.entrypoints.http.dependencies import build_vehicle_repository
from parts_finder.entrypoints.http.exception_handlers import register_exception_handlers
from parts_finder.entrypoints.http.routes.catalog import router as catalog_router
from parts_finder.entrypoints.http.routes.health import router as health_router
from parts_finder.entrypoints.http.routes.vehicles import router as vehicles_router
from parts_finder.infra.logging_config import setup_logging
from parts_finder.ports.catalog_feed import CatalogFeed
from parts_finder.ports.vehicle_repository import VehicleRepository
from parts_finder.use_cases.garage_session import GarageSession

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Load the vehicle collection on startup and release the store client on shutdown.

    A store outage at startup is not fatal: the collection starts empty and
    can be reloaded through POST /v1/vehicles/sync.
    """
    session: GarageSession = app.state.garage_session
    try:
        await session.refresh()
    except SyncError as exc:
        logger.warning("Initial vehicle load failed", extra={"error": exc.message})

    yield

    aclose = getattr(app.state.vehicle_repository, "aclose", None)
    if aclose is not None:
        await aclose()


def build_app(
    vehicle_repository: VehicleRepository | None = None,
    feed: CatalogFeed | None = None,
) -> FastAPI:
    setup_logging()

    app = FastAPI(
        title="Parts Finder API",
        description="""
        Vehicle garage, parts catalog and maintenance recommendations.

        ## Features
        - Register, edit, delete and select vehicles
        - Maintenance recommendations for the selected vehicle
        - Search the parts catalog by name and category
        - Browse nearby service providers
        - Cart item counter

        ## Consistency
        Every vehicle change is written to the store and followed by a full
        reload, so ids, timestamps and ordering always come from the store.
        A change requested while another is in flight is rejected (409 BUSY).

        ## Error Handling
        All errors return structured JSON responses with error codes.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    repository = vehicle_repository or build_vehicle_repository()
    app.state.vehicle_repository = repository
    app.state.garage_session = GarageSession(
        vehicle_repository=repository, feed=feed or StaticCatalogFeed()
    )

    register_exception_handlers(app)

    app.include_router(health_router)
    app.include_router(vehicles_router, prefix="/v1")
    app.include_router(catalog_router, prefix="/v1")

    return app


app = build_app()
