"""Super Farmer API — FastAPI application factory."""


import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from superfarmer.core.cache import cache
from superfarmer.core.config import settings
from superfarmer.core.exceptions import register_exception_handlers
from superfarmer.core.log import configure_logging
from superfarmer.core.messaging import publisher
from superfarmer.db.base import async_session_factory, create_all, engine
from superfarmer.db.seed import seed
from superfarmer.middleware.request_log import RequestLogMiddleware
from superfarmer.schemas.common import HealthResponse

# v1 routers
from superfarmer.routers.v1.auth import router as auth_router
from superfarmer.routers.v1.commodities import router as commodities_router
from superfarmer.routers.v1.harvests import harvests_router, sales_router
from superfarmer.routers.v1.lands import land_commodities_router, lands_router
from superfarmer.routers.v1.market import demands_router, supplies_router
from superfarmer.routers.v1.market import router as prices_router
from superfarmer.routers.v1.regions import cities_router, provinces_router
from superfarmer.routers.v1.users import roles_router
from superfarmer.routers.v1.users import router as users_router

logger = logging.getLogger(__name__)

_V1_ROUTERS = (
    auth_router,
    users_router,
    roles_router,
    provinces_router,
    cities_router,
    commodities_router,
    lands_router,
    land_commodities_router,
    prices_router,
    supplies_router,
    demands_router,
    harvests_router,
    sales_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.auto_create_tables:
        await create_all()
    async with async_session_factory() as session:
        await seed(session)
        await session.commit()
    logger.info("%s started (%s)", settings.app_name, settings.app_env)
    yield
    await cache.close()
    await publisher.close()
    await engine.dispose()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.app_name,
        version="1.0.0",
        docs_url="/docs" if settings.app_env == "development" else None,
        redoc_url="/redoc" if settings.app_env == "development" else None,
        lifespan=lifespan,
    )

    # --- CORS ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # --- Request logging ---
    app.add_middleware(RequestLogMiddleware)

    # --- Global exception handlers ---
    register_exception_handlers(app)

    # --- v1 API routes (/api/v1/*) ---
    for router in _V1_ROUTERS:
        app.include_router(router, prefix="/api/v1")

    # --- Health check ---
    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health():
        return HealthResponse(app=settings.app_name, env=settings.app_env)

    return app


app = create_app()
