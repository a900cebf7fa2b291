"""Marketplace API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MarketplaceError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and asset uploader initialized on startup via lifespan context manager
    - Unmatched paths answer 404 "This route does not exist"

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Uploader credentials passed as a CloudinaryConfig value, built once here
    - Catch-all route registered last so every real route takes precedence
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from marketplace.api.error_handlers import register_error_handlers
from marketplace.core.errors import RouteNotFoundError
from marketplace.infrastructure import asset_uploader, database
from marketplace.infrastructure.asset_uploader import CloudinaryConfig, init_uploader
from marketplace.infrastructure.database import init_db
from marketplace.infrastructure.observability import setup_logging
from marketplace.config import get_settings
from marketplace.api.routes import health, offer, user

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_uploader(CloudinaryConfig(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
        folder=settings.cloudinary_folder,
        base_url=settings.cloudinary_base_url,
        timeout_seconds=settings.upload_timeout_seconds,
    ))
    logger.info("Marketplace API started")
    yield
    if asset_uploader.uploader:
        await asset_uploader.uploader.aclose()
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("Marketplace API shutting down")


app = FastAPI(
    title="Marketplace API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(user.router)
app.include_router(offer.router)


@app.get("/")
async def welcome():
    return {"message": "Welcome to the marketplace API"}


@app.api_route(
    "/{path:path}",
    methods=["GET", "HEAD", "OPTIONS", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def route_not_found(path: str):
    raise RouteNotFoundError()
