"""FastAPI application factory."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from ..config import Settings, load_settings
from ..core.auth import AccessGate
from ..core.storage import JSONCollection
from ..data.bets import BetService
from ..data.images import ImageStore
from ..data.names import NameService
from ..data.offers import OfferService
from ..data.wishlist import WishlistService
from ..errors import BabyboardError
from .middleware import install_middleware
from .routes import Services, register_routes

log = logging.getLogger(__name__)


def build_services(settings: Settings) -> Services:
    """Create the collection services, bootstrapping files on disk."""
    collections = {
        "names": JSONCollection(settings.names_path),
        "wishlist": JSONCollection(settings.wishlist_path),
        "bets": JSONCollection(settings.bets_path),
        "offers": JSONCollection(settings.offers_path),
    }
    for collection in collections.values():
        collection.ensure()
    images = ImageStore(settings.uploads_dir)
    images.ensure()

    return Services(
        names=NameService(collections["names"]),
        wishlist=WishlistService(collections["wishlist"]),
        bets=BetService(collections["bets"]),
        offers=OfferService(collections["offers"], images),
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or load_settings()
    services = build_services(settings)

    app = FastAPI(title=settings.app_title)
    app.state.settings = settings
    app.state.services = services

    install_middleware(app, settings)
    # Added last so it also wraps the 413/429 responses of the guards
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(BabyboardError)
    async def handle_babyboard_error(request: Request, exc: BabyboardError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def handle_bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        log.debug("Rejected request body on %s: %s", request.url.path, exc.errors())
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    router = APIRouter(prefix="/api")
    register_routes(router, services, AccessGate(settings.admin_pin), settings)
    app.include_router(router)

    app.mount(
        ImageStore.url_prefix,
        StaticFiles(directory=settings.uploads_dir),
        name="uploads",
    )
    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
    else:
        log.info("Static directory %s not found, serving the API only", static_dir)

    return app
