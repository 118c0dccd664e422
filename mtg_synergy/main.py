"""
MTG Synergy Analyzer - Main FastAPI Application.

Entry point for the backend API server.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from mtg_synergy import __version__
from mtg_synergy.api.routes import api_router
from mtg_synergy.core.config import settings
from mtg_synergy.core.errors import SynergyError
from mtg_synergy.core.logging import setup_logging
from mtg_synergy.services.collection import build_collection_store
from mtg_synergy.services.scryfall import FetchThrottle, ScryfallLookup

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan manager.

    Creates the shared throttle, Scryfall lookup and collection store on
    startup and releases them on shutdown.
    """
    # Startup
    setup_logging(settings.log_level)
    logger.info(f"Starting {settings.app_name} on http://localhost:{settings.port}")

    throttle = FetchThrottle(settings.scryfall_min_request_interval)
    app.state.card_lookup = ScryfallLookup(
        throttle,
        base_url=settings.scryfall_api_url,
        user_agent=settings.scryfall_user_agent,
        timeout=settings.scryfall_timeout,
    )
    app.state.collection_store = build_collection_store(settings)
    await app.state.collection_store.init()
    logger.info("Collection store ready")

    yield

    # Shutdown
    logger.info(f"Shutting down {settings.app_name}...")
    await app.state.card_lookup.close()
    await app.state.collection_store.close()


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Scryfall card lookups and per-user card collections",
    version=__version__,
    lifespan=lifespan,
    docs_url="/docs" if settings.debug else None,
    redoc_url="/redoc" if settings.debug else None,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


# === Error handlers: every error body is {"error": "<text>"} ===

@app.exception_handler(SynergyError)
async def synergy_error_handler(request: Request, exc: SynergyError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # The only request bodies are {"cardNames": [...]}
    if any(tuple(error.get("loc", ()))[:1] == ("body",) for error in exc.errors()):
        message = "cardNames must be an array"
    else:
        message = "; ".join(error.get("msg", "Invalid request") for error in exc.errors()) or "Invalid request"
    return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": message})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content={"error": str(exc)})


# Include API router
app.include_router(api_router, prefix="/api")


@app.get("/", include_in_schema=False)
async def landing_page():
    """Serve the landing page."""
    html_file = settings.static_dir / "index.html"
    if html_file.exists():
        return FileResponse(html_file, media_type="text/html")
    return {
        "name": settings.app_name,
        "status": "running",
        "version": __version__,
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
