from __future__ import annotations
"""ContentForge - FastAPI application entry point.

Mounts all API routes, configures CORS and maps domain errors onto
``{"error": ...}`` JSON bodies.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from contentforge.api.dispatch import close_http_client
from contentforge.api.router import api_router
from contentforge.config import get_settings
from contentforge.database import close_db
from contentforge.errors import ProviderError, error_body

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: close pooled clients on shutdown."""
    logger.info("ContentForge starting up...")
    logger.info("Durable storage configured: %s", settings.storage_configured)

    yield

    await close_http_client()
    await close_db()
    logger.info("ContentForge shut down")


app = FastAPI(
    title="ContentForge API",
    description="Backend for an AI content studio: scripts, voice-over, stock media and generative video",
    version="0.1.0",
    lifespan=lifespan,
    redirect_slashes=False,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HTTPException)
async def http_exception_handler(request: Request, exc: HTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(ProviderError)
async def provider_error_handler(request: Request, exc: ProviderError):
    logger.error("Unhandled provider error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc), details=exc.details, provider=exc.provider),
    )


# Mount API routes
app.include_router(api_router)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"service": "ContentForge", "status": "running"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "storage": settings.storage_configured,
    }
