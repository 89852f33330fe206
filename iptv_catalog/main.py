"""
IPTV Catalog - FastAPI Backend

Loads an M3U playlist and optional XMLTV guide into a channel catalog
and serves search, category and favorites views of it.
"""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from iptv_catalog.config import get_settings
from iptv_catalog.services.app_state import get_app_state
from iptv_catalog.routers import channels, epg, user

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)

settings = get_settings()

# Rate limiter
limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[f"{settings.rate_limit_per_minute}/minute"]
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown events."""
    logger.info("Starting IPTV Catalog Backend...")
    
    service = await get_app_state()
    state = await service.initialize()
    if state.catalog:
        logger.info(f"Catalog ready with {len(state.catalog.channels)} channels")
    elif state.error:
        logger.warning(f"Initial load failed, awaiting new configuration: {state.error}")
    
    yield
    
    logger.info("Shutting down IPTV Catalog Backend...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    description="M3U/XMLTV channel catalog with search, categories and favorites",
    lifespan=lifespan
)

# Add rate limiter
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)
app.add_middleware(SlowAPIMiddleware)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(channels.router)
app.include_router(epg.router)
app.include_router(user.router)


@app.get("/api/health")
async def health_check():
    """Health check endpoint."""
    service = await get_app_state()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "catalog_loaded": service.state.catalog is not None,
    }


# Error handlers
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"}
    )


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "iptv_catalog.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
