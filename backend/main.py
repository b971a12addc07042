"""
Farming Roadmap Service - Main Application Entry Point

Crop roadmaps with milestone progress tracking for farmers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farm_roadmap.core.config import get_settings
from farm_roadmap.core.logger import setup_logger

logger = setup_logger(__name__)

VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup
    settings = get_settings()
    logger.info("Starting Farming Roadmap Service (debug=%s)...", settings.DEBUG)

    from farm_roadmap.infrastructure.local.database import init_db

    await init_db()

    yield

    # Shutdown
    logger.info("Shutting down Farming Roadmap Service...")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title="Farming Roadmap Service",
        description="Crop growing-cycle roadmaps with milestone progress tracking",
        version=VERSION,
        lifespan=lifespan,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from farm_roadmap.api import roadmaps

    app.include_router(roadmaps.router, prefix="/api/roadmaps", tags=["roadmaps"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": VERSION,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )
