"""FastAPI application for the solar heating calculator."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import SolarHeatConfig, load_config
from .routes import simulation

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    """Application state container."""

    config: Optional[SolarHeatConfig] = None


# Global app state
app_state = AppState()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management."""
    logger.info("Starting solar heating API")

    if app_state.config is None:
        app_state.config = load_config()

    logger.info("Solar heating API started")

    try:
        yield
    finally:
        logger.info("Solar heating API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Solar Heating API",
        description="Time to heat a water store with solar thermal collectors",
        version="1.0.0",
        lifespan=lifespan,
    )

    # CORS middleware for frontend
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[
            "http://localhost:5173",  # Vite dev server
            "http://localhost:3000",  # Alternative dev port
            "http://127.0.0.1:5173",
            "http://127.0.0.1:3000",
        ],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(simulation.router, prefix="/api/simulation", tags=["Simulation"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "config_loaded": app_state.config is not None,
        }

    return app


# Create the app instance
app = create_app()
