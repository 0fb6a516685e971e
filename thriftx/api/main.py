"""
FastAPI main application for thriftX.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import logging

from thriftx import __version__
from thriftx.config import get_app_settings

from .db import init_db, close_db
from .routers import ai, favorites, listings

# Configure logging
logging.basicConfig(
    level=get_app_settings().log_level.upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    logger.info("Starting thriftX API...")
    await init_db()
    logger.info("Database initialized")

    yield

    logger.info("Shutting down thriftX API...")
    await close_db()


app = FastAPI(
    title="thriftX API",
    description="Clothing swap marketplace: browse, list and favorite items",
    version=__version__,
    lifespan=lifespan
)

# CORS middleware - allow all origins for development
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/health")
async def health_check():
    """Health check endpoint"""
    return {
        "status": "healthy",
        "version": __version__
    }


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "message": "thriftX API",
        "docs": "/docs",
        "health": "/health"
    }


app.include_router(listings.router, prefix="/api", tags=["listings"])
app.include_router(favorites.router, prefix="/api", tags=["favorites"])
app.include_router(ai.router, prefix="/api", tags=["ai"])
