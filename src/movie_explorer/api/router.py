"""Main API router aggregation."""

from fastapi import APIRouter

from movie_explorer.api.auth import router as auth_router
from movie_explorer.api.favorites import router as favorites_router
from movie_explorer.api.media import router as media_router

# Main API router
api_router = APIRouter(prefix="/api")

# Include all sub-routers
api_router.include_router(auth_router)
api_router.include_router(favorites_router)
api_router.include_router(media_router)
