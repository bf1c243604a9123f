"""HTTP API routers."""

from movie_explorer.api.router import api_router

__all__ = ["api_router"]
