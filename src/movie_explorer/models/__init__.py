"""SQLAlchemy ORM models."""

from movie_explorer.models.favorite import Favorite
from movie_explorer.models.user import User

__all__ = [
    "Favorite",
    "User",
]
