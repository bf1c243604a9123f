"""Database repositories."""

from movie_explorer.repositories.user import UserRepository

__all__ = ["UserRepository"]
