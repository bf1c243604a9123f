"""User and favorites persistence.

Every method except :meth:`UserRepository.find_by_email_with_password` returns
:class:`UserPublic`, so password hashes never leave this module.
"""

import logging

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from movie_explorer.exceptions import (
    EmailAlreadyExistsError,
    FavoriteAlreadyExistsError,
    UserNotFoundError,
)
from movie_explorer.models.favorite import Favorite
from movie_explorer.models.user import User
from movie_explorer.schemas.user import UserCredentials, UserPublic
from movie_explorer.utils.security import hash_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _is_foreign_key_violation(error: IntegrityError) -> bool:
    return "FOREIGN KEY" in str(error.orig).upper()


class UserRepository:
    """Repository for users and their favorite movies."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def _get(self, user_id: int) -> User | None:
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def _get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def create(self, email: str, password: str, name: str) -> UserPublic:
        """Create a user with a hashed password.

        Raises:
            EmailAlreadyExistsError: If the (lowercased) email is taken.
        """
        user = User(
            email=normalize_email(email),
            name=name,
            hashed_password=hash_password(password),
        )
        try:
            async with self.session.begin_nested():
                self.session.add(user)
        except IntegrityError as e:
            logger.warning("Registration rejected, email already in use: %s", user.email)
            raise EmailAlreadyExistsError() from e

        await self.session.refresh(user)
        logger.info("Created user %s (ID: %s)", user.email, user.id)
        return UserPublic.model_validate(user)

    async def find_by_id(self, user_id: int) -> UserPublic | None:
        user = await self._get(user_id)
        return UserPublic.model_validate(user) if user else None

    async def find_by_email(self, email: str) -> UserPublic | None:
        user = await self._get_by_email(email)
        return UserPublic.model_validate(user) if user else None

    async def find_by_email_with_password(self, email: str) -> UserCredentials | None:
        """Look up a user together with the password hash.

        Only the local credential strategy may call this.
        """
        user = await self._get_by_email(email)
        return UserCredentials.model_validate(user) if user else None

    async def update_profile(self, user_id: int, name: str) -> UserPublic:
        """Rename a user.

        Raises:
            UserNotFoundError: If the user does not exist.
        """
        user = await self._get(user_id)
        if user is None:
            raise UserNotFoundError()

        user.name = name
        await self.session.flush()
        await self.session.refresh(user)
        return UserPublic.model_validate(user)

    async def get_favorites(self, user_id: int) -> list[str]:
        """Return the user's favorite movie IDs, oldest first."""
        result = await self.session.execute(
            select(Favorite.movie_id)
            .where(Favorite.user_id == user_id)
            .order_by(Favorite.created_at, Favorite.id)
        )
        return list(result.scalars().all())

    async def is_favorite(self, user_id: int, movie_id: str) -> bool:
        result = await self.session.execute(
            select(Favorite.id).where(Favorite.user_id == user_id, Favorite.movie_id == movie_id)
        )
        return result.scalar_one_or_none() is not None

    async def add_favorite(self, user_id: int, movie_id: str) -> bool:
        """Add a movie to the user's favorites.

        Raises:
            FavoriteAlreadyExistsError: If the movie is already a favorite.
            UserNotFoundError: If the user does not exist.
        """
        favorite = Favorite(user_id=user_id, movie_id=movie_id)
        try:
            async with self.session.begin_nested():
                self.session.add(favorite)
        except IntegrityError as e:
            if _is_foreign_key_violation(e):
                raise UserNotFoundError() from e
            logger.warning("Duplicate favorite %s for user %s", movie_id, user_id)
            raise FavoriteAlreadyExistsError() from e

        logger.info("Added favorite %s for user %s", movie_id, user_id)
        return True

    async def remove_favorite(self, user_id: int, movie_id: str) -> bool:
        """Remove a favorite. Returns False if it was not there."""
        result = await self.session.execute(
            delete(Favorite).where(Favorite.user_id == user_id, Favorite.movie_id == movie_id)
        )
        removed = result.rowcount > 0
        if removed:
            logger.info("Removed favorite %s for user %s", movie_id, user_id)
        return removed
