"""Credential verification strategies.

Each strategy turns one kind of credential into a :class:`Principal` or raises
:class:`AuthenticationError`. Routes choose the strategy they need through the
dependencies in ``movie_explorer.api.dependencies``.
"""

import logging
from dataclasses import dataclass
from typing import Protocol, TypeVar

from pydantic import ValidationError as PydanticValidationError

from movie_explorer.exceptions import AuthenticationError
from movie_explorer.repositories.user import UserRepository
from movie_explorer.schemas.user import Principal, TokenPayload
from movie_explorer.utils.security import decode_access_token, verify_password

logger = logging.getLogger(__name__)

INVALID_LOGIN_MESSAGE = "Incorrect email or password"
ALTERNATE_SIGN_IN_MESSAGE = "Please log in using your original sign-in method"

CredentialsT = TypeVar("CredentialsT", contravariant=True)


class CredentialStrategy(Protocol[CredentialsT]):
    async def verify(self, credentials: CredentialsT) -> Principal: ...


@dataclass(frozen=True)
class LocalCredentials:
    email: str
    password: str


class LocalCredentialStrategy:
    """Email and password checked against the stored bcrypt hash."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    async def verify(self, credentials: LocalCredentials) -> Principal:
        user = await self.repository.find_by_email_with_password(credentials.email)
        if user is None:
            logger.info("Login failed: unknown email %s", credentials.email)
            raise AuthenticationError(INVALID_LOGIN_MESSAGE)

        if not user.hashed_password:
            logger.info("Login failed: account %s has no local password", user.id)
            raise AuthenticationError(ALTERNATE_SIGN_IN_MESSAGE)

        if not verify_password(credentials.password, user.hashed_password):
            logger.info("Login failed: wrong password for user %s", user.id)
            raise AuthenticationError(INVALID_LOGIN_MESSAGE)

        logger.info("User %s logged in", user.id)
        return Principal(id=user.id, email=user.email, name=user.name)


class TokenCredentialStrategy:
    """Bearer JWT whose subject must still exist in the database."""

    def __init__(self, repository: UserRepository) -> None:
        self.repository = repository

    @staticmethod
    def read_subject(credentials: str | None) -> int:
        """Return the user id a token names, without touching the database."""
        if not credentials:
            raise AuthenticationError()

        payload = decode_access_token(credentials)
        if payload is None:
            raise AuthenticationError()

        try:
            token = TokenPayload.model_validate(payload)
            return int(token.sub)
        except (PydanticValidationError, ValueError):
            logger.warning("Rejected token with malformed subject")
            raise AuthenticationError() from None

    async def verify(self, credentials: str | None) -> Principal:
        return await self.resolve(self.read_subject(credentials))

    async def resolve(self, user_id: int) -> Principal:
        user = await self.repository.find_by_id(user_id)
        if user is None:
            logger.warning("Rejected token for missing user %s", user_id)
            raise AuthenticationError()

        return Principal(id=user.id, email=user.email, name=user.name)
