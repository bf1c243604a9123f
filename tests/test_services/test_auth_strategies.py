"""Tests for the local and token credential strategies."""

from datetime import timedelta
from unittest.mock import AsyncMock, patch

import pytest
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession

from movie_explorer.config import get_settings
from movie_explorer.exceptions import AuthenticationError
from movie_explorer.models.user import User
from movie_explorer.repositories.user import UserRepository
from movie_explorer.schemas.user import Principal, UserPublic
from movie_explorer.services.auth import (
    LocalCredentials,
    LocalCredentialStrategy,
    TokenCredentialStrategy,
)
from movie_explorer.utils.security import create_access_token


@pytest.fixture
async def repository(session: AsyncSession) -> UserRepository:
    return UserRepository(session)


@pytest.fixture
async def alice(repository: UserRepository) -> UserPublic:
    return await repository.create("alice@example.com", "wonderland42", "Alice")


class TestLocalCredentialStrategy:
    async def test_valid_credentials(self, repository: UserRepository, alice: UserPublic) -> None:
        strategy = LocalCredentialStrategy(repository)

        principal = await strategy.verify(LocalCredentials("alice@example.com", "wonderland42"))

        assert principal == Principal(id=alice.id, email="alice@example.com", name="Alice")

    async def test_email_lookup_ignores_case(
        self, repository: UserRepository, alice: UserPublic
    ) -> None:
        strategy = LocalCredentialStrategy(repository)

        principal = await strategy.verify(LocalCredentials("ALICE@example.com", "wonderland42"))

        assert principal.id == alice.id

    async def test_wrong_password(self, repository: UserRepository, alice: UserPublic) -> None:
        strategy = LocalCredentialStrategy(repository)

        with pytest.raises(AuthenticationError, match="Incorrect email or password"):
            await strategy.verify(LocalCredentials("alice@example.com", "looking-glass"))

    async def test_unknown_email(self, repository: UserRepository) -> None:
        strategy = LocalCredentialStrategy(repository)

        with pytest.raises(AuthenticationError, match="Incorrect email or password"):
            await strategy.verify(LocalCredentials("nobody@example.com", "wonderland42"))

    async def test_account_without_password(
        self, session: AsyncSession, repository: UserRepository
    ) -> None:
        session.add(User(email="oauth@example.com", name="OAuth", hashed_password=None))
        await session.flush()
        strategy = LocalCredentialStrategy(repository)

        with pytest.raises(AuthenticationError, match="original sign-in method"):
            await strategy.verify(LocalCredentials("oauth@example.com", "anything"))


class TestTokenCredentialStrategy:
    async def test_valid_token(self, repository: UserRepository, alice: UserPublic) -> None:
        strategy = TokenCredentialStrategy(repository)

        principal = await strategy.verify(create_access_token(alice))

        assert principal == Principal(id=alice.id, email=alice.email, name=alice.name)

    async def test_principal_reflects_current_profile(
        self, repository: UserRepository, alice: UserPublic
    ) -> None:
        token = create_access_token(alice)
        await repository.update_profile(alice.id, "Alice Liddell")

        principal = await TokenCredentialStrategy(repository).verify(token)

        assert principal.name == "Alice Liddell"

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    async def test_missing_or_garbage_token(
        self, repository: UserRepository, token: str | None
    ) -> None:
        with pytest.raises(AuthenticationError, match="Could not validate credentials"):
            await TokenCredentialStrategy(repository).verify(token)

    async def test_expired_token(self, repository: UserRepository, alice: UserPublic) -> None:
        token = create_access_token(alice, expires_delta=timedelta(seconds=-1))

        with pytest.raises(AuthenticationError):
            await TokenCredentialStrategy(repository).verify(token)

    async def test_non_integer_subject(self, repository: UserRepository) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"sub": "alice", "exp": 4102444800},
            settings.secret_key,
            algorithm=settings.jwt_algorithm,
        )

        with pytest.raises(AuthenticationError):
            await TokenCredentialStrategy(repository).verify(token)

    async def test_missing_subject(self, repository: UserRepository) -> None:
        settings = get_settings()
        token = jwt.encode(
            {"exp": 4102444800}, settings.secret_key, algorithm=settings.jwt_algorithm
        )

        with pytest.raises(AuthenticationError):
            await TokenCredentialStrategy(repository).verify(token)

    async def test_user_no_longer_exists(self, repository: UserRepository) -> None:
        token = create_access_token(Principal(id=9999, email="ghost@example.com", name="Ghost"))

        with pytest.raises(AuthenticationError):
            await TokenCredentialStrategy(repository).verify(token)

    async def test_rejects_without_touching_storage(self) -> None:
        repository = AsyncMock(spec=UserRepository)

        with patch("movie_explorer.services.auth.decode_access_token", return_value=None):
            with pytest.raises(AuthenticationError):
                await TokenCredentialStrategy(repository).verify("some.token.value")

        repository.find_by_id.assert_not_awaited()

    def test_read_subject(self, alice: UserPublic) -> None:
        assert TokenCredentialStrategy.read_subject(create_access_token(alice)) == alice.id

    @pytest.mark.parametrize("token", [None, "", "not-a-jwt"])
    def test_read_subject_rejects_bad_tokens(self, token: str | None) -> None:
        with pytest.raises(AuthenticationError):
            TokenCredentialStrategy.read_subject(token)
