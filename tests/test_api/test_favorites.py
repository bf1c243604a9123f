"""Tests for favorites API endpoints."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from httpx import AsyncClient
from sqlalchemy import func, select

from movie_explorer.database import Database, get_db
from movie_explorer.main import app
from movie_explorer.models.favorite import Favorite
from movie_explorer.schemas.user import UserPublic


@pytest.fixture
def mock_db_session():
    """Create a mock database session."""
    mock_session = AsyncMock()
    mock_session.add = MagicMock()
    return mock_session


class TestFavoritesLifecycle:
    async def test_add_list_check_remove(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        """Walk one movie through add, list, status and remove."""
        response = await client.get("/api/favorites", headers=auth_headers)
        assert response.status_code == 200
        assert response.json() == {"favorites": []}

        response = await client.post(
            "/api/favorites", headers=auth_headers, json={"movieId": "tt1234567"}
        )
        assert response.status_code == 201
        assert response.json() == {
            "message": "Favorite added successfully",
            "movie_id": "tt1234567",
        }

        response = await client.get("/api/favorites", headers=auth_headers)
        assert response.json() == {"favorites": ["tt1234567"]}

        response = await client.get("/api/favorites/tt1234567", headers=auth_headers)
        assert response.json() == {"movie_id": "tt1234567", "is_favorite": True}

        response = await client.delete("/api/favorites/tt1234567", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get("/api/favorites", headers=auth_headers)
        assert response.json() == {"favorites": []}

        response = await client.get("/api/favorites/tt1234567", headers=auth_headers)
        assert response.json() == {"movie_id": "tt1234567", "is_favorite": False}

        response = await client.delete("/api/favorites/tt1234567", headers=auth_headers)
        assert response.status_code == 404

    async def test_accepts_snake_case_movie_id(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/api/favorites", headers=auth_headers, json={"movie_id": "tt0111161"}
        )
        assert response.status_code == 201
        assert response.json()["movie_id"] == "tt0111161"

    async def test_list_keeps_insertion_order(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        for movie_id in ("tt0000003", "tt0000001", "tt0000002"):
            await client.post("/api/favorites", headers=auth_headers, json={"movieId": movie_id})

        response = await client.get("/api/favorites", headers=auth_headers)

        assert response.json()["favorites"] == ["tt0000003", "tt0000001", "tt0000002"]


class TestAddFavorite:
    async def test_duplicate_returns_conflict_and_keeps_one_row(
        self,
        client: AsyncClient,
        database: Database,
        test_user: UserPublic,
        auth_headers: dict[str, str],
    ) -> None:
        first = await client.post(
            "/api/favorites", headers=auth_headers, json={"movieId": "tt1234567"}
        )
        second = await client.post(
            "/api/favorites", headers=auth_headers, json={"movieId": "tt1234567"}
        )

        assert first.status_code == 201
        assert second.status_code == 409
        assert second.json()["detail"] == "Movie already in favorites"

        async with database.session() as session:
            count = await session.scalar(
                select(func.count()).select_from(Favorite).where(Favorite.user_id == test_user.id)
            )
        assert count == 1

    async def test_missing_movie_id(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post("/api/favorites", headers=auth_headers, json={})
        assert response.status_code == 422

    async def test_malformed_movie_id(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.post(
            "/api/favorites", headers=auth_headers, json={"movieId": "12345"}
        )
        assert response.status_code == 422


class TestRemoveFavorite:
    async def test_remove_missing_favorite(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.delete("/api/favorites/tt7654321", headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "Movie not in favorites"

    async def test_remove_malformed_id(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        response = await client.delete("/api/favorites/not-an-id", headers=auth_headers)
        assert response.status_code == 422


class TestFavoritesRequireAuth:
    """Unauthenticated requests are rejected before any storage access."""

    @pytest.mark.parametrize(
        ("method", "url", "body"),
        [
            ("GET", "/api/favorites", None),
            ("POST", "/api/favorites", {"movieId": "tt1234567"}),
            ("GET", "/api/favorites/tt1234567", None),
            ("DELETE", "/api/favorites/tt1234567", None),
        ],
    )
    async def test_rejected_without_token(
        self,
        client: AsyncClient,
        mock_db_session: AsyncMock,
        method: str,
        url: str,
        body: dict | None,
    ) -> None:
        async def override_get_db():
            yield mock_db_session

        app.dependency_overrides[get_db] = override_get_db

        response = await client.request(method, url, json=body)

        assert response.status_code == 401
        mock_db_session.execute.assert_not_awaited()
        mock_db_session.add.assert_not_called()

    async def test_rejected_with_invalid_token(
        self, client: AsyncClient, mock_db_session: AsyncMock
    ) -> None:
        async def override_get_db():
            yield mock_db_session

        app.dependency_overrides[get_db] = override_get_db

        response = await client.get(
            "/api/favorites", headers={"Authorization": "Bearer garbage"}
        )

        assert response.status_code == 401
        mock_db_session.execute.assert_not_awaited()

    async def test_rejected_without_opening_a_session(
        self, client: AsyncClient, database: Database
    ) -> None:
        entered: list[bool] = []

        async def override_get_db():
            entered.append(True)
            yield AsyncMock()

        app.dependency_overrides[get_db] = override_get_db

        with patch.object(database, "session", wraps=database.session) as open_session:
            for headers in ({}, {"Authorization": "Bearer garbage"}):
                response = await client.get("/api/favorites", headers=headers)
                assert response.status_code == 401

        open_session.assert_not_called()
        assert entered == []

    async def test_users_only_see_their_own_favorites(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        await client.post("/api/favorites", headers=auth_headers, json={"movieId": "tt1234567"})

        register = await client.post(
            "/api/auth/register",
            json={"email": "other@example.com", "password": "otherpassword", "name": "Other"},
        )
        other_headers = {"Authorization": f"Bearer {register.json()['access_token']}"}

        response = await client.get("/api/favorites", headers=other_headers)

        assert response.json() == {"favorites": []}
