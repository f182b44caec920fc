"""Tests for API middleware."""

import pytest
from httpx import AsyncClient


class TestRequestIdMiddleware:
    """Tests for request ID correlation middleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id_if_not_provided(self, client: AsyncClient) -> None:
        """Should generate request ID if not in request headers."""
        response = await client.get("/health")
        assert response.status_code == 200
        # UUID format
        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_uses_provided_request_id(self, client: AsyncClient) -> None:
        """Should use request ID from request headers."""
        response = await client.get("/health", headers={"X-Request-ID": "req-12345"})
        assert response.headers["X-Request-ID"] == "req-12345"


class TestAdminKeyMiddleware:
    """Tests for admin API key middleware."""

    @pytest.mark.asyncio
    async def test_reads_are_public(self, client: AsyncClient) -> None:
        """GET requests need no credentials."""
        assert (await client.get("/products")).status_code == 200
        assert (await client.get("/brands")).status_code == 200

    @pytest.mark.asyncio
    async def test_missing_header(self, client: AsyncClient) -> None:
        """Mutations without credentials give 401."""
        response = await client.post("/brands", json={"name": "Acme"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert "msg" in response.json()

    @pytest.mark.asyncio
    async def test_malformed_header(self, client: AsyncClient) -> None:
        """Non-Bearer credentials give 401."""
        response = await client.post(
            "/brands", json={"name": "Acme"}, headers={"Authorization": "Basic abc"}
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_wrong_key(self, client: AsyncClient) -> None:
        """A wrong key gives 403."""
        response = await client.request(
            "DELETE",
            "/products",
            json={"_id": "p1", "brand": "b1", "category": "c1"},
            headers={"Authorization": "Bearer wrong"},
        )

        assert response.status_code == 403
        assert response.json() == {"msg": "not Authorized"}

    @pytest.mark.asyncio
    async def test_rejected_request_keeps_request_id(self, client: AsyncClient) -> None:
        """Rejected requests are still correlated."""
        response = await client.post(
            "/brands", json={"name": "Acme"}, headers={"X-Request-ID": "req-401"}
        )

        assert response.headers["X-Request-ID"] == "req-401"
