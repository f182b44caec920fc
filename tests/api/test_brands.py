"""Tests for brand and category API endpoints."""

import pytest
from httpx import AsyncClient

from comfy.catalog.models import BrandModel, CategoryModel


class TestBrands:
    """Tests for /brands endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_get(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        """Created brands start with no products."""
        response = await client.post("/brands", json={"name": "Acme"}, headers=auth_headers)

        assert response.status_code == 201
        created = response.json()
        assert created["name"] == "Acme"
        assert created["products"] == []

        response = await client.get(f"/brands/{created['_id']}")
        assert response.status_code == 200
        assert response.json() == created

    @pytest.mark.asyncio
    async def test_list(self, client: AsyncClient, brand: BrandModel) -> None:
        """Brands are listed with their ids."""
        response = await client.get("/brands")

        assert response.status_code == 200
        assert [b["_id"] for b in response.json()] == [brand.id]

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        """Unknown brands give 404."""
        response = await client.get("/brands/missing")

        assert response.status_code == 404
        assert response.json() == {"msg": "brand missing isn't found"}

    @pytest.mark.asyncio
    async def test_create_requires_name(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        """Empty names are rejected."""
        response = await client.post("/brands", json={"name": ""}, headers=auth_headers)

        assert response.status_code == 422


class TestCategories:
    """Tests for /categories endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_list(
        self, client: AsyncClient, auth_headers: dict[str, str]
    ) -> None:
        """Created categories are listed with an empty products_id."""
        response = await client.post(
            "/categories", json={"name": "Lighting"}, headers=auth_headers
        )
        assert response.status_code == 201

        response = await client.get("/categories")

        assert response.status_code == 200
        assert [(c["name"], c["products_id"]) for c in response.json()] == [("Lighting", [])]

    @pytest.mark.asyncio
    async def test_get(self, client: AsyncClient, category: CategoryModel) -> None:
        """Categories are found by id."""
        response = await client.get(f"/categories/{category.id}")

        assert response.status_code == 200
        assert response.json()["name"] == "Chairs"

    @pytest.mark.asyncio
    async def test_not_found(self, client: AsyncClient) -> None:
        """Unknown categories give 404."""
        response = await client.get("/categories/missing")

        assert response.status_code == 404
