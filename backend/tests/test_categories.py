"""
Tests for event categories.
"""

import pytest
from httpx import AsyncClient

from factories import auth_headers, make_event


@pytest.mark.asyncio
async def test_create_category(client: AsyncClient, admin):
    response = await client.post(
        "/api/v1/categories", json={"name": "Sports"}, headers=auth_headers(admin)
    )
    assert response.status_code == 201
    assert response.json()["name"] == "Sports"


@pytest.mark.asyncio
async def test_create_duplicate_category(client: AsyncClient, admin, category):
    response = await client.post(
        "/api/v1/categories", json={"name": "Technology"}, headers=auth_headers(admin)
    )
    assert response.status_code == 409
    assert response.json()["message"] == (
        "Category with name 'Technology' already exists"
    )


@pytest.mark.asyncio
async def test_create_category_requires_admin(client: AsyncClient, user):
    response = await client.post(
        "/api/v1/categories", json={"name": "Sports"}, headers=auth_headers(user)
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_list_categories_counts_live_events(
    client: AsyncClient, db_session, admin, category, event
):
    deleted = await make_event(db_session, admin, category, name="Gone")
    deleted.soft_delete()
    await db_session.commit()

    response = await client.get("/api/v1/categories")
    assert response.status_code == 200
    assert response.json() == [
        {"id": category.id, "name": "Technology", "image": None, "eventCount": 1}
    ]


@pytest.mark.asyncio
async def test_get_category_with_events(client: AsyncClient, category, event):
    response = await client.get(f"/api/v1/categories/{category.id}")
    assert response.status_code == 200
    assert [e["id"] for e in response.json()["events"]] == [event.id]


@pytest.mark.asyncio
async def test_delete_category_in_use(client: AsyncClient, admin, category, event):
    response = await client.delete(
        f"/api/v1/categories/{category.id}", headers=auth_headers(admin)
    )
    assert response.status_code == 409
    assert response.json()["message"] == (
        "Cannot delete category with 1 associated events"
    )


@pytest.mark.asyncio
async def test_delete_unused_category(client: AsyncClient, admin, category):
    response = await client.delete(
        f"/api/v1/categories/{category.id}", headers=auth_headers(admin)
    )
    assert response.status_code == 200
    missing = await client.get(f"/api/v1/categories/{category.id}")
    assert missing.status_code == 404
    assert missing.json()["message"] == f"Category with ID {category.id} not found"
