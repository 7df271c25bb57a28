"""Tests for the dashboard summary endpoint."""

import pytest
from httpx import AsyncClient

from campusfiles.core.cache import MISSING, CacheStore


@pytest.mark.asyncio
async def test_dashboard_stats_empty(client: AsyncClient):
    resp = await client.get("/v1/dashboard/stats")
    assert resp.status_code == 200
    assert resp.json() == {"total_files": 0, "total_courses": 0, "total_downloads": 0}


@pytest.mark.asyncio
async def test_dashboard_stats_counts_and_caching(client: AsyncClient, cache: CacheStore, clock):
    await client.post("/v1/courses", json={"name": "ES"})
    resp = await client.post("/v1/files", json={
        "title": "Slides",
        "author_name": "Fabio",
        "course": "ES",
        "semester": "2024.1",
        "subject": "Testes",
    })
    file_id = resp.json()["id"]
    await client.post(f"/v1/files/{file_id}/download")

    resp = await client.get("/v1/dashboard/stats")
    assert resp.json() == {"total_files": 1, "total_courses": 1, "total_downloads": 1}
    assert cache.get("dashboard:admin") is not MISSING

    clock.advance(301)
    assert cache.get("dashboard:admin") is MISSING


@pytest.mark.asyncio
async def test_dashboard_invalidated_by_course_write(client: AsyncClient, cache: CacheStore):
    await client.get("/v1/dashboard/stats")
    await client.post("/v1/courses", json={"name": "SI"})
    assert cache.get("dashboard:admin") is MISSING

    resp = await client.get("/v1/dashboard/stats")
    assert resp.json()["total_courses"] == 1
