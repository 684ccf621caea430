"""Smoke tests - verify the app starts and basic endpoints respond."""

import httpx


async def test_health_returns_ok(client: httpx.AsyncClient):
    """GET /health should return 200 with status ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


async def test_students_list_starts_empty(client: httpx.AsyncClient):
    """GET /api/students should return an empty list on a fresh store."""
    response = await client.get("/api/students")
    assert response.status_code == 200
    assert response.json() == []


async def test_unknown_student_is_404(client: httpx.AsyncClient):
    """GET of an unknown student id should return 404."""
    response = await client.get("/api/students/does-not-exist")
    assert response.status_code == 404
