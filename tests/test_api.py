"""HTTP routes over the dispatch service."""

from datetime import datetime

import httpx


async def _create(client: httpx.AsyncClient, payload: dict) -> dict:
    response = await client.post("/api/students", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


async def test_create_and_fetch_student(client: httpx.AsyncClient, sample_student_data: dict):
    """POST /api/students should create a student readable by id and username."""
    created = await _create(client, sample_student_data)

    assert created["name"] == "Ada Lovelace"
    assert created["createdAt"] == created["updatedAt"]
    assert "pin" not in created

    by_id = await client.get(f"/api/students/{created['id']}")
    by_username = await client.get("/api/students/by-username/ada_l")
    assert by_id.json() == created
    assert by_username.json() == created


async def test_duplicate_username_is_conflict(client: httpx.AsyncClient, sample_student_data: dict):
    """A duplicate username should return 409."""
    await _create(client, sample_student_data)

    response = await client.post("/api/students", json=sample_student_data)
    assert response.status_code == 409


async def test_invalid_payload_is_422(client: httpx.AsyncClient, sample_student_data: dict):
    """An invalid student payload should return 422."""
    response = await client.post(
        "/api/students", json={**sample_student_data, "username": "no spaces allowed"}
    )
    assert response.status_code == 422


async def test_patch_updates_fields(client: httpx.AsyncClient, sample_student_data: dict):
    """PATCH should change the given fields and advance updatedAt."""
    created = await _create(client, sample_student_data)

    response = await client.patch(f"/api/students/{created['id']}", json={"grade": "11th"})

    assert response.status_code == 200
    body = response.json()
    assert body["grade"] == "11th"
    assert body["createdAt"] == created["createdAt"]
    assert datetime.fromisoformat(body["updatedAt"]) > datetime.fromisoformat(created["updatedAt"])


async def test_patch_unknown_student_is_404(client: httpx.AsyncClient):
    """PATCH of an unknown student should return 404."""
    response = await client.patch("/api/students/missing", json={"grade": "11th"})
    assert response.status_code == 404


async def test_login(client: httpx.AsyncClient, sample_student_data: dict):
    """POST /api/students/login should check the PIN and hide it from the response."""
    await _create(client, {**sample_student_data, "pin": "1234"})

    bad = await client.post("/api/students/login", json={"username": "ada_l", "pin": "0000"})
    good = await client.post("/api/students/login", json={"username": "ada_l", "pin": "1234"})

    assert bad.status_code == 401
    assert good.status_code == 200
    assert good.json()["username"] == "ada_l"
    assert "pin" not in good.json()


async def test_delete_student(client: httpx.AsyncClient, sample_student_data: dict):
    """DELETE should return 204 then 404."""
    created = await _create(client, sample_student_data)

    first = await client.delete(f"/api/students/{created['id']}")
    second = await client.delete(f"/api/students/{created['id']}")

    assert first.status_code == 204
    assert second.status_code == 404


async def test_assignment_routes(client: httpx.AsyncClient, sample_assignment_data: dict):
    """Assignment routes should create, change status, filter and delete."""
    response = await client.post("/api/assignments", json=sample_assignment_data)
    assert response.status_code == 201
    assignment = response.json()
    assert assignment["status"] == "draft"

    response = await client.put(
        f"/api/assignments/{assignment['id']}/status", json={"status": "assigned"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "assigned"

    assigned = await client.get("/api/assignments", params={"status": "assigned"})
    drafts = await client.get("/api/assignments", params={"status": "draft"})
    mine = await client.get(
        "/api/assignments", params={"created_by": sample_assignment_data["createdBy"]}
    )
    assert [a["id"] for a in assigned.json()] == [assignment["id"]]
    assert drafts.json() == []
    assert len(mine.json()) == 1

    response = await client.delete(f"/api/assignments/{assignment['id']}")
    assert response.status_code == 204
    response = await client.get(f"/api/assignments/{assignment['id']}")
    assert response.status_code == 404


async def test_question_routes(client: httpx.AsyncClient, sample_question_data: dict):
    """Question routes should create, filter, update and delete each kind."""
    response = await client.post("/api/questions", json=sample_question_data)
    assert response.status_code == 201, response.text
    question = response.json()
    assert question["type"] == "multiple_choice"
    assert question["difficultyLevel"] == "medium"
    assert question["options"][0]["isCorrect"] is True

    by_tag = await client.get("/api/questions", params={"tag": ["fractions", "decimals"]})
    essays = await client.get("/api/questions", params={"type": "essay"})
    assert [q["id"] for q in by_tag.json()] == [question["id"]]
    assert essays.json() == []

    response = await client.patch(
        f"/api/questions/{question['id']}", json={"difficultyLevel": "hard"}
    )
    assert response.status_code == 200
    assert response.json()["difficultyLevel"] == "hard"

    response = await client.delete(f"/api/questions/{question['id']}")
    assert response.status_code == 204
    response = await client.get(f"/api/questions/{question['id']}")
    assert response.status_code == 404


async def test_question_payload_errors(client: httpx.AsyncClient, sample_question_data: dict):
    """Bad question payloads and kind changes missing fields should return 422."""
    response = await client.post(
        "/api/questions", json={**sample_question_data, "options": sample_question_data["options"][:1]}
    )
    assert response.status_code == 422

    created = (await client.post("/api/questions", json=sample_question_data)).json()
    response = await client.patch(f"/api/questions/{created['id']}", json={"type": "true_false"})
    assert response.status_code == 422

    response = await client.patch("/api/questions/missing", json={"prompt": "Anything"})
    assert response.status_code == 404
