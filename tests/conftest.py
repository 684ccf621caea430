"""Shared pytest fixtures for the Student Tracker test suite."""

import uuid
from collections.abc import AsyncGenerator
from pathlib import Path

import httpx
import pytest

from app.cqrs.service import CQRSService
from app.cqrs.wiring import build_cqrs_service
from app.repositories import (
    FileAssignmentRepository,
    FileQuestionRepository,
    FileStudentRepository,
)
from main import app

# ---------------------------------------------------------------------------
# Store fixtures (one temporary data directory per test)
# ---------------------------------------------------------------------------


@pytest.fixture()
def data_dir(tmp_path: Path) -> Path:
    return tmp_path / "data"


@pytest.fixture()
def student_repo(data_dir: Path) -> FileStudentRepository:
    return FileStudentRepository(data_dir)


@pytest.fixture()
def assignment_repo(data_dir: Path) -> FileAssignmentRepository:
    return FileAssignmentRepository(data_dir)


@pytest.fixture()
def question_repo(data_dir: Path) -> FileQuestionRepository:
    return FileQuestionRepository(data_dir)


@pytest.fixture()
def cqrs(student_repo, assignment_repo, question_repo) -> CQRSService:
    return build_cqrs_service(student_repo, assignment_repo, question_repo)


@pytest.fixture()
async def client(cqrs: CQRSService) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTPX async client wired to the FastAPI app with a temporary store."""
    app.state.cqrs = cqrs

    async with httpx.AsyncClient(
        transport=httpx.ASGITransport(app=app),
        base_url="http://testserver",
    ) as ac:
        yield ac

    app.state.cqrs = None


# ---------------------------------------------------------------------------
# Convenience / data fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def avatar_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture()
def teacher_id() -> str:
    return str(uuid.uuid4())


@pytest.fixture()
def sample_student_data(avatar_id: str) -> dict:
    """Sample student payload, as the admin form would post it."""
    return {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "username": "ada_l",
        "grade": "10th",
        "avatarId": avatar_id,
    }


@pytest.fixture()
def sample_assignment_data(teacher_id: str) -> dict:
    return {
        "title": "Fractions review",
        "type": "homework",
        "questionIds": [str(uuid.uuid4()), str(uuid.uuid4())],
        "createdBy": teacher_id,
    }


@pytest.fixture()
def sample_question_data(teacher_id: str) -> dict:
    return {
        "type": "multiple_choice",
        "prompt": "What is 1/2 + 1/4?",
        "options": [
            {"id": str(uuid.uuid4()), "text": "3/4", "isCorrect": True},
            {"id": str(uuid.uuid4()), "text": "2/6"},
        ],
        "tags": ["fractions"],
        "createdBy": teacher_id,
    }
