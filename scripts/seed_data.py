"""Seed the document store with sample students.

Usage: python scripts/seed_data.py
"""

import asyncio
import sys
from pathlib import Path

# Ensure project root is on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from app.config import settings
from app.cqrs.students import (
    CreateStudentCommand,
    GetStudentByUsernameQuery,
    UpdateStudentCommand,
)
from app.cqrs.wiring import build_cqrs_service
from app.models.student import StudentUpdate, create_student
from app.repositories import (
    FileAssignmentRepository,
    FileQuestionRepository,
    FileStudentRepository,
)

DEFAULT_AVATAR = "3f1b6c1e-8d8a-4d6e-9a53-6f0a2f4b7c11"

SEED_STUDENTS = [
    {
        "first_name": "Ada",
        "last_name": "Lovelace",
        "username": "ada_l",
        "grade": "10th",
        "guardian_name": "Anne Byron",
    },
    {
        "first_name": "Alan",
        "last_name": "Turing",
        "username": "alan_t",
        "grade": "11th",
        "pin": "1912",
    },
    {
        "first_name": "Grace",
        "last_name": "Hopper",
        "username": "grace_h",
        "grade": "9th",
        "notes": "Prefers morning sessions",
    },
]


async def seed() -> None:
    cqrs = build_cqrs_service(
        FileStudentRepository(settings.DATA_DIR),
        FileAssignmentRepository(settings.DATA_DIR),
        FileQuestionRepository(settings.DATA_DIR),
    )

    for data in SEED_STUDENTS:
        fields = dict(data)
        student = create_student(
            fields.pop("first_name"),
            fields.pop("last_name"),
            fields.pop("grade"),
            fields.pop("username"),
            DEFAULT_AVATAR,
            **fields,
        )
        # Check if student already exists (idempotent)
        existing = await cqrs.execute_query(GetStudentByUsernameQuery(student.username))
        if existing:
            changes = StudentUpdate(**student.model_dump(exclude={"name"}, exclude_unset=True))
            await cqrs.execute_command(UpdateStudentCommand(existing.id, changes))
            print(f"  Updated: {student.username} - {student.name}")
        else:
            await cqrs.execute_command(CreateStudentCommand(student))
            print(f"  Inserted: {student.username} - {student.name}")

    print(f"Seed data complete ({settings.DATA_DIR}).")


if __name__ == "__main__":
    asyncio.run(seed())
