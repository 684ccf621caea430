"""Repository interfaces for the persisted collections."""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from app.models.assignment import Assignment, AssignmentStatus, AssignmentType
from app.models.question import DifficultyLevel, Question, QuestionType
from app.models.student import Student

RecordInput = Mapping[str, Any] | BaseModel


class StudentRepository(ABC):
    """Abstract interface for student storage."""

    @abstractmethod
    async def find_by_id(self, record_id: str) -> Student | None:
        """Return the student with this id, or None."""

    @abstractmethod
    async def find_by_username(self, username: str) -> Student | None:
        """Return the student holding this username, or None."""

    @abstractmethod
    async def find_all(self) -> list[Student]:
        """Return every stored student."""

    @abstractmethod
    async def save(self, data: RecordInput) -> Student:
        """Update the student named by ``data["id"]`` if it exists, otherwise create one."""

    @abstractmethod
    async def create(self, data: RecordInput) -> Student:
        """Store a new student with a generated id and timestamps."""

    @abstractmethod
    async def update(self, record_id: str, changes: RecordInput) -> Student | None:
        """Merge ``changes`` into an existing student. None if the id is unknown."""

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Remove a student. False if nothing matched."""

    @abstractmethod
    async def authenticate(self, username: str, pin: str | None = None) -> Student | None:
        """Return the student if the username exists and the PIN matches (or none is set)."""


class AssignmentRepository(ABC):
    """Abstract interface for assignment storage."""

    @abstractmethod
    async def find_by_id(self, record_id: str) -> Assignment | None:
        """Return the assignment with this id, or None."""

    @abstractmethod
    async def find_all(self) -> list[Assignment]:
        """Return every stored assignment."""

    @abstractmethod
    async def save(self, data: RecordInput) -> Assignment:
        """Upsert an assignment."""

    @abstractmethod
    async def create(self, data: RecordInput) -> Assignment:
        """Store a new assignment."""

    @abstractmethod
    async def update(self, record_id: str, changes: RecordInput) -> Assignment | None:
        """Merge ``changes`` into an existing assignment."""

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Remove an assignment."""

    @abstractmethod
    async def find_by_creator(self, creator_id: str) -> list[Assignment]:
        """Assignments created by one teacher."""

    @abstractmethod
    async def find_by_type(self, assignment_type: AssignmentType) -> list[Assignment]:
        """Assignments of one type."""

    @abstractmethod
    async def find_by_status(self, status: AssignmentStatus) -> list[Assignment]:
        """Assignments in one status."""

    @abstractmethod
    async def update_status(
        self, record_id: str, status: AssignmentStatus
    ) -> Assignment | None:
        """Change only the status of an assignment."""


class QuestionRepository(ABC):
    """Abstract interface for question storage."""

    @abstractmethod
    async def find_by_id(self, record_id: str) -> Question | None:
        """Return the question with this id, or None."""

    @abstractmethod
    async def find_all(self) -> list[Question]:
        """Return every stored question."""

    @abstractmethod
    async def save(self, data: RecordInput) -> Question:
        """Upsert a question."""

    @abstractmethod
    async def create(self, data: RecordInput) -> Question:
        """Store a new question."""

    @abstractmethod
    async def update(self, record_id: str, changes: RecordInput) -> Question | None:
        """Merge ``changes`` into an existing question."""

    @abstractmethod
    async def delete(self, record_id: str) -> bool:
        """Remove a question."""

    @abstractmethod
    async def find_by_creator(self, creator_id: str) -> list[Question]:
        """Questions written by one teacher."""

    @abstractmethod
    async def find_by_type(self, question_type: QuestionType) -> list[Question]:
        """Questions of one kind."""

    @abstractmethod
    async def find_by_difficulty_level(self, level: DifficultyLevel) -> list[Question]:
        """Questions at one difficulty level."""

    @abstractmethod
    async def find_by_tag(self, tag: str) -> list[Question]:
        """Questions carrying ``tag``."""

    @abstractmethod
    async def find_by_tags(self, tags: list[str]) -> list[Question]:
        """Questions carrying at least one of ``tags``."""
