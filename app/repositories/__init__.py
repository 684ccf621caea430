"""Repository layer - storage interfaces and their file-backed implementations."""

from app.repositories.base import AssignmentRepository, QuestionRepository, StudentRepository
from app.repositories.file_assignment import FileAssignmentRepository
from app.repositories.file_question import FileQuestionRepository
from app.repositories.file_student import FileStudentRepository
from app.repositories.file_store import JsonFileRepository

__all__ = [
    "AssignmentRepository",
    "FileAssignmentRepository",
    "FileQuestionRepository",
    "FileStudentRepository",
    "JsonFileRepository",
    "QuestionRepository",
    "StudentRepository",
]
