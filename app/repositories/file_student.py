"""File-backed student repository."""

import logging

from app.errors import DuplicateKeyError
from app.models.student import NewStudent, Student, StudentUpdate
from app.repositories.base import StudentRepository
from app.repositories.file_store import JsonFileRepository

logger = logging.getLogger(__name__)


class FileStudentRepository(JsonFileRepository[Student], StudentRepository):
    """Students stored as ``<data_dir>/students/<id>.json``."""

    collection = "students"
    record_model = Student
    new_model = NewStudent
    update_model = StudentUpdate
    managed_fields = JsonFileRepository.managed_fields | {"name"}

    async def find_by_username(self, username: str) -> Student | None:
        return await self._find_first(lambda s: s.username == username)

    async def authenticate(self, username: str, pin: str | None = None) -> Student | None:
        student = await self.find_by_username(username)
        if student is None:
            return None

        # No PIN on file means any submitted PIN (or none) is accepted.
        if student.pin and pin != student.pin:
            logger.info("PIN mismatch for %s", username)
            return None

        return student

    def _check_constraints(self, record: Student) -> None:
        for other in self._records.values():
            if other.username == record.username and other.id != record.id:
                raise DuplicateKeyError("username", record.username)
