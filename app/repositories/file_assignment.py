"""File-backed assignment repository."""

from app.models.assignment import (
    Assignment,
    AssignmentStatus,
    AssignmentType,
    AssignmentUpdate,
    NewAssignment,
)
from app.repositories.base import AssignmentRepository
from app.repositories.file_store import JsonFileRepository


class FileAssignmentRepository(JsonFileRepository[Assignment], AssignmentRepository):
    """Assignments stored as ``<data_dir>/assignments/<id>.json``."""

    collection = "assignments"
    record_model = Assignment
    new_model = NewAssignment
    update_model = AssignmentUpdate
    immutable_fields = frozenset({"created_by", "createdBy"})

    async def find_by_creator(self, creator_id: str) -> list[Assignment]:
        return await self._find_where(lambda a: a.created_by == creator_id)

    async def find_by_type(self, assignment_type: AssignmentType) -> list[Assignment]:
        return await self._find_where(lambda a: a.type == assignment_type)

    async def find_by_status(self, status: AssignmentStatus) -> list[Assignment]:
        return await self._find_where(lambda a: a.status == status)

    async def update_status(
        self, record_id: str, status: AssignmentStatus
    ) -> Assignment | None:
        return await self.update(record_id, AssignmentUpdate(status=status))
