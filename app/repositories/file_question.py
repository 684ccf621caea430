"""File-backed question repository."""

from app.models.question import (
    NEW_QUESTION_ADAPTER,
    QUESTION_ADAPTER,
    DifficultyLevel,
    Question,
    QuestionType,
    QuestionUpdate,
)
from app.repositories.base import QuestionRepository
from app.repositories.file_store import JsonFileRepository


class FileQuestionRepository(JsonFileRepository[Question], QuestionRepository):
    """Questions stored as ``<data_dir>/questions/<id>.json``.

    Documents of every kind share the directory; ``type`` selects the model.
    """

    collection = "questions"
    record_model = QUESTION_ADAPTER
    new_model = NEW_QUESTION_ADAPTER
    update_model = QuestionUpdate
    immutable_fields = frozenset({"created_by", "createdBy"})

    async def find_by_creator(self, creator_id: str) -> list[Question]:
        return await self._find_where(lambda q: q.created_by == creator_id)

    async def find_by_type(self, question_type: QuestionType) -> list[Question]:
        return await self._find_where(lambda q: q.type == question_type)

    async def find_by_difficulty_level(self, level: DifficultyLevel) -> list[Question]:
        return await self._find_where(lambda q: q.difficulty_level == level)

    async def find_by_tag(self, tag: str) -> list[Question]:
        return await self._find_where(lambda q: tag in q.tags)

    async def find_by_tags(self, tags: list[str]) -> list[Question]:
        if not tags:
            return []
        wanted = set(tags)
        return await self._find_where(lambda q: not wanted.isdisjoint(q.tags))
