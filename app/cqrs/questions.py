"""Question queries, commands and their handlers."""

from dataclasses import dataclass
from typing import ClassVar

from app.cqrs.core import Command, CommandHandler, Query, QueryHandler
from app.models.question import (
    DifficultyLevel,
    NewQuestion,
    Question,
    QuestionType,
    QuestionUpdate,
)
from app.repositories.base import QuestionRepository


@dataclass(frozen=True)
class GetQuestionByIdQuery(Query[Question | None]):
    query_type: ClassVar[str] = "GetQuestionById"

    question_id: str


@dataclass(frozen=True)
class GetAllQuestionsQuery(Query[list[Question]]):
    query_type: ClassVar[str] = "GetAllQuestions"


@dataclass(frozen=True)
class GetQuestionsByCreatorQuery(Query[list[Question]]):
    query_type: ClassVar[str] = "GetQuestionsByCreator"

    creator_id: str


@dataclass(frozen=True)
class GetQuestionsByTypeQuery(Query[list[Question]]):
    query_type: ClassVar[str] = "GetQuestionsByType"

    question_type: QuestionType


@dataclass(frozen=True)
class GetQuestionsByDifficultyQuery(Query[list[Question]]):
    query_type: ClassVar[str] = "GetQuestionsByDifficulty"

    difficulty_level: DifficultyLevel


@dataclass(frozen=True)
class GetQuestionsByTagsQuery(Query[list[Question]]):
    """Questions carrying any of ``tags``."""

    query_type: ClassVar[str] = "GetQuestionsByTags"

    tags: tuple[str, ...]


@dataclass(frozen=True)
class CreateQuestionCommand(Command[Question]):
    command_type: ClassVar[str] = "CreateQuestion"

    data: NewQuestion


@dataclass(frozen=True)
class UpdateQuestionCommand(Command[Question | None]):
    command_type: ClassVar[str] = "UpdateQuestion"

    question_id: str
    changes: QuestionUpdate


@dataclass(frozen=True)
class DeleteQuestionCommand(Command[bool]):
    command_type: ClassVar[str] = "DeleteQuestion"

    question_id: str


QUESTION_QUERIES = (
    GetQuestionByIdQuery,
    GetAllQuestionsQuery,
    GetQuestionsByCreatorQuery,
    GetQuestionsByTypeQuery,
    GetQuestionsByDifficultyQuery,
    GetQuestionsByTagsQuery,
)
QUESTION_COMMANDS = (
    CreateQuestionCommand,
    UpdateQuestionCommand,
    DeleteQuestionCommand,
)


class _QuestionHandler:
    def __init__(self, questions: QuestionRepository) -> None:
        self._questions = questions


class GetQuestionByIdHandler(
    _QuestionHandler, QueryHandler[GetQuestionByIdQuery, Question | None]
):
    handles = GetQuestionByIdQuery

    async def execute(self, query: GetQuestionByIdQuery) -> Question | None:
        return await self._questions.find_by_id(query.question_id)


class GetAllQuestionsHandler(
    _QuestionHandler, QueryHandler[GetAllQuestionsQuery, list[Question]]
):
    handles = GetAllQuestionsQuery

    async def execute(self, query: GetAllQuestionsQuery) -> list[Question]:
        return await self._questions.find_all()


class GetQuestionsByCreatorHandler(
    _QuestionHandler, QueryHandler[GetQuestionsByCreatorQuery, list[Question]]
):
    handles = GetQuestionsByCreatorQuery

    async def execute(self, query: GetQuestionsByCreatorQuery) -> list[Question]:
        return await self._questions.find_by_creator(query.creator_id)


class GetQuestionsByTypeHandler(
    _QuestionHandler, QueryHandler[GetQuestionsByTypeQuery, list[Question]]
):
    handles = GetQuestionsByTypeQuery

    async def execute(self, query: GetQuestionsByTypeQuery) -> list[Question]:
        return await self._questions.find_by_type(query.question_type)


class GetQuestionsByDifficultyHandler(
    _QuestionHandler, QueryHandler[GetQuestionsByDifficultyQuery, list[Question]]
):
    handles = GetQuestionsByDifficultyQuery

    async def execute(self, query: GetQuestionsByDifficultyQuery) -> list[Question]:
        return await self._questions.find_by_difficulty_level(query.difficulty_level)


class GetQuestionsByTagsHandler(
    _QuestionHandler, QueryHandler[GetQuestionsByTagsQuery, list[Question]]
):
    handles = GetQuestionsByTagsQuery

    async def execute(self, query: GetQuestionsByTagsQuery) -> list[Question]:
        return await self._questions.find_by_tags(list(query.tags))


class CreateQuestionHandler(_QuestionHandler, CommandHandler[CreateQuestionCommand, Question]):
    handles = CreateQuestionCommand

    async def execute(self, command: CreateQuestionCommand) -> Question:
        return await self._questions.create(command.data)


class UpdateQuestionHandler(
    _QuestionHandler, CommandHandler[UpdateQuestionCommand, Question | None]
):
    handles = UpdateQuestionCommand

    async def execute(self, command: UpdateQuestionCommand) -> Question | None:
        return await self._questions.update(command.question_id, command.changes)


class DeleteQuestionHandler(_QuestionHandler, CommandHandler[DeleteQuestionCommand, bool]):
    handles = DeleteQuestionCommand

    async def execute(self, command: DeleteQuestionCommand) -> bool:
        return await self._questions.delete(command.question_id)


QUESTION_QUERY_HANDLERS = (
    GetQuestionByIdHandler,
    GetAllQuestionsHandler,
    GetQuestionsByCreatorHandler,
    GetQuestionsByTypeHandler,
    GetQuestionsByDifficultyHandler,
    GetQuestionsByTagsHandler,
)
QUESTION_COMMAND_HANDLERS = (
    CreateQuestionHandler,
    UpdateQuestionHandler,
    DeleteQuestionHandler,
)
